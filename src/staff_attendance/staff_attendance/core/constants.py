"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_REPORT_DAYS = 7
DEFAULT_GRACE_MINUTES = 0

# Synthetic check-out written when a session is left open past midnight.
END_OF_DAY = time(23, 59, 59, 999000)

# Monthly salary is spread over a flat 30-day month for leave deductions.
DAYS_PER_MONTH = 30

DEFAULT_STORE_TIMINGS = {
    "morningStart": "09:30",
    "morningEnd": "13:40",
    "lunchStart": "13:40",
    "lunchEnd": "15:30",
    "eveningStart": "15:30",
    "eveningEnd": "21:30",
}
