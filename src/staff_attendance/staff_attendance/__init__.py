"""Staff attendance package.

Feature modules (attendance, users, payroll, ...) sit behind a thin Flask
controller layer; the punch accounting itself is plain functions over
immutable values so it can be used without Flask or a database.
"""
