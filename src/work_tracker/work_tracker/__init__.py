"""Work Tracker package.

Organized by feature modules (users, timesheet, storage, ...) with a thin
Flask controller layer on top of service and repository layers.
"""
