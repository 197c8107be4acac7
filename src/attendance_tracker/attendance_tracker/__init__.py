"""Attendance Tracker package.

Organized by feature modules (attendance, payroll, users, projects, ...)
with a thin Flask controller layer over service/repository layers. The
attendance resolver and payroll aggregator are pure functions over records
that were already fetched from the store.
"""
