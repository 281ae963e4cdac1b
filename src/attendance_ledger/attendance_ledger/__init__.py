"""Attendance Ledger package.

Roster and daily-attendance recording over a remote table store. The package
is organized by feature modules (roster, attendance) with a thin Flask
controller layer on top of service/repository layers.
"""
