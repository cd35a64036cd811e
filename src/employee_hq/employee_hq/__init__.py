"""Employee HQ package.

Attendance tracking for employees and managers, organized by feature modules
(attendance, profiles, auth, reports) with a thin Flask controller layer and
service/repository layers underneath.
"""
