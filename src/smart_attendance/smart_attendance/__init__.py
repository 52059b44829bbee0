"""Smart Attendance package.

Feature modules (students, teachers, attendance, auth) each own their model,
repository interface, MySQL repository and service, with a thin Flask
controller layer on top.
"""
