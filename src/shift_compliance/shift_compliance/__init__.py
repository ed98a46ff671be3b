"""Attendance & shift compliance engine.

Feature modules (shifts, attendance, reports, ...) each carry a model, a
repository interface with a MySQL implementation, a service and a thin Flask
controller.
"""
