"""Staffing Portal package.

Feature modules (attendance, locations, settings, leave, users, reports) each keep
a thin Flask controller on top of service and repository layers. The attendance
module hosts the geofenced check-in/check-out engine.
"""
