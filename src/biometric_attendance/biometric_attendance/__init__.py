"""Biometric Attendance package.

This package is organized by feature modules (devices, attendance, rosters, ...)
with a thin Flask controller layer over service/repository layers. The heart of
it is the attendance event engine that turns raw device scans into attendance
records.
"""
