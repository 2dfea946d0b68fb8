"""Rig Attendance package.

Organized by feature modules (employees, attendance, export, ...) with a thin Flask
controller layer over service/repository layers.
"""
