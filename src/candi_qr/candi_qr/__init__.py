"""Candi QR school attendance package.

This package is organized by feature modules (users, students, attendance, ...)
with a thin Flask controller layer over service/repository layers.
"""
