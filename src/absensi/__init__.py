"""Absensi package.

This package is organized by feature modules (users, attendance, reports, ...)
with a thin Flask controller layer over service/repository layers.
Persistence is Firestore and credentials are Firebase Authentication.
"""
