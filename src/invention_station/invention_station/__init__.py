"""Invention Station club portal.

This package is organized by feature modules (users, materials, shifts,
notices, notes, attendance, ...) with a thin Flask controller layer over
service/repository layers. Every collection is persisted as one JSON array
in a key-value store.
"""
