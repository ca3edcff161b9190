"""
Utilities
=========

Datetime helpers and small shared helpers.
"""
