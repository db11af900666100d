"""
Core app - Shared abstractions and utilities.

This app provides:
- The error taxonomy shared by every service (errors.py)
"""
