"""
Gatehouse: user directory and capability-based authorization for the admin backend.
"""

__version__ = "0.1.0"
