"""
Finance Tracker - Source Package

A personal income/expense tracker for a single user profile.

DESIGN PRINCIPLES:
1. One flat list of transactions, mirrored to local storage
2. Every mutation is persisted in full (last write wins)
3. Views (filters, totals, chart data) are derived, never stored
4. Validation reports problems; it never silently fixes them
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
