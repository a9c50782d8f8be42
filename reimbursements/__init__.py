"""
Reimbursement Tracker - Core Package

Storage-backed reimbursement requests, toast notifications and
receipt viewing for a single-user expense reimbursement tracker.

DESIGN PRINCIPLES:
1. Storage layer is swappable
2. Absence of data is a normal result, never an exception
3. Validation happens before the data service, never inside it
4. Every handle that is created is released
"""

__version__ = "1.0.0"
__author__ = "Reimbursement Tracker Team"
