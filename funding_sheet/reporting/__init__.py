"""Reporting helpers: month windows and record merging.

- date_window: resolve the Unix-second window of a calendar month
- merger: line up funding payments with margin borrow records
"""
