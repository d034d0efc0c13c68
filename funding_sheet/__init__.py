"""Funding payment and margin borrow reporting into Google Sheets."""

__version__ = "0.1.0"
