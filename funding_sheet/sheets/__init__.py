"""Spreadsheet sink.

- layout: pure header/row/summary-cell construction
- writer: gspread adapter applying a SheetUpdate to a Google spreadsheet
"""
