"""
clockiXL: A CLI tool for exporting Clockify time entries to a spreadsheet.

- Fetches your time entries for a date range from the Clockify API
- Shows them as a table with dates, durations and 12-hour start/end times
- Exports them to Excel (.xlsx) or CSV with a total row
- Keeps your API key in a local file, optionally served over a small HTTP API
- Can be used as a CLI (via `python -m clockixl` or `clockixl` if installed as a package)
"""

__version__ = "0.1.0"
