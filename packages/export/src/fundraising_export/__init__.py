"""Fundraising Export - allocation and dashboard documents.

Renders domain reports into the formats consumers import:
- Magna vesting platform CSV and JSON (``magna``)
- Dashboard CSV with general-purpose CSV escaping (``dashboard_csv``, ``csv_utils``)
- Formatted allocation workbook via openpyxl (``allocation_sheet_renderer``)
"""

from .magna import export_to_json, export_to_magna_csv  # noqa: F401

__version__ = "0.1.0"
