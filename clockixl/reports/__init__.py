"""Report generation modules for clockiXL."""

from .time_entry import RawInterval, NormalizedRecord, normalize
from .aggregator import ResultSet, aggregate
from .spreadsheet import ExportedFile, export_to_spreadsheet, export_filename
from .report_generator import ReportGenerator

__all__ = [
    'RawInterval', 'NormalizedRecord', 'normalize',
    'ResultSet', 'aggregate',
    'ExportedFile', 'export_to_spreadsheet', 'export_filename',
    'ReportGenerator'
]
