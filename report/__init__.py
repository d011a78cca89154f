from .csv_report import CsvReporter
from .excel import ExcelReporter

__all__ = ["CsvReporter", "ExcelReporter"]
