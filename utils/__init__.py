from .text import blank_to_none
from .csv_utils import CsvImportError, read_csv_rows

__all__ = ['blank_to_none', 'CsvImportError', 'read_csv_rows']
