"""
Input table readers.
"""

from .csv_reader import CSVReader
from .file_reader import FileReader, SUPPORTED_FORMATS

__all__ = [
    "CSVReader",
    "FileReader",
    "SUPPORTED_FORMATS",
]
