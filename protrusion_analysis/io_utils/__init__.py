"""
Input/output module
"""

from .structure_loader import StructureLoader, load_structure
from .csv_writer import CSVWriter
from .result_formatter import ResultFormatter

__all__ = [
    "StructureLoader",
    "load_structure",
    "CSVWriter",
    "ResultFormatter",
]
