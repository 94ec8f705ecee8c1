from .csv import CSVParser

__all__ = ["CSVParser"]
