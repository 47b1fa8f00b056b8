"""Convert Qt Linguist translation files to and from CSV and XLSX."""

__version__ = "4.5.0"
__all__ = ["__version__"]