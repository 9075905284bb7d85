"""
Profile export formats.
"""

from .exporters import BaseExporter, CsvExporter, JsonExporter, TextExporter, flatten, get_exporter

EXPORT_FORMATS = ["json", "csv", "text"]

__all__ = [
    "BaseExporter",
    "JsonExporter",
    "CsvExporter",
    "TextExporter",
    "flatten",
    "get_exporter",
    "EXPORT_FORMATS",
]
