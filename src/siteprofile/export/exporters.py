"""
Handles rendering an extracted profile to its download formats.
"""

from __future__ import annotations

import csv
import io
import json
from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import structlog

from siteprofile.extractor.models import ExtractionRecord

logger = structlog.get_logger(__name__)


class BaseExporter(ABC):
    """Abstract base class for all profile exporters."""

    extension: str = ""

    @abstractmethod
    def render(self, record: ExtractionRecord) -> str:
        """Render the record as text in this exporter's format."""
        pass

    def export(self, record: ExtractionRecord, output_path: Path) -> Path:
        """Write the rendered record to ``output_path`` and return the path."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(record), encoding="utf-8")
        logger.info("Profile exported", path=str(output_path), format=self.extension)
        return output_path

    def default_filename(self, day: Optional[date] = None) -> str:
        day = day or date.today()
        return f"website-data-{day.isoformat()}.{self.extension}"


class JsonExporter(BaseExporter):
    """The complete record with camelCase keys, indented."""

    extension = "json"

    def render(self, record: ExtractionRecord) -> str:
        return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)


def flatten(value: Any, prefix: str = "") -> Iterator[Tuple[str, Any]]:
    """
    Yield ``(path, leaf)`` pairs for a nested structure.

    Map keys join with dots and list items use their index, so
    ``{"a": {"b": [1]}}`` yields ``("a.b.0", 1)``. Empty containers produce
    no rows.
    """
    if isinstance(value, dict):
        for key, item in value.items():
            yield from flatten(item, f"{prefix}.{key}" if prefix else str(key))
    elif isinstance(value, list):
        for index, item in enumerate(value):
            yield from flatten(item, f"{prefix}.{index}" if prefix else str(index))
    else:
        yield prefix, value


def _csv_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class CsvExporter(BaseExporter):
    """One ``Data Type,Value`` row per leaf field of the record."""

    extension = "csv"

    def render(self, record: ExtractionRecord) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["Data Type", "Value"])
        for path, value in flatten(record.to_dict()):
            writer.writerow([path, _csv_value(value)])
        return buffer.getvalue()


class TextExporter(BaseExporter):
    """A human-readable report of the headline fields."""

    extension = "txt"

    def __init__(self, generated_at: Optional[datetime] = None):
        self.generated_at = generated_at

    def render(self, record: ExtractionRecord) -> str:
        generated_at = self.generated_at or datetime.now()
        lines: List[str] = ["Website Data Report", generated_at.strftime("%Y-%m-%d %H:%M:%S"), ""]

        for label, value in (
            ("Website Title", record.website_title),
            ("Business Type", record.business_type),
            ("Description", record.description),
        ):
            if value:
                lines.extend([f"{label}: {value}", ""])

        contact = [
            f"{label}: {value}"
            for label, value in (("Email", record.email), ("Phone", record.phone), ("Address", record.address))
            if value
        ]
        if contact:
            lines.extend(contact + [""])

        self._section(lines, "Social Media", record.social_media)
        self._section(lines, "Technologies Used", record.technologies)
        self._section(lines, "Services", record.services)
        self._section(
            lines,
            "Products",
            [f"{product.name} ({product.price})" if product.price else product.name for product in record.products],
        )
        self._section(lines, "FAQs", [f"{faq.question} - {faq.answer}" for faq in record.faqs])

        if record.other_info:
            lines.append("Additional Information:")
            lines.extend(f"{key}: {value}" for key, value in record.other_info.items())
            lines.append("")

        return "\n".join(lines).rstrip("\n") + "\n"

    @staticmethod
    def _section(lines: List[str], title: str, items: List[str]) -> None:
        if not items:
            return
        lines.append(f"{title}:")
        lines.extend(f"- {item}" for item in items)
        lines.append("")


_EXPORTERS: Dict[str, type] = {
    "json": JsonExporter,
    "csv": CsvExporter,
    "text": TextExporter,
}


def get_exporter(format_name: str) -> BaseExporter:
    """Factory function to get the appropriate exporter."""
    exporter_cls = _EXPORTERS.get(format_name.lower())
    if exporter_cls is None:
        raise ValueError(f"Unknown exporter format: {format_name}")
    return exporter_cls()
