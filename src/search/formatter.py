"""
Format search results for the terminal.

This module renders display records through a template. Templates use
named fields such as `{{.Name}}`; a template starting with "table" gets a
header row and its tab-separated cells aligned into columns.
"""

import re
import sys
from typing import Dict, List, Optional, Sequence, TextIO, Tuple

from src.search.projector import DisplayRecord
from src.utils.errors import ErrorDetail, TemplateError
from src.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FORMAT = (
    "table {{.Index}}\t{{.Name}}\t{{.Description}}\t{{.Stars}}\t"
    "{{.Official}}\t{{.Automated}}\t"
)
TABLE_PREFIX = "table"
COLUMN_PADDING = 2

# Template field -> (record attribute, header label)
FIELDS: Dict[str, Tuple[str, str]] = {
    "Index": ("index", "INDEX"),
    "Name": ("name", "NAME"),
    "Description": ("description", "DESCRIPTION"),
    "Stars": ("stars", "STARS"),
    "Official": ("official", "OFFICIAL"),
    "Automated": ("automated", "AUTOMATED"),
}

FIELD_PATTERN = re.compile(r"\{\{\s*\.(\w+)\s*\}\}")


def gen_search_format(format_string: Optional[str]) -> str:
    """
    Resolve the output template.

    A literal backslash-t typed on the command line becomes a tab.
    An empty format selects the default table.
    """
    if format_string:
        return format_string.replace("\\t", "\t")
    return DEFAULT_FORMAT


class SearchResultFormatter:
    """Render display records through a template."""

    def __init__(self, template: Optional[str] = None):
        """
        Initialize the formatter.

        Args:
            template: Output template (defaults to the fixed-column table)
        """
        template = gen_search_format(template)
        self.table = template.startswith(TABLE_PREFIX)
        if self.table:
            template = template[len(TABLE_PREFIX):].lstrip(" ")
        self.template = template
        self._check_fields()

    def _check_fields(self) -> None:
        unknown = [
            field for field in FIELD_PATTERN.findall(self.template) if field not in FIELDS
        ]
        if unknown:
            raise TemplateError(
                f"template references unknown fields: {', '.join(unknown)}",
                details=[
                    ErrorDetail(param=field, message="unknown field") for field in unknown
                ],
            )

    def _substitute(self, values: Dict[str, str]) -> str:
        return FIELD_PATTERN.sub(lambda match: values[match.group(1)], self.template)

    def header(self) -> str:
        """Render the header row from the static header labels."""
        return self._substitute({field: label for field, (_, label) in FIELDS.items()})

    def format_record(self, record: DisplayRecord) -> str:
        """Render a single record."""
        return self._substitute(
            {field: str(getattr(record, attr)) for field, (attr, _) in FIELDS.items()}
        )

    def format_lines(self, records: Sequence[DisplayRecord]) -> List[str]:
        """
        Render records to output lines.

        Args:
            records: Records in output order

        Returns:
            Output lines without trailing newlines; empty for no records
        """
        if not records:
            return []

        lines = [self.format_record(record) for record in records]
        if self.table:
            lines = _align_columns([self.header()] + lines)
        return lines

    def write(self, records: Sequence[DisplayRecord], stream: Optional[TextIO] = None) -> None:
        """Write rendered records to a stream (stdout by default)."""
        stream = stream or sys.stdout
        for line in self.format_lines(records):
            stream.write(line + "\n")


def _align_columns(lines: List[str]) -> List[str]:
    """Pad tab-separated cells so columns line up."""
    rows = [line.split("\t") for line in lines]
    widths: List[int] = []
    for row in rows:
        # The last cell is not padded, so it does not widen the table
        for i, cell in enumerate(row[:-1]):
            if i >= len(widths):
                widths.append(0)
            widths[i] = max(widths[i], len(cell))

    aligned = []
    for row in rows:
        cells = [
            cell.ljust(widths[i] + COLUMN_PADDING) for i, cell in enumerate(row[:-1])
        ]
        cells.append(row[-1])
        aligned.append("".join(cells).rstrip())
    return aligned


def render(
    records: Sequence[DisplayRecord],
    template: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Write records through a template; nothing is written for no records.

    Raises:
        TemplateError: If the template references unknown fields
    """
    formatter = SearchResultFormatter(template)
    if not records:
        logger.debug("No search results to render")
        return
    formatter.write(records, stream)
