"""Extract attr IDs from a compiled jar and write them as an R.txt fragment."""

from __future__ import annotations

import logging
import zipfile
import zlib
from collections.abc import Iterable
from pathlib import Path

from artifact_tools.attrs.classfile import read_int_constant_fields
from artifact_tools.attrs.models import AttributeRecord
from artifact_tools.config import DEFAULT_ATTR_ENTRY
from artifact_tools.errors import ArchiveError

logger = logging.getLogger(__name__)

ATTR_CLASS_ENTRY = DEFAULT_ATTR_ENTRY


def extract_attributes(
    archive_path: Path,
    entry: str = ATTR_CLASS_ENTRY,
) -> list[AttributeRecord] | None:
    """Read integer constants of ``entry`` inside the archive.

    Returns ``None`` when the archive has no such entry.
    """

    try:
        with zipfile.ZipFile(archive_path) as archive:
            try:
                info = archive.getinfo(entry)
            except KeyError:
                logger.debug("No %s entry in %s", entry, archive_path)
                return None
            data = archive.read(info)
    except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError) as exc:
        raise ArchiveError(f"Cannot read archive {archive_path}: {exc}") from exc
    return read_int_constant_fields(data)


def format_attributes(records: Iterable[AttributeRecord] | None) -> str:
    if records is None:
        return ""
    return "".join(record.to_line() for record in records)


def write_attributes(records: Iterable[AttributeRecord] | None, output_path: Path) -> None:
    """Create or truncate ``output_path`` and write one line per record."""

    content = format_attributes(records)
    with output_path.open("w", encoding="utf-8", newline="") as writer:
        writer.write(content)


def run_attr_extraction(
    input_path: Path,
    output_path: Path,
    entry: str = ATTR_CLASS_ENTRY,
) -> int:
    """Extract attributes from ``input_path`` into ``output_path``; return the record count."""

    records = extract_attributes(input_path, entry)
    write_attributes(records, output_path)
    count = len(records) if records else 0
    logger.info("Wrote %d attributes from %s to %s", count, input_path, output_path)
    return count
