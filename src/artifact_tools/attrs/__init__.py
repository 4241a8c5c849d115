"""Extraction of integer attribute constants from compiled resource classes."""

from artifact_tools.attrs.extractor import (
    ATTR_CLASS_ENTRY,
    extract_attributes,
    format_attributes,
    run_attr_extraction,
    write_attributes,
)
from artifact_tools.attrs.models import AttributeRecord

__all__ = [
    "ATTR_CLASS_ENTRY",
    "AttributeRecord",
    "extract_attributes",
    "format_attributes",
    "run_attr_extraction",
    "write_attributes",
]
