"""Hypothesis strategies for sqllocalization property-based testing.

Usage:
    from tests.strategies import culture_names, resource_keys
    from tests.strategies.records import string_records, record_lists
"""

from .records import (
    CULTURE_NAMES,
    culture_names,
    format_arguments,
    record_lists,
    resource_keys,
    string_records,
    string_values,
)

__all__ = [
    "CULTURE_NAMES",
    "culture_names",
    "format_arguments",
    "record_lists",
    "resource_keys",
    "string_records",
    "string_values",
]
