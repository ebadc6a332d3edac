"""Data sources for localized strings.

Submodules:
    source  - StringRecord, DataSource protocol, DataSourceFactory
    records - LazyRecordSet (load-once record storage and culture matching)
    sql     - SqlDataSource (SQLAlchemy-backed relational table)
"""

from sqllocalization.data.records import LazyRecordSet
from sqllocalization.data.source import (
    DataSource,
    DataSourceFactory,
    DataSourceParameters,
    StringRecord,
)
from sqllocalization.data.sql import SqlDataSource

__all__ = [
    "DataSource",
    "DataSourceFactory",
    "DataSourceParameters",
    "LazyRecordSet",
    "SqlDataSource",
    "StringRecord",
]
