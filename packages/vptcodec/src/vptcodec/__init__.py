# packages/vptcodec/src/vptcodec/__init__.py
from __future__ import annotations

"""VPT - Venice Program Table (public surface).

Read path : ProgramTable(buffer, vendor_id) -> .header / .entries()
Write path: TableBuilder(vendor_id).add(name, payload) -> .build()
"""

__version__ = "0.1.0"

from .errors import (
    TableDefect,
    SizeMismatch,
    AlignmentMismatch,
    MagicMismatch,
    VersionMismatch,
    VendorMismatch,
    TruncatedEntry,
)
from .header import VPT_MAGIC, VERSION, Version, compatible, TableHeader, EntryHeader
from .layout import TABLE_HEADER_SIZE, ENTRY_HEADER_SIZE, align8
from .config import TableConfig
from .table import Entry, EntryIterator, ProgramTable
from .builder import EntryBuilder, TableBuilder
from .io import read_table, write_table, looks_like_vpt

__all__ = [
    "__version__",
    # format
    "VPT_MAGIC", "VERSION", "Version", "compatible",
    "TableHeader", "EntryHeader", "TABLE_HEADER_SIZE", "ENTRY_HEADER_SIZE", "align8",
    # read / write
    "ProgramTable", "Entry", "EntryIterator",
    "TableBuilder", "EntryBuilder",
    "TableConfig",
    # errors
    "TableDefect", "SizeMismatch", "AlignmentMismatch", "MagicMismatch",
    "VersionMismatch", "VendorMismatch", "TruncatedEntry",
    # I/O
    "read_table", "write_table", "looks_like_vpt",
]
