"""VPT — unified API
Install once, import one namespace:

    pip install -e .

Usage:

    import vpt
    b = vpt.TableBuilder(vendor_id=7)
    b.add(b"main", b"...")
    table = vpt.ProgramTable(b.build(), 7)
    for entry in table.entries():
        print(bytes(entry.name), len(entry.payload))

Or detailed modules:

    from vpt import codec, wf
"""

__version__ = "0.1.0"

import vptcodec as codec
import vptwf as wf

from vptcodec import (
    VPT_MAGIC, VERSION, Version, compatible,
    ProgramTable, Entry, TableBuilder, EntryBuilder, TableConfig,
    TableDefect, SizeMismatch, AlignmentMismatch, MagicMismatch,
    VersionMismatch, VendorMismatch, TruncatedEntry,
    read_table, write_table,
)
from vptwf import table_manifest, pack_paths, unpack_to_directory

__all__ = [
    # sub-namespaces
    "codec", "wf",
    # convenience
    "VPT_MAGIC", "VERSION", "Version", "compatible",
    "ProgramTable", "Entry", "TableBuilder", "EntryBuilder", "TableConfig",
    "TableDefect", "SizeMismatch", "AlignmentMismatch", "MagicMismatch",
    "VersionMismatch", "VendorMismatch", "TruncatedEntry",
    "read_table", "write_table",
    "table_manifest", "pack_paths", "unpack_to_directory",
    "__version__",
]
