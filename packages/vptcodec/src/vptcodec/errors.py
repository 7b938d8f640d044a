# packages/vptcodec/src/vptcodec/errors.py
from __future__ import annotations

__all__ = [
    "TableDefect",
    "SizeMismatch",
    "AlignmentMismatch",
    "MagicMismatch",
    "VersionMismatch",
    "VendorMismatch",
    "TruncatedEntry",
]


class TableDefect(ValueError):
    """Base class of every defect reported while opening a program table."""


class SizeMismatch(TableDefect):
    """Declared or required size exceeds the available buffer length."""

    def __init__(self, needed: int, available: int) -> None:
        super().__init__(f"table needs {needed} bytes, buffer holds {available}")
        self.needed = needed
        self.available = available


class AlignmentMismatch(TableDefect):
    """Header does not start on an 8-byte boundary."""

    def __init__(self, address: int) -> None:
        super().__init__(f"header at {address:#x} is not 8-byte aligned")
        self.address = address


class MagicMismatch(TableDefect):
    def __init__(self, found: int) -> None:
        super().__init__(f"bad magic {found:#010x}")
        self.found = found


class VersionMismatch(TableDefect):
    def __init__(self, found) -> None:
        super().__init__(f"incompatible table version {found}")
        self.found = found


class VendorMismatch(TableDefect):
    def __init__(self, found: int) -> None:
        super().__init__(f"unexpected vendor id {found}")
        self.found = found


class TruncatedEntry(TableDefect):
    """Raised by strict iteration when an entry runs past the end of the table."""

    def __init__(self, index: int, offset: int) -> None:
        super().__init__(f"entry #{index} at offset {offset} is truncated")
        self.index = index
        self.offset = offset
