# packages/vptcodec/src/vptcodec/table.py
"""
Read path of the program table: validation, table view, entry iterator.

Nothing here copies the table. ``ProgramTable`` keeps a ``memoryview`` over the
caller's buffer and every ``Entry`` it yields is a pair of ``memoryview``
slices of that same buffer. The caller must keep the buffer alive and must
not mutate it while a table or one of its entries is in use.
"""
from __future__ import annotations

import ctypes
import logging
from dataclasses import dataclass
from typing import Any, Iterator, NoReturn, Optional

import numpy as np

from .config import TableConfig
from .errors import (
    AlignmentMismatch,
    MagicMismatch,
    SizeMismatch,
    TableDefect,
    TruncatedEntry,
    VendorMismatch,
    VersionMismatch,
)
from .header import VERSION, VPT_MAGIC, EntryHeader, TableHeader, Version
from .layout import ALIGN, ENTRY_HEADER_SIZE, TABLE_HEADER_SIZE, align8, as_byte_view, buffer_address

__all__ = ["Entry", "EntryIterator", "ProgramTable"]

log = logging.getLogger(__name__)


@dataclass(frozen=True, eq=True)
class Entry:
    """One program of a table, borrowed from the table's buffer."""
    name: memoryview
    payload: memoryview

    # views over a caller-owned, possibly writable buffer
    __hash__ = None

    def to_builder(self):
        """Owned copy, ready to be appended to a ``TableBuilder``."""
        from .builder import EntryBuilder
        return EntryBuilder(bytes(self.name), bytes(self.payload))

    def __repr__(self) -> str:
        return f"Entry(name={bytes(self.name)!r}, payload_len={len(self.payload)})"


class EntryIterator:
    """
    Lazy, bounds-checked walk over the entries of a table.

    Stops after ``program_count`` entries, or earlier when the next entry
    would read past the end of the table. The early stop is silent unless the
    iterator is ``strict``, in which case ``TruncatedEntry`` is raised.
    Iterators are not rewindable: ask the table for a fresh one.
    """

    __slots__ = ("_bytes", "_offset", "_index", "_count", "_strict")

    def __init__(self, entry_bytes: memoryview, program_count: int, strict: bool = False) -> None:
        self._bytes = entry_bytes
        self._offset = 0
        self._index = 0
        self._count = program_count
        self._strict = strict

    @property
    def yielded(self) -> int:
        return self._index

    @property
    def program_count(self) -> int:
        return self._count

    def __iter__(self) -> "EntryIterator":
        return self

    def __next__(self) -> Entry:
        if self._index >= self._count:
            raise StopIteration

        off = self._offset
        remaining = len(self._bytes) - off
        if remaining < ENTRY_HEADER_SIZE:
            self._stop("entry header")
        eh = EntryHeader.from_buffer(self._bytes, off)

        payload_start = off + ENTRY_HEADER_SIZE
        payload_end = payload_start + eh.payload_len
        if payload_end > len(self._bytes):
            self._stop("payload")
        name_end = payload_end + eh.name_len
        if name_end > len(self._bytes):
            self._stop("name")

        self._offset = off + align8(name_end - off)
        self._index += 1
        return Entry(name=self._bytes[payload_end:name_end], payload=self._bytes[payload_start:payload_end])

    def _stop(self, what: str) -> NoReturn:
        index, offset = self._index, TABLE_HEADER_SIZE + self._offset
        log.debug("entry #%d truncated (%s) at offset %d, stopping after %d/%d",
                  index, what, offset, index, self._count)
        # fused: later calls stop immediately
        self._count = index
        if self._strict:
            raise TruncatedEntry(index, offset)
        raise StopIteration


class ProgramTable:
    """
    Validated, read-only view over a serialized program table.

    ``ProgramTable(buffer, vendor_id)`` accepts anything exposing the buffer
    protocol (``bytes``, ``bytearray``, ``memoryview``, ``mmap``, numpy
    ``uint8`` arrays). The view is narrowed to the ``size`` declared in the
    header; trailing bytes are not reachable through it.
    """

    __slots__ = ("_bytes", "_header")

    def __init__(self, buffer: Any, vendor_id: int) -> None:
        mv = as_byte_view(buffer)
        header = _validate(mv, vendor_id)
        self._bytes = mv[: header.size]
        self._header = header

    # ------------------------------------------------------------------ ctors
    @classmethod
    def from_bytes(cls, buffer: Any, vendor_id: int) -> "ProgramTable":
        return cls(buffer, vendor_id)

    @classmethod
    def open(cls, buffer: Any, cfg: Optional[TableConfig] = None) -> "ProgramTable":
        cfg = cfg or TableConfig()
        table = cls(buffer, cfg.vendor_id)
        if cfg.strict:
            # walk once so that a truncated table is refused up front
            for _ in table.entries(strict=True):
                pass
        return table

    @classmethod
    def from_address(cls, address: int, vendor_id: int) -> "ProgramTable":
        """
        Open the table located at raw memory ``address``.

        UNCHECKED PRECONDITION: at least ``header.size`` bytes starting at
        ``address`` must be readable and stay valid while the table is in
        use. Nothing can verify this; violating it is undefined behaviour
        (typically a crash of the interpreter), not a ``TableDefect``.

        Use ``ProgramTable(buffer, vendor_id)`` whenever a Python buffer is
        available.
        """
        address = int(address)
        if address % ALIGN:
            raise AlignmentMismatch(address)
        head = np.ctypeslib.as_array((ctypes.c_uint8 * TABLE_HEADER_SIZE).from_address(address))
        header = TableHeader.from_buffer(head)
        _check_header(header, vendor_id)
        raw = np.ctypeslib.as_array((ctypes.c_uint8 * header.size).from_address(address))
        return cls(raw, vendor_id)

    # ------------------------------------------------------------------ access
    @property
    def header(self) -> TableHeader:
        return self._header

    @property
    def vendor_id(self) -> int:
        return self._header.vendor_id

    @property
    def version(self) -> Version:
        return self._header.version

    @property
    def nbytes(self) -> int:
        return len(self._bytes)

    @property
    def data(self) -> memoryview:
        """The whole table (header included), ``header.size`` bytes."""
        return self._bytes

    def entries(self, strict: bool = False) -> EntryIterator:
        return EntryIterator(self._bytes[TABLE_HEADER_SIZE:], self._header.program_count, strict=strict)

    def __iter__(self) -> Iterator[Entry]:
        return self.entries()

    def find(self, name: bytes) -> Optional[Entry]:
        """First entry called ``name``, or None."""
        name = bytes(name)
        for entry in self.entries():
            if entry.name == name:
                return entry
        return None

    # ------------------------------------------------------------------ lifetime
    def release(self) -> None:
        """End the borrow of the underlying buffer. Entries already yielded stay valid."""
        self._bytes.release()

    def __enter__(self) -> "ProgramTable":
        return self

    def __exit__(self, *exc) -> None:
        self.release()

    def __repr__(self) -> str:
        h = self._header
        return (f"ProgramTable(version={h.version}, vendor_id={h.vendor_id}, "
                f"size={h.size}, program_count={h.program_count})")


# ----------------------------- validation ----------------------------------

def _check_header(header: TableHeader, vendor_id: int) -> None:
    if header.magic != VPT_MAGIC:
        raise MagicMismatch(header.magic)
    if not VERSION.compatible_with(header.version):
        raise VersionMismatch(header.version)
    if header.vendor_id != vendor_id:
        raise VendorMismatch(header.vendor_id)


def _validate(mv: memoryview, vendor_id: int) -> TableHeader:
    try:
        if len(mv) < TABLE_HEADER_SIZE:
            raise SizeMismatch(TABLE_HEADER_SIZE, len(mv))
        address = buffer_address(mv)
        if address % ALIGN:
            raise AlignmentMismatch(address)
        header = TableHeader.from_buffer(mv)
        _check_header(header, vendor_id)
        if header.size < TABLE_HEADER_SIZE or len(mv) < header.size:
            raise SizeMismatch(max(header.size, TABLE_HEADER_SIZE), len(mv))
    except TableDefect as e:
        log.debug("table rejected: %s", e)
        raise
    return header
