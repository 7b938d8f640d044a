# packages/vptcodec/src/vptcodec/builder.py
"""
Write path of the program table.

    b = TableBuilder(vendor_id=7)
    b.add(b"main", bytecode)
    blob = b.build()          # bytes, ready for ProgramTable(blob, 7)

Entries are laid out in insertion order as
``[EntryHeader][payload][name][zero padding to 8 bytes]``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import TableConfig
from .header import VERSION, VPT_MAGIC, EntryHeader, TableHeader
from .layout import ENTRY_HEADER_SIZE, TABLE_HEADER_SIZE, U32_MAX, align8

__all__ = ["EntryBuilder", "TableBuilder"]

log = logging.getLogger(__name__)


def _owned(field: str, data) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"EntryBuilder.{field} must be bytes-like, got {type(data).__name__}")
    data = bytes(data)
    if len(data) > U32_MAX:
        raise ValueError(f"EntryBuilder.{field} is too long ({len(data)} bytes)")
    return data


@dataclass(eq=True)
class EntryBuilder:
    """One named payload, owned by the builder."""
    name: bytes
    payload: bytes

    def __post_init__(self) -> None:
        self.name = _owned("name", self.name)
        self.payload = _owned("payload", self.payload)

    @property
    def base_size(self) -> int:
        return ENTRY_HEADER_SIZE + len(self.name) + len(self.payload)

    @property
    def size(self) -> int:
        """On-wire size, padding included."""
        return align8(self.base_size)

    @property
    def padding_bytes(self) -> int:
        return self.size - self.base_size

    def header(self) -> EntryHeader:
        return EntryHeader(name_len=len(self.name), payload_len=len(self.payload))


class TableBuilder:
    """
    Accumulates entries for one table. ``build()`` consumes the builder:
    any later ``add``/``add_entry``/``build`` raises ``RuntimeError``.
    """

    def __init__(self, vendor_id: int) -> None:
        vendor_id = int(vendor_id)
        if not (0 <= vendor_id <= U32_MAX):
            raise ValueError(f"vendor_id must fit in u32 (got {vendor_id})")
        self._vendor_id = vendor_id
        self._entries: List[EntryBuilder] = []
        self._built = False

    @classmethod
    def from_config(cls, cfg: Optional[TableConfig] = None) -> "TableBuilder":
        return cls((cfg or TableConfig()).vendor_id)

    @property
    def vendor_id(self) -> int:
        return self._vendor_id

    @property
    def entries(self) -> Tuple[EntryBuilder, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add_entry(self, entry: EntryBuilder) -> None:
        self._check_open()
        if not isinstance(entry, EntryBuilder):
            raise TypeError("add_entry expects an EntryBuilder")
        self._entries.append(entry)

    def add(self, name: bytes, payload: bytes) -> EntryBuilder:
        entry = EntryBuilder(name, payload)
        self.add_entry(entry)
        return entry

    def size(self) -> int:
        """Total size of the table ``build()`` would produce."""
        return TABLE_HEADER_SIZE + sum(e.size for e in self._entries)

    def build(self) -> bytes:
        self._check_open()
        total = self.size()
        if total > U32_MAX:
            raise ValueError(f"table too large for a u32 size field ({total} bytes)")

        out = bytearray()
        out += TableHeader(
            magic=VPT_MAGIC,
            version=VERSION,
            vendor_id=self._vendor_id,
            size=total,
            program_count=len(self._entries),
        ).to_bytes()
        for e in self._entries:
            out += e.header().to_bytes()
            out += e.payload
            out += e.name
            out += b"\x00" * e.padding_bytes

        self._built = True
        log.debug("built table: vendor_id=%d entries=%d size=%d", self._vendor_id, len(self._entries), total)
        return bytes(out)

    def _check_open(self) -> None:
        if self._built:
            raise RuntimeError("TableBuilder already built; create a new one")
