# packages/vptcodec/src/vptcodec/header.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .layout import (
    ENTRY_HEADER_DTYPE,
    TABLE_HEADER_DTYPE,
    U32_MAX,
    pack_record,
    view_record,
)

__all__ = ["VPT_MAGIC", "Version", "VERSION", "compatible", "TableHeader", "EntryHeader"]

VPT_MAGIC = 0x675C3ED9


def _check_u32(field: str, value: int) -> int:
    value = int(value)
    if not (0 <= value <= U32_MAX):
        raise ValueError(f"{field} must fit in u32 (got {value})")
    return value


@dataclass(frozen=True)
class Version:
    major: int
    minor: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "major", _check_u32("Version.major", self.major))
        object.__setattr__(self, "minor", _check_u32("Version.minor", self.minor))

    def compatible_with(self, found: "Version") -> bool:
        """
        True when a table written with version ``found`` can be read by a reader
        built against ``self``.

        Majors must match. Pre-1.0 (major == 0) the minors must match too;
        afterwards the table may be newer (``found.minor >= self.minor``).
        """
        if self.major != found.major:
            return False
        if self.major == 0:
            return self.minor == found.minor
        return self.minor <= found.minor

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


#: Format version produced by the builder and accepted by the reader.
VERSION = Version(0, 1)


def compatible(requested: Version, found: Version) -> bool:
    return requested.compatible_with(found)


@dataclass(frozen=True)
class TableHeader:
    """Header at offset 0 of every table (24 bytes, 8-byte aligned)."""
    magic: int
    version: Version
    vendor_id: int
    size: int
    program_count: int

    @staticmethod
    def from_buffer(buffer: Any, offset: int = 0) -> "TableHeader":
        rec = view_record(buffer, TABLE_HEADER_DTYPE, offset)
        return TableHeader(
            magic=int(rec["magic"]),
            version=Version(int(rec["version"]["major"]), int(rec["version"]["minor"])),
            vendor_id=int(rec["vendor_id"]),
            size=int(rec["size"]),
            program_count=int(rec["program_count"]),
        )

    def to_bytes(self) -> bytes:
        return pack_record(TABLE_HEADER_DTYPE, (
            _check_u32("magic", self.magic),
            (self.version.major, self.version.minor),
            _check_u32("vendor_id", self.vendor_id),
            _check_u32("size", self.size),
            _check_u32("program_count", self.program_count),
        ))

    def to_dict(self) -> dict:
        return {
            "magic": self.magic,
            "version": str(self.version),
            "vendor_id": self.vendor_id,
            "size": self.size,
            "program_count": self.program_count,
        }


@dataclass(frozen=True)
class EntryHeader:
    name_len: int
    payload_len: int

    @staticmethod
    def from_buffer(buffer: Any, offset: int = 0) -> "EntryHeader":
        # entry offsets are multiples of 8 inside an aligned table
        rec = view_record(buffer, ENTRY_HEADER_DTYPE, offset, check_alignment=False)
        return EntryHeader(name_len=int(rec["name_len"]), payload_len=int(rec["payload_len"]))

    def to_bytes(self) -> bytes:
        return pack_record(ENTRY_HEADER_DTYPE, (
            _check_u32("name_len", self.name_len),
            _check_u32("payload_len", self.payload_len),
        ))
