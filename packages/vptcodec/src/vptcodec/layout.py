# packages/vptcodec/src/vptcodec/layout.py
"""
Fixed-size record layouts of the program table.

All records are made of little-endian ``u32`` fields only, so any bit pattern
is a valid instance. They are described as numpy structured dtypes with an
explicit field order and no implicit padding:

    TableHeader (24 bytes)          EntryHeader (8 bytes)
      u32 magic                       u32 name_len
      u32 version.major               u32 payload_len
      u32 version.minor
      u32 vendor_id
      u32 size
      u32 program_count

Raw bytes are reinterpreted through :func:`view_record`, which checks size and
alignment before handing out a zero-copy view.
"""
from __future__ import annotations

from typing import Any, Tuple

import numpy as np

from .errors import AlignmentMismatch, SizeMismatch

__all__ = [
    "ALIGN", "U32_MAX",
    "VERSION_DTYPE", "TABLE_HEADER_DTYPE", "ENTRY_HEADER_DTYPE",
    "TABLE_HEADER_SIZE", "ENTRY_HEADER_SIZE",
    "align8", "as_byte_view", "buffer_address", "view_record", "pack_record",
]

ALIGN = 8
U32_MAX = 0xFFFFFFFF

_U32 = "<u4"

VERSION_DTYPE = np.dtype([("major", _U32), ("minor", _U32)])

TABLE_HEADER_DTYPE = np.dtype([
    ("magic", _U32),
    ("version", VERSION_DTYPE),
    ("vendor_id", _U32),
    ("size", _U32),
    ("program_count", _U32),
])
TABLE_HEADER_SIZE = TABLE_HEADER_DTYPE.itemsize  # = 24 bytes

ENTRY_HEADER_DTYPE = np.dtype([
    ("name_len", _U32),
    ("payload_len", _U32),
])
ENTRY_HEADER_SIZE = ENTRY_HEADER_DTYPE.itemsize  # = 8 bytes


def align8(n: int) -> int:
    return (n + ALIGN - 1) & ~(ALIGN - 1)


def as_byte_view(buffer: Any) -> memoryview:
    """Flat, unsigned-byte memoryview over any buffer-protocol object (no copy)."""
    try:
        mv = memoryview(buffer)
    except TypeError:
        raise TypeError(f"expected a bytes-like buffer, got {type(buffer).__name__}") from None
    if not mv.c_contiguous:
        raise TypeError("expected a C-contiguous buffer")
    if mv.format != "B" or mv.ndim != 1:
        mv = mv.cast("B")
    return mv


def buffer_address(buffer: Any) -> int:
    """Address of the first byte of ``buffer`` (the buffer must be non-empty)."""
    return int(np.frombuffer(buffer, dtype=np.uint8, count=1).ctypes.data)


def view_record(buffer: Any, dtype: np.dtype, offset: int = 0, *, check_alignment: bool = True) -> np.void:
    """
    Reinterpret ``dtype.itemsize`` bytes of ``buffer`` at ``offset`` as one record.

    Raises ``SizeMismatch`` if the record does not fit, ``AlignmentMismatch`` if
    its address is not a multiple of 8. The returned record shares memory with
    ``buffer``.
    """
    available = len(buffer) - offset
    if available < dtype.itemsize:
        raise SizeMismatch(offset + dtype.itemsize, len(buffer))
    if check_alignment:
        address = buffer_address(buffer) + offset
        if address % ALIGN:
            raise AlignmentMismatch(address)
    return np.frombuffer(buffer, dtype=dtype, count=1, offset=offset)[0]


def pack_record(dtype: np.dtype, values: Tuple[Any, ...]) -> bytes:
    """Serialize one record; values are given in field order (nested records as tuples)."""
    return np.array([values], dtype=dtype).tobytes()
