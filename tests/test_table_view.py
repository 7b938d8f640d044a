from __future__ import annotations
import logging
import struct

import numpy as np
import pytest

from vptcodec import (
    ProgramTable, TableBuilder, TableConfig, Version, TABLE_HEADER_SIZE,
    SizeMismatch, AlignmentMismatch, MagicMismatch, VersionMismatch, VendorMismatch,
    TableDefect, TruncatedEntry,
)

log = logging.getLogger("vpt.tests.table_view")


def _blob(vendor_id: int = 7) -> bytes:
    b = TableBuilder(vendor_id)
    b.add(b"main", b"print('hello')")
    b.add(b"lib/util", b"\x00\x01\x02")
    return b.build()


def _aligned(data: bytes, shift: int = 0) -> np.ndarray:
    """Copy of ``data`` starting ``shift`` bytes after an aligned address."""
    arr = np.zeros(len(data) + 16, dtype=np.uint8)
    base = (-arr.ctypes.data) % 8
    out = arr[base + shift: base + shift + len(data)]
    out[:] = np.frombuffer(data, dtype=np.uint8)
    return out


def test_open_valid_table():
    blob = _blob()
    t = ProgramTable(blob, 7)
    log.info("opened %r", t)
    assert t.header.program_count == 2
    assert t.header.size == len(blob) == t.nbytes
    assert t.vendor_id == 7
    assert t.version == Version(0, 1)


def test_accepts_buffer_protocol_objects():
    blob = _blob()
    for buf in (blob, bytearray(blob), memoryview(blob), _aligned(blob)):
        assert ProgramTable.from_bytes(buf, 7).header.program_count == 2


def test_buffer_shorter_than_header():
    with pytest.raises(SizeMismatch):
        ProgramTable(b"", 7)
    with pytest.raises(SizeMismatch):
        ProgramTable(_blob()[:TABLE_HEADER_SIZE - 1], 7)


def test_misaligned_header():
    with pytest.raises(AlignmentMismatch) as ei:
        ProgramTable(_aligned(_blob(), shift=4), 7)
    assert ei.value.address % 8 == 4
    # same bytes, aligned: fine
    assert ProgramTable(_aligned(_blob(), shift=8), 7).header.program_count == 2


def test_magic_rejection_reports_found_value():
    bad = bytearray(_blob())
    bad[0:4] = struct.pack("<I", 0xDEADBEEF)
    with pytest.raises(MagicMismatch) as ei:
        ProgramTable(bad, 7)
    assert ei.value.found == 0xDEADBEEF


def test_version_rejection():
    bad = bytearray(_blob())
    bad[4:12] = struct.pack("<II", 0, 2)
    with pytest.raises(VersionMismatch) as ei:
        ProgramTable(bad, 7)
    assert ei.value.found == Version(0, 2)


def test_vendor_rejection():
    with pytest.raises(VendorMismatch) as ei:
        ProgramTable(_blob(vendor_id=7), 8)
    assert ei.value.found == 7


def test_truncated_buffer_is_size_mismatch():
    blob = _blob()
    with pytest.raises(SizeMismatch):
        ProgramTable(blob[:-1], 7)


def test_declared_size_smaller_than_header():
    bad = bytearray(_blob())
    bad[16:20] = struct.pack("<I", 4)
    with pytest.raises(SizeMismatch):
        ProgramTable(bad, 7)


def test_checks_run_in_order():
    # wrong magic AND wrong vendor AND truncated: magic wins
    bad = bytearray(_blob(vendor_id=1))[:-8]
    bad[0:4] = b"\0\0\0\0"
    with pytest.raises(MagicMismatch):
        ProgramTable(bad, 7)


def test_all_defects_are_value_errors():
    with pytest.raises(ValueError):
        ProgramTable(_blob(), 8)
    assert issubclass(TruncatedEntry, TableDefect)


def test_view_is_narrowed_to_declared_size():
    blob = _blob()
    t = ProgramTable(blob + b"\xff" * 24, 7)
    assert t.nbytes == len(blob)
    assert bytes(t.data) == blob


def test_zero_copy_entries_borrow_the_buffer():
    buf = bytearray(_blob())
    t = ProgramTable(buf, 7)
    e = next(t.entries())
    assert e.payload.obj is buf
    # the caller owns the buffer: in-place edits show through
    off = TABLE_HEADER_SIZE + 8
    buf[off] = ord("P")
    assert bytes(e.payload).startswith(b"P")


def test_release_ends_the_borrow():
    with ProgramTable(_blob(), 7) as t:
        entries = list(t)
    assert bytes(entries[0].name) == b"main"
    with pytest.raises(ValueError):
        t.nbytes


def test_from_address():
    arr = _aligned(_blob())
    t = ProgramTable.from_address(arr.ctypes.data, 7)
    assert t.header.size == arr.size
    assert [bytes(e.name) for e in t.entries()] == [b"main", b"lib/util"]


def test_from_address_rejections():
    arr = _aligned(_blob())
    with pytest.raises(AlignmentMismatch):
        ProgramTable.from_address(arr.ctypes.data + 1, 7)
    with pytest.raises(VendorMismatch):
        ProgramTable.from_address(arr.ctypes.data, 9)
    arr[4:12] = np.frombuffer(struct.pack("<II", 1, 0), dtype=np.uint8)
    with pytest.raises(VersionMismatch) as ei:
        ProgramTable.from_address(arr.ctypes.data, 7)
    assert ei.value.found == Version(1, 0)
    arr[0] ^= 0xFF
    with pytest.raises(MagicMismatch):
        ProgramTable.from_address(arr.ctypes.data, 7)


def test_open_with_config():
    blob = _blob(vendor_id=3)
    assert ProgramTable.open(blob, TableConfig(vendor_id=3)).header.program_count == 2
    with pytest.raises(VendorMismatch):
        ProgramTable.open(blob)


def test_open_strict_refuses_truncated_tables():
    bad = bytearray(_blob())
    bad[20:24] = struct.pack("<I", 3)  # program_count: one more than present
    assert len(list(ProgramTable.open(bad, TableConfig(vendor_id=7)).entries())) == 2
    with pytest.raises(TruncatedEntry):
        ProgramTable.open(bad, TableConfig(vendor_id=7, strict=True))


def test_non_contiguous_buffer_is_a_type_error():
    arr = np.zeros(2 * len(_blob()), dtype=np.uint8)
    with pytest.raises(TypeError):
        ProgramTable(arr[::2], 7)


def test_entries_over_writable_buffers_compare_but_do_not_hash():
    blob = _blob()
    e = next(ProgramTable(bytearray(blob), 7).entries())
    assert e == next(ProgramTable(blob, 7).entries())
    with pytest.raises(TypeError):
        hash(e)
