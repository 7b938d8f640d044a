from __future__ import annotations
import struct
from pathlib import Path

from .header import VPT_MAGIC

__all__ = ["read_table", "write_table", "looks_like_vpt"]


def read_table(path: str | Path) -> bytes:
    """Read a serialized table from disk (raw bytes, not validated)."""
    return Path(path).read_bytes()


def write_table(data: bytes, path: str | Path) -> None:
    """Atomic write to target path (tmp file then replace)."""
    p = Path(path)
    tmp = p.with_suffix(p.suffix + ".tmp")
    tmp.write_bytes(bytes(data))
    tmp.replace(p)


def looks_like_vpt(path: str | Path) -> bool:
    """Cheap sniff on the leading magic; does not validate the table."""
    try:
        with open(path, "rb") as f:
            head = f.read(4)
    except OSError:
        return False
    return len(head) == 4 and struct.unpack("<I", head)[0] == VPT_MAGIC
