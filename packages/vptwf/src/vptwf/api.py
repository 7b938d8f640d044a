from __future__ import annotations
import hashlib, logging, os
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterable, List

from vptcodec import ProgramTable, TableBuilder

log = logging.getLogger(__name__)


def atomic_write(path: Path | str, data: bytes) -> None:
    path = Path(path)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.parent.mkdir(parents=True, exist_ok=True)
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)


def table_manifest(table: ProgramTable) -> Dict[str, Any]:
    """JSON-able summary: header fields + one row per entry actually present."""
    rows: List[Dict[str, Any]] = []
    for e in table.entries():
        rows.append({
            "name": bytes(e.name).decode("utf-8", errors="replace"),
            "payload_len": len(e.payload),
            "sha256": hashlib.sha256(e.payload).hexdigest(),
        })
    h = table.header.to_dict()
    h["magic"] = f"{h['magic']:#010x}"
    return {"header": h, "entries": rows, "truncated": len(rows) < table.header.program_count}


def iter_input_files(inputs: Iterable[Path | str]) -> List[tuple[str, Path]]:
    """
    Expand files/dirs to ``(entry_name, path)`` pairs.

    A file keeps its base name; a directory contributes every regular file
    below it, named by its POSIX path relative to the directory. Sorted by
    name within each input.
    """
    out: List[tuple[str, Path]] = []
    for src in inputs:
        src = Path(src)
        if src.is_dir():
            files = sorted(p for p in src.rglob("*") if p.is_file())
            out.extend((p.relative_to(src).as_posix(), p) for p in files)
        elif src.is_file():
            out.append((src.name, src))
        else:
            raise FileNotFoundError(src)
    return out


def pack_paths(inputs: Iterable[Path | str], vendor_id: int) -> bytes:
    b = TableBuilder(vendor_id)
    for name, p in iter_input_files(inputs):
        log.debug("add %s (%s)", name, p)
        b.add(name.encode("utf-8"), p.read_bytes())
    return b.build()


def entry_path(out_dir: Path | str, name: bytes) -> Path:
    """Destination of an entry under ``out_dir``; refuses names escaping it."""
    text = bytes(name).decode("utf-8")
    rel = PurePosixPath(text)
    if not text or rel.is_absolute() or ".." in rel.parts or "\x00" in text:
        raise ValueError(f"unsafe entry name {text!r}")
    return Path(out_dir).joinpath(*rel.parts)


def unpack_to_directory(table: ProgramTable, out_dir: Path | str) -> List[Path]:
    """Write every payload to ``out_dir/<name>``; nothing is written if any name is unsafe."""
    out_dir = Path(out_dir)
    plan = [(entry_path(out_dir, e.name), e.payload) for e in table.entries()]
    written: List[Path] = []
    for dst, payload in plan:
        atomic_write(dst, bytes(payload))
        written.append(dst)
    return written
