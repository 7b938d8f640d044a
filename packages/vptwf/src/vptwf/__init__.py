# packages/vptwf/src/vptwf/__init__.py
from __future__ import annotations

from .api import atomic_write, table_manifest, pack_paths, unpack_to_directory

__all__ = [
    "atomic_write",
    "table_manifest",
    "pack_paths",
    "unpack_to_directory",
    # on n'importe PAS le sous-module cli ici pour garder l'import léger
]

__version__ = "0.1.0"
