# packages/vptcodec/src/vptcodec/config.py
from __future__ import annotations
import os
from dataclasses import dataclass

__all__ = ["TableConfig", "ENV_VENDOR_ID", "ENV_STRICT", "parse_vendor_id"]

ENV_VENDOR_ID = "VPT_VENDOR_ID"
ENV_STRICT = "VPT_STRICT"


@dataclass(frozen=True, slots=True)
class TableConfig:
    """
    Configuration **publique et stable** partagée par le lecteur et le builder.

    Champs
    ------
    vendor_id : int, default=0
        Discriminant choisi par l'appelant (u32). Un lecteur refuse toute table
        dont le `vendor_id` diffère ; le builder l'écrit dans l'en-tête.
    strict : bool, default=False
        Si vrai, une table dont une entrée déborde de la fin du buffer est
        refusée (`TruncatedEntry`) au lieu d'être itérée jusqu'à la dernière
        entrée complète.

    Notes
    -----
    - La dataclass est **immuable** (`frozen=True`).
    - Les validations lèvent une `ValueError` si les bornes sont violées.
    - `TableConfig.from_env()` lit `VPT_VENDOR_ID` et `VPT_STRICT`.
    """

    vendor_id: int = 0
    strict: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.vendor_id, bool) or not isinstance(self.vendor_id, int):
            raise ValueError("TableConfig.vendor_id must be an int")
        if not (0 <= self.vendor_id <= 0xFFFFFFFF):
            raise ValueError("TableConfig.vendor_id must be in [0..2^32-1]")

    @staticmethod
    def from_env(**overrides) -> "TableConfig":
        """Build a config from the environment; explicit ``overrides`` win."""
        values = {
            "vendor_id": _vendor_id_from_env(),
            "strict": _strict_from_env(),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return TableConfig(**values)


def parse_vendor_id(text: str) -> int:
    """Decimal or ``0x`` prefixed hex, in the u32 range."""
    try:
        v = int(text.strip(), 0)
    except ValueError:
        raise ValueError(f"invalid vendor id {text!r}") from None
    if not (0 <= v <= 0xFFFFFFFF):
        raise ValueError(f"vendor id {text!r} out of range [0..2^32-1]")
    return v


def _vendor_id_from_env() -> int:
    v = os.getenv(ENV_VENDOR_ID, "").strip()
    return parse_vendor_id(v) if v else 0


def _strict_from_env() -> bool:
    v = os.getenv(ENV_STRICT, "0").strip().lower()
    return v in ("1", "true", "yes", "on")
