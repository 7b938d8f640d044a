from __future__ import annotations
import pytest

from vptcodec import TableConfig
from vptcodec.config import parse_vendor_id


def test_defaults():
    cfg = TableConfig()
    assert cfg.vendor_id == 0 and cfg.strict is False


def test_validation():
    with pytest.raises(ValueError):
        TableConfig(vendor_id=-1)
    with pytest.raises(ValueError):
        TableConfig(vendor_id=1 << 32)
    with pytest.raises(ValueError):
        TableConfig(vendor_id="7")


def test_frozen():
    cfg = TableConfig(vendor_id=1)
    with pytest.raises(AttributeError):
        cfg.vendor_id = 2


def test_parse_vendor_id():
    assert parse_vendor_id("42") == 42
    assert parse_vendor_id(" 0x2A ") == 42
    with pytest.raises(ValueError):
        parse_vendor_id("forty-two")


def test_from_env(monkeypatch):
    monkeypatch.setenv("VPT_VENDOR_ID", "0x10")
    monkeypatch.setenv("VPT_STRICT", "yes")
    cfg = TableConfig.from_env()
    assert cfg == TableConfig(vendor_id=16, strict=True)
    # explicit overrides win, None means "not given"
    assert TableConfig.from_env(vendor_id=3, strict=None) == TableConfig(vendor_id=3, strict=True)


def test_from_env_unset(monkeypatch):
    monkeypatch.delenv("VPT_VENDOR_ID", raising=False)
    monkeypatch.delenv("VPT_STRICT", raising=False)
    assert TableConfig.from_env() == TableConfig()


def test_parse_vendor_id_range():
    assert parse_vendor_id("0xFFFFFFFF") == 0xFFFFFFFF
    for bad in ("-1", "0x100000000"):
        with pytest.raises(ValueError):
            parse_vendor_id(bad)
