from __future__ import annotations


def test_unified_namespace_smoke():
    import vpt
    import vptcodec

    assert vpt.codec is vptcodec
    assert vpt.VPT_MAGIC == 0x675C3ED9

    b = vpt.TableBuilder(vendor_id=11)
    b.add(b"main", b"\x90" * 3)
    t = vpt.ProgramTable(b.build(), 11)
    assert [(bytes(e.name), bytes(e.payload)) for e in t] == [(b"main", b"\x90" * 3)]
    assert vpt.table_manifest(t)["entries"][0]["name"] == "main"

