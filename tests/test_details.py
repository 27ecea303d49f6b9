from __future__ import annotations

import stat

import pytest

from pls.config import Conf
from pls.details import detail_value, format_size
from pls.enums import DetailField, Typ, Unit
from pls.fmt import plain
from pls.owner import OwnerMan

from conftest import mk_node, plain_args


def _value(detail: DetailField, node, **args) -> str:
    return plain(detail_value(detail, node, OwnerMan(), Conf(), plain_args(**args)))


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        (stat.S_IFREG | 0o644, "rw-r--r--"),
        (stat.S_IFREG | 0o755, "rwxr-xr-x"),
        (stat.S_IFREG | 0o4755, "rwsr-xr-x"),
        (stat.S_IFREG | 0o2644, "rw-r-Sr--"),
        (stat.S_IFDIR | 0o1777, "rwxrwxrwt"),
    ],
)
def test_perm_string(mode: int, expected: str) -> None:
    assert _value(DetailField.PERM, mk_node("x", mode=mode)) == expected


def test_oct_has_four_digits() -> None:
    node = mk_node("x", mode=stat.S_IFREG | 0o2750)
    assert _value(DetailField.OCT, node) == "2750"


@pytest.mark.parametrize(
    ("size", "unit", "expected"),
    [
        (0, Unit.BINARY, "0B"),
        (1023, Unit.BINARY, "1023B"),
        (1536, Unit.BINARY, "1.5KiB"),
        (5 * 1024**3, Unit.BINARY, "5.0GiB"),
        (1500, Unit.DECIMAL, "1.5kB"),
        (1500, Unit.NONE, "1500B"),
    ],
)
def test_format_size(size: int, unit: Unit, expected: str) -> None:
    assert plain(format_size(size, unit, Conf())) == expected


def test_size_is_blank_for_directories() -> None:
    assert _value(DetailField.SIZE, mk_node("d", typ=Typ.DIR, size=4096)) == ""
    assert _value(DetailField.SIZE, mk_node("f", size=2048)) == "2.0KiB"


def test_missing_metadata_renders_empty_cells() -> None:
    node = mk_node("ghost", meta=False)
    for detail in DetailField:
        if detail in (DetailField.NAME, DetailField.TYP) or detail.value in {
            "none",
            "std",
            "all",
        }:
            continue
        assert _value(detail, node) == ""


def test_typ_column_uses_type_char() -> None:
    assert _value(DetailField.TYP, mk_node("d", typ=Typ.DIR)) == "d"
    assert _value(DetailField.TYP, mk_node("f")) == "f"
    assert _value(DetailField.TYP, mk_node("?", typ=Typ.UNKNOWN, meta=False)) == "?"


def test_uid_and_timestamp_values() -> None:
    node = mk_node("f", uid=4242, mtime_ns=0)
    assert _value(DetailField.UID, node) == "4242"
    assert _value(DetailField.MTIME, node) != ""
    assert _value(DetailField.BTIME, node) == ""


def test_detail_clean_expands_shorthands() -> None:
    assert DetailField.clean([DetailField.STD]) == [
        DetailField.TYP,
        DetailField.PERM,
        DetailField.USER,
        DetailField.GROUP,
        DetailField.SIZE,
        DetailField.MTIME,
        DetailField.NAME,
    ]
    assert DetailField.clean([DetailField.ALL, DetailField.NONE]) == [DetailField.NAME]
    assert DetailField.clean([DetailField.INO, DetailField.NAME, DetailField.INO]) == [
        DetailField.INO,
        DetailField.NAME,
    ]
    assert DetailField.NONE not in DetailField.clean([DetailField.ALL])
