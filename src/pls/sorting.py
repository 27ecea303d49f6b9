from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key

from .details import group_val, user_val
from .enums import DetailField, SortField
from .models import Node
from .owner import OwnerMan

_TIME_FIELDS = {
    SortField.BTIME: DetailField.BTIME,
    SortField.CTIME: DetailField.CTIME,
    SortField.MTIME: DetailField.MTIME,
    SortField.ATIME: DetailField.ATIME,
}


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _compare_no_meta(
    field: SortField, a: Node, b: Node, owner_man: OwnerMan
) -> int | None:
    if field == SortField.NAME:
        return _cmp(a.name, b.name)
    if field == SortField.CNAME:
        return _cmp(a.cname, b.cname)
    if field == SortField.EXT:
        return _cmp(a.ext, b.ext)
    if field == SortField.TYP:
        return _cmp(a.typ.rank, b.typ.rank)
    if field == SortField.CAT:
        return _cmp(a.typ.cat, b.typ.cat)
    if field == SortField.USER:
        return _cmp(user_val(a, owner_man), user_val(b, owner_man))
    if field == SortField.GROUP:
        return _cmp(group_val(a, owner_man), group_val(b, owner_man))
    return None


def _compare_meta(field: SortField, a: Node, b: Node) -> int | None:
    if a.meta is None or b.meta is None:
        return None
    attr = {
        SortField.DEV: "st_dev",
        SortField.INO: "st_ino",
        SortField.NLINK: "st_nlink",
        SortField.UID: "st_uid",
        SortField.GID: "st_gid",
        SortField.SIZE: "st_size",
        SortField.BLOCKS: "st_blocks",
    }.get(field)
    if attr is None:
        return None
    return _cmp(getattr(a.meta, attr, 0), getattr(b.meta, attr, 0))


def _compare_time(field: SortField, a: Node, b: Node) -> int | None:
    detail = _TIME_FIELDS.get(field)
    if detail is None:
        return None
    a_time = a.time_ns(detail)
    b_time = b.time_ns(detail)
    if a_time is None or b_time is None:
        return None
    return _cmp(a_time, b_time)


def compare(field: SortField, a: Node, b: Node, owner_man: OwnerMan) -> int:
    """Compare two nodes by one sort field.

    Reversed fields reuse the natural field's comparison and invert it. When
    no stage applies, for example because metadata is missing, the nodes
    compare equal and a stable sort keeps their current order.
    """
    basis, is_reversed = field.simplify()
    ord_ = _compare_no_meta(basis, a, b, owner_man)
    if ord_ is None:
        ord_ = _compare_meta(basis, a, b)
    if ord_ is None:
        ord_ = _compare_time(basis, a, b)
    if ord_ is None:
        ord_ = 0
    return -ord_ if is_reversed else ord_


def sort_nodes(
    nodes: list[Node], fields: Iterable[SortField], owner_man: OwnerMan
) -> None:
    """Sort ``nodes`` in place so that the first field is the dominant key.

    Each field is applied as a full stable pass, last field first.
    """
    if len(nodes) < 2:
        return
    for field in reversed(list(fields)):
        if field == SortField.NONE:
            continue
        nodes.sort(
            key=cmp_to_key(lambda a, b, f=field: compare(f, a, b, owner_man))
        )
