from __future__ import annotations

import io
import stat
from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

from pls.args import Args
from pls.config import Conf
from pls.enums import Collapse, CollapseKind, Typ
from pls.matcher import match_specs
from pls.models import Node, Spec


@dataclass
class FakeStat:
    st_mode: int = stat.S_IFREG | 0o644
    st_ino: int = 1
    st_dev: int = 1
    st_nlink: int = 1
    st_uid: int = 0
    st_gid: int = 0
    st_size: int = 0
    st_blocks: int = 0
    st_atime_ns: int = 0
    st_mtime_ns: int = 0
    st_ctime_ns: int = 0


def mk_node(
    name: str,
    *,
    typ: Typ = Typ.FILE,
    size: int = 0,
    mtime_ns: int = 0,
    mode: int | None = None,
    uid: int = 0,
    gid: int = 0,
    ino: int = 1,
    meta: bool = True,
    conf: Conf | None = None,
) -> Node:
    type_bits = stat.S_IFDIR if typ == Typ.DIR else stat.S_IFREG
    fake = FakeStat(
        st_mode=mode if mode is not None else type_bits | 0o644,
        st_ino=ino,
        st_uid=uid,
        st_gid=gid,
        st_size=size,
        st_mtime_ns=mtime_ns,
    )
    node = Node(
        name=name,
        path=Path("/virtual") / name,
        meta=fake if meta else None,  # type: ignore[arg-type]
        typ=typ,
    )
    if conf is not None:
        node.specs = match_specs(name, conf.specs)
    return node


def mk_spec(
    pattern: str,
    icon: str | None = None,
    *,
    style: str | None = None,
    importance: int = 0,
    collapse_name: str | None = None,
    collapse_ext: str | None = None,
) -> Spec:
    collapse = None
    if collapse_name is not None:
        collapse = Collapse(CollapseKind.NAME, collapse_name)
    elif collapse_ext is not None:
        collapse = Collapse(CollapseKind.EXT, collapse_ext)
    return Spec.build(
        pattern, icon, style=style, importance=importance, collapse=collapse
    )


def mk_conf(*specs: Spec) -> Conf:
    return Conf(specs=list(specs))


def plain_args(**overrides) -> Args:
    defaults = dict(icon=False, align=False, suffix=False, sym=False, header=False)
    defaults.update(overrides)
    return Args(**defaults)


@pytest.fixture
def console() -> Console:
    return Console(
        file=io.StringIO(),
        width=200,
        color_system=None,
        highlight=False,
        soft_wrap=True,
        emoji=False,
    )


def output_of(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]
