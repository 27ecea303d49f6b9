from __future__ import annotations

import os
import re
from pathlib import Path

import pytest

from pls.config import ConfMan
from pls.enums import DetailField, SortField, Typ
from pls.listing import Lister

from conftest import output_of, plain_args


@pytest.fixture
def conf_man(tmp_path: Path) -> ConfMan:
    home = tmp_path / "home"
    home.mkdir()
    return ConfMan(home=home)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "Cargo.toml").write_text("[package]\n", encoding="utf-8")
    (root / "Cargo.lock").write_text("# lock\n", encoding="utf-8")
    (root / "README.md").write_text("hello\n", encoding="utf-8")
    (root / ".DS_Store").write_bytes(b"\x00")
    (root / "b.txt").write_text("b" * 10, encoding="utf-8")
    (root / "a.txt").write_text("a" * 20, encoding="utf-8")
    return root


def _lines(console) -> list[str]:
    return output_of(console).splitlines()


def test_lists_dirs_first_then_names(console, conf_man, project) -> None:
    args = plain_args(paths=(project,))
    assert Lister(args, console, conf_man).run() == 0

    # .DS_Store and Cargo.lock are below the default importance
    assert _lines(console) == [
        "docs",
        "src",
        "a.txt",
        "b.txt",
        "Cargo.toml",
        "README.md",
    ]


def test_collapsed_children_are_drawn_as_a_tree(console, conf_man, project) -> None:
    args = plain_args(paths=(project,), min_imp=-1)
    Lister(args, console, conf_man).run()

    lines = _lines(console)
    assert lines[lines.index("Cargo.toml") + 1] == "└─ Cargo.lock"
    assert "Cargo.lock" not in lines


def test_without_collapse_children_stay_top_level(console, conf_man, project) -> None:
    args = plain_args(paths=(project,), min_imp=-1, collapse=False)
    Lister(args, console, conf_man).run()
    assert "Cargo.lock" in _lines(console)


def test_sort_and_filters(console, conf_man, project) -> None:
    args = plain_args(
        paths=(project,),
        sort_bases=(SortField.SIZE_,),
        only=re.compile(r"\.txt$"),
        typs=frozenset({Typ.FILE}),
    )
    Lister(args, console, conf_man).run()
    assert _lines(console) == ["a.txt", "b.txt"]


def test_type_filter_keeps_only_directories(console, conf_man, project) -> None:
    args = plain_args(paths=(project,), typs=frozenset({Typ.DIR}))
    Lister(args, console, conf_man).run()
    assert _lines(console) == ["docs", "src"]


def test_solo_file_is_shown_as_given(console, conf_man, project) -> None:
    path = project / ".DS_Store"
    Lister(plain_args(paths=(path,)), console, conf_man).run()
    # visibility filters do not apply to a file listed on its own
    assert _lines(console) == [os.fspath(path)]


def test_failed_path_is_reported_and_listing_continues(
    console, conf_man, project
) -> None:
    missing = project / "missing"
    args = plain_args(paths=(missing, project / "docs"))

    assert Lister(args, console, conf_man).run() == 1

    lines = _lines(console)
    assert lines[0] == f"{missing}:"
    assert lines[1].startswith("Error:")
    assert str(missing) in lines[1]
    assert lines[2] == ""
    assert lines[3] == f"{project / 'docs'}:"


def test_detail_columns_and_header(console, conf_man, project) -> None:
    args = plain_args(
        paths=(project,),
        details=(DetailField.TYP, DetailField.SIZE, DetailField.NAME),
        header=True,
        only=re.compile(r"^(a\.txt|docs)$"),
    )
    Lister(args, console, conf_man).run()

    assert _lines(console) == [
        "T Size Name",
        "d      docs",
        "f  20B a.txt",
    ]


def test_suffix_alignment_and_icons(console, conf_man, project) -> None:
    args = plain_args(
        paths=(project,),
        only=re.compile(r"^(docs|\.DS_Store|a\.txt)$"),
        min_imp=-2,
        suffix=True,
        align=True,
    )
    Lister(args, console, conf_man).run()

    assert _lines(console) == [" docs/", " a.txt", ".DS_Store"]


def test_symlink_targets(console, conf_man, tmp_path: Path) -> None:
    root = tmp_path / "links"
    root.mkdir()
    (root / "real.txt").write_text("x", encoding="utf-8")
    (root / "good").symlink_to("real.txt")
    (root / "dangling").symlink_to("nowhere.txt")

    args = plain_args(paths=(root,), sym=True, sort_bases=(SortField.NAME,))
    Lister(args, console, conf_man).run()

    lines = _lines(console)
    assert lines[0].startswith("dangling ") and lines[0].endswith(" nowhere.txt")
    assert lines[1].startswith("good ") and lines[1].endswith(" real.txt")
    assert lines[2] == "real.txt"


def test_unreadable_directory_is_an_error(console, conf_man, tmp_path: Path) -> None:
    if os.geteuid() == 0:
        pytest.skip("root can read any directory")
    locked = tmp_path / "locked"
    locked.mkdir()
    locked.chmod(0)
    try:
        assert Lister(plain_args(paths=(locked,)), console, conf_man).run() == 1
    finally:
        locked.chmod(0o755)
    assert _lines(console)[0].startswith("Error:")


def test_invalid_config_fails_only_its_path(console, conf_man, project) -> None:
    broken = project / "docs"
    (broken / ".pls.toml").write_text(
        "[[specs]]\npattern = 'x'\nimportance = 'high'\n", encoding="utf-8"
    )
    args = plain_args(paths=(broken, project / "src"))

    assert Lister(args, console, conf_man).run() == 1

    lines = _lines(console)
    assert lines[1].startswith("Error:")
    assert "importance" in lines[1]
    assert lines[3] == f"{project / 'src'}:"
