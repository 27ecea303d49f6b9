from __future__ import annotations

import re

from pls.config import Conf
from pls.enums import Typ
from pls.matcher import (
    directives,
    icon_name,
    importance,
    is_visible,
    match_specs,
    passes_filters,
)

from conftest import mk_conf, mk_node, mk_spec, plain_args


def test_match_specs_keeps_specificity_order() -> None:
    specs = [
        mk_spec(r"\.toml$", "json"),
        mk_spec(r"^README"),
        mk_spec(r"^Cargo\.toml$", "package"),
    ]
    assert match_specs("Cargo.toml", specs) == [0, 2]
    assert match_specs("README.md", specs) == [1]
    assert match_specs("main.rs", specs) == []


def test_match_specs_searches_anywhere_in_name() -> None:
    assert match_specs("my-Dockerfile.dev", [mk_spec("Dockerfile")]) == [0]


def test_directives_concatenate_in_match_order() -> None:
    conf = mk_conf(
        mk_spec(r"\.rs$", style="red"),
        mk_spec(r"^main", style="bold"),
        mk_spec(r"^main\.rs$"),
    )
    node = mk_node("main.rs", conf=conf)
    assert directives(node, conf) == "red bold"


def test_directives_start_with_type_and_importance_styles() -> None:
    conf = mk_conf(mk_spec(r"^src$", style="green", importance=1))
    conf.constants.imp_styles = {1: "italic"}
    node = mk_node("src", typ=Typ.DIR, conf=conf)
    assert directives(node, conf) == "blue italic green"


def test_icon_prefers_most_specific_spec() -> None:
    conf = mk_conf(
        mk_spec(r"\.toml$", "json"),
        mk_spec(r"^Cargo"),
        mk_spec(r"^Cargo\.toml$", "package"),
        mk_spec(r"^Cargo\.", style="red"),
    )
    node = mk_node("Cargo.toml", conf=conf)
    assert icon_name(node, conf) == "package"


def test_icon_falls_back_to_type_then_nothing() -> None:
    conf = mk_conf(mk_spec(r"\.md$", style="bold"))
    assert icon_name(mk_node("docs", typ=Typ.DIR, conf=conf), conf) == "dir"
    assert icon_name(mk_node("notes.md", conf=conf), conf) is None


def test_passes_filters_requires_only_and_not_exclude() -> None:
    only = re.compile(r"\.py$")
    exclude = re.compile(r"^test_")

    assert passes_filters("app.py", None, None)
    assert passes_filters("app.py", only, exclude)
    assert not passes_filters("app.rs", only, None)
    assert not passes_filters("test_app.py", only, exclude)
    assert not passes_filters("test_app.rs", None, exclude)


def test_importance_is_max_over_matched_specs() -> None:
    conf = mk_conf(
        mk_spec(r"^\.", importance=-1),
        mk_spec(r"^\.env"),
        mk_spec(r"^\.env$", importance=1),
    )
    assert importance(mk_node(".env", conf=conf), conf) == 1
    # `^\.env` carries the default importance of 0
    assert importance(mk_node(".envrc", conf=conf), conf) == 0
    assert importance(mk_node(".bashrc", conf=conf), conf) == -1
    assert importance(mk_node("plain", conf=conf), conf) == 0


def test_visibility_follows_importance_range() -> None:
    conf = mk_conf(
        mk_spec(r"^\.DS_Store$", importance=-2),
        mk_spec(r"^README", importance=2),
    )
    hidden = mk_node(".DS_Store", conf=conf)
    readme = mk_node("README.md", conf=conf)
    plain = mk_node("notes.txt", conf=conf)

    assert not is_visible(hidden, conf, plain_args())
    assert is_visible(hidden, conf, plain_args(min_imp=-2))
    assert is_visible(readme, conf, plain_args())
    assert not is_visible(readme, conf, plain_args(max_imp=1))
    assert is_visible(plain, conf, plain_args(max_imp=1))


def test_default_conf_lock_file_collapses_into_manifest() -> None:
    conf = Conf()
    node = mk_node("Cargo.lock", conf=conf)
    collapses = [spec.collapse for spec in conf.specs_of(node) if spec.collapse]
    assert [c.value for c in collapses] == ["Cargo.toml"]
    assert icon_name(node, conf) == "lock"
