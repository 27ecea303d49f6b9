from __future__ import annotations

import logging
from pathlib import PurePath

from .config import Conf
from .enums import Appearance, CollapseKind
from .models import Node

LOGGER = logging.getLogger(__name__)


def find_collapse(node: Node, conf: Conf) -> str | None:
    """Name of the sibling this node collapses under, from its most specific rule."""
    for spec in reversed(conf.specs_of(node)):
        collapse = spec.collapse
        if collapse is None:
            continue
        if collapse.kind == CollapseKind.NAME:
            target = collapse.value
        else:
            try:
                target = PurePath(node.name).with_suffix(f".{collapse.value}").name
            except ValueError:
                return None
        # a node never collapses into itself
        return target if target != node.name else None
    return None


def _make_tree_node(node: Node, child_map: dict[str, list[Node]]) -> Node:
    children = [
        _make_tree_node(child, child_map) for child in child_map.pop(node.name, [])
    ]
    node.children = children
    if children:
        node.appearance = Appearance.TREE_PARENT
    return node


def resolve_collapses(nodes: list[Node], conf: Conf) -> list[Node]:
    """Move collapsed nodes under their parents, returning only the roots.

    Parents are found by name, recursively, so a child can itself own a
    further group. Nodes whose parent is not listed are dropped.
    """
    roots: list[Node] = []
    child_map: dict[str, list[Node]] = {}
    for node in nodes:
        node.collapse_name = find_collapse(node, conf)
        if node.collapse_name is None:
            roots.append(node)
            continue
        node.appearance = Appearance.TREE_CHILD
        child_map.setdefault(node.collapse_name, []).append(node)

    trees = [_make_tree_node(root, child_map) for root in roots]
    for target, orphans in child_map.items():
        LOGGER.debug(
            "Dropping %s; collapse target %r is not listed.",
            ", ".join(orphan.name for orphan in orphans),
            target,
        )
    return trees
