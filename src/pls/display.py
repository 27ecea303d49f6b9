from __future__ import annotations

from .args import Args
from .config import Conf
from .details import detail_value
from .enums import Appearance, DetailField
from .fmt import escape, styled
from .images import image_icon, is_image_icon
from .matcher import directives, icon_name, match_specs
from .models import Node
from .owner import OwnerMan
from .symlinks import read_target
from .window import Window

Row = dict[DetailField, str]


def aligned_name(node: Node) -> str:
    """Dim a leading dot, or pad with a space, so that letters line up."""
    if node.name.startswith("."):
        return f"[dim].[/]{escape(node.name[1:])}"
    return f" {escape(node.name)}"


def icon(node: Node, conf: Conf, window: Window | None) -> str:
    """Icon markup for a node, image sequences included.

    Glyph icons always occupy one cell plus a separating space. Image icons
    are only drawn when ``window`` is known, and move the cursor themselves.
    """
    name = icon_name(node, conf)
    # nodes that could not be stat-ed
    if node.meta is None and "missing" in conf.icons:
        name = "missing"
    elif name == "dir" and node.appearance == Appearance.TREE_PARENT:
        name = "dir_open" if "dir_open" in conf.icons else name
    value = conf.icons.get(name, "") if name else ""

    if value and is_image_icon(value):
        if window is not None:
            rendered = image_icon(value, conf.constants.icon_size, window)
            if rendered:
                return rendered
        value = ""
    return f"{escape(value) or ' '} "


def symlink_target(node: Node, conf: Conf, args: Args) -> str:
    target = read_target(node)
    if target is None:
        return ""
    info = conf.constants.symlink[target.state]
    sep = styled(info.sep, info.style)
    if target.node is None:
        return f" {sep} {styled(escape(target.text), info.style)}"
    target.node.specs = match_specs(target.node.name, conf.specs)
    return f" {sep} {display_name(target.node, conf, args)}"


def display_name(
    node: Node, conf: Conf, args: Args, window: Window | None = None
) -> str:
    """Markup for the name cell: icon, name, suffix and symlink target."""
    text_directives = directives(node, conf)
    # underlined icons look broken
    icon_directives = " ".join(
        part for part in text_directives.split() if part != "underline"
    )
    is_target = node.appearance == Appearance.SYMLINK

    parts: list[str] = []
    if args.icon and not is_target:
        parts.append(styled(icon(node, conf, window), icon_directives))

    name = aligned_name(node) if args.align and not is_target else escape(node.name)
    if args.suffix:
        name += conf.constants.typ[node.typ].suffix
    parts.append(styled(name, text_directives))

    if args.sym and not is_target:
        parts.append(symlink_target(node, conf, args))
    return "".join(parts)


def row(
    node: Node,
    owner_man: OwnerMan,
    conf: Conf,
    args: Args,
    window: Window | None = None,
) -> Row:
    """Values of every requested detail column, in the order requested."""
    return {
        detail: (
            display_name(node, conf, args, window)
            if detail == DetailField.NAME
            else detail_value(detail, node, owner_man, conf, args)
        )
        for detail in args.details
    }


def entries(
    node: Node,
    owner_man: OwnerMan,
    conf: Conf,
    args: Args,
    window: Window | None = None,
    shapes: tuple[str, ...] = (),
    is_last: bool | None = None,
) -> list[Row]:
    """Flatten a node and its collapsed children into table rows.

    Children follow their parent and get tree-drawing shapes in front of
    their name. ``is_last`` is ``None`` for top-level nodes.
    """
    tree = conf.constants.tree
    current = row(node, owner_man, conf, args, window)
    if is_last is not None and DetailField.NAME in current:
        prefix = "".join(shapes) + (tree.bend_dash if is_last else tree.tee_dash)
        current[DetailField.NAME] = styled(prefix, "dim") + current[DetailField.NAME]

    rows = [current]
    child_shapes = shapes
    if is_last is not None:
        child_shapes = (*shapes, tree.space_space if is_last else tree.pipe_space)
    for idx, child in enumerate(node.children):
        rows.extend(
            entries(
                child,
                owner_man,
                conf,
                args,
                window,
                child_shapes,
                idx == len(node.children) - 1,
            )
        )
    return rows
