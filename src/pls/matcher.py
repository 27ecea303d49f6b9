from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from .args import Args
from .config import Conf
from .models import Node, Spec

LOGGER = logging.getLogger(__name__)


def match_specs(name: str, specs: Sequence[Spec]) -> list[int]:
    """Return the indices of every spec whose pattern matches ``name``.

    The result keeps the ascending specificity order of ``specs``.
    """
    return [idx for idx, spec in enumerate(specs) if spec.pattern.search(name)]


def passes_filters(
    name: str, only: re.Pattern[str] | None, exclude: re.Pattern[str] | None
) -> bool:
    """A name passes if it matches ``only`` and does not match ``exclude``.

    Either pattern being unset counts as passing that half of the test.
    """
    if only is not None and not only.search(name):
        LOGGER.debug("Name %r did not match `--only`.", name)
        return False
    if exclude is not None and exclude.search(name):
        LOGGER.debug("Name %r matched `--exclude`.", name)
        return False
    return True


def importance(node: Node, conf: Conf) -> int:
    """Highest importance among the matched specs; 0 when nothing matches."""
    return max((spec.importance for spec in conf.specs_of(node)), default=0)


def is_visible(node: Node, conf: Conf, args: Args) -> bool:
    imp = importance(node, conf)
    if imp < args.min_imp or (args.max_imp is not None and imp > args.max_imp):
        LOGGER.debug("Node %r hidden by importance %d.", node.name, imp)
        return False
    return True


def directives(node: Node, conf: Conf) -> str:
    """Collect the style directives of a node.

    Type style comes first, then the importance style, then the style of each
    matched spec in specificity order, so the most specific spec is applied
    last and wins.
    """
    parts = [conf.constants.typ[node.typ].style]
    imp_style = conf.constants.imp_styles.get(importance(node, conf))
    if imp_style:
        parts.append(imp_style)
    parts.extend(spec.style for spec in conf.specs_of(node) if spec.style)
    return " ".join(part for part in parts if part)


def icon_name(node: Node, conf: Conf) -> str | None:
    """Pick the icon of the most specific spec, falling back to the type icon."""
    for spec in reversed(conf.specs_of(node)):
        if spec.icon:
            return spec.icon
    return conf.constants.typ[node.typ].icon
