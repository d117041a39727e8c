"""Locate include gaps and content fragments inside parsed HTML trees."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from bs4.element import Tag

from ._constants import CONTENTS_ATTRIBUTE, DEFAULT_FRAGMENT, TEMPLATE_TAG
from .directives import IncludeGap, parse_include_gap_comment
from .errors import TreelineError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bs4.element import PageElement

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class ContentFragment:
    """A labelled ``<template data-treeline-contents>`` block.

    Attributes
    ----------
    name : str
        Fragment name, ``"default"`` when the marker attribute is empty.
    template : Tag
        The template element. Its children are what gets spliced.
    """

    name: str
    template: Tag

    @property
    def nodes(self) -> list[PageElement]:
        """Return the template's child nodes in document order."""
        return list(self.template.contents)


def walk_tree(
    node: PageElement, visit: cabc.Callable[[PageElement], bool]
) -> None:
    """Visit ``node`` and its descendants depth-first in document order.

    ``visit`` returns ``True`` to stop descending below the node it was given.
    """
    if visit(node):
        return
    if isinstance(node, Tag):
        # Copy so callers may splice siblings while walking.
        for child in list(node.contents):
            walk_tree(child, visit)


def find_include_gaps(root: PageElement) -> dict[str, IncludeGap]:
    """Return every ``includes`` directive below ``root`` keyed by gap name.

    Later gaps with a repeated name replace earlier ones.
    """
    gaps: dict[str, IncludeGap] = {}

    def _visit(node: PageElement) -> bool:
        try:
            gap = parse_include_gap_comment(node)
        except TreelineError:
            return False
        logger.debug("found include gap '%s'", gap.name)
        gaps[gap.name] = gap
        return True

    walk_tree(root, _visit)
    return gaps


def find_content_fragments(root: Tag) -> dict[str, ContentFragment]:
    """Return content fragments declared as direct children of ``root``.

    Only ``<template>`` elements carrying ``data-treeline-contents`` count. An
    empty attribute value registers the fragment as ``"default"``; a repeated
    name keeps the last template.
    """
    fragments: dict[str, ContentFragment] = {}
    for child in root.children:
        if not isinstance(child, Tag) or child.name != TEMPLATE_TAG:
            continue
        if not child.has_attr(CONTENTS_ATTRIBUTE):
            continue
        name = str(child.get(CONTENTS_ATTRIBUTE) or "") or DEFAULT_FRAGMENT
        fragments[name] = ContentFragment(name=name, template=child)
    return fragments


__all__ = [
    "ContentFragment",
    "find_content_fragments",
    "find_include_gaps",
    "walk_tree",
]
