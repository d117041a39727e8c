"""Parse treeline directive comments.

A directive is an HTML comment whose text reads ``treeline:<scenario>:<value>``,
for example ``<!-- treeline:extends:base -->`` or
``<!-- treeline:includes:main -->``. Only the first directive in a comment is
considered and ``value`` runs to the end of that line verbatim.

Examples
--------
>>> from treeline.directives import parse_treeline_comment
>>> parse_treeline_comment(" treeline:extends:base ")
TreelineComment(scenario=<Scenario.EXTENDS: 'extends'>, value='base')
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import re
import typing as typ

from bs4.element import Comment

from ._constants import DIRECTIVE_PREFIX
from .errors import InvalidScenarioError, NotACommentError, NotTreelineCommentError

if typ.TYPE_CHECKING:
    from bs4.element import PageElement

logger = logging.getLogger(__name__)

DIRECTIVE_PATTERN = re.compile(rf"{DIRECTIVE_PREFIX}:(\w+):(.+)")


class Scenario(enum.StrEnum):
    """Directive kinds understood by the comment parser."""

    EXTENDS = "extends"
    INCLUDES = "includes"
    # Accepted by the parser; nothing acts on it yet.
    CONTENTS = "contents"


class DirectiveStatus(enum.Enum):
    """Outcome of looking for a directive on a node."""

    ABSENT = "absent"
    MALFORMED = "malformed"
    FOUND = "found"


@dc.dataclass(frozen=True, slots=True)
class TreelineComment:
    """A parsed ``treeline:<scenario>:<value>`` directive."""

    scenario: Scenario
    value: str


@dc.dataclass(frozen=True, slots=True)
class IncludeGap:
    """A named insertion point inside a layout tree.

    Attributes
    ----------
    name : str
        Directive value addressed by content fragments.
    node : Comment
        The ``includes`` comment itself. Borrowed from the layout tree; content
        is spliced directly after it.
    """

    name: str
    node: Comment


@dc.dataclass(frozen=True, slots=True)
class DirectiveLookup:
    """Non-raising result of :func:`detect_directive`.

    ``ABSENT`` covers missing nodes, non-comment nodes, and comments that are
    not directives at all. ``MALFORMED`` is reserved for comments that look
    like directives but name an unknown scenario.
    """

    status: DirectiveStatus
    directive: TreelineComment | None = None
    error: Exception | None = None

    @property
    def found(self) -> bool:
        """Return ``True`` when a well-formed directive was parsed."""
        return self.status is DirectiveStatus.FOUND


def parse_treeline_comment(text: str) -> TreelineComment:
    """Parse the raw text of a comment into a :class:`TreelineComment`.

    Parameters
    ----------
    text : str
        Comment body without the ``<!--``/``-->`` delimiters. Surrounding
        whitespace is ignored.

    Returns
    -------
    TreelineComment
        The scenario and the untrimmed remainder of the matched line.

    Raises
    ------
    NotTreelineCommentError
        If the text does not contain ``treeline:<scenario>:<value>``.
    InvalidScenarioError
        If the scenario token is not a :class:`Scenario` member.
    """
    stripped = text.strip()
    match = DIRECTIVE_PATTERN.search(stripped)
    if match is None:
        raise NotTreelineCommentError(stripped)
    token, value = match.groups()
    try:
        scenario = Scenario(token)
    except ValueError as exc:
        raise InvalidScenarioError(token) from exc
    return TreelineComment(scenario=scenario, value=value)


def parse_comment_node(node: PageElement) -> TreelineComment:
    """Parse ``node`` as a directive comment, raising when it is not one."""
    if not isinstance(node, Comment):
        raise NotACommentError
    return parse_treeline_comment(str(node))


def parse_include_gap_comment(node: PageElement) -> IncludeGap:
    """Parse ``node`` as an ``includes`` directive.

    Raises
    ------
    NotACommentError
        If ``node`` is not a comment.
    NotTreelineCommentError
        If the comment is not a directive.
    InvalidScenarioError
        If the directive is well formed but not an ``includes`` directive.
    """
    directive = parse_comment_node(node)
    if directive.scenario is not Scenario.INCLUDES:
        raise InvalidScenarioError(directive.scenario)
    return IncludeGap(name=directive.value, node=typ.cast("Comment", node))


def detect_directive(node: PageElement | None) -> DirectiveLookup:
    """Look for a directive on ``node`` without raising.

    Examples
    --------
    >>> from bs4 import BeautifulSoup
    >>> soup = BeautifulSoup("<!--treeline:bogus:x-->", "html.parser")
    >>> detect_directive(soup.contents[0]).status
    <DirectiveStatus.MALFORMED: 'malformed'>
    """
    if node is None:
        return DirectiveLookup(DirectiveStatus.ABSENT)
    try:
        directive = parse_comment_node(node)
    except (NotACommentError, NotTreelineCommentError) as exc:
        return DirectiveLookup(DirectiveStatus.ABSENT, error=exc)
    except InvalidScenarioError as exc:
        logger.debug("ignoring malformed directive: %s", exc)
        return DirectiveLookup(DirectiveStatus.MALFORMED, error=exc)
    return DirectiveLookup(DirectiveStatus.FOUND, directive=directive)


__all__ = [
    "DIRECTIVE_PATTERN",
    "DirectiveLookup",
    "DirectiveStatus",
    "IncludeGap",
    "Scenario",
    "TreelineComment",
    "detect_directive",
    "parse_comment_node",
    "parse_include_gap_comment",
    "parse_treeline_comment",
]
