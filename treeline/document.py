"""Document model for treeline pages and layouts.

A :class:`TreelineFile` wraps one HTML resource. On load it parses the file,
reads the directive in its first node to find the layout it extends, and
collects the ``<template data-treeline-contents>`` fragments it supplies.
Rendering walks up the ``extends`` chain to the root layout, fills the root's
``includes`` gaps with fragments from the nearest descendant, and stores the
serialized result on the page that started the render.

Examples
--------
>>> from pathlib import Path
>>> from treeline.document import TreelineFile
>>> from treeline.registry import LayoutRegistry
>>> base = TreelineFile.init(Path("templates"), "base.html", LayoutRegistry())  # doctest: +SKIP
>>> layouts = LayoutRegistry.from_documents([base])  # doctest: +SKIP
>>> page = TreelineFile.init(Path("."), "home.html", layouts)  # doctest: +SKIP
>>> page.render().write()  # doctest: +SKIP
PosixPath('home.html')
"""

from __future__ import annotations

import copy
import enum
import logging
import typing as typ
from pathlib import Path

from bs4 import BeautifulSoup
from bs4.element import Doctype

from .directives import Scenario, detect_directive
from .discovery import ContentFragment, find_content_fragments, find_include_gaps
from .errors import (
    LayoutCycleError,
    LayoutDoesNotExistError,
    MissingContentFragmentError,
    NoParentLayoutError,
    OutputNotRenderedError,
    RootDirectiveIsNotLayoutError,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bs4.element import PageElement

    from .directives import DirectiveLookup, IncludeGap

logger = logging.getLogger(__name__)

HTML_PARSER = "html.parser"


class ParseMode(enum.Enum):
    """How a resource was interpreted when parsed."""

    DOCUMENT = "document"
    FRAGMENT = "fragment"


def parse_html(source: str) -> tuple[BeautifulSoup, ParseMode]:
    """Parse ``source`` and report whether it is a whole document.

    Sources carrying a doctype are whole documents; anything else is a
    fragment. ``html.parser`` never adds ``html``/``head``/``body`` wrappers, so
    fragments keep exactly the nodes they were written with.
    """
    tree = BeautifulSoup(source, HTML_PARSER)
    is_document = any(isinstance(node, Doctype) for node in tree.contents)
    return tree, ParseMode.DOCUMENT if is_document else ParseMode.FRAGMENT


class TreelineFile:
    """One HTML resource acting as a page, a layout, or both."""

    def __init__(self, parent: Path, name: str, source: str) -> None:
        """Wrap an already-read resource.

        Parameters
        ----------
        parent : Path
            Directory holding the resource.
        name : str
            File name of the resource inside ``parent``.
        source : str
            Raw HTML text of the resource.
        """
        self.parent = parent
        self.name = name
        self.source = source
        self.tree, self.mode = parse_html(source)
        self.root_directive: DirectiveLookup = detect_directive(
            self.tree.contents[0] if self.tree.contents else None
        )
        self.content_fragments: dict[str, ContentFragment] = find_content_fragments(
            self.tree
        )
        self.include_gaps: dict[str, IncludeGap] = {}
        self.rendered_output: str | None = None
        self._parent_layout: TreelineFile | None = None
        self._resolved = False

    @classmethod
    def load(cls, parent: Path, name: str) -> TreelineFile:
        """Read ``parent / name`` from disk without resolving its layout."""
        source = (parent / name).read_text(encoding="utf-8-sig")
        return cls(parent, name, source)

    @classmethod
    def init(
        cls, parent: Path, name: str, layouts: cabc.Mapping[str, TreelineFile]
    ) -> TreelineFile:
        """Load a resource and resolve its parent layout against ``layouts``."""
        document = cls.load(parent, name)
        document.resolve_parent(layouts)
        return document

    def __repr__(self) -> str:
        return f"TreelineFile({self.label!r}, path={str(self.path)!r})"

    @property
    def label(self) -> str:
        """Return the file name without its suffix, e.g. ``"colophon"``."""
        return Path(self.name).stem

    @property
    def path(self) -> Path:
        """Return the absolute path of the resource."""
        return (self.parent / self.name).resolve()

    @property
    def has_parent_layout(self) -> bool:
        """Return ``True`` when an ``extends`` directive was resolved."""
        return self._parent_layout is not None

    @property
    def parent_layout(self) -> TreelineFile:
        """Return the layout this document directly extends.

        Raises
        ------
        NoParentLayoutError
            If the document does not extend a layout. Call :meth:`render` to
            reach indirect ancestors.
        """
        if self._parent_layout is None:
            raise NoParentLayoutError(self.label)
        return self._parent_layout

    def resolve_parent(
        self, layouts: cabc.Mapping[str, TreelineFile]
    ) -> TreelineFile | None:
        """Resolve the ``extends`` directive in the document's first node.

        A missing, non-comment, or malformed first node means the document has
        no layout. Once resolved the parent never changes; later calls return
        the existing result.

        Raises
        ------
        RootDirectiveIsNotLayoutError
            If the first node is a directive other than ``extends``.
        LayoutDoesNotExistError
            If the named layout is not in ``layouts``.
        """
        if self._resolved:
            return self._parent_layout
        directive = self.root_directive.directive
        if directive is not None:
            if directive.scenario is not Scenario.EXTENDS:
                raise RootDirectiveIsNotLayoutError(self.label, directive.scenario)
            layout = layouts.get(directive.value)
            if layout is None:
                raise LayoutDoesNotExistError(self.label, directive.value)
            logger.debug("%s extends %s", self.label, layout.label)
            self._parent_layout = layout
        self._resolved = True
        return self._parent_layout

    def render(self, render_stack: list[TreelineFile] | None = None) -> TreelineFile:
        """Merge this document into its root layout and return the rendered page.

        Parameters
        ----------
        render_stack : list[TreelineFile], optional
            Descendants visited on the way up. Callers start with ``None``.

        Returns
        -------
        TreelineFile
            The content source, i.e. the document nearest to the root layout on
            the render stack, with :attr:`rendered_output` set. For a one-level
            chain this is the page the render started from. Fragments further
            down a longer chain are not visible to the root layout.

        Raises
        ------
        MissingContentFragmentError
            If a gap in the root layout has no same-named fragment.
        LayoutCycleError
            If the ``extends`` chain loops back on itself.
        """
        stack = list(render_stack or [])
        if self in stack:
            raise LayoutCycleError([doc.label for doc in [*stack, self]])
        if self._parent_layout is not None:
            return self._parent_layout.render([*stack, self])

        content_source = stack.pop() if stack else self
        tree = copy.copy(self.tree)
        self.include_gaps = find_include_gaps(tree)
        for name, gap in self.include_gaps.items():
            fragment = content_source.content_fragments.get(name)
            if fragment is None:
                raise MissingContentFragmentError(content_source.label, name, self.label)
            _splice_after(gap.node, fragment.nodes)
            logger.debug(
                "filled gap '%s' of %s from %s", name, self.label, content_source.label
            )
        content_source.rendered_output = tree.decode()
        return content_source

    def write(self) -> Path:
        """Write :attr:`rendered_output` over the resource and return its path.

        Raises
        ------
        OutputNotRenderedError
            If :meth:`render` has not produced output for this document. It is
            also an ``OSError``.
        OSError
            If the destination cannot be written.
        """
        if self.rendered_output is None:
            raise OutputNotRenderedError(self.label)
        path = self.path
        path.write_text(self.rendered_output, encoding="utf-8")
        return path


def _splice_after(anchor: PageElement, nodes: cabc.Iterable[PageElement]) -> None:
    """Insert copies of ``nodes`` after ``anchor``, preserving their order."""
    cursor = anchor
    for node in nodes:
        clone = copy.copy(node)
        cursor.insert_after(clone)
        cursor = clone


__all__ = ["HTML_PARSER", "ParseMode", "TreelineFile", "parse_html"]
