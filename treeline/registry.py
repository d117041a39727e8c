"""Read-only lookup of layouts by label."""

from __future__ import annotations

import collections.abc as cabc
import types
import typing as typ

from .errors import DuplicateLayoutError

if typ.TYPE_CHECKING:
    from .document import TreelineFile


class LayoutRegistry(cabc.Mapping[str, "TreelineFile"]):
    """Immutable mapping of layout label to :class:`TreelineFile`.

    The registry is populated once, before any page is resolved, and handed to
    the document model explicitly. Missing labels surface as ``KeyError`` here;
    documents translate that into :class:`LayoutDoesNotExistError`.
    """

    def __init__(self, layouts: cabc.Mapping[str, TreelineFile] | None = None) -> None:
        self._layouts = types.MappingProxyType(dict(layouts or {}))

    @classmethod
    def from_documents(cls, documents: cabc.Iterable[TreelineFile]) -> LayoutRegistry:
        """Build a registry from ``documents``, keyed by their labels.

        Raises
        ------
        DuplicateLayoutError
            If two documents share a label.
        """
        layouts: dict[str, TreelineFile] = {}
        for document in documents:
            existing = layouts.get(document.label)
            if existing is not None:
                raise DuplicateLayoutError(
                    document.label, str(existing.path), str(document.path)
                )
            layouts[document.label] = document
        return cls(layouts)

    def __getitem__(self, label: str) -> TreelineFile:
        return self._layouts[label]

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._layouts)

    def __len__(self) -> int:
        return len(self._layouts)

    def __repr__(self) -> str:
        return f"LayoutRegistry({sorted(self._layouts)!r})"


__all__ = ["LayoutRegistry"]
