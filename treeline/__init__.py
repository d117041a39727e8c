"""Compose HTML pages from layouts using directive comments.

Layouts declare insertion points with ``<!-- treeline:includes:name -->``;
pages name their layout with a leading ``<!-- treeline:extends:layout -->``
and supply markup in ``<template data-treeline-contents="name">`` blocks.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``TreelineFile``: Document model that resolves and renders one resource.
- ``LayoutRegistry``: Read-only label to layout mapping.
- ``TreelineBuilder``: Renders every page of a build directory.

Examples
--------
>>> from treeline import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .builder import TreelineBuilder
from .cli import app, main
from .document import TreelineFile
from .registry import LayoutRegistry

__all__ = ["LayoutRegistry", "TreelineBuilder", "TreelineFile", "app", "main"]
