"""Discover layouts and pages on disk and render every page in place.

The builder runs in two strictly ordered phases. First every layout under the
template directory is loaded and linked into a :class:`LayoutRegistry`; only
then are the pages under the build directory loaded against that registry and
rendered one after another. Any error aborts the build.

>>> from pathlib import Path
>>> from treeline.builder import TreelineBuilder
>>> from treeline.config import BuildConfig
>>> TreelineBuilder(BuildConfig(build_dir=Path("build"))).run()  # doctest: +SKIP
[PosixPath('/site/build/index.html')]
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import HTML_SUFFIX
from .document import TreelineFile
from .registry import LayoutRegistry

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import BuildConfig

logger = logging.getLogger(__name__)


def collect_html_files(
    directory: Path,
    *,
    suffix: str = HTML_SUFFIX,
    excludes: cabc.Collection[Path] = (),
) -> list[Path]:
    """Return files below ``directory`` ending in ``suffix``, sorted by path.

    Directories listed in ``excludes`` are skipped together with everything
    beneath them. Symlinked directories are not followed.
    """
    excluded = {path.resolve() for path in excludes}
    found: list[Path] = []
    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            if entry.is_symlink():
                logger.debug("not following symlinked directory %s", entry)
                continue
            if entry.resolve() in excluded:
                logger.debug("skipping excluded directory %s", entry)
                continue
            found.extend(
                collect_html_files(entry, suffix=suffix, excludes=excludes)
            )
        elif entry.is_file() and entry.suffix.lower() == suffix:
            found.append(entry)
    return found


def load_layouts(template_dir: Path, *, suffix: str = HTML_SUFFIX) -> LayoutRegistry:
    """Load every layout under ``template_dir`` into a registry.

    All layouts are read before any ``extends`` directive is resolved, so a
    layout may extend another layout regardless of file order.
    """
    documents = [
        TreelineFile.load(path.parent, path.name)
        for path in collect_html_files(template_dir, suffix=suffix)
    ]
    registry = LayoutRegistry.from_documents(documents)
    for document in documents:
        document.resolve_parent(registry)
    logger.debug("loaded %d layouts from %s", len(registry), template_dir)
    return registry


def load_pages(
    build_dir: Path,
    layouts: cabc.Mapping[str, TreelineFile],
    *,
    suffix: str = HTML_SUFFIX,
    excludes: cabc.Collection[Path] = (),
) -> list[TreelineFile]:
    """Load every page under ``build_dir`` and resolve it against ``layouts``."""
    return [
        TreelineFile.init(path.parent, path.name, layouts)
        for path in collect_html_files(build_dir, suffix=suffix, excludes=excludes)
    ]


class TreelineBuilder:
    """Render every page of a build directory through its layouts."""

    def __init__(self, config: BuildConfig) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : BuildConfig
            Build and template directories plus the suffix of files to process.
        """
        self.config = config

    def discover(self) -> tuple[LayoutRegistry, list[TreelineFile]]:
        """Return the layout registry and the pages that use it."""
        template_dir = self.config.template_path
        if not template_dir.is_dir():
            msg = f"Template directory '{template_dir}' not found."
            raise FileNotFoundError(msg)
        layouts = load_layouts(template_dir, suffix=self.config.suffix)
        pages = load_pages(
            self.config.build_dir,
            layouts,
            suffix=self.config.suffix,
            excludes=[template_dir],
        )
        return layouts, pages

    def run(self) -> list[Path]:
        """Render and overwrite every page, returning the written paths.

        Files that do not extend a layout are left untouched.
        """
        _layouts, pages = self.discover()
        written: list[Path] = []
        for page in pages:
            if not page.has_parent_layout:
                logger.warning("%s: no treeline:extends directive, skipping", page.label)
                continue
            rendered = page.render()
            if rendered is not page:
                # Longer chains fill the root from the intermediate layout;
                # the result still belongs at the page's path.
                logger.warning(
                    "%s: root layout was filled from '%s', not from the page",
                    page.label,
                    rendered.label,
                )
                page.rendered_output = rendered.rendered_output
            written.append(page.write())
        return written


__all__ = [
    "TreelineBuilder",
    "collect_html_files",
    "load_layouts",
    "load_pages",
]
