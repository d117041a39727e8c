"""Cyclopts CLI entrypoint for composing HTML pages from treeline layouts.

The ``treeline`` console script defined here merges every page of a build
directory into the layouts kept in its template directory, overwriting each
page in place. Typical usage runs ``treeline build`` after the site's assets
have been copied into the build directory, and ``treeline describe`` to see
which layouts and fragments were discovered.

Examples
--------
Render every page under ``build`` with layouts from ``build/templates``:

>>> from treeline.cli import app
>>> app.run(["build", "--build-dir", "build"])  # doctest: +SKIP

Inspect the discovered layouts without writing anything:

>>> app.run(["describe", "--build-dir", "build"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG
from .builder import TreelineBuilder
from .config import BuildConfig, load_build_config
from .discovery import find_include_gaps

if typ.TYPE_CHECKING:
    from .document import TreelineFile

app = App(name="treeline", config=cyclopts.config.Env("TREELINE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_config(
    config: Path,
    build_dir: Path | None,
    template_dir: str | None,
    suffix: str | None,
) -> BuildConfig:
    """Merge the optional config file with command-line overrides."""
    base = load_build_config(config) if config.exists() else BuildConfig()
    return base.with_overrides(
        build_dir=build_dir, template_dir=template_dir, suffix=suffix
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Merge every page into its layouts and overwrite it in place.")
def build(
    *,
    build_dir: typ.Annotated[
        Path | None,
        Parameter(help="Directory holding the pages", env_var="TREELINE_BUILD_DIR"),
    ] = None,
    template_dir: typ.Annotated[
        str | None,
        Parameter(
            help="Layout directory, relative to the build directory",
            env_var="TREELINE_TEMPLATE_DIR",
        ),
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to build config", env_var="TREELINE_CONFIG")
    ] = DEFAULT_CONFIG,
    suffix: typ.Annotated[
        str | None, Parameter(help="Extension of files to process")
    ] = None,
    verbose: bool = False,
) -> None:
    """Render every page of the build directory through its layouts.

    Parameters
    ----------
    build_dir : Path or None, optional
        Directory scanned for pages; overrides ``build_dir`` from the config
        file.
    template_dir : str or None, optional
        Directory holding the layouts; excluded from the page scan.
    config : Path, optional
        Optional ``treeline.yaml``; ignored when it does not exist.
    suffix : str or None, optional
        File extension of documents to process, ``.html`` by default.
    verbose : bool, optional
        Emit debug logging for directive and gap discovery.

    Returns
    -------
    None
        Overwrites each page and prints the written paths.

    Raises
    ------
    TreelineError
        If any page cannot be resolved or merged. Nothing after the failing
        page is written.
    """
    _configure_logging(verbose)
    build_config = _resolve_config(config, build_dir, template_dir, suffix)
    for path in TreelineBuilder(build_config).run():
        print(f"wrote {_format_path(path)}")


def _describe_document(document: TreelineFile) -> str:
    parent = document.parent_layout.label if document.has_parent_layout else "-"
    return f"{document.label} ({document.mode.value}) extends {parent}"


@app.command(help="List discovered layouts, include gaps, and content fragments.")
def describe(
    *,
    build_dir: typ.Annotated[
        Path | None,
        Parameter(help="Directory holding the pages", env_var="TREELINE_BUILD_DIR"),
    ] = None,
    template_dir: typ.Annotated[
        str | None,
        Parameter(
            help="Layout directory, relative to the build directory",
            env_var="TREELINE_TEMPLATE_DIR",
        ),
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to build config", env_var="TREELINE_CONFIG")
    ] = DEFAULT_CONFIG,
    suffix: typ.Annotated[
        str | None, Parameter(help="Extension of files to process")
    ] = None,
) -> None:
    """Print each layout with its gaps and each page with its fragments."""
    build_config = _resolve_config(config, build_dir, template_dir, suffix)
    layouts, pages = TreelineBuilder(build_config).discover()
    print("layouts:")
    for label in sorted(layouts):
        layout = layouts[label]
        gaps = ", ".join(find_include_gaps(layout.tree)) or "-"
        print(f"  {_describe_document(layout)}; gaps: {gaps}")
    print("pages:")
    for page in pages:
        fragments = ", ".join(page.content_fragments) or "-"
        print(f"  {_describe_document(page)}; fragments: {fragments}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``treeline`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
