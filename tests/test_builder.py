"""Tests for discovering and rendering a whole build directory.

These tests lay out a miniature site under ``tmp_path`` with a ``templates``
directory of layouts and pages at several depths, then drive
:class:`treeline.builder.TreelineBuilder` end to end.
"""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup
from bs4.element import Comment

from treeline.builder import TreelineBuilder, collect_html_files, load_layouts
from treeline.config import BuildConfig
from treeline.errors import DuplicateLayoutError, LayoutDoesNotExistError

if typ.TYPE_CHECKING:
    from pathlib import Path

BASE_LAYOUT = (
    "<!DOCTYPE html>\n"
    "<html><body><header><!--treeline:includes:title--></header>"
    "<main><!--treeline:includes:default--></main></body></html>\n"
)


def _write(path: Path, source: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")


def _page(title: str, body: str) -> str:
    return (
        "<!--treeline:extends:base-->\n"
        f'<template data-treeline-contents="title">{title}</template>\n'
        f"<template data-treeline-contents>{body}</template>\n"
    )


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """Create a build directory with one layout and two pages."""
    _write(tmp_path / "templates" / "base.html", BASE_LAYOUT)
    _write(tmp_path / "index.html", _page("Home", "<p>Welcome</p>"))
    _write(tmp_path / "blog" / "post.html", _page("Post", "<article>Text</article>"))
    _write(tmp_path / "styles.css", "body {}")
    return tmp_path


def test_collect_html_files_skips_excluded_dirs(site: Path) -> None:
    found = collect_html_files(site, excludes=[site / "templates"])
    assert found == [site / "blog" / "post.html", site / "index.html"]


def test_run_renders_every_page_in_place(site: Path) -> None:
    written = TreelineBuilder(BuildConfig(build_dir=site)).run()
    assert written == [
        (site / "blog" / "post.html").resolve(),
        (site / "index.html").resolve(),
    ]

    soup = BeautifulSoup((site / "index.html").read_text(encoding="utf-8"), "html.parser")
    gap = soup.find(string=lambda s: isinstance(s, Comment) and "includes:default" in s)
    assert gap is not None
    assert gap.next_sibling.name == "p"
    assert soup.header.get_text() == "Home"
    assert soup.find("template") is None

    layout_text = (site / "templates" / "base.html").read_text(encoding="utf-8")
    assert layout_text == BASE_LAYOUT


def test_layouts_may_extend_layouts(tmp_path: Path) -> None:
    templates = tmp_path / "templates"
    _write(templates / "a-child.html", "<!--treeline:extends:z-root-->\n<p>x</p>")
    _write(templates / "z-root.html", "<div><!--treeline:includes:default--></div>")
    layouts = load_layouts(templates)
    assert layouts["a-child"].parent_layout is layouts["z-root"]


def test_duplicate_layout_labels_abort(tmp_path: Path) -> None:
    _write(tmp_path / "templates" / "base.html", BASE_LAYOUT)
    _write(tmp_path / "templates" / "nested" / "base.html", BASE_LAYOUT)
    with pytest.raises(DuplicateLayoutError):
        TreelineBuilder(BuildConfig(build_dir=tmp_path)).run()


def test_unknown_layout_aborts_build(site: Path) -> None:
    _write(site / "broken.html", "<!--treeline:extends:missing-->")
    with pytest.raises(LayoutDoesNotExistError):
        TreelineBuilder(BuildConfig(build_dir=site)).run()
    assert "treeline:extends:base" in (site / "index.html").read_text(encoding="utf-8")


def test_missing_template_dir_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        TreelineBuilder(BuildConfig(build_dir=tmp_path)).run()


def test_three_level_chain_writes_to_page_path(tmp_path: Path) -> None:
    templates = tmp_path / "templates"
    _write(templates / "root.html", "<div><!--treeline:includes:main--></div>")
    _write(
        templates / "mid.html",
        '<!--treeline:extends:root--><template data-treeline-contents="main">mid</template>',
    )
    _write(
        tmp_path / "page.html",
        '<!--treeline:extends:mid--><template data-treeline-contents="main">page</template>',
    )
    TreelineBuilder(BuildConfig(build_dir=tmp_path)).run()
    assert (tmp_path / "page.html").read_text(encoding="utf-8") == (
        "<div><!--treeline:includes:main-->mid</div>"
    )
    assert "treeline:extends:root" in (templates / "mid.html").read_text(encoding="utf-8")


def test_files_without_layout_are_left_untouched(site: Path) -> None:
    plain = "<p>a<p>b<br><input disabled>&copy;</p>\n"
    _write(site / "plain.html", plain)
    written = TreelineBuilder(BuildConfig(build_dir=site)).run()
    assert (site / "plain.html").resolve() not in written
    assert (site / "plain.html").read_text(encoding="utf-8") == plain


def test_symlinked_directories_are_not_followed(site: Path) -> None:
    (site / "blog" / "loop").symlink_to(site, target_is_directory=True)
    found = collect_html_files(site, excludes=[site / "templates"])
    assert found == [site / "blog" / "post.html", site / "index.html"]
