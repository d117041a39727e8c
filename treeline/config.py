"""Load build settings from ``treeline.yaml``.

The file is optional and every key has a default::

    build_dir: build
    template_dir: templates
    suffix: .html

``template_dir`` is resolved relative to ``build_dir`` unless it is absolute.

Examples
--------
>>> from pathlib import Path
>>> from treeline.config import load_build_config
>>> config = load_build_config(Path("treeline.yaml"))  # doctest: +SKIP
>>> config.template_path  # doctest: +SKIP
PosixPath('build/templates')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from ._constants import DEFAULT_TEMPLATE_DIR, HTML_SUFFIX


class BuildConfigError(ValueError):
    """Raised when the build configuration is invalid."""


@dc.dataclass(slots=True)
class BuildConfig:
    """Directories and file selection for one build invocation."""

    build_dir: Path = dc.field(default_factory=Path)
    template_dir: str = DEFAULT_TEMPLATE_DIR
    suffix: str = HTML_SUFFIX

    @property
    def template_path(self) -> Path:
        """Return the layout directory, anchored at ``build_dir`` when relative."""
        template = Path(self.template_dir)
        if template.is_absolute():
            return template
        return self.build_dir / template

    def with_overrides(
        self,
        *,
        build_dir: Path | None = None,
        template_dir: str | None = None,
        suffix: str | None = None,
    ) -> BuildConfig:
        """Return a copy with any non-``None`` override applied."""
        return BuildConfig(
            build_dir=build_dir if build_dir is not None else self.build_dir,
            template_dir=template_dir if template_dir is not None else self.template_dir,
            suffix=_normalize_suffix(suffix) if suffix is not None else self.suffix,
        )


def _normalize_suffix(value: object) -> str:
    """Return ``value`` as a dotted lowercase suffix such as ``.html``."""
    text = str(value).strip().lower()
    if not text or text == ".":
        msg = "'suffix' must name a file extension."
        raise BuildConfigError(msg)
    return text if text.startswith(".") else f".{text}"


def _optional_text(raw: typ.Mapping[str, typ.Any], key: str) -> str | None:
    """Return a stripped string value for ``key`` or None when unset."""
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"'{key}' must be a string, got {type(value).__name__}."
        raise BuildConfigError(msg)
    return value.strip() or None


def load_build_config(path: Path) -> BuildConfig:
    """Load the YAML build configuration at ``path``.

    Parameters
    ----------
    path : Path
        Location of ``treeline.yaml``. Relative directories inside the file are
        resolved against the file's own directory.

    Returns
    -------
    BuildConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    BuildConfigError
        If a value has the wrong type.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    base = path.parent
    build_dir = _optional_text(raw, "build_dir")
    template_dir = _optional_text(raw, "template_dir") or DEFAULT_TEMPLATE_DIR
    suffix = raw.get("suffix")

    return BuildConfig(
        build_dir=base / build_dir if build_dir else base,
        template_dir=template_dir,
        suffix=_normalize_suffix(suffix) if suffix is not None else HTML_SUFFIX,
    )


__all__ = ["BuildConfig", "BuildConfigError", "load_build_config"]
