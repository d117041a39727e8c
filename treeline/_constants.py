"""Common literal values used across treeline.

These constants keep directive syntax, marker attributes, and filesystem
defaults centralized so the parser, document model, builder, and tests share
the same values.

Examples
--------
>>> from treeline import _constants
>>> _constants.DIRECTIVE_PREFIX
'treeline'
>>> _constants.CONTENTS_ATTRIBUTE
'data-treeline-contents'
"""

from pathlib import Path

DIRECTIVE_PREFIX = "treeline"
CONTENTS_ATTRIBUTE = "data-treeline-contents"
DEFAULT_FRAGMENT = "default"
HTML_SUFFIX = ".html"
TEMPLATE_TAG = "template"
DEFAULT_CONFIG = Path("treeline.yaml")
DEFAULT_TEMPLATE_DIR = "templates"
