"""Exception hierarchy raised while resolving and merging treeline documents."""

from __future__ import annotations


class TreelineError(ValueError):
    """Base class for every treeline failure."""


class NoParentLayoutError(TreelineError):
    """Raised when a document is asked for a parent layout it does not have."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"No parent layout has been set for page '{label}'.")


class RootDirectiveIsNotLayoutError(TreelineError):
    """Raised when the first directive of a document is not ``extends``."""

    def __init__(self, label: str, scenario: str) -> None:
        self.label = label
        self.scenario = scenario
        super().__init__(
            f"The root treeline directive of page '{label}' must be a "
            f"'treeline:extends' comment, found 'treeline:{scenario}'."
        )


class LayoutDoesNotExistError(TreelineError):
    """Raised when an ``extends`` directive names an unknown layout."""

    def __init__(self, label: str, layout: str) -> None:
        self.label = label
        self.layout = layout
        super().__init__(
            f"The root treeline directive for '{label}' specifies an invalid "
            f"layout '{layout}'."
        )


class NotACommentError(TreelineError):
    """Raised when a directive is read from a node that is not a comment."""

    def __init__(self) -> None:
        super().__init__("Node is not a Comment.")


class NotTreelineCommentError(TreelineError):
    """Raised when a comment does not follow ``treeline:<scenario>:<value>``."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Comment '{text}' is not a treeline comment.")


class InvalidScenarioError(TreelineError):
    """Raised when a directive scenario is not recognised or not expected."""

    def __init__(self, scenario: str) -> None:
        self.scenario = scenario
        super().__init__(f"'{scenario}' is not a valid treeline comment scenario.")


class MissingContentFragmentError(TreelineError):
    """Raised when a layout gap has no same-named fragment in the content source."""

    def __init__(self, label: str, gap: str, layout: str) -> None:
        self.label = label
        self.gap = gap
        self.layout = layout
        super().__init__(
            f"Page '{label}' has no content fragment for include gap '{gap}' "
            f"declared by layout '{layout}'."
        )


class LayoutCycleError(TreelineError):
    """Raised when following ``extends`` directives revisits a document."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        joined = " -> ".join(chain)
        super().__init__(f"Layout chain contains a cycle: {joined}.")


class DuplicateLayoutError(TreelineError):
    """Raised when two layout files share a label."""

    def __init__(self, label: str, first: str, second: str) -> None:
        self.label = label
        super().__init__(
            f"Layout '{label}' is defined more than once ('{first}' and '{second}')."
        )


class OutputNotRenderedError(TreelineError, OSError):
    """Raised when writing a document whose output has not been rendered."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Page '{label}' has not been rendered yet.")


__all__ = [
    "DuplicateLayoutError",
    "InvalidScenarioError",
    "LayoutCycleError",
    "LayoutDoesNotExistError",
    "MissingContentFragmentError",
    "NoParentLayoutError",
    "NotACommentError",
    "NotTreelineCommentError",
    "OutputNotRenderedError",
    "RootDirectiveIsNotLayoutError",
    "TreelineError",
]
