"""Data types shared by the import organizer stages.

Records are immutable; every stage builds a new list instead of editing the
one it was given.
"""
from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from typing import Optional
from typing import Tuple

NORMAL = "normal"
ALIGNED = "aligned"
FORMAT_STYLES = (NORMAL, ALIGNED)

EXTERNAL = "external"
ALIAS = "alias"
RELATIVE = "relative"
SOURCE_CLASSES = (EXTERNAL, ALIAS, RELATIVE)

DEFAULT_PATH_ALIASES = ("@/", "~/", "@components/", "@services/", "@utils/", "@hooks/")
DEFAULT_BARREL_TARGETS = frozenset({
    "@mui/material",
    "@mui/icons-material",
    "@mui/lab",
    "@mui/x-data-grid",
    "@mui/x-date-pickers",
})
DEFAULT_PINNED_MARKER = "fix-ts-path"


@dataclass(frozen=True)
class ImportRecord:
    """One parsed import line.

    ``module_path`` keeps its quotes so the line can be re-emitted with the
    same quote style. A record with empty ``raw_text`` is a blank separator.
    """

    raw_text: str
    specifier: str
    module_path: str
    is_named: bool = False
    is_asterisk: bool = False
    is_side_effect: bool = False
    is_mixed: bool = False
    is_pinned: bool = False
    source_class: Optional[str] = None

    @property
    def is_separator(self) -> bool:
        return self.raw_text == ""

    @property
    def bare_path(self) -> str:
        """Module path without its surrounding quotes."""
        return self.module_path[1:-1]

    @property
    def quote(self) -> str:
        return self.module_path[:1]

    def with_source_class(self, source_class: str) -> "ImportRecord":
        return replace(self, source_class=source_class)


SEPARATOR = ImportRecord(raw_text="", specifier="", module_path="")


@dataclass(frozen=True)
class ImportBlock:
    """The leading run of import lines found in a document."""

    start_line: int
    end_line: int
    records: Tuple[ImportRecord, ...]


@dataclass(frozen=True)
class EditOp:
    """A single replace edit, in zero-based line/column coordinates."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    replacement_text: str


@dataclass(frozen=True)
class OrganizerConfig:
    """Options for one organize call."""

    format_style: str = ALIGNED
    optimize_barrel_imports: bool = False
    group_by_source_class: bool = True
    remove_unused: bool = False
    path_alias_prefixes: Tuple[str, ...] = DEFAULT_PATH_ALIASES
    barrel_optimization_targets: frozenset = field(default=DEFAULT_BARREL_TARGETS)
    pinned_module_marker: str = DEFAULT_PINNED_MARKER

    def __post_init__(self) -> None:
        if self.format_style not in FORMAT_STYLES:
            raise ValueError(
                f"Unknown format style {self.format_style!r}; expected one of {', '.join(FORMAT_STYLES)}")
        # Accept lists from config files and callers.
        object.__setattr__(self, "path_alias_prefixes", tuple(self.path_alias_prefixes))
        object.__setattr__(self, "barrel_optimization_targets", frozenset(self.barrel_optimization_targets))
