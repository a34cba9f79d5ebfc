#!/usr/bin/env python3
"""Core utilities for order-import. This module
organizes the leading import block of a JavaScript or TypeScript document:
it sorts imports into precedence buckets, optionally groups them by source,
renders them in the normal or aligned style and returns the result as a
single replace edit. It also exposes the file-level helpers used by the CLI.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple

from order_import.models import ALIGNED
from order_import.models import SEPARATOR
from order_import.models import SOURCE_CLASSES
from order_import.models import EditOp
from order_import.models import ImportBlock
from order_import.models import ImportRecord
from order_import.models import OrganizerConfig
from order_import.parser import find_import_block
from order_import.rules import classify_imports
from order_import.rules import optimize_barrel_imports
from order_import.rules import remove_unused_imports
from .style_rules import render_imports

LOG = logging.getLogger(__name__)

SOURCE_SUFFIXES = {".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"}
SKIPPED_DIRS = {"node_modules"}

PINNED, NAMESPACE, NAMED, MIXED, DEFAULT, SIDE_EFFECT = range(6)


def bucket_of(record: ImportRecord) -> int:
    """Return the precedence bucket of a record; lower buckets render first."""
    if record.is_pinned:
        return PINNED
    if record.is_side_effect:
        return SIDE_EFFECT
    if record.is_asterisk:
        return NAMESPACE
    if record.is_named:
        return NAMED
    if record.is_mixed:
        return MIXED
    return DEFAULT


def sort_imports(records: Sequence[ImportRecord], format_style: str) -> List[ImportRecord]:
    """Sort records by bucket, then by module path (aligned) or specifier length (normal).

    The sort is stable, so ties keep their original relative order.
    """
    if format_style == ALIGNED:
        return sorted(records, key=lambda r: (bucket_of(r), r.module_path))
    return sorted(records, key=lambda r: (bucket_of(r), len(r.specifier)))


def group_imports(records: Sequence[ImportRecord]) -> List[ImportRecord]:
    """Partition sorted records into external, alias and relative groups.

    Pinned records come first and belong to no group. A blank separator goes
    between consecutive non-empty groups.
    """
    result = [r for r in records if r.is_pinned]
    groups = [[r for r in records if not r.is_pinned and r.source_class == source_class]
              for source_class in SOURCE_CLASSES]

    first = True
    for group in groups:
        if not group:
            continue
        if not first:
            result.append(SEPARATOR)
        result.extend(group)
        first = False
    return result


def detect_newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def build_edit(lines: Sequence[str], block: ImportBlock, rendered: Sequence[str], newline: str = "\n") -> EditOp:
    """Replace the whole original block, from its first column to its last line end."""
    end_col = len(lines[block.end_line].rstrip("\r"))
    return EditOp(
        start_line=block.start_line,
        start_col=0,
        end_line=block.end_line,
        end_col=end_col,
        replacement_text=newline.join(rendered),
    )


def organize(text: str, config: Optional[OrganizerConfig] = None) -> Optional[EditOp]:
    """Organize the import block of a document.

    Args:
        text: The full document text.
        config: Organizer options; defaults are used when omitted.

    Returns:
        One EditOp replacing the import block, or None if the document has no imports.
    """
    config = config or OrganizerConfig()
    lines = text.split("\n")
    block = find_import_block(lines, config.pinned_module_marker)
    if block is None:
        return None

    records: List[ImportRecord] = list(block.records)
    if config.optimize_barrel_imports:
        records = optimize_barrel_imports(records, config.barrel_optimization_targets)
    if config.remove_unused:
        records = remove_unused_imports(records, lines, block.end_line)
    if config.group_by_source_class:
        records = classify_imports(records, config.path_alias_prefixes)

    ordered = sort_imports(records, config.format_style)
    if config.group_by_source_class:
        ordered = group_imports(ordered)

    rendered = render_imports(ordered, config.format_style)
    return build_edit(lines, block, rendered, detect_newline(text))


def line_offset(lines: Sequence[str], index: int) -> int:
    return sum(len(line) + 1 for line in lines[:index])


def apply_edit(text: str, edit: EditOp) -> str:
    """Return text with the edit applied."""
    lines = text.split("\n")
    start = line_offset(lines, edit.start_line) + edit.start_col
    end = line_offset(lines, edit.end_line) + edit.end_col
    return text[:start] + edit.replacement_text + text[end:]


def organize_text(text: str, config: Optional[OrganizerConfig] = None) -> str:
    """Return the document with its import block organized."""
    edit = organize(text, config)
    if edit is None:
        return text
    return apply_edit(text, edit)


def process_file(file_path: str, config: OrganizerConfig, apply: bool = False) -> Tuple[bool, List[Tuple[int, str]]]:
    """Process a single source file and organize its imports.

    Returns (modified, warnings). Read and write failures are reported as
    warnings on line 0.
    """
    path_obj = Path(file_path)

    try:
        with open(path_obj, "r", encoding="utf-8", newline="") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        return False, [(0, f"Could not read file: {e}")]

    edit = organize(source, config)
    if edit is None:
        LOG.debug("[%s] no imports found", file_path)
        return False, []

    new_source = apply_edit(source, edit)
    if new_source == source:
        return False, []

    if not apply:
        return True, [(edit.start_line + 1, "Imports are not organized.")]

    try:
        with open(path_obj, "w", encoding="utf-8", newline="") as f:
            f.write(new_source)
    except OSError as e:
        return False, [(0, f"Could not write file: {e}")]
    return True, []


def iter_source_files(root: str, ignore: Optional[Iterable[str]] = None) -> Iterator[Path]:
    """Yield JavaScript/TypeScript files under root, skipping node_modules and hidden directories."""
    ignore_set = set(ignore or [])
    root_path = Path(root)
    for path in sorted(root_path.rglob("*")):
        if not path.is_file() or path.suffix not in SOURCE_SUFFIXES:
            continue
        parts = path.relative_to(root_path).parts[:-1]
        if any(part in SKIPPED_DIRS or part.startswith(".") for part in parts):
            continue
        if any(str(path).startswith(str(root_path / pattern)) for pattern in ignore_set):
            continue
        yield path
