"""Parser module for order-import.

This module finds the leading block of single-line import statements in a
JavaScript or TypeScript document and parses each line into an ImportRecord.
Matching is line oriented; multi-line imports are not recognised and end the
block like any other statement.
"""

import logging
import re
from typing import List
from typing import Optional
from typing import Tuple

from order_import.models import ImportBlock
from order_import.models import ImportRecord

LOG = logging.getLogger(__name__)

IDENTIFIER = r"[\w$]+"
NAMED_LIST = r"\{[^}]+\}"

SPECIFIER = rf"(?:{NAMED_LIST}|\*\s+as\s+{IDENTIFIER}|{IDENTIFIER}(?:\s*,\s*{NAMED_LIST})?)"

IMPORT_LINE_RE = re.compile(
    rf"""^import\s+(?:(?P<specifier>{SPECIFIER})\s+from\s+)?(?P<path>(?P<quote>['"])[^'"]+(?P=quote))\s*;?$"""
)
MIXED_RE = re.compile(rf"^(?P<default>{IDENTIFIER})\s*,\s*(?P<named>{NAMED_LIST})$")


def scan_comment(stripped: str, in_block_comment: bool) -> Tuple[bool, bool]:
    """Classify a stripped line as a whole-line comment.

    Only ``//`` lines, ``/* ... */`` lines with nothing after the closing
    ``*/`` and lines inside an open ``/*`` block count as comments.

    Returns:
        (is_comment, in_block_comment) where the second item is the block
        comment state after this line.
    """
    if in_block_comment:
        if "*/" not in stripped:
            return True, True
        return stripped.split("*/", 1)[1].strip() == "", False
    if stripped.startswith("//"):
        return True, False
    if stripped.startswith("/*"):
        rest = stripped[2:]
        if "*/" not in rest:
            return True, True
        return rest.split("*/", 1)[1].strip() == "", False
    return False, False


def parse_import_line(line: str, pinned_marker: str = "") -> Optional[ImportRecord]:
    """Parse one line into an ImportRecord.

    Args:
        line: A single source line; surrounding whitespace is ignored.
        pinned_marker: Substring of the module path that pins a record first.
            An empty marker pins nothing.

    Returns:
        The parsed record, or None if the line is not a single-line import.
    """
    stripped = line.strip()
    match = IMPORT_LINE_RE.match(stripped)
    if not match:
        return None

    specifier = match.group("specifier") or ""
    module_path = match.group("path")
    is_pinned = bool(pinned_marker) and pinned_marker in module_path

    if not specifier:
        return ImportRecord(
            raw_text=stripped,
            specifier="",
            module_path=module_path,
            is_side_effect=True,
            is_pinned=is_pinned,
        )

    return ImportRecord(
        raw_text=stripped,
        specifier=specifier,
        module_path=module_path,
        is_named=specifier.startswith("{"),
        is_asterisk=specifier.startswith("*"),
        is_mixed=MIXED_RE.match(specifier) is not None,
        is_pinned=is_pinned,
    )


def find_import_block(lines: List[str], pinned_marker: str = "") -> Optional[ImportBlock]:
    """Find the leading contiguous run of import lines.

    Lines before the first import are skipped. Once an import has been seen,
    blank and comment lines are tolerated and any other line (including an
    unparseable import such as ``import {} from 'x';``) ends the block.

    Returns:
        An ImportBlock with inclusive line indices, or None if no import was found.
    """
    start: Optional[int] = None
    end: Optional[int] = None
    records: List[ImportRecord] = []

    in_block_comment = False

    for i, line in enumerate(lines):
        stripped = line.strip()
        if not in_block_comment:
            record = parse_import_line(line, pinned_marker)
            if record is not None:
                if start is None:
                    start = i
                end = i
                records.append(record)
                continue

        if not stripped:
            continue
        comment, in_block_comment = scan_comment(stripped, in_block_comment)
        if end is not None and not comment:
            break

    if start is None or end is None:
        LOG.debug("No import block found.")
        return None

    LOG.debug("Found %d imports on lines %d-%d", len(records), start, end)
    return ImportBlock(start_line=start, end_line=end, records=tuple(records))
