"""Rules module for order-import.

The transformer chain applied to parsed import records before sorting:
barrel-import splitting, unused-import removal and source classification.
Every function returns a new list and leaves its input untouched.
"""

import logging
import re
from typing import Iterable
from typing import List
from typing import Sequence

from order_import.models import ALIAS
from order_import.models import EXTERNAL
from order_import.models import RELATIVE
from order_import.models import ImportRecord
from order_import.parser import IDENTIFIER

LOG = logging.getLogger(__name__)

BARE_IDENTIFIER_RE = re.compile(rf"^{IDENTIFIER}$")
ALIASED_RE = re.compile(r"\s+as\s+")


def named_entries(specifier: str) -> List[str]:
    """Return the trimmed, non-empty entries of the brace list in a specifier."""
    inner = specifier[specifier.index("{") + 1:specifier.rindex("}")]
    return [entry.strip() for entry in inner.split(",") if entry.strip()]


def default_identifier(specifier: str) -> str:
    """Return the leading default binding of a default or mixed specifier."""
    return specifier.split(",", 1)[0].strip()


def matches_target(record: ImportRecord, targets: Iterable[str]) -> bool:
    return any(target in record.module_path for target in targets)


def split_barrel_import(record: ImportRecord) -> List[ImportRecord]:
    """Rewrite a named barrel import into one default import per entry.

    ``import { Button, TextField } from '@mui/material';`` becomes
    ``import Button from '@mui/material/Button';`` and
    ``import TextField from '@mui/material/TextField';``.

    Returns an empty list when the record can not be split: an aliased entry
    has no safe direct sub-path, so the whole record is kept as written.
    """
    entries = named_entries(record.specifier)
    if not entries or not all(BARE_IDENTIFIER_RE.match(entry) for entry in entries):
        return []

    split: List[ImportRecord] = []
    for entry in entries:
        module_path = f"{record.quote}{record.bare_path}/{entry}{record.quote}"
        split.append(ImportRecord(
            raw_text=f"import {entry} from {module_path};",
            specifier=entry,
            module_path=module_path,
            is_pinned=record.is_pinned,
        ))
    return split


def optimize_barrel_imports(records: Sequence[ImportRecord], targets: Iterable[str]) -> List[ImportRecord]:
    """Split named imports from barrel modules into direct sub-module imports.

    Unsplit records keep their order; new records follow them in brace-list
    order. The sort stage decides the final placement.
    """
    targets = list(targets)
    kept: List[ImportRecord] = []
    created: List[ImportRecord] = []

    for record in records:
        if record.is_named and matches_target(record, targets):
            split = split_barrel_import(record)
            if split:
                created.extend(split)
                continue
            LOG.debug("Leaving aliased barrel import unsplit: %s", record.raw_text)
        kept.append(record)

    LOG.debug("Barrel optimization created %d imports", len(created))
    return kept + created


def is_word_used(identifier: str, body: str) -> bool:
    """Return True if identifier occurs in body as a whole word."""
    if not identifier:
        return False
    pattern = rf"(?<![\w$]){re.escape(identifier)}(?![\w$])"
    return re.search(pattern, body) is not None


def is_import_used(record: ImportRecord, body: str) -> bool:
    if record.is_side_effect or record.is_asterisk:
        # Usage of these can not be determined lexically.
        return True
    if record.is_named:
        identifiers = [ALIASED_RE.split(entry)[0].strip() for entry in named_entries(record.specifier)]
        return any(is_word_used(identifier, body) for identifier in identifiers)
    return is_word_used(default_identifier(record.specifier), body)


def remove_unused_imports(records: Sequence[ImportRecord], lines: Sequence[str], end_line: int) -> List[ImportRecord]:
    """Drop imports whose bindings never appear after the import block.

    Args:
        records: Parsed import records.
        lines: All document lines.
        end_line: Index of the last import line; only text after it is searched.
    """
    body = "\n".join(lines[end_line + 1:])
    kept = [record for record in records if is_import_used(record, body)]
    LOG.debug("Removed %d unused imports", len(records) - len(kept))
    return kept


def classify_source(module_path: str, alias_prefixes: Sequence[str]) -> str:
    """Classify an unquoted module path as 'relative', 'alias' or 'external'."""
    if module_path.startswith(("./", "../")):
        return RELATIVE
    for prefix in alias_prefixes:
        if module_path.startswith(prefix):
            return ALIAS
    return EXTERNAL


def classify_imports(records: Sequence[ImportRecord], alias_prefixes: Sequence[str]) -> List[ImportRecord]:
    """Tag each record with its source class. Pinned records are left untagged."""
    classified: List[ImportRecord] = []
    for record in records:
        if record.is_pinned or record.is_separator:
            classified.append(record)
        else:
            classified.append(record.with_source_class(classify_source(record.bare_path, alias_prefixes)))
    return classified
