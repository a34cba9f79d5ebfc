from typing import List
from typing import Sequence

from order_import.models import ALIGNED
from order_import.models import ImportRecord


def render_side_effect(record: ImportRecord) -> str:
    return f"import {record.module_path};"


def render_normal(records: Sequence[ImportRecord]) -> List[str]:
    """Render records with a single space on each side of ``from``."""
    lines = []
    for record in records:
        if record.is_separator:
            lines.append("")
        elif record.is_side_effect:
            lines.append(render_side_effect(record))
        else:
            lines.append(f"import {record.specifier} from {record.module_path};")
    return lines


def max_specifier_length(records: Sequence[ImportRecord]) -> int:
    return max((len(r.specifier) for r in records if not r.is_separator), default=0)


def render_aligned(records: Sequence[ImportRecord]) -> List[str]:
    """Render records with every ``from`` keyword in the same column."""
    width = max_specifier_length(records)
    lines = []
    for record in records:
        if record.is_separator:
            lines.append("")
        elif record.is_side_effect:
            lines.append(render_side_effect(record))
        else:
            padding = " " * (width - len(record.specifier) + 1)
            lines.append(f"import {record.specifier}{padding}from {record.module_path};")
    return lines


def render_imports(records: Sequence[ImportRecord], format_style: str) -> List[str]:
    """Return one output line per record in the given format style."""
    if format_style == ALIGNED:
        return render_aligned(records)
    return render_normal(records)
