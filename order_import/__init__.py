"""Top-level package for order-import.

This package exposes the core API for organizing the import block of
JavaScript and TypeScript documents.
"""

from order_import.config import load_config
from order_import.core import apply_edit
from order_import.core import iter_source_files
from order_import.core import organize
from order_import.core import organize_text
from order_import.core import process_file
from order_import.models import EditOp
from order_import.models import ImportRecord
from order_import.models import OrganizerConfig
from order_import.parser import find_import_block
from order_import.parser import parse_import_line


__all__ = [
    "organize",
    "organize_text",
    "apply_edit",
    "find_import_block",
    "parse_import_line",
    "process_file",
    "iter_source_files",
    "load_config",
    "EditOp",
    "ImportRecord",
    "OrganizerConfig",
]
