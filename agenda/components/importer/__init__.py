"""
Importer component - CSV bulk import of events.
"""

from .component import TEMPLATE_FILENAME, build_template, run_commit, run_validate
from .models import CommitImportInput, CommitResult, ImportReport, ParsedRow, ValidateImportInput
from .ports import EventRepoPort, TimePort

__all__ = [
    # Entry points
    "build_template",
    "run_commit",
    "run_validate",
    "TEMPLATE_FILENAME",
    # Models
    "CommitImportInput",
    "CommitResult",
    "ImportReport",
    "ParsedRow",
    "ValidateImportInput",
    # Ports
    "EventRepoPort",
    "TimePort",
]
