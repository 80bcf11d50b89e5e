"""
Briefing component - Musician-facing event summaries.
"""

from .component import SUMMARY_FAILED, run, run_brief
from .models import BriefInput, BriefOutput
from .ports import BandRepoPort, EventRepoPort, SummarizerPort

__all__ = [
    "run",
    "run_brief",
    "SUMMARY_FAILED",
    "BriefInput",
    "BriefOutput",
    "BandRepoPort",
    "EventRepoPort",
    "SummarizerPort",
]
