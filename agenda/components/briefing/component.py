import logging

from agenda.domain.policy import PolicyEngine

from .models import BriefInput, BriefOutput
from .ports import BandRepoPort, EventRepoPort, SummarizerPort

logger = logging.getLogger(__name__)

UNKNOWN_BAND = "Banda"
SUMMARY_FAILED = "Não foi possível gerar o resumo."


def run_brief(
    inp: BriefInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    summarizer: SummarizerPort,
    policy: PolicyEngine,
) -> BriefOutput:
    """
    Musician-facing summary of one event.

    Only access is checked: the brief never carries financial fields, so
    roles without financial visibility may request it too.
    """
    event = event_repo.get_by_id(inp.event_id)
    if not event:
        return BriefOutput(success=False, error="Event not found")
    if not policy.can_access_event(inp.actor, event, band_repo.list_all()):
        return BriefOutput(success=False, error="Access denied")

    band = band_repo.get_by_id(event.band_id)
    band_name = band.name if band else UNKNOWN_BAND

    try:
        text = summarizer.summarize(event, band_name)
    except Exception as e:
        # Adapters should answer with a placeholder, but a stray failure still must not surface.
        logger.error(f"Summarizer raised for event {event.id}: {e}")
        text = SUMMARY_FAILED

    return BriefOutput(text=text or SUMMARY_FAILED, success=True)


def run(
    inp: BriefInput,
    *,
    event_repo: EventRepoPort | None = None,
    band_repo: BandRepoPort | None = None,
    summarizer: SummarizerPort | None = None,
    policy: PolicyEngine | None = None,
) -> BriefOutput:
    if isinstance(inp, BriefInput):
        assert event_repo and band_repo and summarizer and policy
        return run_brief(inp, event_repo, band_repo, summarizer, policy)

    raise ValueError(f"Unknown input type: {type(inp)}")
