from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from agenda.adapters.repos import BandRepo, EventRepo
from agenda.api.deps import get_band_repo, get_clock, get_current_user, get_event_repo, get_policy, get_rules
from agenda.api.errors import raise_for_error
from agenda.api.schemas import CommitResponse, ImportReportResponse, ParsedRowResponse
from agenda.components.importer import (
    TEMPLATE_FILENAME,
    CommitImportInput,
    ImportReport,
    ValidateImportInput,
    build_template,
    run_commit,
    run_validate,
)
from agenda.domain.entities import User
from agenda.domain.policy import PolicyEngine
from agenda.ports.clock import ClockPort
from agenda.rules.models import Rules

router = APIRouter()


async def _read_csv(request: Request) -> str:
    raw = await request.body()
    try:
        # utf-8-sig drops the BOM spreadsheet tools put in front of the header.
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="O arquivo deve estar em UTF-8.") from e


def _validate(file_text: str, user: User, band_repo: BandRepo, policy: PolicyEngine, rules: Rules) -> ImportReport:
    # Rows may only target bands the importing user can reach.
    bands = policy.filter_bands(band_repo.list_all(), user)
    return run_validate(ValidateImportInput(file_text=file_text, bands=bands), rules.importer)


@router.post("/validate", response_model=ImportReportResponse)
async def validate_import(
    request: Request,
    current_user: User = Depends(get_current_user),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
    rules: Rules = Depends(get_rules),
) -> ImportReportResponse:
    """Dry run: report which CSV lines would be imported and what is wrong with the rest."""
    report = _validate(await _read_csv(request), current_user, band_repo, policy, rules)
    return ImportReportResponse(
        rows=[
            ParsedRowResponse(line_number=r.line_number, original=r.original, errors=r.errors, valid=r.is_valid)
            for r in report.rows
        ],
        valid_count=len(report.valid_rows),
        invalid_count=len(report.invalid_rows),
        header_error=report.header_error,
        missing_headers=report.missing_headers,
    )


@router.post("/commit", response_model=CommitResponse)
async def commit_import(
    request: Request,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
    rules: Rules = Depends(get_rules),
    clock: ClockPort = Depends(get_clock),
) -> CommitResponse:
    """Validate the CSV again and save its valid rows; invalid rows are skipped."""
    report = _validate(await _read_csv(request), current_user, band_repo, policy, rules)
    if report.header_error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=report.header_error)

    result = run_commit(CommitImportInput(actor=current_user, rows=report.valid_rows), event_repo, policy, clock)
    if result.error:
        raise_for_error(result.error)
    return CommitResponse(committed=result.committed, failed=result.failed, event_ids=result.event_ids)


@router.get("/template", response_class=PlainTextResponse)
def download_template(rules: Rules = Depends(get_rules)) -> PlainTextResponse:
    return PlainTextResponse(
        build_template(rules.importer),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )
