"""
Importer component - CSV bulk import of events.

Validation is all-or-nothing per row: any error excludes the row from the
commit set. A missing required header rejects the whole file before any row
is read.

Cells are split on plain commas. Quoted fields are not supported, so a
comma inside a value shifts every later column.
"""

from __future__ import annotations

import logging
import re
from datetime import date

from agenda.domain.calendar import utc_noon
from agenda.domain.entities import EVENT_STATUSES, Band, Financials, new_id
from agenda.domain.financials import parse_decimal_comma
from agenda.domain.policy import PolicyEngine
from agenda.domain.sanitize import infer_pipeline_stage, sanitize_event
from agenda.rules.models import ImporterRules

from .models import CommitImportInput, CommitResult, ImportReport, ParsedRow, ValidateImportInput
from .ports import EventRepoPort, TimePort

logger = logging.getLogger(__name__)

BAND_HEADER = "Banda"
NAME_HEADER = "Nome do Evento"
DATE_HEADER = "Data (DD/MM/AAAA)"
STATUS_HEADER = "Status"
TIME_HEADER = "Hora"
CITY_HEADER = "Cidade"
VENUE_HEADER = "Local"
CONTRACTOR_HEADER = "Contratante"
GROSS_HEADER = "Valor Bruto"

TEMPLATE_FILENAME = "modelo_importacao_agenda.csv"


def _clean_header(cell: str) -> str:
    return cell.strip().replace('"', "")


def _find_band(bands: list[Band], name: str) -> Band | None:
    wanted = name.strip().lower()
    for band in bands:
        if band.name.strip().lower() == wanted:
            return band
    return None


def _parse_row(
    cells: dict[str, str],
    line_number: int,
    bands: list[Band],
    rules: ImporterRules,
    date_re: re.Pattern[str],
) -> ParsedRow:
    errors: list[str] = []
    data: dict = {}
    allowed = ", ".join(EVENT_STATUSES)

    # 1. Band
    band_name = cells.get(BAND_HEADER, "")
    if not band_name:
        errors.append(f'Coluna "{BAND_HEADER}" vazia.')
    else:
        band = _find_band(bands, band_name)
        if band is None:
            errors.append(f'Banda "{band_name}" não encontrada no sistema.')
        else:
            data["band_id"] = band.id

    # 2. Name
    name = cells.get(NAME_HEADER, "")
    if not name:
        errors.append(f"{NAME_HEADER} é obrigatório.")
    else:
        data["name"] = name

    # 3. Date, stored at UTC noon
    date_str = cells.get(DATE_HEADER, "")
    if not date_str:
        errors.append(f'Coluna "{DATE_HEADER}" é obrigatória.')
    else:
        match = date_re.match(date_str)
        if not match:
            errors.append("Formato de data inválido. Use DD/MM/AAAA.")
        else:
            day, month, year = (int(part) for part in match.groups())
            try:
                data["date"] = utc_noon(date(year, month, day))
            except ValueError:
                errors.append(f'Data "{date_str}" inválida.')

    # 4. Status
    status_str = cells.get(STATUS_HEADER, "").upper()
    status = rules.status_aliases.get(status_str, status_str)
    if not status_str:
        errors.append(f"Status é obrigatório. Use: {allowed}.")
    elif status not in EVENT_STATUSES:
        errors.append(f'Status "{status_str}" inválido. Use: {allowed}.')
    else:
        data["status"] = status

    # 5. Optional fields
    data["time"] = cells.get(TIME_HEADER) or rules.default_time
    data["city"] = cells.get(CITY_HEADER, "")
    data["venue"] = cells.get(VENUE_HEADER, "")
    data["contractor"] = cells.get(CONTRACTOR_HEADER, "")

    gross = parse_decimal_comma(cells.get(GROSS_HEADER))
    data["financials"] = Financials(
        gross_value=gross,
        commission_type="FIXED",
        commission_value=0,
        taxes=0,
        net_value=gross,
    )

    return ParsedRow(original=cells, data=data, errors=errors, line_number=line_number)


def run_validate(inp: ValidateImportInput, rules: ImporterRules) -> ImportReport:
    lines = inp.file_text.strip().splitlines()
    if not lines:
        return ImportReport(header_error="Arquivo vazio.", missing_headers=list(rules.required_headers))

    header = [_clean_header(h) for h in lines[0].split(",")]
    missing = [h for h in rules.required_headers if h not in header]
    if missing:
        return ImportReport(
            header_error=f"Arquivo CSV inválido. Colunas obrigatórias ausentes: {', '.join(missing)}",
            missing_headers=missing,
        )

    date_re = re.compile(rules.date_pattern)
    rows: list[ParsedRow] = []
    for index, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        values = [v.strip() for v in line.split(",")]
        cells = {h: values[i] if i < len(values) else "" for i, h in enumerate(header)}
        rows.append(_parse_row(cells, index, inp.bands, rules, date_re))

    return ImportReport(rows=rows)


def run_commit(
    inp: CommitImportInput,
    event_repo: EventRepoPort,
    policy: PolicyEngine,
    time: TimePort,
) -> CommitResult:
    """
    Persist every valid row as a new event, one at a time.

    There is no rollback: rows saved before a failure stay saved, and the
    result reports how many made it.
    """
    if not policy.can_edit_events(inp.actor):
        return CommitResult(success=False, error="Access denied")

    now = time.now_utc()
    committed: list[str] = []
    failed = 0

    for row in inp.rows:
        if not row.is_valid or row.data is None:
            continue

        draft = {
            "bandId": row.data["band_id"],
            "name": row.data["name"],
            "date": row.data["date"].isoformat(),
            "time": row.data["time"],
            "city": row.data["city"],
            "venue": row.data["venue"],
            "contractor": row.data["contractor"],
            "status": row.data["status"],
            "pipelineStage": infer_pipeline_stage(row.data["status"]),
            "financials": row.data["financials"].to_document(),
            "hasContract": False,
            "contractFiles": [],
            "createdBy": inp.actor.name,
            "createdAt": now.isoformat(),
        }
        event = sanitize_event(draft, new_id())
        try:
            event_repo.save(event)
        except Exception as e:
            failed += 1
            logger.error(f"Import of line {row.line_number} failed: {e}")
            continue
        committed.append(event.id)

    logger.info(f"Import committed {len(committed)} event(s), {failed} failed")
    return CommitResult(committed=len(committed), failed=failed, event_ids=committed, success=failed == 0)


def build_template(rules: ImporterRules) -> str:
    """CSV with the accepted header row and one sample line."""
    header = [*rules.required_headers, *rules.optional_headers]
    sample = {
        BAND_HEADER: "Banda Principal",
        NAME_HEADER: "Show de Verão",
        DATE_HEADER: "25/12/2024",
        STATUS_HEADER: "CONFIRMED",
        TIME_HEADER: rules.default_time,
        CITY_HEADER: "Recife",
        VENUE_HEADER: "Teatro Guararapes",
        CONTRACTOR_HEADER: "Maria Silva",
        GROSS_HEADER: "15000.00",
    }
    return "\n".join([",".join(header), ",".join(sample.get(h, "") for h in header)]) + "\n"
