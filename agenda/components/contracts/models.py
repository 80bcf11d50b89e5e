from __future__ import annotations

from dataclasses import dataclass

from agenda.domain.entities import User


@dataclass(frozen=True)
class SaveTemplateInput:
    actor: User
    template: str


@dataclass(frozen=True)
class RenderContractInput:
    actor: User
    event_id: str


@dataclass(frozen=True)
class TemplateOutput:
    template: str | None = None
    success: bool = False
    error: str | None = None


@dataclass(frozen=True)
class ContractOutput:
    text: str | None = None
    success: bool = False
    error: str | None = None
