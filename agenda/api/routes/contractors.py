from fastapi import APIRouter, Depends, HTTPException, status

from agenda.adapters.repos import ContractorRepo
from agenda.api.deps import get_contractor_repo, get_current_user, get_policy
from agenda.domain.entities import Contractor, User
from agenda.domain.policy import PolicyEngine

router = APIRouter()


@router.get("", response_model=list[Contractor])
def list_contractors(
    current_user: User = Depends(get_current_user),
    contractor_repo: ContractorRepo = Depends(get_contractor_repo),
) -> list[Contractor]:
    return sorted(contractor_repo.list_all(), key=lambda c: c.name.lower())


@router.post("", response_model=Contractor)
def create_contractor(
    contractor: Contractor,
    current_user: User = Depends(get_current_user),
    contractor_repo: ContractorRepo = Depends(get_contractor_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> Contractor:
    if not policy.can_edit_events(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    if not contractor.name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nome do contratante é obrigatório.")
    return contractor_repo.save(contractor)


@router.put("/{contractor_id}", response_model=Contractor)
def update_contractor(
    contractor_id: str,
    contractor: Contractor,
    current_user: User = Depends(get_current_user),
    contractor_repo: ContractorRepo = Depends(get_contractor_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> Contractor:
    if not policy.can_edit_events(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    if not contractor_repo.get_by_id(contractor_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contractor not found")
    return contractor_repo.save(contractor.model_copy(update={"id": contractor_id}))


@router.delete("/{contractor_id}")
def delete_contractor(
    contractor_id: str,
    current_user: User = Depends(get_current_user),
    contractor_repo: ContractorRepo = Depends(get_contractor_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> dict[str, str]:
    if not policy.can_delete_events(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    contractor_repo.delete(contractor_id)
    return {"status": "deleted"}
