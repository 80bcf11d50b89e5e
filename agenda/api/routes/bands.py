from fastapi import APIRouter, Depends, HTTPException, status

from agenda.adapters.repos import BandRepo
from agenda.api.deps import get_band_repo, get_current_user, get_policy
from agenda.domain.entities import Band, User
from agenda.domain.policy import PolicyEngine

router = APIRouter()


def _require_band_admin(user: User, policy: PolicyEngine) -> None:
    if not policy.can_manage_bands(user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


@router.get("", response_model=list[Band])
def list_bands(
    current_user: User = Depends(get_current_user),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> list[Band]:
    """Bands visible to the caller."""
    return policy.filter_bands(band_repo.list_all(), current_user)


@router.post("", response_model=Band)
def create_band(
    band: Band,
    current_user: User = Depends(get_current_user),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> Band:
    _require_band_admin(current_user, policy)
    if not band.name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nome da banda é obrigatório.")
    return band_repo.save(band)


@router.put("/{band_id}", response_model=Band)
def update_band(
    band_id: str,
    band: Band,
    current_user: User = Depends(get_current_user),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> Band:
    _require_band_admin(current_user, policy)
    if not band_repo.get_by_id(band_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Band not found")
    if not band.name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nome da banda é obrigatório.")
    return band_repo.save(band.model_copy(update={"id": band_id}))


@router.delete("/{band_id}")
def delete_band(
    band_id: str,
    current_user: User = Depends(get_current_user),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> dict[str, str]:
    _require_band_admin(current_user, policy)
    # Events of the band are kept and keep pointing at the removed id.
    band_repo.delete(band_id)
    return {"status": "deleted"}
