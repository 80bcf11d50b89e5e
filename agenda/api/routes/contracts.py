from fastapi import APIRouter, Depends

from agenda.adapters.stores.json_files import JsonFileKeyValueStore
from agenda.api.deps import get_current_user, get_kv_store, get_policy, get_template_key
from agenda.api.errors import raise_for_error
from agenda.api.schemas import TemplateRequest, TextResponse
from agenda.components.contracts import SaveTemplateInput, run_get_template, run_save_template
from agenda.domain.entities import User
from agenda.domain.policy import PolicyEngine

router = APIRouter()


@router.get("", response_model=TextResponse)
def get_template(
    current_user: User = Depends(get_current_user),
    kv: JsonFileKeyValueStore = Depends(get_kv_store),
    template_key: str = Depends(get_template_key),
) -> TextResponse:
    result = run_get_template(kv, template_key)
    return TextResponse(text=result.template or "")


@router.put("", response_model=TextResponse)
def save_template(
    req: TemplateRequest,
    current_user: User = Depends(get_current_user),
    kv: JsonFileKeyValueStore = Depends(get_kv_store),
    template_key: str = Depends(get_template_key),
    policy: PolicyEngine = Depends(get_policy),
) -> TextResponse:
    result = run_save_template(SaveTemplateInput(actor=current_user, template=req.template), kv, template_key, policy)
    if not result.success or result.template is None:
        raise_for_error(result.error)
    return TextResponse(text=result.template)
