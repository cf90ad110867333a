from fastapi import APIRouter, Depends
from deviflow.core.gate import GateContext
from deviflow.dependencies import get_gate_context
from deviflow.schemas.auth import ModulesResponse
from deviflow.services.auth import auth_service

router = APIRouter()


@router.get("", response_model=ModulesResponse)
def get_modules(ctx: GateContext = Depends(get_gate_context)):
    """Modules enabled for the caller's tenant alongside the full catalog."""
    return auth_service.describe_modules(ctx.tenant)
