"""Service hook endpoint.

Providers POST their webhook payload here.  The payload is translated into a
``DeploymentRequest``; fetching and deploying the content happens elsewhere.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, ValidationError

from shipwright.deploy_runtime.deps import HookHandlers
from shipwright.deploy_runtime.hooks import parse_payload
from shipwright.deploy_runtime.models.deployment import DeploymentRequest
from shipwright.deploy_runtime.models.enums import DeployAction

router = APIRouter(prefix="/hooks", tags=["hooks"])


class HookResponse(BaseModel):
    action: DeployAction
    request: DeploymentRequest | None = None


@router.post("/deploy", response_model=HookResponse)
async def deploy_hook(
    handlers: HookHandlers,
    response: Response,
    payload: dict[str, Any],
    target_branch: str = "master",
) -> HookResponse:
    """Parse a provider payload into a deployment request.

    Returns 202 when a deployment should run, 200 for a recognised no-op,
    and 400 for payloads no handler understands.
    """
    try:
        action, request = parse_payload(handlers, payload, target_branch)
    except ValidationError as exc:
        msg = f"Malformed payload: {exc.error_count()} validation error(s)."
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=msg) from None

    if action == DeployAction.UNKNOWN_PAYLOAD:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Unknown payload format.")

    if action == DeployAction.PROCESS_DEPLOYMENT:
        response.status_code = status.HTTP_202_ACCEPTED
    return HookResponse(action=action, request=request)
