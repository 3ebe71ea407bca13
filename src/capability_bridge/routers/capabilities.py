"""Capability listing and direct invocation endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from capability_bridge.dependencies import get_bridge, get_host
from capability_bridge.deployments import CapabilityBridge
from capability_bridge.host import AgentHost
from capability_bridge.models.capabilities import (
    CapabilityInfo,
    CapabilityListResponse,
    InvokeRequest,
    InvokeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/capabilities", tags=["capabilities"])


@router.get("", response_model=CapabilityListResponse)
async def list_capabilities(
    host: AgentHost = Depends(get_host),
    bridge: CapabilityBridge = Depends(get_bridge),
) -> CapabilityListResponse:
    """List the capabilities offered to the model.

    Returns:
        CapabilityListResponse with name, description and schema of each
        capability
    """
    capabilities = [
        CapabilityInfo(
            name=capability.name,
            description=capability.description,
            schema_=capability.schema,
        )
        for capability in host.capabilities
    ]
    return CapabilityListResponse(
        deployment=bridge.deployment.name,
        capabilities=capabilities,
        count=len(capabilities),
    )


@router.post("/{name}/invoke", response_model=InvokeResponse)
async def invoke_capability(
    name: str,
    request_body: InvokeRequest,
    host: AgentHost = Depends(get_host),
) -> InvokeResponse:
    """Invoke a capability directly, bypassing the model.

    Tool failures are part of the result text, as they would be for the
    model; only names the host does not expose are rejected.

    Raises:
        HTTPException: 404 if the capability is not registered
    """
    capability = host.get_capability(name)
    if capability is None:
        raise HTTPException(
            status_code=404,
            detail={
                "error": {
                    "code": "capability_not_found",
                    "message": f"Capability {name} not found",
                    "details": {"name": name},
                }
            },
        )

    logger.info(f"Direct invocation of capability {name}")
    result = await capability.run(request_body.arguments)
    return InvokeResponse(name=name, result=result)
