"""Service hook handler interface.

A handler recognises one provider's webhook payload and translates it into
a ``DeploymentRequest``.  Handlers are tried in order; the first one that
does not answer ``UNKNOWN_PAYLOAD`` decides.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from loguru import logger

from shipwright.deploy_runtime.models.enums import DeployAction

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from shipwright.deploy_runtime.models.deployment import DeploymentRequest


@runtime_checkable
class ServiceHookHandler(Protocol):
    """Recognises and parses one provider's payload format."""

    def try_parse_deployment_info(
        self,
        payload: Mapping[str, Any],
        target_branch: str,
    ) -> tuple[DeployAction, DeploymentRequest | None]:
        """Return the action to take and, for ``PROCESS_DEPLOYMENT``, the request."""
        ...


def parse_payload(
    handlers: Iterable[ServiceHookHandler],
    payload: Mapping[str, Any],
    target_branch: str,
) -> tuple[DeployAction, DeploymentRequest | None]:
    """Run *handlers* in order and return the first recognised result."""
    for handler in handlers:
        action, request = handler.try_parse_deployment_info(payload, target_branch)
        if action != DeployAction.UNKNOWN_PAYLOAD:
            logger.info("Payload handled by {} (action={})", type(handler).__name__, action)
            return action, request
    return DeployAction.UNKNOWN_PAYLOAD, None
