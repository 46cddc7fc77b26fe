"""Service hook handlers: provider payload -> DeploymentRequest."""

from shipwright.deploy_runtime.hooks.base import ServiceHookHandler, parse_payload
from shipwright.deploy_runtime.hooks.onedrive import OneDriveHandler

DEFAULT_HANDLERS: list[ServiceHookHandler] = [OneDriveHandler()]

__all__ = ["DEFAULT_HANDLERS", "OneDriveHandler", "ServiceHookHandler", "parse_payload"]
