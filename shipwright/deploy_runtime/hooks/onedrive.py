"""OneDrive service hook handler.

Expected payload::

    {
        "RepositoryUrl": "https://api.onedrive.com/...",
        "AccessToken": "..."
    }

The payload carries no author information, so the target changeset is a
temporary placeholder until the folder has been synchronised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shipwright.deploy_runtime.models.deployment import DeploymentRequest, create_temporary_changeset
from shipwright.deploy_runtime.models.enums import DeployAction

if TYPE_CHECKING:
    from collections.abc import Mapping

ONEDRIVE_HOST = "api.onedrive.com"
DEPLOYER = "OneDrive"
SYNC_MESSAGE = "Synchronizing with OneDrive"
UNKNOWN_AUTHOR = "Unknown"


class OneDriveHandler:
    def try_parse_deployment_info(
        self,
        payload: Mapping[str, Any],
        target_branch: str,
    ) -> tuple[DeployAction, DeploymentRequest | None]:
        url = payload.get("RepositoryUrl")
        if not isinstance(url, str) or not url.strip() or ONEDRIVE_HOST not in url.lower():
            return DeployAction.UNKNOWN_PAYLOAD, None

        request = DeploymentRequest(
            deployer=DEPLOYER,
            repository_url=url,
            access_token=payload.get("AccessToken"),
            target_changeset=create_temporary_changeset(
                author_name=UNKNOWN_AUTHOR,
                author_email=UNKNOWN_AUTHOR,
                message=SYNC_MESSAGE,
            ),
        )
        return DeployAction.PROCESS_DEPLOYMENT, request
