"""Deployment request models.

A ``DeploymentRequest`` is the canonical record a service hook handler
produces from a provider-specific payload.  The command builder never sees
it directly; callers extract the source and target paths from it.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, Field, SecretStr


class ChangeSet(BaseModel):
    """The revision a deployment targets."""

    id: str
    author_name: str
    author_email: str
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    is_temporary: bool = False


class DeploymentRequest(BaseModel):
    """Provider-neutral deployment request."""

    deployer: str
    repository_url: str
    access_token: SecretStr | None = None
    target_changeset: ChangeSet | None = None


def create_temporary_changeset(
    *,
    author_name: str | None = None,
    author_email: str | None = None,
    message: str | None = None,
) -> ChangeSet:
    """Create a placeholder changeset for deployments whose revision is not known yet.

    The real revision is filled in once the content has been fetched.
    """
    return ChangeSet(
        id=str(uuid.uuid4()),
        author_name=author_name or "",
        author_email=author_email or "",
        message=message or "",
        is_temporary=True,
    )
