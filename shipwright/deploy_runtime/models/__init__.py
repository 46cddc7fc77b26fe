"""Data models for the deploy runtime."""

from shipwright.deploy_runtime.models.deployment import (
    ChangeSet,
    DeploymentRequest,
    create_temporary_changeset,
)
from shipwright.deploy_runtime.models.descriptor import (
    PATH_KEY,
    DescriptorDraft,
    ExecutableDescriptor,
)
from shipwright.deploy_runtime.models.enums import DeployAction, Tool, ValueSource
from shipwright.deploy_runtime.models.host import HostEnvironment

__all__ = [
    "PATH_KEY",
    # Deployment
    "ChangeSet",
    # Enums
    "DeployAction",
    "DeploymentRequest",
    # Descriptor
    "DescriptorDraft",
    "ExecutableDescriptor",
    # Host
    "HostEnvironment",
    "Tool",
    "ValueSource",
    "create_temporary_changeset",
]
