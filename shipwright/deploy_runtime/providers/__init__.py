from shipwright.deploy_runtime.providers.deployment_settings import (
    DeploymentFileError,
    DeploymentSettingsManager,
    DeploymentSettingsProvider,
    InvalidSettingError,
    load_deployment_file,
)
from shipwright.deploy_runtime.providers.tools import HostToolLocator, ToolLocator

__all__ = [
    "DeploymentFileError",
    "DeploymentSettingsManager",
    "DeploymentSettingsProvider",
    "HostToolLocator",
    "InvalidSettingError",
    "ToolLocator",
    "load_deployment_file",
]
