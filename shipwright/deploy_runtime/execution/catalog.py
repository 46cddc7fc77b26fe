"""Well-known environment variables and their computed defaults.

Each catalog entry maps a variable name to a pure function of the
``DefaultContext``.  The builder resolves every entry through the
compositor, so a user setting with the same name overrides the default.

``GENERIC_DEFAULTS`` apply to every external command;
``STARTER_DEFAULTS`` are layered on top for the deployment starter script.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from shipwright.deploy_runtime.models.enums import Tool

if TYPE_CHECKING:
    from shipwright.deploy_runtime.models.host import HostEnvironment
    from shipwright.deploy_runtime.providers.deployment_settings import DeploymentSettingsProvider
    from shipwright.deploy_runtime.providers.tools import ToolLocator

# ---------------------------------------------------------------------------
# Variable names
# ---------------------------------------------------------------------------

WEB_ROOT_PATH = "WEBROOT_PATH"
MSBUILD_PATH = "MSBUILD_PATH"
SYNC_COMMAND = "KUDU_SYNC_CMD"
NUGET_EXE_COMMAND = "NUGET_EXE"
NPM_JS_PATH = "NPM_JS_PATH"
HOME = "HOME"

SOURCE_PATH = "DEPLOYMENT_SOURCE"
TARGET_PATH = "DEPLOYMENT_TARGET"
POST_DEPLOYMENT_ACTION = "POST_DEPLOYMENT_ACTION"
POST_DEPLOYMENT_ACTION_DIR = "POST_DEPLOYMENT_ACTION_DIR"
SELECT_NODE_VERSION_COMMAND = "KUDU_SELECT_NODE_VERSION_CMD"
SELECT_PYTHON_VERSION_COMMAND = "KUDU_SELECT_PYTHON_VERSION_CMD"
WEBJOBS_DEPLOY_COMMAND = "WEBJOBS_DEPLOY_CMD"
DNX_CLR = "DNX_CLR"
DNX_BITNESS = "DNX_BITNESS"
DNVM_PATH = "DNVM_PATH"
GO_WEB_CONFIG_TEMPLATE = "GO_WEB_CONFIG_TEMPLATE"
IN_PLACE_DEPLOYMENT = "IN_PLACE_DEPLOYMENT"

PACKAGE_RESTORE = "EnableNuGetPackageRestore"
"""Always ``true``; written last and never resolved against settings."""

SITE_BITNESS = "SITE_BITNESS"
"""Process environment variable describing the site's platform."""

# ---------------------------------------------------------------------------
# Fixed values
# ---------------------------------------------------------------------------

SYNC_COMMAND_DEFAULT = "kudusync"
POST_DEPLOYMENT_ACTION_DEFAULT = "postdeployment"
WEBJOBS_DEPLOY_COMMAND_DEFAULT = "deploy_webjobs.cmd"
DNX_CLR_DEFAULT = "clr"
IN_PLACE_DEPLOYMENT_VALUE = "1"
PACKAGE_RESTORE_VALUE = "true"
X64_BIT = "AMD64"

STARTER_SCRIPT_NAME = "starter.cmd" if os.name == "nt" else "starter.sh"


# ---------------------------------------------------------------------------
# Default context
# ---------------------------------------------------------------------------


class ConfigurationMissingError(LookupError):
    """A mandatory host path is not configured."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required host path '{name}' is not configured")
        self.name = name


@dataclass(frozen=True)
class DefaultContext:
    """Inputs for default computation.  Read-only; defaults never mutate it."""

    host: HostEnvironment
    tools: ToolLocator
    settings: DeploymentSettingsProvider
    environ: Mapping[str, str] = field(default_factory=dict)
    source_path: str = ""
    target_path: str = ""

    @property
    def script_path(self) -> str:
        if not self.host.script_path:
            raise ConfigurationMissingError("script_path")
        return self.host.script_path

    def script(self, name: str) -> str:
        return os.path.join(self.script_path, name)


def quote_path(path: str) -> str:
    return f'"{path}"'


# ---------------------------------------------------------------------------
# Default functions
# ---------------------------------------------------------------------------


def post_deployment_actions_dir(ctx: DefaultContext) -> str:
    default = os.path.join(ctx.host.deployment_tools_path, "PostDeploymentActions")
    return ctx.settings.get_post_deployment_actions_dir(default)


def dnx_bitness(ctx: DefaultContext) -> str:
    bitness = ctx.environ.get(SITE_BITNESS)
    if bitness is None:
        return "x64" if ctx.host.is_64bit_process else "x86"
    return "x64" if bitness.casefold() == X64_BIT.casefold() else "x86"


DefaultFn = Callable[[DefaultContext], str]

GENERIC_DEFAULTS: dict[str, DefaultFn] = {
    WEB_ROOT_PATH: lambda ctx: ctx.host.web_root_path,
    MSBUILD_PATH: lambda ctx: ctx.tools.resolve(Tool.MSBUILD) or "",
    SYNC_COMMAND: lambda ctx: SYNC_COMMAND_DEFAULT,
    NUGET_EXE_COMMAND: lambda ctx: ctx.script("nuget.exe"),
    NPM_JS_PATH: lambda ctx: ctx.tools.resolve(Tool.NPM_JS) or "",
    HOME: lambda ctx: ctx.host.root_path,
}

STARTER_DEFAULTS: dict[str, DefaultFn] = {
    SOURCE_PATH: lambda ctx: ctx.source_path,
    TARGET_PATH: lambda ctx: ctx.target_path,
    POST_DEPLOYMENT_ACTION: lambda ctx: POST_DEPLOYMENT_ACTION_DEFAULT,
    POST_DEPLOYMENT_ACTION_DIR: post_deployment_actions_dir,
    SELECT_NODE_VERSION_COMMAND: lambda ctx: "node " + quote_path(ctx.script("selectNodeVersion")),
    SELECT_PYTHON_VERSION_COMMAND: lambda ctx: "python " + quote_path(ctx.script("select_python_version.py")),
    WEBJOBS_DEPLOY_COMMAND: lambda ctx: WEBJOBS_DEPLOY_COMMAND_DEFAULT,
    DNX_CLR: lambda ctx: DNX_CLR_DEFAULT,
    DNX_BITNESS: dnx_bitness,
    DNVM_PATH: lambda ctx: ctx.script("dnvm.ps1"),
    GO_WEB_CONFIG_TEMPLATE: lambda ctx: ctx.script("go.web.config.template"),
}
