"""Host environment model.

Describes the on-disk layout of the site being deployed.  Only
``root_path`` is required.  A relative root is made absolute against the
current directory, and every other location is derived from it unless
configured explicitly::

    {root}/site/wwwroot              -> web_root_path
    {root}/site/deployments/tools    -> deployment_tools_path
    {root}/site/repository           -> repository_path

``script_path`` (the directory holding ``starter`` and the helper scripts)
has no sensible default.  It stays ``None`` until configured, and the
command builder refuses to run without it.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, model_validator

if TYPE_CHECKING:
    from shipwright.deploy_runtime.settings import ShipwrightSettings


class HostEnvironment(BaseModel):
    """Resolved host paths used to compute environment defaults."""

    model_config = ConfigDict(frozen=True)

    root_path: str
    site_root_path: str = ""
    web_root_path: str = ""
    deployment_tools_path: str = ""
    repository_path: str = ""
    script_path: str | None = None
    is_64bit_process: bool = sys.maxsize > 2**32

    @model_validator(mode="before")
    @classmethod
    def _derive_paths(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        data = {k: v for k, v in data.items() if v is not None or k == "script_path"}
        root = data.get("root_path", "")
        if root:
            root = data["root_path"] = os.path.abspath(root)
        site = data.get("site_root_path") or os.path.join(root, "site")
        data["site_root_path"] = site
        data["web_root_path"] = data.get("web_root_path") or os.path.join(site, "wwwroot")
        data["deployment_tools_path"] = data.get("deployment_tools_path") or os.path.join(
            site, "deployments", "tools"
        )
        data["repository_path"] = data.get("repository_path") or os.path.join(site, "repository")
        data["script_path"] = data.get("script_path") or None
        return data

    @classmethod
    def from_settings(cls, settings: ShipwrightSettings) -> HostEnvironment:
        """Build the host layout from service settings."""
        return cls(
            root_path=settings.root_path,
            web_root_path=settings.web_root_path,
            deployment_tools_path=settings.deployment_tools_path,
            repository_path=settings.repository_path,
            script_path=settings.script_path,
        )
