"""Fakes and factories for command builder tests."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import timedelta

import pytest

from shipwright.deploy_runtime.execution.builder import ExternalCommandBuilder
from shipwright.deploy_runtime.models.enums import Tool
from shipwright.deploy_runtime.models.host import HostEnvironment
from shipwright.deploy_runtime.providers.deployment_settings import DeploymentSettingsManager

SCRIPT_PATH = "/opt/shipwright/scripts"
INHERITED_PATH = "/usr/local/bin:/bin"


class FakeToolLocator:
    """Tool locator answering from fixed tables and counting lookups."""

    def __init__(
        self,
        paths: Mapping[Tool, str] | None = None,
        families: Mapping[Tool, list[str]] | None = None,
    ) -> None:
        self.paths = dict(paths or {})
        self.families = {k: list(v) for k, v in (families or {}).items()}
        self.calls: list[Tool] = []

    def resolve(self, tool: Tool) -> str | None:
        self.calls.append(tool)
        return self.paths.get(tool)

    def resolve_all(self, tool: Tool) -> list[str]:
        self.calls.append(tool)
        return list(self.families.get(tool, []))


class FailingSettings(DeploymentSettingsManager):
    """Settings provider whose lookups blow up, e.g. an unreachable backend."""

    def get_value(self, key: str) -> str | None:
        msg = f"settings backend unavailable ({key})"
        raise RuntimeError(msg)


@pytest.fixture
def host() -> HostEnvironment:
    return HostEnvironment(root_path="/home", script_path=SCRIPT_PATH, is_64bit_process=True)


BuilderFactory = Callable[..., ExternalCommandBuilder]


@pytest.fixture
def make_builder(host: HostEnvironment) -> BuilderFactory:
    """Factory for builders with fake collaborators and a fixed process environment."""

    def _make(
        values: Mapping[str, str] | None = None,
        *,
        tools: FakeToolLocator | None = None,
        environ: Mapping[str, str] | None = None,
        host_env: HostEnvironment | None = None,
        idle_timeout: timedelta = timedelta(seconds=60),
        settings: DeploymentSettingsManager | None = None,
    ) -> ExternalCommandBuilder:
        if settings is None:
            settings = DeploymentSettingsManager(values, default_idle_timeout=idle_timeout)
        return ExternalCommandBuilder(
            host_env or host,
            settings,
            tools or FakeToolLocator(),
            environ={"PATH": INHERITED_PATH} if environ is None else environ,
            path_separator=":",
        )

    return _make


@pytest.fixture
def fake_tools() -> type[FakeToolLocator]:
    return FakeToolLocator


@pytest.fixture
def failing_settings() -> FailingSettings:
    return FailingSettings()
