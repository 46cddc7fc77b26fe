"""External command builder -- produces launch descriptors for deployment tools.

Given a command and a working directory, the builder assembles everything
the process launcher needs:

1. Export every deployment setting as an environment variable.
2. Resolve each catalog key: user override if set, computed default otherwise.
3. Aggregate the optional tool directories into a search path prefix and
   prepend it to the inherited ``PATH``.
4. For the starter script, layer on the deployment keys and the in-place flag.
5. Force the package-restore flag.

The builder holds no per-call state.  Every build gets a fresh draft, and
the descriptor it returns is immutable.  Settings and tool locator errors
propagate unchanged, and no descriptor is returned when anything fails.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from loguru import logger

from shipwright.deploy_runtime.execution import catalog
from shipwright.deploy_runtime.execution.catalog import (
    ConfigurationMissingError,
    DefaultContext,
)
from shipwright.deploy_runtime.execution.compositor import EnvironmentCompositor
from shipwright.deploy_runtime.execution.paths import (
    aggregate_search_path,
    parent_directory,
    paths_equal,
    prepend_to_search_path,
)
from shipwright.deploy_runtime.models.descriptor import PATH_KEY, DescriptorDraft
from shipwright.deploy_runtime.models.enums import Tool
from shipwright.deploy_runtime.providers.deployment_settings import PROJECT_KEY

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import timedelta

    from shipwright.deploy_runtime.models.descriptor import ExecutableDescriptor
    from shipwright.deploy_runtime.models.host import HostEnvironment
    from shipwright.deploy_runtime.providers.deployment_settings import DeploymentSettingsProvider
    from shipwright.deploy_runtime.providers.tools import ToolLocator

__all__ = ["ConfigurationMissingError", "ExternalCommandBuilder"]


class ExternalCommandBuilder:
    """Builds ``ExecutableDescriptor`` objects for external deployment commands.

    Parameters
    ----------
    host:
        Host layout (root, web root, script directory, ...).
    settings:
        Deployment settings provider (user overrides, idle timeout).
    tools:
        Locator for optional host tools.
    environ:
        Process environment to inherit ``PATH`` and ``SITE_BITNESS`` from.
        Snapshot of ``os.environ`` when omitted.
    path_separator:
        Separator for the assembled ``PATH``.
    """

    def __init__(
        self,
        host: HostEnvironment,
        settings: DeploymentSettingsProvider,
        tools: ToolLocator,
        *,
        environ: Mapping[str, str] | None = None,
        path_separator: str = os.pathsep,
    ) -> None:
        self._host = host
        self._settings = settings
        self._tools = tools
        self._environ = dict(os.environ if environ is None else environ)
        self._path_separator = path_separator

    @property
    def starter_script_path(self) -> str:
        """Location of the deployment starter script.

        Raises ``ConfigurationMissingError`` if the script directory is unset.
        """
        if not self._host.script_path:
            raise ConfigurationMissingError("script_path")
        return os.path.join(self._host.script_path, catalog.STARTER_SCRIPT_NAME)

    # -- Public API ------------------------------------------------------------

    def build_command(
        self,
        command_path: str,
        working_directory: str,
        idle_timeout: timedelta,
    ) -> ExecutableDescriptor:
        """Build a descriptor for an arbitrary external command."""
        draft = self._generic_draft(command_path, working_directory, idle_timeout)
        _force_package_restore(draft)
        return draft.build()

    def build_starter_command(
        self,
        working_directory: str,
        target_path: str,
        source_path: str,
    ) -> ExecutableDescriptor:
        """Build the descriptor for the deployment starter script.

        Raises ``ConfigurationMissingError`` if the starter script location
        cannot be formed.
        """
        draft = self._generic_draft(
            self.starter_script_path,
            working_directory,
            self._settings.get_idle_timeout(),
        )
        ctx = self._context(source_path=source_path, target_path=target_path)
        compositor = EnvironmentCompositor(self._settings)
        _apply_defaults(draft, compositor, catalog.STARTER_DEFAULTS, ctx)

        if self._is_in_place(source_path, target_path):
            logger.debug("In-place deployment detected (source={}, target={})", source_path, target_path)
            value = compositor.resolve(catalog.IN_PLACE_DEPLOYMENT, catalog.IN_PLACE_DEPLOYMENT_VALUE)
            draft.set_env(catalog.IN_PLACE_DEPLOYMENT, value, compositor.sources[catalog.IN_PLACE_DEPLOYMENT])

        _force_package_restore(draft)
        return draft.build()

    # -- Internal helpers ------------------------------------------------------

    def _context(self, *, source_path: str = "", target_path: str = "") -> DefaultContext:
        return DefaultContext(
            host=self._host,
            tools=self._tools,
            settings=self._settings,
            environ=self._environ,
            source_path=source_path,
            target_path=target_path,
        )

    def _generic_draft(
        self,
        command_path: str,
        working_directory: str,
        idle_timeout: timedelta,
    ) -> DescriptorDraft:
        ctx = self._context()
        # Fails fast before any resolver call if the script directory is missing.
        script_path = ctx.script_path

        draft = DescriptorDraft(command_path, working_directory, idle_timeout)
        draft.update_env(self._settings.all_values())
        _apply_defaults(draft, EnvironmentCompositor(self._settings), catalog.GENERIC_DEFAULTS, ctx)

        prefix = aggregate_search_path(self._tool_directories(script_path))
        inherited = self._environ.get(PATH_KEY)
        draft.prepend_to_path(prefix, prepend_to_search_path(prefix, inherited, self._path_separator))
        return draft

    def _tool_directories(self, script_path: str) -> list[str | None]:
        """Candidate search path entries in precedence order (first match wins)."""
        tools = self._tools
        candidates: list[str | None] = [
            parent_directory(tools.resolve(Tool.MSBUILD)),
            parent_directory(tools.resolve(Tool.GIT)),
            parent_directory(tools.resolve(Tool.VSTEST)),
            parent_directory(tools.resolve(Tool.SQLCMD)),
            script_path,
        ]
        candidates.extend(tools.resolve_all(Tool.NODE_RUNTIMES))
        candidates.append(tools.resolve(Tool.NPM_GLOBAL_PREFIX))
        candidates.extend(parent_directory(tools.resolve(tool)) for tool in (Tool.BOWER, Tool.GRUNT, Tool.GULP))
        return candidates

    def _is_in_place(self, source_path: str, target_path: str) -> bool:
        project = self._settings.get_value(PROJECT_KEY)
        if project:
            return paths_equal(os.path.join(source_path, project), target_path)
        return paths_equal(source_path, target_path)


def _apply_defaults(
    draft: DescriptorDraft,
    compositor: EnvironmentCompositor,
    defaults: Mapping[str, catalog.DefaultFn],
    ctx: DefaultContext,
) -> None:
    for key, default_fn in defaults.items():
        value = compositor.resolve(key, default_fn(ctx))
        draft.set_env(key, value, compositor.sources[key])


def _force_package_restore(draft: DescriptorDraft) -> None:
    # Package restore requires this flag; user settings never replace it.
    draft.set_env(catalog.PACKAGE_RESTORE, catalog.PACKAGE_RESTORE_VALUE)
