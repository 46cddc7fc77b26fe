"""Tool locator -- finds optional third-party tools on the host.

Every tool is optional.  A missing tool resolves to ``None`` (or an empty
list for ``resolve_all``) and is simply left off the command search path.

Lookups hit the filesystem, so they may block briefly; they have no other
side effects.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from shipwright.deploy_runtime.models.enums import Tool

if TYPE_CHECKING:
    from collections.abc import Mapping

# Executable names looked up on the search path, in preference order.
_EXECUTABLES: dict[Tool, tuple[str, ...]] = {
    Tool.MSBUILD: ("msbuild", "dotnet"),
    Tool.GIT: ("git",),
    Tool.VSTEST: ("vstest.console",),
    Tool.SQLCMD: ("sqlcmd",),
    Tool.BOWER: ("bower",),
    Tool.GRUNT: ("grunt",),
    Tool.GULP: ("gulp",),
}

_NPM_CLI_RELATIVE = Path("lib") / "node_modules" / "npm" / "bin" / "npm-cli.js"


@runtime_checkable
class ToolLocator(Protocol):
    """Resolves tool names to absolute host paths."""

    def resolve(self, tool: Tool) -> str | None:
        """Return the tool's path, or ``None`` if it is not installed."""
        ...

    def resolve_all(self, tool: Tool) -> list[str]:
        """Return every installation of a tool family, in precedence order."""
        ...


class HostToolLocator:
    """Tool locator backed by the host filesystem.

    Parameters
    ----------
    search_path:
        Search path used for executable lookup.  Defaults to the process
        ``PATH``.
    node_versions_root:
        Directory whose subdirectories are installed node runtimes.
    npm_global_prefix:
        npm global prefix; falls back to ``NPM_CONFIG_PREFIX`` in *environ*.
    environ:
        Environment mapping for fallbacks.  Defaults to ``os.environ``.
    """

    def __init__(
        self,
        *,
        search_path: str | None = None,
        node_versions_root: str | None = None,
        npm_global_prefix: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        env = os.environ if environ is None else environ
        self._search_path = search_path if search_path is not None else env.get("PATH", "")
        self._node_versions_root = node_versions_root
        self._npm_global_prefix = npm_global_prefix or env.get("NPM_CONFIG_PREFIX") or None

    def resolve(self, tool: Tool) -> str | None:
        if tool in _EXECUTABLES:
            return self._which(*_EXECUTABLES[tool])
        if tool == Tool.NPM_JS:
            return self._resolve_npm_cli()
        if tool == Tool.NPM_GLOBAL_PREFIX:
            return self._npm_global_prefix
        if tool == Tool.NODE_RUNTIMES:
            runtimes = self.resolve_all(tool)
            return runtimes[0] if runtimes else None
        return None

    def resolve_all(self, tool: Tool) -> list[str]:
        if tool == Tool.NODE_RUNTIMES:
            return self._node_runtime_dirs()
        path = self.resolve(tool)
        return [path] if path else []

    # -- Lookups ---------------------------------------------------------------

    def _which(self, *names: str) -> str | None:
        for name in names:
            found = shutil.which(name, path=self._search_path)
            if found:
                return str(Path(found).absolute())
        return None

    def _resolve_npm_cli(self) -> str | None:
        """Locate ``npm-cli.js`` relative to the installed ``npm`` executable."""
        npm = self._which("npm")
        if npm is None:
            return None
        install_root = Path(npm).resolve().parent.parent
        for candidate in (install_root / _NPM_CLI_RELATIVE, Path(npm).resolve().parent / "npm-cli.js"):
            if candidate.is_file():
                return str(candidate)
        return None

    def _node_runtime_dirs(self) -> list[str]:
        """Installed runtime ``bin`` directories under the versions root, sorted by name."""
        if not self._node_versions_root:
            return []
        root = Path(self._node_versions_root)
        if not root.is_dir():
            return []

        dirs: list[str] = []
        for version_dir in sorted(p for p in root.iterdir() if p.is_dir()):
            bin_dir = version_dir / "bin"
            dirs.append(str(bin_dir if bin_dir.is_dir() else version_dir))
        return dirs
