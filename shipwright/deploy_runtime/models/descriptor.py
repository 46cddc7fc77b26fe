"""Executable descriptor -- the hand-off record for the process launcher.

A descriptor fully specifies how to launch one external deployment command:
what to run, where, with which environment and search path, and how long the
process may stay silent before the supervisor treats it as hung.

Descriptors are created fresh for every command and are immutable.  They are
assembled through a ``DescriptorDraft`` so that a half-built descriptor never
reaches a caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from shipwright.deploy_runtime.models.enums import ValueSource

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

PATH_KEY = "PATH"


@dataclass(frozen=True)
class ExecutableDescriptor:
    """Immutable launch descriptor.

    ``environment_variables`` already contains the final ``PATH`` (the
    aggregated ``search_path_prefix`` followed by the inherited search path).
    ``value_sources`` records, for every catalog key, whether the value came
    from a user override or from the computed default.
    """

    command: str
    working_directory: str
    idle_timeout: timedelta
    environment_variables: Mapping[str, str]
    search_path_prefix: tuple[str, ...] = ()
    value_sources: Mapping[str, ValueSource] = field(default_factory=lambda: MappingProxyType({}))

    def as_dict(self) -> dict[str, Any]:
        """JSON-friendly representation for diagnostics."""
        return {
            "command": self.command,
            "working_directory": self.working_directory,
            "idle_timeout": self.idle_timeout.total_seconds(),
            "environment_variables": dict(self.environment_variables),
            "search_path_prefix": list(self.search_path_prefix),
            "value_sources": {k: str(v) for k, v in self.value_sources.items()},
        }


class DescriptorDraft:
    """Mutable builder for an ``ExecutableDescriptor``.

    Environment writes are last-write-wins; insertion order is kept for
    diagnostics.  ``build()`` freezes copies, so the draft may be discarded
    or reused without affecting descriptors already built from it.
    """

    def __init__(self, command: str, working_directory: str, idle_timeout: timedelta) -> None:
        self.command = command
        self.working_directory = working_directory
        self.idle_timeout = idle_timeout
        self.environment_variables: dict[str, str] = {}
        self.search_path_prefix: list[str] = []
        self.value_sources: dict[str, ValueSource] = {}

    def set_env(self, key: str, value: str, source: ValueSource | None = None) -> None:
        self.environment_variables[key] = value
        if source is not None:
            self.value_sources[key] = source

    def update_env(self, values: Mapping[str, str]) -> None:
        self.environment_variables.update(values)

    def prepend_to_path(self, prefix: Iterable[str], full_path: str) -> None:
        """Record the aggregated prefix and the final ``PATH`` value."""
        self.search_path_prefix = list(prefix)
        self.environment_variables[PATH_KEY] = full_path

    def build(self) -> ExecutableDescriptor:
        return ExecutableDescriptor(
            command=self.command,
            working_directory=self.working_directory,
            idle_timeout=self.idle_timeout,
            environment_variables=MappingProxyType(dict(self.environment_variables)),
            search_path_prefix=tuple(self.search_path_prefix),
            value_sources=MappingProxyType(dict(self.value_sources)),
        )
