"""Environment variable compositor.

Decides, per key, between a user override from the deployment settings and
the computed default.  A present, non-empty override always wins; an unset
or empty value falls back to the default.  Every decision is recorded so
callers can see which values were customised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from shipwright.deploy_runtime.models.enums import ValueSource

if TYPE_CHECKING:
    from shipwright.deploy_runtime.providers.deployment_settings import DeploymentSettingsProvider


@dataclass(frozen=True)
class Resolution:
    """One resolved key: the winning value and where it came from."""

    key: str
    value: str
    source: ValueSource


def resolve_value(settings: DeploymentSettingsProvider, key: str, default: str) -> Resolution:
    """Pick the override for *key* if set and non-empty, otherwise *default*.

    Settings provider errors propagate unchanged.
    """
    override = settings.get_value(key)
    if override:
        return Resolution(key=key, value=override, source=ValueSource.OVERRIDE)
    return Resolution(key=key, value=default, source=ValueSource.DEFAULT)


class EnvironmentCompositor:
    """Resolves catalog keys against one settings provider and keeps the decisions.

    ``sources`` maps each resolved key to where its value came from.
    """

    def __init__(self, settings: DeploymentSettingsProvider) -> None:
        self._settings = settings
        self.sources: dict[str, ValueSource] = {}

    def resolve(self, key: str, default: str) -> str:
        resolution = resolve_value(self._settings, key, default)
        if resolution.source == ValueSource.OVERRIDE:
            logger.info("Using custom deployment setting for {} custom value is '{}'.", key, resolution.value)
        else:
            logger.debug("Using default for {}: '{}'", key, resolution.value)
        self.sources[key] = resolution.source
        return resolution.value
