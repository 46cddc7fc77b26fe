"""Per-deployment settings provider.

Deployment settings are plain string key/value pairs supplied by the user
(site app settings, the repository's ``.deployment`` file, ...).  They
override computed environment defaults and tune command execution.

The builder only depends on the ``DeploymentSettingsProvider`` protocol.
Providers must return ``None`` for unset keys; an empty string is treated
the same way by the environment compositor.  Any other failure is raised
and propagates to the caller unchanged.
"""

from __future__ import annotations

import configparser
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

COMMAND_IDLE_TIMEOUT_KEY = "SCM_COMMAND_IDLE_TIMEOUT"
POST_DEPLOYMENT_ACTIONS_DIR_KEY = "SCM_POST_DEPLOYMENT_ACTIONS_PATH"
PROJECT_KEY = "project"

DEPLOYMENT_FILE_NAME = ".deployment"
DEPLOYMENT_FILE_SECTION = "config"

DEFAULT_COMMAND_IDLE_TIMEOUT = timedelta(seconds=60)


class InvalidSettingError(ValueError):
    """A deployment setting is present but cannot be interpreted."""

    def __init__(self, key: str, value: str, expected: str) -> None:
        super().__init__(f"Invalid value '{value}' for deployment setting '{key}': expected {expected}")
        self.key = key
        self.value = value


class DeploymentFileError(ValueError):
    """The repository's ``.deployment`` file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read deployment file '{path}': {reason}")
        self.path = path


@runtime_checkable
class DeploymentSettingsProvider(Protocol):
    """Read-only access to deployment settings."""

    def get_value(self, key: str) -> str | None:
        """Return the configured value, or ``None`` if unset."""
        ...

    def get_idle_timeout(self) -> timedelta:
        """Idle timeout applied to deployment commands."""
        ...

    def get_post_deployment_actions_dir(self, default: str) -> str:
        """Directory of post-deployment action scripts, or *default*."""
        ...

    def all_values(self) -> dict[str, str]:
        """Every configured setting, exported to commands as environment variables."""
        ...


class DeploymentSettingsManager:
    """In-memory implementation of the DeploymentSettingsProvider protocol.

    Holds a single merged mapping.  Use ``from_sources`` to layer several
    sources where the earlier source wins, e.g.::

        DeploymentSettingsManager.from_sources(site_settings, load_deployment_file(repo))
    """

    def __init__(
        self,
        values: Mapping[str, str] | None = None,
        *,
        default_idle_timeout: timedelta = DEFAULT_COMMAND_IDLE_TIMEOUT,
    ) -> None:
        self._values = dict(values or {})
        self._default_idle_timeout = default_idle_timeout

    @classmethod
    def from_sources(
        cls,
        *sources: Mapping[str, str],
        default_idle_timeout: timedelta = DEFAULT_COMMAND_IDLE_TIMEOUT,
    ) -> DeploymentSettingsManager:
        merged: dict[str, str] = {}
        for source in sources:
            for key, value in source.items():
                merged.setdefault(key, value)
        return cls(merged, default_idle_timeout=default_idle_timeout)

    def get_value(self, key: str) -> str | None:
        return self._values.get(key)

    def get_idle_timeout(self) -> timedelta:
        raw = self._values.get(COMMAND_IDLE_TIMEOUT_KEY)
        if not raw:
            return self._default_idle_timeout
        try:
            seconds = int(raw.strip())
        except ValueError:
            raise InvalidSettingError(COMMAND_IDLE_TIMEOUT_KEY, raw, "an integer number of seconds") from None
        if seconds < 0:
            raise InvalidSettingError(COMMAND_IDLE_TIMEOUT_KEY, raw, "a non-negative number of seconds")
        return timedelta(seconds=seconds)

    def get_post_deployment_actions_dir(self, default: str) -> str:
        return self._values.get(POST_DEPLOYMENT_ACTIONS_DIR_KEY) or default

    def all_values(self) -> dict[str, str]:
        return dict(self._values)


def load_deployment_file(repository_path: str | Path) -> dict[str, str]:
    """Read the ``[config]`` section of the repository's ``.deployment`` file.

    Returns an empty mapping if the file does not exist.  Keys keep their
    original case (``command``, ``project``, ``SCM_COMMAND_IDLE_TIMEOUT``);
    a repeated key keeps its last value.

    Raises ``DeploymentFileError`` if the file is not valid INI or not UTF-8.
    """
    path = Path(repository_path) / DEPLOYMENT_FILE_NAME
    if not path.is_file():
        return {}

    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as exc:
        raise DeploymentFileError(path, exc.message.splitlines()[0]) from None
    except UnicodeDecodeError:
        raise DeploymentFileError(path, "not valid UTF-8") from None
    if not parser.has_section(DEPLOYMENT_FILE_SECTION):
        return {}
    return dict(parser.items(DEPLOYMENT_FILE_SECTION))
