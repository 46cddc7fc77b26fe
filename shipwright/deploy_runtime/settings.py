"""Service configuration loaded from SHIPWRIGHT_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ShipwrightSettings(BaseSettings):
    """Shipwright deploy runtime settings.

    All fields are read from environment variables with the ``SHIPWRIGHT_``
    prefix.  For example, ``SHIPWRIGHT_LOG_LEVEL=DEBUG`` maps to ``log_level``.

    Per-site deployment settings (``SCM_*``, ``project``, variable overrides)
    are **not** managed here -- they come from the deployment settings
    provider, which layers them per deployment.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHIPWRIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Host layout -----------------------------------------------------------
    root_path: str = "./home"
    """Site home directory.  Exported to deployment commands as ``HOME``.

    A relative value is resolved against the working directory the service
    starts in; set it explicitly for anything but local use.
    """

    script_path: str | None = None
    """Directory holding the starter script and helper scripts.  Required to build commands."""

    web_root_path: str | None = None
    deployment_tools_path: str | None = None
    repository_path: str | None = None

    # -- Tool discovery --------------------------------------------------------
    node_versions_root: str | None = None
    """Directory whose subdirectories are installed node runtimes."""

    npm_global_prefix: str | None = None
    """npm global prefix.  Falls back to ``NPM_CONFIG_PREFIX`` when unset."""

    # -- Commands --------------------------------------------------------------
    command_idle_timeout: int = 60
    """Default idle timeout (seconds) when ``SCM_COMMAND_IDLE_TIMEOUT`` is not set."""

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000


def get_settings() -> ShipwrightSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to force a
    re-read after overriding env vars.
    """
    return _get_settings_cached()


@lru_cache(maxsize=1)
def _get_settings_cached() -> ShipwrightSettings:
    return ShipwrightSettings()


