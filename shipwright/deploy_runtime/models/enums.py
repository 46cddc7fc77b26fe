"""Shared enumerations used across the deploy runtime."""

from __future__ import annotations

from enum import StrEnum

# -- Environment composition -------------------------------------------------


class ValueSource(StrEnum):
    """Where a resolved environment variable value came from."""

    OVERRIDE = "override"
    DEFAULT = "default"


# -- Tools -------------------------------------------------------------------


class Tool(StrEnum):
    """Optional host tools found by the tool locator.

    Single-path tools resolve to an executable file; ``NODE_RUNTIMES`` and
    ``NPM_GLOBAL_PREFIX`` resolve to directories.
    """

    MSBUILD = "msbuild"
    GIT = "git"
    VSTEST = "vstest"
    SQLCMD = "sqlcmd"
    NPM_JS = "npm_js"
    NODE_RUNTIMES = "node_runtimes"
    NPM_GLOBAL_PREFIX = "npm_global_prefix"
    BOWER = "bower"
    GRUNT = "grunt"
    GULP = "gulp"


# -- Service hooks -----------------------------------------------------------


class DeployAction(StrEnum):
    """Outcome of parsing a service hook payload."""

    UNKNOWN_PAYLOAD = "unknown_payload"
    NO_OP = "no_op"
    PROCESS_DEPLOYMENT = "process_deployment"
