"""FastAPI dependency injection for service hook handlers.

Usage in route handlers::

    @router.post("/deploy")
    async def deploy(handlers: HookHandlers, ...) -> HookResponse:
        ...

Tests replace the handler chain via ``app.dependency_overrides[get_hook_handlers]``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from shipwright.deploy_runtime.hooks import DEFAULT_HANDLERS, ServiceHookHandler


def get_hook_handlers(request: Request) -> list[ServiceHookHandler]:
    """Return the handler chain configured on the app, or the built-in handlers."""
    handlers: list[ServiceHookHandler] | None = getattr(request.app.state, "hook_handlers", None)
    if handlers is None:
        return DEFAULT_HANDLERS
    return handlers


HookHandlers = Annotated[list[ServiceHookHandler], Depends(get_hook_handlers)]
"""Annotated dependency: ordered service hook handler chain."""
