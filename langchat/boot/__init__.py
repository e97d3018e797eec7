"""Boot layer - Application composition root.

This package is the ONLY place where concrete infrastructure
implementations are instantiated and wired together.

Architecture rules:
- boot CAN import: ui, app, domain, infra, utils, config
- NO OTHER layer imports infra
- The UI gets a fully-configured application via boot.create_app()
"""

from __future__ import annotations

from langchat.boot.app_factory import AppComponents, create_app
from langchat.boot.async_runtime import AsyncRuntime

__all__ = [
    "AppComponents",
    "AsyncRuntime",
    "create_app",
]
