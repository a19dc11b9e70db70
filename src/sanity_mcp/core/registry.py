"""
Tool discovery for the MCP gateway.

A tool is any public coroutine defined in a `sanity_mcp.core.tools` module
whose first parameter is `client`. The registered wrapper supplies the client
itself, so MCP hosts only ever see the remaining parameters.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
import time
from types import ModuleType
from typing import Callable, Iterable, List, Optional, get_type_hints

from .client import SanityClient
from .observability import log_event

log = logging.getLogger("sanity_mcp.core.registry")

TOOLS_PACKAGE = "sanity_mcp.core.tools"

ClientProvider = Callable[[], SanityClient]


# --- Discovery ------------------------------------------------------------- #


def discover_tool_modules(package_name: str = TOOLS_PACKAGE) -> List[ModuleType]:
    """Import every public module of the tools package; broken ones are skipped."""
    base_pkg = importlib.import_module(package_name)
    modules: List[ModuleType] = []

    for info in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        if info.name.rsplit(".", 1)[-1].startswith("_"):
            continue
        try:
            modules.append(importlib.import_module(info.name))
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", info.name, exc)

    return modules


def _takes_client_first(func: Callable) -> bool:
    params = list(inspect.signature(func).parameters)
    return bool(params) and params[0] == "client"


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    for name, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if name.startswith("_") or func.__module__ != module.__name__:
            continue
        if not _takes_client_first(func):
            log.debug("Skipping %s.%s: no leading 'client'", module.__name__, name)
            continue
        yield func


# --- Wrapping -------------------------------------------------------------- #


def _public_signature(func: Callable) -> inspect.Signature:
    """Signature without `client`, with string annotations resolved."""
    sig = inspect.signature(func)
    hints = get_type_hints(func)
    params = [
        p.replace(annotation=hints.get(p.name, p.annotation))
        for p in list(sig.parameters.values())[1:]
    ]
    return inspect.Signature(
        parameters=params,
        return_annotation=hints.get("return", sig.return_annotation),
    )


def _log_tool_call(
    tool: str, started: float, status: str, error_type: Optional[str] = None
) -> None:
    log_event(
        "tool_call",
        tool=tool,
        status=status,
        error_type=error_type,
        duration_ms=int((time.perf_counter() - started) * 1000),
    )


def _wrap_tool(func: Callable, client_provider: ClientProvider) -> Callable:
    name = func.__name__

    async def wrapped(*args, **kwargs):
        started = time.perf_counter()
        try:
            result = await func(client_provider(), *args, **kwargs)
        except Exception as exc:
            # FastMCP turns the exception into an error result for the host.
            _log_tool_call(name, started, "error", type(exc).__name__)
            raise
        _log_tool_call(name, started, "ok")
        return result

    wrapped.__name__ = name
    wrapped.__qualname__ = func.__qualname__
    wrapped.__doc__ = func.__doc__
    wrapped.__module__ = func.__module__
    wrapped.__signature__ = _public_signature(func)  # type: ignore[attr-defined]
    return wrapped


# --- Registration ---------------------------------------------------------- #


def register_discovered_tools(
    app,
    client: ClientProvider | SanityClient,
    modules: List[ModuleType] | None = None,
) -> List[str]:
    """
    Register every discovered tool on `app` (anything with a FastMCP-style
    `.tool(name=...)` decorator) and return the names in registration order.
    Raises ValueError when two modules define the same tool name.
    """
    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    if isinstance(client, SanityClient):
        instance = client

        def provider() -> SanityClient:
            return instance

    else:
        provider = client

    registered: List[str] = []
    for module in modules or discover_tool_modules():
        for func in iter_tool_functions(module):
            name = func.__name__
            if name in registered:
                raise ValueError(f"Duplicate tool name detected: {name}")
            app.tool(name=name)(_wrap_tool(func, provider))
            registered.append(name)
            log.info("Registered tool: %s (%s)", name, module.__name__)

    return registered
