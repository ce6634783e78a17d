from __future__ import annotations

import importlib
import inspect
import json
import logging
import pkgutil
from types import ModuleType
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, get_type_hints

from pydantic import BaseModel

from .client import BambooHRClient
from .config import BambooHRConfig, ConfigStore

log = logging.getLogger("bamboohr_mcp.core.registry")

ClientFactory = Callable[[BambooHRConfig], BambooHRClient]

# Public tool names, kept stable for existing MCP clients.
TOOL_NAMES: Dict[str, str] = {
    "list_absences": "bamboohr_fetch_whos_out",
    "list_projects": "bamboohr_fetch_projects",
    "list_time_entries": "bamboohr_fetch_time_entries",
    "get_employee": "bamboohr_get_me",
    "get_employee_directory": "bamboohr_fetch_employee_directory",
    "submit_work_hours": "bamboohr_submit_work_hours",
}


def tool_name(func: Callable) -> str:
    return TOOL_NAMES.get(func.__name__, f"bamboohr_{func.__name__}")


# --- Discovery helpers ----------------------------------------------------- #


def discover_tool_modules(
    package_name: str = "bamboohr_mcp.core.tools",
) -> List[ModuleType]:
    """Import all modules under the given tools package, skipping failures."""
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        name = finder.name
        try:
            module = importlib.import_module(name)
            modules.append(module)
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", name, exc)
            continue

    return modules


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield public coroutines defined in the module that take 'client' first."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if func.__name__.startswith("_"):
            continue
        if func.__module__ != module.__name__:
            # Skip imported functions
            continue

        params = list(inspect.signature(func).parameters.values())
        if not params or params[0].name != "client":
            log.debug(
                "Skipping %s.%s: first parameter must be 'client'",
                module.__name__,
                func.__name__,
            )
            continue

        yield func


# --- Result serialization -------------------------------------------------- #


def to_payload(result: Any) -> Any:
    """Turn tool results (models, lists of models, primitives) into JSON-ready data."""
    if isinstance(result, BaseModel):
        to_dict = getattr(result, "to_payload", None)
        if callable(to_dict):
            return to_dict()
        return result.model_dump(mode="json", by_alias=True)
    if isinstance(result, (list, tuple)):
        return [to_payload(item) for item in result]
    if isinstance(result, dict):
        return {k: to_payload(v) for k, v in result.items()}
    return result


# --- Wrapping / registration ---------------------------------------------- #

_OVERRIDE_PARAMS = (
    inspect.Parameter(
        "token",
        inspect.Parameter.KEYWORD_ONLY,
        default=None,
        annotation=Optional[str],
    ),
    inspect.Parameter(
        "companyDomain",
        inspect.Parameter.KEYWORD_ONLY,
        default=None,
        annotation=Optional[str],
    ),
)


def _camel(name: str) -> str:
    """employee_id -> employeeId; tool arguments use BambooHR's camelCase names."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _wrap_tool(
    func: Callable, store: ConfigStore, client_factory: ClientFactory
) -> Callable:
    """
    Return a wrapper that hides 'client', exposes camelCase argument names,
    accepts per-call token/companyDomain overrides and returns the
    JSON-serialized result as text.
    """
    original_sig = inspect.signature(func)
    type_hints = get_type_hints(func)

    new_params = []
    arg_names: Dict[str, str] = {}
    for i, (name, param) in enumerate(original_sig.parameters.items()):
        if i == 0 and name == "client":
            continue  # drop injected client
        public = _camel(name)
        arg_names[public] = name
        ann = type_hints.get(name, param.annotation)
        new_params.append(
            param.replace(
                name=public, kind=inspect.Parameter.KEYWORD_ONLY, annotation=ann
            )
        )
    new_params.extend(_OVERRIDE_PARAMS)

    new_sig = inspect.Signature(parameters=new_params, return_annotation=str)

    async def wrapped(*, token=None, companyDomain=None, **kwargs):
        unknown = set(kwargs) - set(arg_names)
        if unknown:
            raise TypeError(
                f"{func.__name__}() got unexpected arguments: {sorted(unknown)}"
            )
        config = store.get().with_overrides(token=token, company_domain=companyDomain)
        async with client_factory(config) as client:
            result = await func(
                client, **{arg_names[k]: v for k, v in kwargs.items()}
            )
        return json.dumps(to_payload(result))

    wrapped.__name__ = func.__name__
    wrapped.__doc__ = func.__doc__
    wrapped.__module__ = func.__module__
    wrapped.__signature__ = new_sig  # type: ignore[attr-defined]
    return wrapped


def register_discovered_tools(
    app,
    store: ConfigStore,
    modules: List[ModuleType] | None = None,
    *,
    client_factory: ClientFactory = BambooHRClient,
) -> List[str]:
    """Register discovered tools on an app that exposes a .tool decorator."""
    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    modules = modules or discover_tool_modules()
    seen_names: Set[str] = set()

    for module in modules:
        for func in iter_tool_functions(module):
            name = tool_name(func)
            if name in seen_names:
                raise ValueError(f"Duplicate tool name detected: {name}")

            wrapped = _wrap_tool(func, store, client_factory)
            app.tool(name=name)(wrapped)
            seen_names.add(name)
            log.info("Registered tool: %s (%s)", name, module.__name__)

    return sorted(seen_names)


__all__ = [
    "TOOL_NAMES",
    "tool_name",
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
    "to_payload",
]
