"""Feature modules with auto-discovery."""

from importlib import import_module
from pathlib import Path
from types import ModuleType

import structlog
from fastapi import APIRouter


logger = structlog.get_logger()


def _iter_modules() -> list[ModuleType]:
    modules_dir = Path(__file__).parent
    return [
        import_module(f"app.modules.{path.name}")
        for path in sorted(modules_dir.iterdir())
        if path.is_dir() and not path.name.startswith("_")
    ]


def discover_modules() -> list[APIRouter]:
    """Return the routers of all feature modules.

    A module contributes a router by exporting ``router`` from its
    ``__init__.py``. Modules without one (users) are skipped.

    Returns:
        List of FastAPI routers, in module name order.
    """
    routers: list[APIRouter] = []
    for module in _iter_modules():
        router = getattr(module, "router", None)
        if router is not None:
            routers.append(router)
            logger.debug("module_loaded", module=module.__name__)
    return routers


def load_models() -> None:
    """Import every module's models so they register on ``Base.metadata``."""
    for module in _iter_modules():
        import_module(f"{module.__name__}.models")
