"""
Toolchain registry.

Toolchains are found, in order, by:
1. A name registered with @register_toolchain
2. A 'package.module:attribute' import path
3. An entry point in the 'runway.toolchains' group

The attribute or entry point may be a toolchain class (instantiated with no
arguments) or a ready-made toolchain instance.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable
from importlib.metadata import entry_points
from typing import Any

from runway.core.errors import ToolchainNotFoundError
from runway.core.toolchain.protocol import Toolchain

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "runway.toolchains"

_toolchains: dict[str, type[Toolchain]] = {}


def register_toolchain(
    name: str,
) -> Callable[[type[Toolchain]], type[Toolchain]]:
    """
    Decorator to register a toolchain implementation.

    Usage:
        @register_toolchain('scala')
        class ScalaToolchain:
            @property
            def name(self) -> str:
                return 'scala'
            ...

    Args:
        name: Toolchain name

    Returns:
        Decorator function
    """

    def decorator(toolchain_class: type[Toolchain]) -> type[Toolchain]:
        _toolchains[name] = toolchain_class
        return toolchain_class

    return decorator


def list_toolchains() -> list[str]:
    """Names of registered and installed toolchains."""
    names = set(_toolchains)
    names.update(ep.name for ep in entry_points(group=ENTRY_POINT_GROUP))
    return sorted(names)


def _instantiate(target: Any, reference: str) -> Toolchain:
    toolchain = target() if isinstance(target, type) else target
    if not isinstance(toolchain, Toolchain):
        raise ToolchainNotFoundError(reference)
    return toolchain


def _import_path(reference: str) -> Any:
    module_name, _, attribute = reference.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        logger.debug("Cannot import toolchain module %s: %s", module_name, e)
        raise ToolchainNotFoundError(reference) from e
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise ToolchainNotFoundError(reference) from e


def get_toolchain(reference: str | None) -> Toolchain:
    """
    Get a toolchain by name, import path or entry point.

    Args:
        reference: Registered name, 'module:attribute' path, or entry point name

    Returns:
        Toolchain instance

    Raises:
        ToolchainNotFoundError: If nothing matches reference
    """
    if not reference:
        raise ToolchainNotFoundError("<unset>", list_toolchains())

    toolchain_class = _toolchains.get(reference)
    if toolchain_class is not None:
        return _instantiate(toolchain_class, reference)

    if ":" in reference:
        return _instantiate(_import_path(reference), reference)

    for ep in entry_points(group=ENTRY_POINT_GROUP):
        if ep.name == reference:
            logger.debug("Loading toolchain %s from entry point %s", reference, ep.value)
            return _instantiate(ep.load(), reference)

    raise ToolchainNotFoundError(reference, list_toolchains())


__all__ = [
    "ENTRY_POINT_GROUP",
    "get_toolchain",
    "list_toolchains",
    "register_toolchain",
]
