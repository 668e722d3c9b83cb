"""
Toolchain protocol and registry.

The toolchain is the pluggable collaborator that resolves inputs, builds,
watches, links and compiles. Runway only consumes it.
"""

from runway.core.toolchain.protocol import Toolchain, WatchSession
from runway.core.toolchain.registry import (
    ENTRY_POINT_GROUP,
    get_toolchain,
    list_toolchains,
    register_toolchain,
)

__all__ = [
    "ENTRY_POINT_GROUP",
    "Toolchain",
    "WatchSession",
    "get_toolchain",
    "list_toolchains",
    "register_toolchain",
]
