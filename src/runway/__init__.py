"""
Runway - build, run, and rerun programs.

The execution layer of a build/run tool: picks the entry point and the
execution strategy of a compiled program, launches it, propagates its exit
status, and reruns it on every successful rebuild in watch mode.
"""

__version__ = "0.3.0"

# Re-export core models for convenience
from runway.core.build.models import BuildOptions, Failed, Inputs, Platform, Successful
from runway.core.config.models import RunwayConfig

__all__ = [
    "BuildOptions",
    "Failed",
    "Inputs",
    "Platform",
    "RunwayConfig",
    "Successful",
    "__version__",
]
