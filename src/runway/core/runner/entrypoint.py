"""
Entry point resolution.

Picks the main class to launch for a successful build. First match wins:
an explicit override, then the benchmark harness, then the main class
retained by analysis of the build output.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from runway.core.build.models import RunJmhOptions
from runway.core.runner.models import JMH_MAIN_CLASS

logger = logging.getLogger(__name__)


def resolve_entry_point(
    explicit_override: str | None,
    run_jmh: RunJmhOptions | None,
    retained_candidates: Sequence[str],
) -> str | None:
    """
    Resolve the main class to launch.

    The override is not checked against the build; a wrong name surfaces as
    a launch failure of the program itself.

    Args:
        explicit_override: Main class given by the user, if any
        run_jmh: Benchmark options of the build, or None
        retained_candidates: Main classes found in the build output

    Returns:
        The main class, or None when there is nothing to run

    Examples:
        >>> resolve_entry_point(None, None, ["app.Main"])
        'app.Main'
        >>> resolve_entry_point("other.Main", None, ["app.Main"])
        'other.Main'
        >>> resolve_entry_point(None, None, []) is None
        True
    """
    if explicit_override and explicit_override.strip():
        return explicit_override.strip()

    if run_jmh is not None and not run_jmh.preprocess:
        return JMH_MAIN_CLASS

    if not retained_candidates:
        logger.debug("No main class found in build output, nothing to run")
        return None

    if len(retained_candidates) > 1:
        logger.warning(
            "Found several main classes: %s. Using %s; pick another one with --main-class.",
            ", ".join(retained_candidates),
            retained_candidates[0],
        )

    return retained_candidates[0]


__all__ = ["resolve_entry_point"]
