"""
Scoped launcher artifacts.

Script and native targets need a launcher file generated from the build.
The file lives exactly as long as the `with` block that created it: it is
created under a unique temporary name, populated by the toolchain, yielded,
and removed on the way out whether the block finished or raised.

Usage:
    >>> with linked_script(toolchain, build, "app.Main", False, js_config) as artifact:
    ...     runner.run_script(artifact.path, args)
"""

from __future__ import annotations

import logging
import os
import stat
import sys
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from runway.core.build.models import Successful
from runway.core.config.models import JsConfig, NativeConfig
from runway.core.runner.models import LauncherArtifact, TargetKind
from runway.core.toolchain.protocol import Toolchain

logger = logging.getLogger(__name__)

LAUNCHER_PREFIX = "main"


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug("Could not remove launcher %s: %s", path, e)


@contextmanager
def scoped_launcher(
    populate: Callable[[Path], None],
    kind: TargetKind,
    suffix: str = "",
) -> Iterator[LauncherArtifact]:
    """
    Create, populate and always remove a temporary launcher file.

    Args:
        populate: Writes the launcher to the given path
        kind: Target the launcher is for
        suffix: File name suffix

    Yields:
        The populated launcher artifact
    """
    fd, name = tempfile.mkstemp(prefix=LAUNCHER_PREFIX, suffix=suffix)
    os.close(fd)
    dest = Path(name)
    logger.debug("Created launcher %s", dest)
    try:
        populate(dest)
        yield LauncherArtifact(path=dest, kind=kind)
    finally:
        _remove_quietly(dest)


@contextmanager
def linked_script(
    toolchain: Toolchain,
    build: Successful,
    entry_point: str | None,
    test_mode: bool,
    config: JsConfig,
) -> Iterator[LauncherArtifact]:
    """
    Link the build into a temporary script.

    Args:
        toolchain: Toolchain doing the linking
        build: Successful build to link
        entry_point: Main class, or None in test mode
        test_mode: Add the test initializer instead of a main initializer
        config: Linker settings

    Yields:
        The linked script artifact
    """

    def populate(dest: Path) -> None:
        toolchain.link_script(build, dest, entry_point, test_mode, config)

    with scoped_launcher(populate, TargetKind.LINKED_SCRIPT, suffix=".js") as artifact:
        yield artifact


@contextmanager
def native_launcher(
    toolchain: Toolchain,
    build: Successful,
    entry_point: str,
    config: NativeConfig,
    work_dir: Path,
) -> Iterator[LauncherArtifact]:
    """
    Compile the build into a temporary native executable.

    Yields:
        The native binary artifact
    """

    def populate(dest: Path) -> None:
        work_dir.mkdir(parents=True, exist_ok=True)
        toolchain.compile_native(build, entry_point, dest, config, work_dir, logger)
        dest.chmod(dest.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    suffix = ".exe" if sys.platform == "win32" else ""
    with scoped_launcher(populate, TargetKind.NATIVE_BINARY, suffix=suffix) as artifact:
        yield artifact


__all__ = ["LAUNCHER_PREFIX", "linked_script", "native_launcher", "scoped_launcher"]
