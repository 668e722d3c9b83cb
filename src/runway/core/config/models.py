"""
Configuration data models for runway.

These models define the structure of .runway.json and
~/.config/runway/config.json files, with validation and type safety via
Pydantic.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JavaConfig(BaseModel):
    """
    Managed runtime launch settings.
    """

    command: str = Field(
        default="java",
        description="Java command used to launch managed-runtime programs",
    )
    options: list[str] = Field(
        default_factory=list,
        description="Extra options passed to the java command (e.g. -Xmx2g)",
    )

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: str) -> str:
        """Reject blank commands."""
        if not v.strip():
            raise ValueError("java command must not be empty")
        return v.strip()


class JsConfig(BaseModel):
    """
    Linked-script target settings.

    Anything beyond the documented fields is passed through untouched to the
    toolchain's linker.
    """

    model_config = ConfigDict(extra="allow")

    enabled: bool = Field(
        default=False,
        description="Compile to a linked script and run it with node",
    )
    node_command: str = Field(
        default="node",
        description="Script runtime used to execute the linked script",
    )
    module_kind: str = Field(
        default="commonjs",
        pattern="^(commonjs|esmodule|nomodule)$",
        description="Module kind of the linked script",
    )
    optimize: bool = Field(
        default=False,
        description="Run the full optimizer when linking",
    )


class NativeConfig(BaseModel):
    """
    Native-binary target settings.

    Anything beyond the documented fields is passed through untouched to the
    toolchain's native compiler.
    """

    model_config = ConfigDict(extra="allow")

    enabled: bool = Field(
        default=False,
        description="Compile to a native binary and run it directly",
    )
    mode: str = Field(
        default="debug",
        pattern="^(debug|release-fast|release-full)$",
        description="Native build mode",
    )
    work_dir: Optional[str] = Field(
        default=None,
        description="Work directory for native compilation "
        "(defaults to <workspace>/.runway/<project>/native)",
    )
    clang_options: list[str] = Field(
        default_factory=list,
        description="Extra options passed to clang",
    )


class BenchmarkConfig(BaseModel):
    """
    Benchmark harness settings.
    """

    jmh: Optional[bool] = Field(
        default=None,
        description="Run benchmarks through the JMH harness",
    )
    jmh_version: Optional[str] = Field(
        default=None,
        description="JMH version override",
    )


class WatchConfig(BaseModel):
    """
    Watch mode settings.
    """

    show_message: bool = Field(
        default=True,
        description="Print the 'Watching sources' line after each build",
    )
    interrupt_poll_seconds: float = Field(
        default=0.5,
        gt=0.0,
        description="How often the interrupt wait wakes up to check for signals",
    )


class RunwayConfig(BaseModel):
    """
    Main runway configuration.

    Merged from multiple sources with precedence:
    defaults < user config < project config < env vars < CLI flags
    """

    model_config = ConfigDict(extra="ignore")

    toolchain: Optional[str] = Field(
        default=None,
        description="Toolchain name, 'module:attribute' path, or entry point name",
    )
    add_runner_dependency: bool = Field(
        default=False,
        description="Launch managed-runtime programs through the runner bootstrap",
    )
    directories: list[str] = Field(
        default_factory=list,
        description="Extra directories handed to input resolution",
    )
    java: JavaConfig = Field(default_factory=JavaConfig)
    js: JsConfig = Field(default_factory=JsConfig)
    native: NativeConfig = Field(default_factory=NativeConfig)
    benchmark: BenchmarkConfig = Field(default_factory=BenchmarkConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)

    def with_overrides(self, **overrides: Any) -> "RunwayConfig":
        """
        Return a copy with CLI flag overrides applied.

        Keys use dotted section names (``js.enabled``) or top-level field
        names. ``None`` values mean "flag not given" and are skipped.

        Example:
            >>> config = RunwayConfig().with_overrides(**{"js.enabled": True})
            >>> config.js.enabled
            True
        """
        data = self.model_dump()
        for key, value in overrides.items():
            if value is None:
                continue
            section, _, name = key.partition(".")
            if name:
                data.setdefault(section, {})[name] = value
            else:
                data[section] = value
        return RunwayConfig.model_validate(data)
