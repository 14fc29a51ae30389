"""Which tools to register and how bridges behave.

A config file is YAML (or JSON) such as::

    builtin_tools: true
    extraction_mode: best_effort
    tools:
      - myapp.tools:StepsTool
      - myapp.tools:make_location_tool
    telemetry:
      enabled: true
      otlp_endpoint: ${OTLP_ENDPOINT}

Each ``tools`` entry is a ``module:attribute`` import path naming a tool
class, a zero-argument factory, or a tool instance.
"""

from __future__ import annotations

import importlib
import json
import os
from pathlib import Path  # noqa: TC003
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from mcpcore.bridges.local import ExtractionMode
from mcpcore.protocol.registry import ToolRegistry
from mcpcore.protocol.tool import MCPTool
from mcpcore.tools.builtin import register_builtin_tools
from mcpcore.utils.telemetry import TelemetrySettings, configure_telemetry


class ConfigError(Exception):
    """Raised when a config file fails parsing, validation or tool import."""


class MCPConfig(BaseModel):
    """Validated configuration."""

    tools: list[str] = Field(
        default_factory=list,
        description="Import paths ('module:attribute') of tools to register.",
    )
    builtin_tools: bool = Field(default=True, description="Register ping, debug/echo, tools/list.")
    extraction_mode: ExtractionMode = Field(
        default=ExtractionMode.BEST_EFFORT,
        description="How malformed <tool_call> blocks are treated.",
    )
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)


class ConfigLoader:
    """Load and validate a config file into an :class:`MCPConfig`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> MCPConfig:
        """Read the file, expand environment variables, and validate.

        ``${VAR}`` and ``$VAR`` are expanded with :func:`os.path.expandvars`
        before parsing. Files ending in ``.json`` are parsed as JSON, anything
        else as YAML.

        Raises:
            ConfigError: On read, parse or validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        data: Any
        if self._path.suffix == ".json":
            try:
                data = json.loads(expanded)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"JSON parse error: {exc}") from exc
        else:
            try:
                data = yaml.safe_load(expanded)
            except yaml.YAMLError as exc:
                raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config must be a mapping")

        try:
            return MCPConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_config(path: Path | None) -> MCPConfig:
    """Load *path*, or return the default config when no path is given."""
    if path is None:
        return MCPConfig()
    return ConfigLoader(path).load()


def load_tool(import_path: str) -> MCPTool:
    """Import and instantiate the tool named by *import_path*."""
    module_name, _, attribute = import_path.partition(":")
    if not module_name or not attribute:
        raise ConfigError(f"Tool path must look like 'module:attribute', got {import_path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import {module_name}: {exc}") from exc

    try:
        target = getattr(module, attribute)
    except AttributeError as exc:
        raise ConfigError(f"{module_name} has no attribute {attribute!r}") from exc

    # Classes are checked first: a tool class itself passes the protocol check.
    if isinstance(target, type) or (callable(target) and not isinstance(target, MCPTool)):
        try:
            tool = target()
        except TypeError as exc:
            raise ConfigError(f"Cannot instantiate {import_path}: {exc}") from exc
    else:
        tool = target

    if not isinstance(tool, MCPTool) or isinstance(tool, type):
        raise ConfigError(f"{import_path} did not produce a tool")
    return tool


def build_registry(config: MCPConfig) -> ToolRegistry:
    """Create a registry holding the tools named by *config*."""
    registry = ToolRegistry()
    if config.builtin_tools:
        register_builtin_tools(registry)
    for import_path in config.tools:
        registry.register(load_tool(import_path))
    return registry


def apply_telemetry(config: MCPConfig) -> None:
    """Configure tracing if *config* enables it."""
    if config.telemetry.enabled:
        configure_telemetry(config.telemetry)
