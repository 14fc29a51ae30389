"""Tests for config loading and registry construction."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from mcpcore.bridges.local import ExtractionMode
from mcpcore.config import (
    ConfigError,
    ConfigLoader,
    MCPConfig,
    TelemetrySettings,
    apply_telemetry,
    build_registry,
    load_config,
    load_tool,
)
from mcpcore.tools.builtin import PingTool

if TYPE_CHECKING:
    from pathlib import Path

_TOOLS_MODULE = '''\
class StepsTool:
    method_name = "healthKit/getSteps"
    tool_schema = "{}"

    async def handle(self, params):
        return {"steps": 1}


def make_steps():
    return StepsTool()


instance = StepsTool()
not_a_tool = 42


class NeedsArgs(StepsTool):
    def __init__(self, required):
        self.required = required
'''


@pytest.fixture
def tools_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "cfg_sample_tools.py").write_text(_TOOLS_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cfg_sample_tools"


class TestConfigLoader:
    def test_load_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "mcp.yaml"
        f.write_text(
            "builtin_tools: false\n"
            "extraction_mode: strict\n"
            "tools:\n"
            "  - mcpcore.tools.builtin:PingTool\n"
        )
        config = ConfigLoader(f).load()
        assert config.builtin_tools is False
        assert config.extraction_mode is ExtractionMode.STRICT
        assert config.tools == ["mcpcore.tools.builtin:PingTool"]

    def test_load_json(self, tmp_path: Path) -> None:
        f = tmp_path / "mcp.json"
        f.write_text('{"telemetry": {"enabled": true, "service_name": "svc"}}')
        config = ConfigLoader(f).load()
        assert config.telemetry.enabled is True
        assert config.telemetry.service_name == "svc"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        f = tmp_path / "empty.yaml"
        f.write_text("")
        assert ConfigLoader(f).load() == MCPConfig()

    def test_env_var_interpolation(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OTLP_ENDPOINT", "http://collector:4317")
        f = tmp_path / "mcp.yaml"
        f.write_text("telemetry:\n  otlp_endpoint: ${OTLP_ENDPOINT}\n")
        assert ConfigLoader(f).load().telemetry.otlp_endpoint == "http://collector:4317"

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            ConfigLoader(tmp_path / "missing.yaml").load()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "bad.yaml"
        f.write_text("{{{{invalid")
        with pytest.raises(ConfigError, match="YAML parse error"):
            ConfigLoader(f).load()

    def test_invalid_json(self, tmp_path: Path) -> None:
        f = tmp_path / "bad.json"
        f.write_text("{")
        with pytest.raises(ConfigError, match="JSON parse error"):
            ConfigLoader(f).load()

    def test_not_mapping(self, tmp_path: Path) -> None:
        f = tmp_path / "list.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            ConfigLoader(f).load()

    def test_validation_error(self, tmp_path: Path) -> None:
        f = tmp_path / "mode.yaml"
        f.write_text("extraction_mode: sometimes\n")
        with pytest.raises(ConfigError, match="extraction_mode"):
            ConfigLoader(f).load()

    def test_load_config_without_path(self) -> None:
        assert load_config(None) == MCPConfig()


class TestLoadTool:
    def test_class(self, tools_module: str) -> None:
        tool = load_tool(f"{tools_module}:StepsTool")
        assert tool.method_name == "healthKit/getSteps"
        assert not isinstance(tool, type)

    def test_factory(self, tools_module: str) -> None:
        assert load_tool(f"{tools_module}:make_steps").method_name == "healthKit/getSteps"

    def test_instance(self, tools_module: str) -> None:
        import importlib

        module = importlib.import_module(tools_module)
        assert load_tool(f"{tools_module}:instance") is module.instance

    def test_not_a_tool(self, tools_module: str) -> None:
        with pytest.raises(ConfigError, match="did not produce a tool"):
            load_tool(f"{tools_module}:not_a_tool")

    def test_cannot_instantiate(self, tools_module: str) -> None:
        with pytest.raises(ConfigError, match="Cannot instantiate"):
            load_tool(f"{tools_module}:NeedsArgs")

    @pytest.mark.parametrize(
        ("path", "message"),
        [
            ("no_colon", "module:attribute"),
            ("mcpcore_missing_module:Tool", "Cannot import"),
            ("mcpcore.tools.builtin:Missing", "no attribute"),
        ],
    )
    def test_bad_paths(self, path: str, message: str) -> None:
        with pytest.raises(ConfigError, match=message):
            load_tool(path)


class TestBuildRegistry:
    def test_builtins_by_default(self) -> None:
        registry = build_registry(MCPConfig())
        assert registry.registered_methods() == {"ping", "debug/echo", "tools/list"}

    def test_configured_tools_only(self, tools_module: str) -> None:
        registry = build_registry(
            MCPConfig(builtin_tools=False, tools=[f"{tools_module}:StepsTool"])
        )
        assert registry.registered_methods() == {"healthKit/getSteps"}

    def test_builtin_class_path(self) -> None:
        registry = build_registry(
            MCPConfig(builtin_tools=False, tools=["mcpcore.tools.builtin:PingTool"])
        )
        assert isinstance(registry.tool_for("ping"), PingTool)


class TestApplyTelemetry:
    def test_disabled_does_nothing(self) -> None:
        with patch("mcpcore.config.configure_telemetry") as configure:
            apply_telemetry(MCPConfig())
        configure.assert_not_called()

    def test_enabled_configures(self) -> None:
        settings = TelemetrySettings(enabled=True, service_name="svc", otlp_endpoint="http://x")
        with patch("mcpcore.config.configure_telemetry") as configure:
            apply_telemetry(MCPConfig(telemetry=settings))
        configure.assert_called_once_with(settings)
