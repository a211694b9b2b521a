import pytest
import yaml
from click.testing import CliRunner

from fxconfig.cli.context import CLIContext
from fxconfig.cli.root import new_root_command
from fxconfig.cliio.codec import JSONCodec
from fxconfig.cliio.printer import CLIPrinter

MINIMAL_CONFIG = """
msp:
  localMspID: TestMSP
"""


class FakeApp:
    def __init__(self, config):
        self.config = config


def make_loader(calls):
    def load(path):
        calls.append(path)
        if path is None:
            return {}
        with open(path, encoding="utf-8") as handle:
            return yaml.safe_load(handle)

    return load


def build_fake_app(config):
    return FakeApp(config)


def test_root_command_structure():
    root = new_root_command(CLIContext(), build_fake_app, make_loader([]))
    assert root.name == "fxconfig"
    assert root.short_help
    assert "config_file" in [p.name for p in root.params]
    assert {"version", "info", "namespace", "tx"} <= set(root.commands)


def test_pre_run_via_config_flag(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(MINIMAL_CONFIG)
    calls = []
    ctx = CLIContext()
    root = new_root_command(ctx, build_fake_app, make_loader(calls))

    result = CliRunner().invoke(
        root, ["--config", str(config_path), "version"], catch_exceptions=False
    )

    assert result.exit_code == 0
    assert calls == [str(config_path)]
    assert ctx.config["msp"]["localMspID"] == "TestMSP"
    assert isinstance(ctx.printer, CLIPrinter)
    assert isinstance(ctx.codec, JSONCodec)
    assert isinstance(ctx.app, FakeApp)
    assert ctx.app.config is ctx.config
    assert result.output.splitlines()[0] == "fxconfig"


def test_pre_run_without_config_flag_passes_none():
    calls = []
    ctx = CLIContext()
    root = new_root_command(ctx, build_fake_app, make_loader(calls))
    result = CliRunner().invoke(root, ["version"], catch_exceptions=False)
    assert result.exit_code == 0
    assert calls == [None]
    assert ctx.config == {}


def test_info_prints_loaded_config(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(MINIMAL_CONFIG)
    root = new_root_command(CLIContext(), build_fake_app, make_loader([]))
    result = CliRunner().invoke(
        root, ["--config", str(config_path), "info"], catch_exceptions=False
    )
    assert result.exit_code == 0
    assert "localMspID: TestMSP" in result.output


def test_help_does_not_load_config():
    calls = []
    root = new_root_command(CLIContext(), build_fake_app, make_loader(calls))
    result = CliRunner().invoke(root, ["--help"])
    assert result.exit_code == 0
    assert "namespace" in result.output
    assert calls == []


def test_build_app_error_propagates():
    def failing_build(_config):
        raise RuntimeError("cannot build application")

    ctx = CLIContext()
    root = new_root_command(ctx, failing_build, make_loader([]))
    with pytest.raises(RuntimeError, match="cannot build application"):
        CliRunner().invoke(root, ["version"], catch_exceptions=False)
    assert ctx.config == {}
    assert ctx.app is None


def test_load_config_error_propagates():
    def failing_load(_path):
        raise ValueError("bad config")

    ctx = CLIContext()
    root = new_root_command(ctx, build_fake_app, failing_load)
    with pytest.raises(ValueError, match="bad config"):
        CliRunner().invoke(root, ["version"], catch_exceptions=False)
    assert ctx.printer is None