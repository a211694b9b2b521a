import io
from dataclasses import dataclass, field

import yaml
from click.testing import CliRunner

from fxconfig.cli.context import CLIContext
from fxconfig.cli.info import new_info_command
from fxconfig.cliio.printer import CLIPrinter, Format


@dataclass
class _MSP:
    localMspID: str = ""


@dataclass
class _Config:
    msp: _MSP = field(default_factory=_MSP)


def _context(config):
    out = io.StringIO()
    return CLIContext(config=config, printer=CLIPrinter(out, out, Format.TABLE)), out


def test_new_info_command():
    command = new_info_command(CLIContext())
    assert command.name == "info"
    assert command.short_help == "Display effective configuration"


def test_info_prints_yaml_config():
    ctx, out = _context(_Config(msp=_MSP(localMspID="TestMSP")))
    result = CliRunner().invoke(new_info_command(ctx), [])
    assert result.exit_code == 0
    assert out.getvalue() != ""
    assert yaml.safe_load(out.getvalue()) == {"msp": {"localMspID": "TestMSP"}}


def test_info_prints_mapping_config():
    ctx, out = _context({"msp": {"localMspID": "TestMSP"}})
    result = CliRunner().invoke(new_info_command(ctx), [])
    assert result.exit_code == 0
    assert "localMspID: TestMSP" in out.getvalue()


def test_info_nil_config_prints_null():
    ctx, out = _context(None)
    result = CliRunner().invoke(new_info_command(ctx), [])
    assert result.exit_code == 0
    assert "null" in out.getvalue()
    assert "..." not in out.getvalue()