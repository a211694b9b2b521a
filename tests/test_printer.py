import io
import json
from dataclasses import dataclass

import pytest
import yaml

from fxconfig.cliio.printer import CLIPrinter, Format


def _printer(fmt):
    out, err = io.StringIO(), io.StringIO()
    return CLIPrinter(out, err, fmt), out, err


def test_new_printer_keeps_format():
    printer, _, _ = _printer(Format.JSON)
    assert printer.format is Format.JSON


def test_print_json_map():
    printer, out, _ = _printer(Format.JSON)
    printer.print({"key1": "value1", "key2": 123})
    result = json.loads(out.getvalue())
    assert result["key1"] == "value1"
    assert result["key2"] == pytest.approx(123.0)


def test_print_json_string():
    printer, out, _ = _printer(Format.JSON)
    printer.print("test string")
    assert "test string" in out.getvalue()


def test_print_json_slice():
    printer, out, _ = _printer(Format.JSON)
    data = ["item1", "item2", "item3"]
    printer.print(data)
    assert json.loads(out.getvalue()) == data


def test_print_json_unserialisable_reports_error():
    printer, out, err = _printer(Format.JSON)
    printer.print(object())
    assert out.getvalue() == ""
    assert "error" in json.loads(err.getvalue())


def test_print_yaml_map():
    printer, out, _ = _printer(Format.YAML)
    printer.print({"key1": "value1", "key2": 123})
    result = yaml.safe_load(out.getvalue())
    assert result["key1"] == "value1"
    assert result["key2"] == 123


def test_print_yaml_string():
    printer, out, _ = _printer(Format.YAML)
    printer.print("test string")
    assert "test string" in out.getvalue()


def test_print_table_string():
    printer, out, _ = _printer(Format.TABLE)
    printer.print("test output")
    assert out.getvalue() == "test output"


def test_print_table_struct():
    @dataclass
    class Sample:
        field1: str
        field2: int

    printer, out, _ = _printer(Format.TABLE)
    printer.print(Sample(field1="value1", field2=42))
    assert "value1" in out.getvalue()
    assert "42" in out.getvalue()


def test_print_error_table():
    printer, _, err = _printer(Format.TABLE)
    printer.print_error(RuntimeError("test error message"))
    assert "Error: test error message" in err.getvalue()


def test_print_error_yaml():
    printer, _, err = _printer(Format.YAML)
    printer.print_error(RuntimeError("test error message"))
    assert "Error: test error message" in err.getvalue()


def test_print_error_json():
    printer, _, err = _printer(Format.JSON)
    printer.print_error(RuntimeError("test error message"))
    assert json.loads(err.getvalue())["error"] == "test error message"


def test_format_values():
    assert Format("table") is Format.TABLE
    assert Format("json") is Format.JSON
    assert Format("yaml") is Format.YAML