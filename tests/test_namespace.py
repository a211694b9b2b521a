import io

from click.testing import CliRunner

from fxconfig.cli.context import (
    UNKNOWN_STATUS,
    CLIContext,
    DeployNamespaceOutput,
    NamespaceQueryResult,
)
from fxconfig.cli.namespace import (
    new_ns_create_command,
    new_ns_list_command,
    new_ns_root_command,
    new_ns_update_command,
)
from fxconfig.cliio.codec import JSONCodec
from fxconfig.cliio.printer import CLIPrinter, Format


class FakeApp:
    def __init__(self, deploy_result=None, status=UNKNOWN_STATUS, namespaces=None, error=None):
        self.deploy_result = deploy_result
        self.status = status
        self.namespaces = namespaces or []
        self.error = error
        self.deploy_calls = []
        self.list_calls = 0

    def deploy_namespace(self, request):
        self.deploy_calls.append(request)
        if self.error is not None:
            raise self.error
        return self.deploy_result, self.status

    def list_namespaces(self):
        self.list_calls += 1
        if self.error is not None:
            raise self.error
        return self.namespaces


def _ctx(app):
    out = io.StringIO()
    err = io.StringIO()
    ctx = CLIContext(app=app, printer=CLIPrinter(out, err, Format.TABLE), codec=JSONCodec())
    return ctx, out


POLICY = "OR('Org1MSP.member')"


def test_ns_root_command_has_subcommands():
    cmd = new_ns_root_command(CLIContext(app=FakeApp()))
    assert cmd.name == "namespace"
    assert cmd.short_help == "Manage Fabric-X namespaces"
    assert {"create", "update", "list"} <= set(cmd.commands)


def test_new_create_command():
    cmd = new_ns_create_command(CLIContext(app=FakeApp()))
    assert cmd.name == "create"
    assert cmd.short_help == "Create new namespace"
    assert "policy" in [p.name for p in cmd.params]


def test_create_command_tx_returned():
    app = FakeApp(deploy_result=DeployNamespaceOutput(tx_id="tx-123", tx={}))
    ctx, _ = _ctx(app)
    result = CliRunner().invoke(new_ns_create_command(ctx), ["my-namespace", "--policy", POLICY])
    assert result.exit_code == 0, result.output
    assert "tx-123" in result.output
    assert len(app.deploy_calls) == 1
    request = app.deploy_calls[0]
    assert request.ns_id == "my-namespace"
    assert request.version == -1
    assert request.policy.policy == POLICY


def test_create_command_no_tx():
    app = FakeApp()
    ctx, out = _ctx(app)
    result = CliRunner().invoke(new_ns_create_command(ctx), ["my-namespace", "--policy", POLICY])
    assert result.exit_code == 0
    assert "Transaction status: STATUS_UNSPECIFIED" in out.getvalue()
    assert len(app.deploy_calls) == 1


def test_create_command_passes_lifecycle_flags():
    app = FakeApp()
    ctx, _ = _ctx(app)
    CliRunner().invoke(
        new_ns_create_command(ctx),
        ["hello", "--policy", POLICY, "--endorse", "--submit", "--wait"],
    )
    request = app.deploy_calls[0]
    assert (request.endorse, request.submit, request.wait) == (True, True, True)


def test_create_command_writes_output_file(tmp_path):
    app = FakeApp(deploy_result=DeployNamespaceOutput(tx_id="tx-123", tx={"namespaces": []}))
    ctx, _ = _ctx(app)
    target = tmp_path / "tx.json"
    result = CliRunner().invoke(
        new_ns_create_command(ctx), ["hello", "--policy", POLICY, "--output", str(target)]
    )
    assert result.exit_code == 0
    assert JSONCodec().decode(target.read_bytes()) == ("tx-123", {"namespaces": []})


def test_create_command_requires_policy_and_name():
    app = FakeApp()
    ctx, _ = _ctx(app)
    assert CliRunner().invoke(new_ns_create_command(ctx), ["hello"]).exit_code == 2
    assert CliRunner().invoke(new_ns_create_command(ctx), ["--policy", POLICY]).exit_code == 2
    assert app.deploy_calls == []


def test_create_command_propagates_app_error():
    error = RuntimeError("deploy failed")
    ctx, _ = _ctx(FakeApp(error=error))
    result = CliRunner().invoke(new_ns_create_command(ctx), ["hello", "--policy", POLICY])
    assert result.exception is error


def test_new_update_command():
    cmd = new_ns_update_command(CLIContext(app=FakeApp()))
    assert cmd.name == "update"
    assert cmd.short_help == "Update existing namespace"
    names = [p.name for p in cmd.params]
    assert "version" in names and "policy" in names


def test_update_command_tx_returned():
    app = FakeApp(deploy_result=DeployNamespaceOutput(tx_id="tx-456", tx={}))
    ctx, _ = _ctx(app)
    result = CliRunner().invoke(
        new_ns_update_command(ctx), ["my-namespace", "--policy", POLICY, "--version", "1"]
    )
    assert result.exit_code == 0, result.output
    assert "tx-456" in result.output
    assert app.deploy_calls[0].version == 1


def test_update_command_no_tx():
    app = FakeApp()
    ctx, out = _ctx(app)
    result = CliRunner().invoke(
        new_ns_update_command(ctx), ["my-namespace", "--policy", POLICY, "--version", "0"]
    )
    assert result.exit_code == 0
    assert "Transaction status: STATUS_UNSPECIFIED" in out.getvalue()
    assert app.deploy_calls[0].version == 0


def test_update_command_requires_version():
    app = FakeApp()
    ctx, _ = _ctx(app)
    result = CliRunner().invoke(new_ns_update_command(ctx), ["hello", "--policy", POLICY])
    assert result.exit_code == 2
    assert "version" in result.output
    assert app.deploy_calls == []


def test_new_list_command():
    cmd = new_ns_list_command(CLIContext(app=FakeApp()))
    assert cmd.name == "list"
    assert cmd.short_help == "List installed Namespaces"


def test_list_command_run():
    app = FakeApp(
        namespaces=[
            NamespaceQueryResult(ns_id="ns1", version=1, policy=bytes([0xDE, 0xAD])),
            NamespaceQueryResult(ns_id="ns2", version=2, policy=bytes([0xBE, 0xEF])),
        ]
    )
    ctx, out = _ctx(app)
    result = CliRunner().invoke(new_ns_list_command(ctx), [])
    assert result.exit_code == 0
    output = out.getvalue()
    assert "2 total" in output
    assert "ns1" in output and "ns2" in output
    assert "0) ns1: version 1 policy: dead" in output
    assert "1) ns2: version 2 policy: beef" in output
    assert app.list_calls == 1


def test_list_command_app_error():
    error = TimeoutError("deadline exceeded")
    app = FakeApp(error=error)
    ctx, _ = _ctx(app)
    result = CliRunner().invoke(new_ns_list_command(ctx), [])
    assert result.exception is error
    assert app.list_calls == 1