# fxconfig

`fxconfig` is a Python library for managing namespaces and transactions on a
Fabric-X network. It provides the pieces of the namespace-change lifecycle:

1. **Create** a transaction that creates or updates a namespace together with
   its endorsement policy.
2. **Endorse** it with the local organisation's signature.
3. **Merge** endorsements collected independently by several organisations.
4. **Submit** the merged transaction to the ordering service and, if wanted,
   wait for the final status reported by the committer.

The command tree for these steps is built with `click`; the work itself is
delegated to an application object and to service objects that you supply.

## Package layout

| Module | What it provides |
| --- | --- |
| `fxconfig.messages` | `Status`, `BroadcastStatus`, and the messages `TxStatusEvent`, `NotificationRequest`, `NotificationResponse` and `Envelope`. |
| `fxconfig.cliio.codec` | `JSONCodec`, which reads and writes the transaction file format, and `CodecError`. |
| `fxconfig.cliio.streams` | `resolve_input`, `write_output`, `read_with_limit`, the `IOFlags` option group and `InputError`. |
| `fxconfig.cliio.printer` | `CLIPrinter` and `Format` for table, JSON or YAML output. |
| `fxconfig.client.security` | `TLSConfig`, `SecureOptions`, `create_secure_options` and `load_file`. |
| `fxconfig.client.orderer` | `OrdererClient`, which signs transactions into envelopes and broadcasts them, and `BroadcastError`. |
| `fxconfig.client.queries` | `QueryClient`, which reads the installed namespace policies, and `QueryError`. |
| `fxconfig.client.notifications` | `NotificationClient`, `parse_response`, `wait` and `ClientClosedError`. |
| `fxconfig.cli.context` | `CLIContext`, the `Application` protocol, `PolicyConfig`, `DeployNamespaceInput`, `DeployNamespaceOutput` and `NamespaceQueryResult`. |
| `fxconfig.cli.flags` | Reusable options: `output_option`, `policy_option`, `version_option`, `namespace_deploy_options`, `wait_option`. |
| `fxconfig.cli.info`, `.namespace`, `.tx`, `.version`, `.root` | The commands `info`, `namespace create/update/list`, `tx endorse/merge/submit` and `version`, assembled by `new_root_command`. |

## Transaction files

Transactions move between organisations as JSON documents holding the
transaction ID and the transaction itself:

```json
{
  "tx": {
    "namespaces": [
      {"ns_id": "_meta", "read_writes": [{"key": "cGF5bWVudHM="}]}
    ]
  },
  "txID": "tx-123"
}
```

`JSONCodec` reads and writes this format. The transaction is kept as a plain
dictionary; `encode` writes it indented by two spaces with sorted keys.

```python
from fxconfig.cliio.codec import JSONCodec

codec = JSONCodec()
with open("tx.json", "rb") as handle:
    tx_id, tx = codec.decode(handle.read())
data = codec.encode(tx_id, tx)
```

Decoding a document that is not a JSON object, or that has no `tx` object,
raises `CodecError`; a missing `txID` decodes as an empty string. Encoding
`None` as the transaction raises `CodecError("tx is nil")`.

## Reading and writing safely

`resolve_input(input_file, stdin)` reads from the named file, or from `stdin`
when no file is named and `stdin` is not a terminal. It refuses a file name
together with piped input, paths that still contain `..` once normalised, and
anything larger than 20 MiB, raising `InputError`. `read_with_limit` applies a
limit to any binary stream:

```python
import io
from fxconfig.cliio.streams import read_with_limit

read_with_limit(io.BytesIO(b"test data"), 1024)   # b"test data"
read_with_limit(io.BytesIO(b"x" * 1001), 1000)    # raises InputError
```

`write_output(output_file, data, stdout)` writes to a newly created file with
owner-only permissions (`0o600`), or to `stdout` when the file name is empty.

## Output

`CLIPrinter` prints values as plain text (`Format.TABLE`), JSON or YAML:

```python
import io
from fxconfig.cliio.printer import CLIPrinter, Format

out, err = io.StringIO(), io.StringIO()
printer = CLIPrinter(out, err, Format.JSON)
printer.print({"key1": "value1", "key2": 123})
printer.print_error(RuntimeError("test error message"))
```

Table format writes `str(value)` with no trailing newline. Dataclasses, enums
and bytes are turned into plain values for JSON and YAML, bytes as base64. A
value that cannot be printed is reported through `print_error`. In JSON format
errors are written as `{"error": "..."}`; in every other format as
`Error: ...` lines on the error stream.

## Status codes

`Status` holds `STATUS_UNSPECIFIED`, `COMMITTED` and
`ABORTED_SIGNATURE_INVALID`. `Status.name_of(code)` returns the name of a
code, or an empty string for a code it does not know. A transaction that
times out while being waited on is reported as `STATUS_UNSPECIFIED`.

## Service clients

The clients do not open network connections themselves; each is given an
object that talks to the service:

- `OrdererClient(broadcaster, channel, on_close=None)`. `broadcast(signer,
  tx_id, tx)` builds a payload with a channel header (channel, transaction ID,
  timestamp) and a signature header (the signer's serialised identity and a
  random nonce), signs it with `signer.sign`, sends the `Envelope` on a stream
  from `broadcaster.broadcast()`, and raises `BroadcastError` unless the reply
  is `BroadcastStatus.SUCCESS`. A missing signer or broadcaster raises
  `ValueError`.
- `QueryClient(service, connection_timeout, on_close=None)`.
  `get_namespace_policies()` calls the service with the connection timeout
  and wraps any failure in `QueryError`.
- `NotificationClient(notifier, waiting_timeout, on_close=None, start=True)`.
  A background thread runs `listen()`, which opens a stream from
  `notifier.open_notification_stream()`. `subscribe(tx_id)` returns a queue
  that receives the transaction's status; several subscribers of the same ID
  share one upstream request. `wait_for_event(subscription)` waits up to the
  waiting timeout and raises `TimeoutError("deadline exceeded")` otherwise.
  Once the stream has failed, `subscribe` raises that failure; after `close()`
  it raises `ClientClosedError`.

`create_secure_options(tls)` loads the root certificates named in a
`TLSConfig` and, when both a client key and a client certificate are set,
both of them for mutual TLS; a half-configured pair is ignored with a logged
warning. A file that cannot be read raises `OSError` naming the path.

## The command tree

`new_root_command(ctx, build_app, load_config)` returns a `click` group.
Before any subcommand runs it calls `load_config` with the `--config` path (or
`None`), then fills the `CLIContext` with that configuration, a table
printer, a `JSONCodec` and the application returned by `build_app`.

```python
from fxconfig.cli.context import CLIContext
from fxconfig.cli.root import new_root_command

ctx = CLIContext()
root = new_root_command(ctx, build_app=make_application, load_config=read_settings)
root.main(["namespace", "list"], standalone_mode=False)
```

Here `make_application` returns an object satisfying the `Application`
protocol and `read_settings` returns the configuration, for example a dict or
a dataclass.

- `info` prints the configuration as YAML.
- `version` prints the package version, Python version, commit and OS/architecture.
- `namespace create NAME --policy ...` and `namespace update NAME --version N
  --policy ...` call `deploy_namespace` (create uses version `-1`), with the
  flags `--endorse`, `--submit`, `--wait` and `--output`. When a transaction
  comes back it is encoded and written out; otherwise the transaction status
  is printed.
- `namespace list` prints `Installed namespaces (N total):` and one line per
  namespace with its version and policy in hexadecimal.
- `tx endorse FILE`, `tx merge FILE FILE...` and `tx submit FILE [--wait]`
  decode transaction files and call the application. `merge` needs at least
  two files sharing one transaction ID. `submit --wait` prints the status and
  raises `TransactionFailedError` unless it is `COMMITTED`.

## What the package does not do

- It installs no command-line program; the command tree is built and run from
  Python as shown above.
- It reads no configuration files or environment variables itself; loading
  configuration is the job of the `load_config` function you pass in, and the
  `info` command only prints what that function returned.
- It contains no implementation of `Application`: the logic that builds
  namespace transactions, endorses, merges and submits them is supplied by
  the caller.
- It contains no network transport. The service clients work with objects you
  provide, and envelope payloads are encoded as JSON by this package, not in
  any service's wire format.