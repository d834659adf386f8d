# jjmcp

A Model Context Protocol (MCP) server that lets an MCP client drive the
Jujutsu (`jj`) version control system. It speaks newline-delimited JSON-RPC
over standard input and output and exposes a small set of `jj` commands as
tools. It has no dependencies outside the Python standard library.

## Requirements

- Python 3.10 or later
- The `jj` executable available on `PATH`

## Installation

```sh
pip install .
```

## Running the server

```sh
jj-mcp-server
```

The server reads one JSON-RPC message per line from stdin and writes one
response per line to stdout, until stdin ends. A start-up notice,
`jj MCP Server starting...`, goes to stderr. `jj-mcp-server --version`
prints the version and exits.

It answers these methods:

- `initialize`: echoes the client's `protocolVersion` (or `2024-11-05` if
  none is given), advertises the `tools` capability, and reports the server
  name `jj-mcp-server` and version `1.0.0`.
- `ping`: returns an empty result.
- `tools/list`: lists the tools below with their input schemas.
- `tools/call`: runs a tool by `name` with the given `arguments`.

Notifications (messages without an `id`) get no reply. Unknown methods get a
`-32601` error, a call to an unknown tool or without a tool name a `-32602`
error, malformed messages a `-32600` error and lines that are not JSON a
`-32700` error.

## Tools

| Tool        | Runs           | Arguments                                                              |
|-------------|----------------|------------------------------------------------------------------------|
| `status`    | `jj status`    | `repoPath`, `cwd`                                                      |
| `rebase`    | `jj rebase`    | `source` (`-s`), `destination` (`-d`), `repoPath`, `cwd`               |
| `commit`    | `jj commit`    | `message` (`-m`), `repoPath`, `cwd`                                    |
| `new`       | `jj new`       | `parents`, `repoPath`, `cwd`                                           |
| `log`       | `jj log`       | `limit` (`-n`), `template` (`-T`), `revisions`, `repoPath`, `cwd`      |
| `diff`      | `jj diff`      | `from`, `to`, `context`, `summary`, `stat`, `paths`, `repoPath`, `cwd` |
| `git-clone` | `jj git clone` | `source`, `destination`, `colocate`, `remote`, `depth`                 |

All arguments are optional. `repoPath` is passed to `jj` as `-R <path>`, and
`cwd` sets the directory the command runs in; `git-clone` always runs in the
server's own working directory. `limit`, `context` and `depth` must be
non-negative integers, `summary`, `stat` and `colocate` booleans, and `paths`
a list of strings. If any argument has the wrong type, all arguments of that
call are ignored and the command runs with none.

Each call returns a single text item holding the trimmed standard output of
`jj`. If `jj` fails or cannot be started, the result is flagged as an error
(`isError: true`) and the text is `Error: ` followed by what `jj` wrote to
stderr, or by the operating-system error.

## Using it from Python

```python
from jjmcp.tools import JjTool, LogParams, run_jj_log

result = run_jj_log(LogParams(limit=5, repo_path="/path/to/repo"))
print(result.is_error, result.content[0].text)

tool = JjTool(name="status", description="Show status", input_schema={"type": "object"})
print(tool.call({"repoPath": "/path/to/repo"}).to_dict())
```

`jjmcp.tools` holds one parameter class per tool (`StatusParams`,
`RebaseParams`, `CommitParams`, `NewParams`, `LogParams`, `DiffParams`,
`GitCloneParams`). Each has `from_json()` to read a tool's JSON arguments and
`to_args()` to build the `jj` argument list; `DiffParams` names its revision
fields `from_rev` and `to_rev`. `run_jj_command(args, cwd)` runs `jj`
directly, returning its trimmed stdout or raising `JjError`.

`jjmcp.server.create_tools()` returns the full tool set with its input
schemas, and `jjmcp.server.McpServer` answers single messages with
`handle()` or serves a pair of text streams with `serve()`.

## What it does not do

The server offers tools only: it has no prompts, resources or logging
support, and it runs only over standard input and output, with no network
transport.

## Tests

```sh
pip install ".[test]"
pytest
```