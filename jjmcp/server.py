"""A Model Context Protocol server that exposes jj tools over standard input and output."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass, field
from typing import Any, TextIO

from jjmcp.tools import JjTool

SERVER_NAME = "jj-mcp-server"
SERVER_VERSION = "1.0.0"
DEFAULT_PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


class _RpcError(Exception):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def _string(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def _number(description: str) -> dict[str, Any]:
    return {"type": "number", "description": description}


def _boolean(description: str) -> dict[str, Any]:
    return {"type": "boolean", "description": description}


def _object_schema(properties: dict[str, Any], *, repo: bool = True) -> dict[str, Any]:
    props = dict(properties)
    if repo:
        props["repoPath"] = _string("Optional path to repo root")
        props["cwd"] = _string("Optional working directory")
    return {"type": "object", "properties": props}


def create_tools() -> list[JjTool]:
    """Return the jj tools the server offers, in the order they are listed."""
    return [
        JjTool(
            "status",
            "Show the status of the working directory",
            _object_schema({}),
        ),
        JjTool(
            "rebase",
            "Rebase a revision onto another",
            _object_schema(
                {
                    "source": _string("Source revision to rebase"),
                    "destination": _string("Destination revision to rebase onto"),
                }
            ),
        ),
        JjTool(
            "commit",
            "Create a new commit",
            _object_schema({"message": _string("Commit message")}),
        ),
        JjTool(
            "new",
            "Create a new empty commit",
            _object_schema({"parents": _string("Parent revisions for the new commit")}),
        ),
        JjTool(
            "log",
            "Show commit history",
            _object_schema(
                {
                    "limit": _number("Maximum number of commits to show"),
                    "template": _string("Template for formatting output"),
                    "revisions": _string("Revisions to show"),
                }
            ),
        ),
        JjTool(
            "diff",
            "Show differences between revisions",
            _object_schema(
                {
                    "from": _string("Source revision"),
                    "to": _string("Target revision"),
                    "paths": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Specific paths to diff",
                    },
                    "context": _number("Number of context lines"),
                    "summary": _boolean("Show summary only"),
                    "stat": _boolean("Show file statistics"),
                }
            ),
        ),
        JjTool(
            "git-clone",
            "Clone a Git repository using jj",
            _object_schema(
                {
                    "source": _string("Git repository URL to clone"),
                    "destination": _string("Destination directory"),
                    "colocate": _boolean("Create a colocated jj/git repository"),
                    "remote": _string("Name for the remote"),
                    "depth": _number("Depth for shallow clone"),
                },
                repo=False,
            ),
        ),
    ]


def _error_response(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    }


@dataclass
class McpServer:
    """Answers JSON-RPC requests of the MCP protocol with the registered tools."""

    tools: list[JjTool] = field(default_factory=create_tools)
    name: str = SERVER_NAME
    version: str = SERVER_VERSION
    capabilities: dict[str, Any] = field(default_factory=lambda: {"tools": {}})

    def _tool(self, name: str) -> JjTool:
        for tool in self.tools:
            if tool.name == name:
                return tool
        raise _RpcError(INVALID_PARAMS, f"Unknown tool: {name}")

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        requested = params.get("protocolVersion")
        return {
            "protocolVersion": requested
            if isinstance(requested, str)
            else DEFAULT_PROTOCOL_VERSION,
            "capabilities": self.capabilities,
            "serverInfo": {"name": self.name, "version": self.version},
        }

    def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [tool.to_dict() for tool in self.tools]}

    def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str):
            raise _RpcError(INVALID_PARAMS, "Missing tool name")
        return self._tool(name).call(params.get("arguments")).to_dict()

    def _dispatch(self, method: str, params: dict[str, Any]) -> dict[str, Any] | None:
        handlers = {
            "initialize": self._initialize,
            "ping": lambda _params: {},
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }
        handler = handlers.get(method)
        if handler is None:
            if method.startswith("notifications/"):
                return None
            raise _RpcError(METHOD_NOT_FOUND, f"Method not found: {method}")
        return handler(params)

    def handle(self, message: Any) -> dict[str, Any] | None:
        """Answer one decoded JSON-RPC message; notifications get no answer."""
        if not isinstance(message, dict):
            return _error_response(None, INVALID_REQUEST, "Invalid request")
        is_notification = "id" not in message
        request_id = message.get("id")
        method = message.get("method")
        params = message.get("params")
        if params is None:
            params = {}
        if not isinstance(method, str) or not isinstance(params, dict):
            if is_notification:
                return None
            return _error_response(request_id, INVALID_REQUEST, "Invalid request")
        try:
            result = self._dispatch(method, params)
        except _RpcError as exc:
            if is_notification:
                return None
            return _error_response(request_id, exc.code, exc.message)
        if is_notification:
            return None
        return {"jsonrpc": "2.0", "id": request_id, "result": result if result is not None else {}}

    def serve(self, stdin: TextIO, stdout: TextIO) -> None:
        """Read newline-delimited JSON-RPC messages until end of input, writing replies."""
        for line in stdin:
            line = line.strip()
            if not line:
                continue
            try:
                message = json.loads(line)
            except json.JSONDecodeError:
                response = _error_response(None, PARSE_ERROR, "Parse error")
            else:
                response = self.handle(message)
            if response is not None:
                stdout.write(json.dumps(response) + "\n")
                stdout.flush()


def main(argv: list[str] | None = None) -> int:
    """Start the server on standard input and output."""
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="MCP server for the Jujutsu version control system",
    )
    parser.add_argument("--version", action="version", version=SERVER_VERSION)
    parser.parse_args(argv)
    print("jj MCP Server starting...", file=sys.stderr)
    McpServer().serve(sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())