"""Tools that run Jujutsu (``jj``) commands and wrap their output as MCP tool responses."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field, fields
from typing import Any, Callable, ClassVar, Sequence, TypeVar

JJ_COMMAND = "jj"
_U32_MAX = 0xFFFFFFFF

_P = TypeVar("_P")


class JjError(Exception):
    """Raised when a jj command cannot be started or exits unsuccessfully."""


@dataclass(frozen=True)
class TextContent:
    """A block of plain text in a tool response."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass
class CallToolResponse:
    """The result of calling a tool."""

    content: list[TextContent]
    is_error: bool = False
    meta: dict[str, Any] | None = None

    @classmethod
    def success(cls, text: str) -> "CallToolResponse":
        return cls(content=[TextContent(text)], is_error=False)

    @classmethod
    def failure(cls, text: str) -> "CallToolResponse":
        return cls(content=[TextContent(text)], is_error=True)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "content": [block.to_dict() for block in self.content],
            "isError": self.is_error,
        }
        if self.meta is not None:
            result["_meta"] = self.meta
        return result


def _is_valid(kind: str, value: Any) -> bool:
    if value is None:
        return True
    if kind == "str":
        return isinstance(value, str)
    if kind == "bool":
        return isinstance(value, bool)
    if kind == "u32":
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and 0 <= value <= _U32_MAX
        )
    if kind == "str_list":
        return isinstance(value, list) and all(isinstance(item, str) for item in value)
    raise ValueError(f"unknown field kind: {kind}")


def _param(kind: str, key: str | None = None) -> Any:
    return field(default=None, metadata={"kind": kind, "key": key})


def _decode(cls: type[_P], value: Any) -> _P:
    """Build ``cls`` from a JSON object.

    Unknown keys are ignored; any value of the wrong type makes the whole
    parameter set fall back to its defaults.
    """
    if not isinstance(value, dict):
        return cls()
    values: dict[str, Any] = {}
    for spec in fields(cls):  # type: ignore[arg-type]
        key = spec.metadata.get("key") or spec.name
        raw = value.get(key)
        if not _is_valid(spec.metadata["kind"], raw):
            return cls()
        values[spec.name] = list(raw) if isinstance(raw, list) else raw
    return cls(**values)


def add_repo_args(args: Sequence[str], repo_path: str | None) -> list[str]:
    """Return ``args`` followed by ``-R <repo_path>`` when a repository path is given."""
    if repo_path is None:
        return list(args)
    return [*args, "-R", repo_path]


@dataclass
class StatusParams:
    repo_path: str | None = _param("str", "repoPath")
    cwd: str | None = _param("str")

    @classmethod
    def from_json(cls, value: Any) -> "StatusParams":
        return _decode(cls, value)

    def to_args(self) -> list[str]:
        return add_repo_args(["status"], self.repo_path)


@dataclass
class RebaseParams:
    source: str | None = _param("str")
    destination: str | None = _param("str")
    repo_path: str | None = _param("str", "repoPath")
    cwd: str | None = _param("str")

    @classmethod
    def from_json(cls, value: Any) -> "RebaseParams":
        return _decode(cls, value)

    def to_args(self) -> list[str]:
        args = ["rebase"]
        if self.source is not None:
            args += ["-s", self.source]
        if self.destination is not None:
            args += ["-d", self.destination]
        return add_repo_args(args, self.repo_path)


@dataclass
class CommitParams:
    message: str | None = _param("str")
    repo_path: str | None = _param("str", "repoPath")
    cwd: str | None = _param("str")

    @classmethod
    def from_json(cls, value: Any) -> "CommitParams":
        return _decode(cls, value)

    def to_args(self) -> list[str]:
        args = ["commit"]
        if self.message is not None:
            args += ["-m", self.message]
        return add_repo_args(args, self.repo_path)


@dataclass
class NewParams:
    parents: str | None = _param("str")
    repo_path: str | None = _param("str", "repoPath")
    cwd: str | None = _param("str")

    @classmethod
    def from_json(cls, value: Any) -> "NewParams":
        return _decode(cls, value)

    def to_args(self) -> list[str]:
        args = ["new"]
        if self.parents is not None:
            args.append(self.parents)
        return add_repo_args(args, self.repo_path)


@dataclass
class LogParams:
    repo_path: str | None = _param("str", "repoPath")
    cwd: str | None = _param("str")
    limit: int | None = _param("u32")
    template: str | None = _param("str")
    revisions: str | None = _param("str")

    @classmethod
    def from_json(cls, value: Any) -> "LogParams":
        return _decode(cls, value)

    def to_args(self) -> list[str]:
        args = ["log"]
        if self.limit is not None:
            args += ["-n", str(self.limit)]
        if self.template is not None:
            args += ["-T", self.template]
        if self.revisions is not None:
            args.append(self.revisions)
        return add_repo_args(args, self.repo_path)


@dataclass
class DiffParams:
    repo_path: str | None = _param("str", "repoPath")
    cwd: str | None = _param("str")
    from_rev: str | None = _param("str", "from")
    to_rev: str | None = _param("str", "to")
    paths: list[str] | None = _param("str_list")
    summary: bool | None = _param("bool")
    stat: bool | None = _param("bool")
    context: int | None = _param("u32")

    @classmethod
    def from_json(cls, value: Any) -> "DiffParams":
        return _decode(cls, value)

    def to_args(self) -> list[str]:
        args = ["diff"]
        if self.from_rev is not None:
            args += ["--from", self.from_rev]
        if self.to_rev is not None:
            args += ["--to", self.to_rev]
        if self.context is not None:
            args += ["--context", str(self.context)]
        if self.summary:
            args.append("--summary")
        if self.stat:
            args.append("--stat")
        if self.paths is not None:
            args.extend(self.paths)
        return add_repo_args(args, self.repo_path)


@dataclass
class GitCloneParams:
    source: str | None = _param("str")
    destination: str | None = _param("str")
    colocate: bool | None = _param("bool")
    remote: str | None = _param("str")
    depth: int | None = _param("u32")

    @classmethod
    def from_json(cls, value: Any) -> "GitCloneParams":
        return _decode(cls, value)

    def to_args(self) -> list[str]:
        args = ["git", "clone"]
        if self.source is not None:
            args.append(self.source)
        if self.destination is not None:
            args.append(self.destination)
        if self.colocate:
            args.append("--colocate")
        if self.remote is not None:
            args += ["--remote", self.remote]
        if self.depth is not None:
            args += ["--depth", str(self.depth)]
        return args


def run_jj_command(args: Sequence[str], cwd: str | None = None) -> str:
    """Run ``jj`` with ``args`` and return its trimmed standard output.

    Raises JjError carrying the trimmed standard error when the command fails,
    or the operating-system error when it cannot be started.
    """
    try:
        completed = subprocess.run(
            [JJ_COMMAND, *args],
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise JjError(f"Error: {exc}") from exc
    if completed.returncode != 0:
        stderr = completed.stderr.decode("utf-8", errors="replace").strip()
        raise JjError(f"Error: {stderr}")
    return completed.stdout.decode("utf-8", errors="replace").strip()


def _respond(args: Sequence[str], cwd: str | None) -> CallToolResponse:
    try:
        return CallToolResponse.success(run_jj_command(args, cwd))
    except JjError as exc:
        return CallToolResponse.failure(str(exc))


def run_jj_status(params: StatusParams) -> CallToolResponse:
    """Show the working-copy status."""
    return _respond(params.to_args(), params.cwd)


def run_jj_rebase(params: RebaseParams) -> CallToolResponse:
    """Rebase a revision onto another."""
    return _respond(params.to_args(), params.cwd)


def run_jj_commit(params: CommitParams) -> CallToolResponse:
    """Commit the working-copy change."""
    return _respond(params.to_args(), params.cwd)


def run_jj_new(params: NewParams) -> CallToolResponse:
    """Create a new empty change."""
    return _respond(params.to_args(), params.cwd)


def run_jj_log(params: LogParams) -> CallToolResponse:
    """Show the commit history."""
    return _respond(params.to_args(), params.cwd)


def run_jj_diff(params: DiffParams) -> CallToolResponse:
    """Show differences between revisions."""
    return _respond(params.to_args(), params.cwd)


def run_jj_git_clone(params: GitCloneParams) -> CallToolResponse:
    """Clone a Git repository into a jj repository."""
    return _respond(params.to_args(), None)


_DISPATCH: dict[str, tuple[Any, Callable[[Any], CallToolResponse]]] = {
    "status": (StatusParams, run_jj_status),
    "rebase": (RebaseParams, run_jj_rebase),
    "commit": (CommitParams, run_jj_commit),
    "new": (NewParams, run_jj_new),
    "log": (LogParams, run_jj_log),
    "diff": (DiffParams, run_jj_diff),
    "git-clone": (GitCloneParams, run_jj_git_clone),
}


@dataclass
class JjTool:
    """A named tool with a description and a JSON input schema."""

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)

    known_names: ClassVar[frozenset[str]] = frozenset(_DISPATCH)

    def call(self, arguments: Any = None) -> CallToolResponse:
        """Run the jj command this tool stands for with the given JSON arguments."""
        entry = _DISPATCH.get(self.name)
        if entry is None:
            return CallToolResponse.failure(f"Unknown tool: {self.name}")
        params_type, runner = entry
        return runner(params_type.from_json(arguments))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }