"""Version store backed by a local git repository.

Every read shells out to ``git`` plumbing commands (``rev-parse``, ``ls-tree``,
``cat-file``, ``log``). Failures surface as ``StoreReadError``; an unknown
version surfaces as ``VersionNotFoundError``.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from ..errors import StoreReadError, VersionNotFoundError
from ..log import get_logger
from .types import Blob, Commit, LogOptions, Tree, TreeEntry

logger = get_logger(__name__)

DEFAULT_GIT_TIMEOUT_SECONDS = 10.0

_FIELD_SEP = "\x00"
_RECORD_SEP = "\x1e"
_COMMIT_FORMAT = "%H%x00%T%x00%an%x00%ae%x00%at%x00%s"


def _parse_commit_record(record: str) -> Commit:
    fields = record.split(_FIELD_SEP)
    if len(fields) != 6:
        raise StoreReadError(f"unexpected commit record: {record!r}")
    commit_id, tree_id, author_name, author_email, authored_at, message = fields
    try:
        timestamp = int(authored_at)
    except ValueError as exc:
        raise StoreReadError(f"unexpected commit timestamp: {authored_at!r}") from exc
    return Commit(
        id=commit_id,
        tree_id=tree_id,
        author_name=author_name,
        author_email=author_email,
        authored_at=timestamp,
        message=message,
    )


def _iter_ls_tree_records(output: str) -> list[tuple[str, str, str]]:
    """Parse ``ls-tree -z`` output into ``(type, object_id, name)`` tuples."""
    records: list[tuple[str, str, str]] = []
    for token in output.split("\0"):
        if not token:
            continue
        meta, sep, name = token.partition("\t")
        if not sep:
            continue
        parts = meta.split()
        if len(parts) != 3:
            continue
        _mode, object_type, object_id = parts
        records.append((object_type, object_id, name))
    return records


class GitVersionStore:
    """Read commits, trees, and blobs from the repository at ``repo_path``."""

    def __init__(self, repo_path: Path | str, timeout_seconds: float = DEFAULT_GIT_TIMEOUT_SECONDS) -> None:
        self.repo_path = Path(repo_path)
        self.timeout_seconds = timeout_seconds

    def __repr__(self) -> str:
        return f"GitVersionStore({str(self.repo_path)!r})"

    def _run_git(
        self,
        args: list[str],
        *,
        binary: bool = False,
        ok_returncodes: tuple[int, ...] = (0,),
    ) -> subprocess.CompletedProcess:
        command = ["git", "-C", str(self.repo_path), *args]
        logger.debug("running %s", " ".join(command))
        text_kwargs = {} if binary else {"text": True, "encoding": "utf-8", "errors": "replace"}
        try:
            proc = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
                timeout=self.timeout_seconds,
                **text_kwargs,
            )
        except subprocess.TimeoutExpired as exc:
            raise StoreReadError(f"git timed out after {self.timeout_seconds}s", command) from exc
        except OSError as exc:
            raise StoreReadError(f"could not run git: {exc}", command) from exc

        if proc.returncode not in ok_returncodes:
            stderr = proc.stderr
            if isinstance(stderr, bytes):
                stderr = stderr.decode("utf-8", errors="replace")
            raise StoreReadError(
                f"git {args[0]} failed with exit code {proc.returncode}: {stderr.strip()}",
                command,
            )
        return proc

    def _resolve_commit_id(self, version: str) -> str:
        if not version or version.startswith("-"):
            raise VersionNotFoundError(version)
        proc = self._run_git(
            ["rev-parse", "--verify", "--quiet", f"{version}^{{commit}}"],
            ok_returncodes=(0, 1),
        )
        commit_id = proc.stdout.strip()
        if proc.returncode != 0 or not commit_id:
            raise VersionNotFoundError(version)
        return commit_id

    def commit(self, version: str) -> Commit:
        commit_id = self._resolve_commit_id(version)
        proc = self._run_git(["show", "-s", f"--format={_COMMIT_FORMAT}", commit_id])
        return _parse_commit_record(proc.stdout.rstrip("\n"))

    def tree_of(self, commit: Commit) -> Tree:
        return Tree(id=commit.tree_id, name="")

    def children_of(self, tree: Tree) -> list[TreeEntry]:
        proc = self._run_git(["ls-tree", "-z", tree.id])
        children: list[TreeEntry] = []
        for object_type, object_id, name in _iter_ls_tree_records(proc.stdout):
            if object_type == "blob":
                children.append(Blob(id=object_id, name=name))
            elif object_type == "tree":
                children.append(Tree(id=object_id, name=name))
            # "commit" entries are submodule gitlinks; their content is not in this repo.
        return children

    def data_of(self, blob: Blob) -> bytes:
        proc = self._run_git(["cat-file", "blob", blob.id], binary=True)
        return proc.stdout

    def log(self, version: str, path: str, options: LogOptions) -> list[Commit]:
        commit_id = self._resolve_commit_id(version)
        args = [
            "--literal-pathspecs",
            "log",
            f"--format={_COMMIT_FORMAT}%x1e",
            f"--max-count={max(0, options.max_count)}",
        ]
        if options.skip > 0:
            args.append(f"--skip={options.skip}")
        args.append(commit_id)
        args.append("--")
        if path:
            args.append(path)
        proc = self._run_git(args)

        commits: list[Commit] = []
        for record in proc.stdout.split(_RECORD_SEP):
            record = record.strip("\n")
            if record:
                commits.append(_parse_commit_record(record))
        return commits


__all__ = ["GitVersionStore", "DEFAULT_GIT_TIMEOUT_SECONDS"]
