"""Console output and the external-process boundary every stage goes through."""

import asyncio
import shlex
import sys
from typing import NamedTuple, Optional, Sequence

from raft.errors import ProcessFailed
from raft.paths import RaftPath


class ProcessOutput(NamedTuple):
    stdout: bytes
    stderr: bytes


def info(message: str, tag: Optional[str] = None) -> None:
    """Print a standard informational message."""
    if tag:
        print(f"[raft] {tag}: {message}")
    else:
        print(f"[raft] {message}")


def error(message: str) -> None:
    """Print a standardized error message to stderr."""
    print(f"error: {message}", file=sys.stderr)


def format_command(command: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in command)


def _prepare_cwd(cwd: RaftPath, tag: str) -> None:
    info(f"Running in {cwd}", tag)
    if cwd.create_directory():
        info(f"Created {cwd}", tag)
    # A still-missing directory surfaces as a spawn failure.


async def execute(
    command: Sequence[str],
    cwd: Optional[RaftPath] = None,
    tag: Optional[str] = None,
) -> ProcessOutput:
    """Run ``command`` and capture its output.

    The working directory is created first when it does not exist. Raises
    ProcessFailed on a non-zero exit or when the command cannot be spawned.
    """
    command = list(command)
    tag = tag or format_command(command)
    if cwd is not None:
        _prepare_cwd(cwd, tag)
    else:
        info("Running in the current working directory", tag)

    print("+", format_command(command))
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=str(cwd) if cwd is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        error(f"{tag}: could not start command: {exc}")
        raise ProcessFailed(command, None, stderr=str(exc).encode()) from exc

    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        error(f"{tag}: command failed with exit code {process.returncode}")
        raise ProcessFailed(command, process.returncode, stdout, stderr)

    info("Finished successfully", tag)
    return ProcessOutput(stdout, stderr)
