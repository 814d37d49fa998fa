"""Exception types raised by the raft build pipeline."""

from typing import Optional, Sequence


class RaftError(Exception):
    """Base class for every failure the CLI reports to the user."""


class ProjectNotFound(RaftError):
    def __init__(self, start: object, marker: str):
        super().__init__(
            f"no {marker} directory found in {start} or any of its parents"
        )
        self.start = start
        self.marker = marker


class ManifestInvalid(RaftError):
    pass


class UnsupportedRepository(RaftError):
    pass


class UnsupportedBuildSystem(RaftError):
    pass


class ConfigInvalid(RaftError):
    pass


class TemplateError(RaftError):
    pass


class DeployNotImplemented(RaftError, NotImplementedError):
    pass


class ProcessFailed(RaftError):
    """An external command exited non-zero or could not be started.

    ``returncode`` is None when the process never spawned.
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int],
        stdout: bytes = b"",
        stderr: bytes = b"",
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(self._describe())

    def _describe(self) -> str:
        name = self.command[0] if self.command else "<empty command>"
        if self.returncode is None:
            reason = "could not be started"
        else:
            reason = f"failed with exit code {self.returncode}"
        detail = self.stderr.decode("utf-8", errors="replace").strip()
        if detail:
            return f"{name} {reason}: {detail}"
        return f"{name} {reason}"
