"""Immutable string-backed filesystem path used for every derived raft location."""

import os


type PathSegment = str | RaftPath | os.PathLike[str]


class RaftPath:
    """A filesystem location. Joining and navigation never touch the disk."""

    __slots__ = ("_path",)

    def __init__(self, path: PathSegment):
        object.__setattr__(self, "_path", os.path.normpath(os.fspath(path)))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("RaftPath is immutable")

    def append(self, *segments: PathSegment) -> "RaftPath":
        parts = [os.fspath(segment) for segment in segments]
        return RaftPath(os.path.join(self._path, *parts))

    def parent(self) -> "RaftPath":
        return RaftPath(os.path.dirname(self._path) or os.curdir)

    def is_root(self) -> bool:
        """True when the path is its own parent, e.g. ``/`` or ``C:\\``."""
        return self.parent() == self

    def exists(self) -> bool:
        return os.path.exists(self._path)

    def is_dir(self) -> bool:
        return os.path.isdir(self._path)

    def create_directory(self) -> bool:
        """Create the directory tree; return True only if it was newly created."""
        if os.path.isdir(self._path):
            return False
        try:
            os.makedirs(self._path)
        except OSError:
            return False
        return True

    def read_text(self) -> str:
        with open(self._path, "r", encoding="utf-8") as handle:
            return handle.read()

    def absolute(self) -> "RaftPath":
        return RaftPath(os.path.abspath(self._path))

    @property
    def name(self) -> str:
        return os.path.basename(self._path)

    @classmethod
    def cwd(cls) -> "RaftPath":
        return cls(os.getcwd())

    @classmethod
    def home(cls) -> "RaftPath":
        return cls(os.path.expanduser("~"))

    def __fspath__(self) -> str:
        return self._path

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"RaftPath({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RaftPath):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)
