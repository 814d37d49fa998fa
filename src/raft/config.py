"""Startup configuration threaded through project discovery and the build."""

import os
from typing import Mapping, Optional, TypedDict

from raft.errors import ConfigInvalid
from raft.paths import RaftPath


DEFAULT_MARKER_DIR = "Raft"
DEFAULT_MANIFEST_NAME = "raftfile.json"
DEFAULT_BUILD_DIR = "build"
DEFAULT_BUILD_JOBS = 8
DEFAULT_CMAKE = "cmake"
DEFAULT_GIT = "git"
DEFAULT_TEMPLATE_DIR = ".raft/templates"


class ConfigDict(TypedDict):
    marker_dir: str
    manifest_name: str
    build_dir: str
    build_jobs: int
    cmake: str
    git: str
    template_root: RaftPath
    android_ndk: Optional[RaftPath]


class RaftConfig:
    def __init__(
        self,
        marker_dir: str = DEFAULT_MARKER_DIR,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
        build_dir: str = DEFAULT_BUILD_DIR,
        build_jobs: int = DEFAULT_BUILD_JOBS,
        cmake: str = DEFAULT_CMAKE,
        git: str = DEFAULT_GIT,
        template_root: Optional[RaftPath] = None,
        android_ndk: Optional[RaftPath] = None,
    ):
        self._marker_dir = marker_dir
        self._manifest_name = manifest_name
        self._build_dir = build_dir
        self._build_jobs = build_jobs
        self._cmake = cmake
        self._git = git
        self._template_root = (
            template_root
            if template_root is not None
            else RaftPath.home().append(DEFAULT_TEMPLATE_DIR)
        )
        self._android_ndk = android_ndk

    @property
    def marker_dir(self) -> str:
        return self._marker_dir

    @property
    def manifest_name(self) -> str:
        return self._manifest_name

    @property
    def build_dir(self) -> str:
        return self._build_dir

    @property
    def build_jobs(self) -> int:
        return self._build_jobs

    @property
    def cmake(self) -> str:
        return self._cmake

    @property
    def git(self) -> str:
        return self._git

    @property
    def template_root(self) -> RaftPath:
        return self._template_root

    @property
    def android_ndk(self) -> Optional[RaftPath]:
        return self._android_ndk

    def to_dict(self) -> ConfigDict:
        return {
            "marker_dir": self._marker_dir,
            "manifest_name": self._manifest_name,
            "build_dir": self._build_dir,
            "build_jobs": self._build_jobs,
            "cmake": self._cmake,
            "git": self._git,
            "template_root": self._template_root,
            "android_ndk": self._android_ndk,
        }

    @classmethod
    def from_dict(cls, config: ConfigDict) -> "RaftConfig":
        return cls(
            marker_dir=config["marker_dir"],
            manifest_name=config["manifest_name"],
            build_dir=config["build_dir"],
            build_jobs=config["build_jobs"],
            cmake=config["cmake"],
            git=config["git"],
            template_root=config["template_root"],
            android_ndk=config["android_ndk"],
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RaftConfig":
        """Defaults with RAFT_* and Android NDK environment overrides applied."""
        env = os.environ if environ is None else environ
        data = cls().to_dict()

        build_dir_override = env.get("RAFT_BUILD_DIR", "").strip()
        if build_dir_override:
            data["build_dir"] = build_dir_override
        jobs_override = env.get("RAFT_BUILD_JOBS", "").strip()
        if jobs_override:
            data["build_jobs"] = _parse_jobs(jobs_override)
        cmake_override = env.get("RAFT_CMAKE", "").strip()
        if cmake_override:
            data["cmake"] = cmake_override
        git_override = env.get("RAFT_GIT", "").strip()
        if git_override:
            data["git"] = git_override
        template_override = env.get("RAFT_TEMPLATE_DIR", "").strip()
        if template_override:
            data["template_root"] = RaftPath(os.path.expanduser(template_override))
        for name in ("ANDROID_NDK_HOME", "ANDROID_NDK"):
            ndk = env.get(name, "").strip()
            if ndk:
                data["android_ndk"] = RaftPath(os.path.expanduser(ndk))
                break
        return cls.from_dict(data)


def _parse_jobs(value: str) -> int:
    try:
        jobs = int(value)
    except ValueError:
        raise ConfigInvalid(
            f"RAFT_BUILD_JOBS must be a positive integer; got {value!r}"
        ) from None
    if jobs < 1:
        raise ConfigInvalid(f"RAFT_BUILD_JOBS must be a positive integer; got {jobs}")
    return jobs
