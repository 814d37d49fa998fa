"""Project root discovery and the per-target filesystem layout."""

import json
from typing import Optional, cast

from raft import cmake
from raft.cmake import CMakeValue
from raft.config import RaftConfig
from raft.errors import ConfigInvalid, DeployNotImplemented, ProjectNotFound
from raft.manifest import DependencyDescriptor, Manifest, load_manifest
from raft.paths import RaftPath
from raft.system import info
from raft.target import ANDROID_ABIS, BuildTarget


# Upper bound on the upward search, well past any real directory depth.
MAX_SEARCH_DEPTH = 4096

DEPENDENCY_DIR = "libs"
DEPENDENCY_SRC_DIR = "src"
DEPENDENCY_BUILD_DIR = "build"
DEPENDENCY_INSTALL_DIR = "install"
DEPENDENCY_LIB_DIR = "lib"
DEPENDENCY_INC_DIR = "include"


def _candidate_roots(start: RaftPath) -> list[RaftPath]:
    candidates = [start]
    while not candidates[-1].is_root() and len(candidates) < MAX_SEARCH_DEPTH:
        candidates.append(candidates[-1].parent())
    return candidates


class Project:
    """A raft project: its root, its manifest, and every path derived from them."""

    def __init__(self, root: RaftPath, config: Optional[RaftConfig] = None):
        self._root = root
        self._config = config if config is not None else RaftConfig()
        self._manifest: Optional[Manifest] = None

    @property
    def root(self) -> RaftPath:
        return self._root

    @property
    def config(self) -> RaftConfig:
        return self._config

    @classmethod
    def find(
        cls, start: RaftPath, config: Optional[RaftConfig] = None
    ) -> "Project":
        """Walk up from ``start``; the nearest directory holding the marker wins.

        Raises ProjectNotFound when no ancestor has one and ManifestInvalid
        when the manifest at the discovered root cannot be loaded.
        """
        config = config if config is not None else RaftConfig()
        for candidate in _candidate_roots(start.absolute()):
            if candidate.append(config.marker_dir).is_dir():
                return cls(candidate, config).load()
        raise ProjectNotFound(start, config.marker_dir)

    def load(self) -> "Project":
        self._manifest = load_manifest(self.manifest_path())
        info(json.dumps(self._manifest), "Project Data")
        return self

    @property
    def manifest(self) -> Manifest:
        if self._manifest is None:
            self.load()
        return cast(Manifest, self._manifest)

    def dependencies(self) -> list[DependencyDescriptor]:
        return list(self.manifest["dependencies"])

    def raft_dir(self) -> RaftPath:
        return self._root.append(self._config.marker_dir)

    def manifest_path(self) -> RaftPath:
        return self.raft_dir().append(self._config.manifest_name)

    def _dependency_dir(self, *segments: str) -> RaftPath:
        return self.raft_dir().append(DEPENDENCY_DIR, *segments)

    def dir_for_dependency(self, name: str) -> RaftPath:
        return self._dependency_dir(DEPENDENCY_SRC_DIR, name)

    def dir_for_dependency_build(self, name: str, target: BuildTarget) -> RaftPath:
        return self._dependency_dir(
            DEPENDENCY_BUILD_DIR,
            target.platform.value,
            target.architecture.value,
            name,
        )

    def dir_for_dependency_install(self, target: BuildTarget) -> RaftPath:
        return self._dependency_dir(
            DEPENDENCY_INSTALL_DIR,
            target.platform.value,
            target.architecture.value,
        )

    def dir_for_dependency_lib(self, target: BuildTarget) -> RaftPath:
        return self.dir_for_dependency_install(target).append(DEPENDENCY_LIB_DIR)

    def dir_for_dependency_inc(self, target: BuildTarget) -> RaftPath:
        return self.dir_for_dependency_install(target).append(DEPENDENCY_INC_DIR)

    def dir_for_build(self, target: BuildTarget) -> RaftPath:
        if target.is_deploy:
            raise DeployNotImplemented("deploy builds have not been implemented")
        return self._root.append(self._config.build_dir)

    def platform_options(self, target: BuildTarget) -> dict[str, CMakeValue]:
        """Toolchain defines shared by dependency and project configures.

        Raises ConfigInvalid for an android target when no NDK is configured.
        """
        if not target.is_android:
            return {}
        ndk = self._config.android_ndk
        if ndk is None:
            raise ConfigInvalid("android builds need ANDROID_NDK_HOME to point at an NDK")
        return {
            "CMAKE_TOOLCHAIN_FILE": ndk.append("build", "cmake", "android.toolchain.cmake"),
            "ANDROID_ABI": ANDROID_ABIS.get(target.architecture, target.architecture.value),
        }

    def cmake_options(self, target: BuildTarget) -> dict[str, CMakeValue]:
        install_dir = self.dir_for_dependency_install(target)
        options: dict[str, CMakeValue] = {
            "RAFT": cmake.raft_cmake_file(),
            "RAFT_INCLUDE_DIR": self.dir_for_dependency_inc(target),
            "RAFT_LIB_DIR": self.dir_for_dependency_lib(target),
            "RAFT_IS_DESKTOP": target.is_desktop,
            "RAFT_IS_ANDROID": target.is_android,
            "CMAKE_INSTALL_PREFIX": install_dir,
            "CMAKE_PREFIX_PATH": install_dir,
        }
        options.update(self.platform_options(target))
        return options

    async def build(self, target: BuildTarget) -> None:
        build_path = self.dir_for_build(target)
        options = self.cmake_options(target)
        await cmake.configure(self._root, build_path, options, self._config)
        await cmake.build(build_path, self._config)
