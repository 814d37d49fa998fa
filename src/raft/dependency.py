"""Dependency model: descriptors resolved into download/build/install capabilities.

Repository and build-system kinds are tagged variants. A ``Dependency`` owns
one ``Repository`` and dispatches each stage on its build-system kind;
stages a kind does not implement are no-ops.
"""

import asyncio
from enum import Enum
from typing import Optional, Protocol

from raft import cmake
from raft.cmake import CMakeValue
from raft.errors import UnsupportedBuildSystem, UnsupportedRepository
from raft.manifest import DependencyDescriptor, RepositoryDescriptor
from raft.paths import RaftPath
from raft.project import Project
from raft.system import info
from raft.target import BuildTarget


class RepositoryKind(str, Enum):
    GIT = "git"


class BuildSystemKind(str, Enum):
    NONE = "none"
    CMAKE = "cmake"


class Stages(Protocol):
    name: str

    async def download(self, project: Project, target: BuildTarget) -> None: ...

    async def build(self, project: Project, target: BuildTarget) -> None: ...

    async def install(self, project: Project, target: BuildTarget) -> None: ...


class Repository:
    def __init__(self, kind: RepositoryKind, location: str):
        self.kind = kind
        self.location = location

    def __repr__(self) -> str:
        return f"Repository({self.kind.value}, {self.location!r})"

    async def download(self, destination: RaftPath, project: Project) -> None:
        if self.kind is RepositoryKind.GIT:
            await cmake.git_clone(self.location, destination, project.config)


class Dependency:
    def __init__(self, name: str, repository: Repository, build_system: BuildSystemKind):
        self.name = name
        self.repository = repository
        self.build_system = build_system

    def __repr__(self) -> str:
        return f"Dependency({self.name!r}, {self.repository!r}, {self.build_system.value})"

    async def download(self, project: Project, target: BuildTarget) -> None:
        await self.repository.download(project.dir_for_dependency(self.name), project)

    async def build(self, project: Project, target: BuildTarget) -> None:
        if self.build_system is not BuildSystemKind.CMAKE:
            return
        source = project.dir_for_dependency(self.name)
        build_path = project.dir_for_dependency_build(self.name, target)
        options: dict[str, CMakeValue] = {
            "CMAKE_INSTALL_PREFIX": project.dir_for_dependency_install(target),
        }
        options.update(project.platform_options(target))
        await cmake.configure(source, build_path, options, project.config)
        await cmake.build(build_path, project.config)

    async def install(self, project: Project, target: BuildTarget) -> None:
        if self.build_system is not BuildSystemKind.CMAKE:
            return
        build_path = project.dir_for_dependency_build(self.name, target)
        await cmake.install(build_path, project.config)


def create_repository(descriptor: RepositoryDescriptor) -> Repository:
    repo_type = descriptor.get("type")
    try:
        kind = RepositoryKind(repo_type)
    except ValueError:
        raise UnsupportedRepository(f"unknown repository type {repo_type!r}") from None
    location = descriptor.get("location")
    if not location:
        raise UnsupportedRepository(f"{kind.value} repository has no location")
    return Repository(kind, location)


def create_dependency(descriptor: DependencyDescriptor) -> Dependency:
    build_system = descriptor.get("buildSystem")
    try:
        kind = BuildSystemKind(build_system)
    except ValueError:
        raise UnsupportedBuildSystem(
            f"dependency {descriptor.get('name')!r}: unknown build system {build_system!r}"
        ) from None
    return Dependency(descriptor["name"], create_repository(descriptor["repository"]), kind)


async def get_dependency(
    project: Project,
    dependency: Stages,
    target: BuildTarget,
    install_lock: Optional[asyncio.Lock] = None,
) -> None:
    """Run download, build and install for one dependency, strictly in order."""
    info("Downloading", dependency.name)
    await dependency.download(project, target)
    info("Building", dependency.name)
    await dependency.build(project, target)
    info("Installing", dependency.name)
    if install_lock is None:
        await dependency.install(project, target)
    else:
        async with install_lock:
            await dependency.install(project, target)
    info("Ready", dependency.name)
