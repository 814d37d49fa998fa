"""CMake backend adapter and the version-control client."""

import os
from typing import Mapping

from raft.config import RaftConfig
from raft.paths import RaftPath
from raft.system import ProcessOutput, execute


type CMakeValue = str | bool | int | RaftPath

RAFT_CMAKE_FILE_NAME = "raft.cmake"


def raft_cmake_file() -> RaftPath:
    """Path of the helper script the root project includes via ``${RAFT}``."""
    package_dir = RaftPath(os.path.dirname(os.path.abspath(__file__)))
    return package_dir.append(RAFT_CMAKE_FILE_NAME)


def _cmake_value(value: CMakeValue) -> str:
    if isinstance(value, bool):
        return "ON" if value else "OFF"
    return str(value)


def define_flags(options: Mapping[str, CMakeValue]) -> list[str]:
    return [f"-D{key}={_cmake_value(value)}" for key, value in options.items()]


async def configure(
    src_path: RaftPath,
    build_path: RaftPath,
    options: Mapping[str, CMakeValue],
    config: RaftConfig,
) -> ProcessOutput:
    command = [config.cmake, str(src_path), *define_flags(options)]
    return await execute(command, cwd=build_path)


async def build(build_path: RaftPath, config: RaftConfig) -> ProcessOutput:
    command = [config.cmake, "--build", ".", "--parallel", str(config.build_jobs)]
    return await execute(command, cwd=build_path)


async def install(build_path: RaftPath, config: RaftConfig) -> ProcessOutput:
    return await execute([config.cmake, "--install", "."], cwd=build_path)


async def git_clone(uri: str, destination: RaftPath, config: RaftConfig) -> ProcessOutput:
    return await execute([config.git, "clone", uri, str(destination)])
