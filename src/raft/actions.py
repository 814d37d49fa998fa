"""Top-level actions behind the CLI commands."""

import asyncio
from typing import Optional

from raft.config import RaftConfig
from raft.dependency import create_dependency, get_dependency
from raft.paths import RaftPath
from raft.project import Project
from raft.system import error, info
from raft.target import BuildTarget


async def build(
    start: RaftPath,
    target: BuildTarget,
    config: Optional[RaftConfig] = None,
) -> Project:
    """Fetch, build and install every dependency, then build the project.

    Dependency pipelines run concurrently; the project build starts only
    after all of them succeeded. The first failure in manifest order is
    re-raised once every pipeline has finished.
    """
    project = Project.find(start, config)
    project.dir_for_build(target)
    project.platform_options(target)
    dependencies = [create_dependency(entry) for entry in project.dependencies()]

    info(f"Getting {len(dependencies)} dependencies for the project", "Project")
    # One target means one shared install tree; installs into it are serialized.
    install_lock = asyncio.Lock()
    results = await asyncio.gather(
        *(
            get_dependency(project, dependency, target, install_lock)
            for dependency in dependencies
        ),
        return_exceptions=True,
    )

    failures = [
        (dependency, result)
        for dependency, result in zip(dependencies, results)
        if isinstance(result, BaseException)
    ]
    for dependency, failure in failures:
        error(f"{dependency.name}: {failure}")
    if failures:
        raise failures[0][1]

    await project.build(target)
    return project


def run_build(
    start: RaftPath,
    target: BuildTarget,
    config: Optional[RaftConfig] = None,
) -> Project:
    return asyncio.run(build(start, target, config))
