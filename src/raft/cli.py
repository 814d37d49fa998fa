#!/usr/bin/env python3
"""Command line entry point for raft."""

import importlib.metadata
import sys
from typing import Optional, Sequence

from raft import actions, template
from raft.config import RaftConfig
from raft.errors import RaftError
from raft.paths import RaftPath
from raft.system import error, info
from raft.target import BuildTarget, Platform


DEFAULT_VERSION = "0.1.0"


def usage() -> None:
    print("usage: raft <command> [args...]")
    print("")
    print("commands:")
    print("  build (b)            fetch, build and install dependencies, then build")
    print("  create (c) <name>    create a project from ~/.raft/templates/<name>")
    print("  help (h)             show this help text")
    print("")
    print("options:")
    print("  --platform <name>    build for a platform (host, android)")
    print("  -v, --version        print the raft version")
    print("")
    print("environment:")
    print("  RAFT_BUILD_DIR, RAFT_BUILD_JOBS, RAFT_CMAKE, RAFT_GIT,")
    print("  RAFT_TEMPLATE_DIR, ANDROID_NDK_HOME")
    print("")
    print("examples:")
    print("  raft build")
    print("  raft build --platform android")
    print("  raft create cpp-app")


def _version() -> str:
    try:
        return importlib.metadata.version("raft-build")
    except importlib.metadata.PackageNotFoundError:
        return DEFAULT_VERSION


def _parse_build_args(args: Sequence[str]) -> tuple[int, Optional[str]]:
    platform = None
    index = 0
    while index < len(args):
        arg = args[index]
        if arg == "--platform":
            if index + 1 >= len(args):
                error("usage: --platform <name>")
                return 2, None
            platform = args[index + 1]
            index += 2
            continue
        if arg.startswith("--platform="):
            platform = arg.split("=", 1)[1]
            if not platform:
                error("usage: --platform <name>")
                return 2, None
            index += 1
            continue
        error(f"unexpected argument '{arg}'")
        return 2, None
    if platform is not None:
        known = {member.value for member in Platform}
        if platform.strip().lower() not in known:
            error(f"unknown platform '{platform}'; expected one of: {', '.join(sorted(known))}")
            return 2, None
    return 0, platform


def build_command(args: Sequence[str], config: RaftConfig) -> int:
    result, platform = _parse_build_args(args)
    if result != 0:
        return result
    target = BuildTarget.for_platform(platform)
    info(f"building for {target.platform.value}/{target.architecture.value}")
    actions.run_build(RaftPath.cwd(), target, config)
    info("build finished")
    return 0


def create_command(args: Sequence[str], config: RaftConfig) -> int:
    if len(args) != 1 or not args[0].strip():
        error("usage: raft create <template>")
        return 2
    created = template.create(args[0].strip(), RaftPath.cwd(), config.template_root)
    info(f"created {len(created)} files")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        usage()
        return 2

    command = argv[0]
    args = argv[1:]
    if command in {"-v", "--version"}:
        print(f"raft {_version()}")
        return 0

    aliases = {
        "b": "build",
        "c": "create",
        "h": "help",
    }
    command = aliases.get(command, command)
    if command in {"help", "-h", "--help"}:
        usage()
        return 0

    commands = {
        "build": build_command,
        "create": create_command,
    }
    handler = commands.get(command)
    if handler is None:
        error(f"unknown command '{command}'")
        usage()
        return 2

    try:
        config = RaftConfig.from_env()
        return handler(args, config)
    except RaftError as exc:
        error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
