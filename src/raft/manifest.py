"""Loading and shape validation of ``raftfile.json``."""

import json
import os
from typing import Any, TypedDict

from raft.errors import ManifestInvalid
from raft.paths import RaftPath


class RepositoryDescriptor(TypedDict, total=False):
    type: str
    location: str


class DependencyDescriptor(TypedDict):
    name: str
    repository: RepositoryDescriptor
    buildSystem: str


class Manifest(TypedDict):
    dependencies: list[DependencyDescriptor]


def _validate_dependency_name(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ManifestInvalid(f"{field_name} must be a non-empty string")
    name = value.strip()
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if any(sep in name for sep in separators) or name in {os.curdir, os.pardir}:
        raise ManifestInvalid(f"{field_name} must be a single path segment; got {name!r}")
    return name


def _validate_dependency(entry: Any, index: int) -> DependencyDescriptor:
    field = f"dependencies[{index}]"
    if not isinstance(entry, dict):
        raise ManifestInvalid(f"{field} must be a JSON object")
    name = _validate_dependency_name(entry.get("name"), f"{field}.name")

    repository = entry.get("repository")
    if not isinstance(repository, dict):
        raise ManifestInvalid(f"{field}.repository must be a JSON object")
    location = repository.get("location")
    if location is not None and not isinstance(location, str):
        raise ManifestInvalid(f"{field}.repository.location must be a string")

    build_system = entry.get("buildSystem")
    if not isinstance(build_system, str):
        raise ManifestInvalid(f"{field}.buildSystem must be a string")

    return {
        "name": name,
        "repository": dict(repository),
        "buildSystem": build_system,
    }


def parse_manifest(contents: str, source: object = "<manifest>") -> Manifest:
    try:
        data = json.loads(contents)
    except json.JSONDecodeError as exc:
        raise ManifestInvalid(f"invalid JSON in {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestInvalid(f"{source} must contain a JSON object")

    entries = data.get("dependencies", [])
    if not isinstance(entries, list):
        raise ManifestInvalid(f"{source}: dependencies must be a list")
    dependencies = [_validate_dependency(entry, i) for i, entry in enumerate(entries)]

    seen: set[str] = set()
    for dependency in dependencies:
        if dependency["name"] in seen:
            raise ManifestInvalid(
                f"{source}: dependency {dependency['name']!r} is declared twice"
            )
        seen.add(dependency["name"])
    return {"dependencies": dependencies}


def load_manifest(path: RaftPath) -> Manifest:
    try:
        contents = path.read_text()
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestInvalid(f"failed to read {path}: {exc}") from exc
    return parse_manifest(contents, path)
