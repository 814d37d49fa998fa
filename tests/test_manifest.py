import json

import pytest

from raft.errors import ManifestInvalid
from raft.manifest import load_manifest, parse_manifest
from raft.paths import RaftPath


FOO = {
    "name": "foo",
    "repository": {"type": "git", "location": "https://example/foo.git"},
    "buildSystem": "cmake",
}


def test_parse_manifest_keeps_descriptors_verbatim():
    manifest = parse_manifest(json.dumps({"dependencies": [FOO]}))

    assert manifest == {"dependencies": [FOO]}


def test_missing_dependencies_key_means_none():
    assert parse_manifest("{}") == {"dependencies": []}


def test_unknown_tags_are_not_rejected_at_parse_time():
    entry = dict(FOO, buildSystem="unknown", repository={"type": "svn"})

    manifest = parse_manifest(json.dumps({"dependencies": [entry]}))

    assert manifest["dependencies"][0]["buildSystem"] == "unknown"


@pytest.mark.parametrize(
    "contents",
    [
        "not json",
        "[]",
        json.dumps({"dependencies": {}}),
        json.dumps({"dependencies": ["foo"]}),
        json.dumps({"dependencies": [dict(FOO, name="")]}),
        json.dumps({"dependencies": [dict(FOO, name="a/b")]}),
        json.dumps({"dependencies": [dict(FOO, name="..")]}),
        json.dumps({"dependencies": [dict(FOO, repository="git")]}),
        json.dumps({"dependencies": [dict(FOO, buildSystem=None)]}),
        json.dumps({"dependencies": [FOO, FOO]}),
    ],
)
def test_malformed_manifest_is_invalid(contents):
    with pytest.raises(ManifestInvalid):
        parse_manifest(contents)


def test_error_names_the_offending_entry():
    contents = json.dumps({"dependencies": [FOO, dict(FOO, name=3)]})

    with pytest.raises(ManifestInvalid, match=r"dependencies\[1\]\.name"):
        parse_manifest(contents)


def test_load_manifest_missing_file(tmp_path):
    with pytest.raises(ManifestInvalid, match="failed to read"):
        load_manifest(RaftPath(str(tmp_path / "raftfile.json")))


def test_load_manifest_reads_file(tmp_path):
    path = tmp_path / "raftfile.json"
    path.write_text(json.dumps({"dependencies": [FOO]}), encoding="utf-8")

    manifest = load_manifest(RaftPath(str(path)))

    assert [entry["name"] for entry in manifest["dependencies"]] == ["foo"]
