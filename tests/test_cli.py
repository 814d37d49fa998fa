import pytest

from raft import actions, cli, template
from raft.errors import UnsupportedBuildSystem
from raft.target import Architecture, Platform


@pytest.fixture
def build_calls(monkeypatch):
    calls = []

    def fake_run_build(start, target, config=None):
        calls.append((start, target, config))

    monkeypatch.setattr(actions, "run_build", fake_run_build)
    return calls


def test_no_arguments_prints_usage(capsys):
    assert cli.main([]) == 2
    assert "usage: raft" in capsys.readouterr().out


def test_help(capsys):
    assert cli.main(["h"]) == 0
    assert "commands:" in capsys.readouterr().out


def test_version(capsys):
    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.startswith("raft ")


def test_unknown_command(capsys):
    assert cli.main(["deploy"]) == 2
    assert "unknown command 'deploy'" in capsys.readouterr().err


def test_build_defaults_to_host(build_calls, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert cli.main(["build"]) == 0

    start, target, config = build_calls[0]
    assert str(start) == str(tmp_path)
    assert target.platform is Platform.HOST
    assert target.architecture is Architecture.HOST
    assert config.marker_dir == "Raft"


@pytest.mark.parametrize("args", [["b", "--platform", "android"], ["build", "--platform=Android"]])
def test_build_for_android(build_calls, args):
    assert cli.main(args) == 0

    _, target, _ = build_calls[0]
    assert target.platform is Platform.ANDROID
    assert target.architecture is Architecture.ARMEABI


@pytest.mark.parametrize(
    "args",
    [
        ["build", "--platform"],
        ["build", "--platform="],
        ["build", "--platform", "wasm"],
        ["build", "extra"],
    ],
)
def test_build_usage_errors(build_calls, args):
    assert cli.main(args) == 2
    assert build_calls == []


def test_build_failure_reports_and_exits_non_zero(monkeypatch, capsys):
    def failing_run_build(start, target, config=None):
        raise UnsupportedBuildSystem("dependency 'foo': unknown build system 'scons'")

    monkeypatch.setattr(actions, "run_build", failing_run_build)

    assert cli.main(["build"]) == 1
    assert "error: dependency 'foo': unknown build system 'scons'" in capsys.readouterr().err


def test_bad_environment_is_reported(build_calls, monkeypatch, capsys):
    monkeypatch.setenv("RAFT_BUILD_JOBS", "many")

    assert cli.main(["build"]) == 1
    assert "RAFT_BUILD_JOBS" in capsys.readouterr().err
    assert build_calls == []


def test_create_uses_configured_template_root(monkeypatch, tmp_path):
    calls = []

    def fake_create(name, target_dir, template_root):
        calls.append((name, str(target_dir), str(template_root)))
        return []

    monkeypatch.setattr(template, "create", fake_create)
    monkeypatch.setenv("RAFT_TEMPLATE_DIR", str(tmp_path / "templates"))
    monkeypatch.chdir(tmp_path)

    assert cli.main(["create", "cpp-app"]) == 0
    assert calls == [("cpp-app", str(tmp_path), str(tmp_path / "templates"))]


def test_create_requires_a_template_name(capsys):
    assert cli.main(["c"]) == 2
    assert "usage: raft create <template>" in capsys.readouterr().err


def test_failing_template_setup_exits_non_zero(monkeypatch, tmp_path, capsys):
    template_dir = tmp_path / "templates" / "broken"
    (template_dir / "files").mkdir(parents=True)
    (template_dir / "index.py").write_text("def setup(args):\n    raise ValueError('boom')\n", encoding="utf-8")
    monkeypatch.setenv("RAFT_TEMPLATE_DIR", str(tmp_path / "templates"))
    monkeypatch.chdir(tmp_path)

    assert cli.main(["create", "broken"]) == 1
    assert "boom" in capsys.readouterr().err
