import json
import sys
from pathlib import Path

import pytest  # type: ignore[import-not-found]

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from raft.config import RaftConfig  # noqa: E402
from raft.errors import ProcessFailed  # noqa: E402
from raft.paths import RaftPath  # noqa: E402
from raft.system import ProcessOutput  # noqa: E402


class CommandLog:
    """Records execute() calls instead of spawning processes."""

    def __init__(self):
        self.calls = []
        self.failures = {}

    def fail_when(self, predicate, returncode=1, stderr=b"boom"):
        self.failures[predicate] = (returncode, stderr)

    async def execute(self, command, cwd=None, tag=None):
        command = list(command)
        self.calls.append((command, cwd))
        for predicate, (returncode, stderr) in self.failures.items():
            if predicate(command, cwd):
                raise ProcessFailed(command, returncode, b"", stderr)
        return ProcessOutput(b"", b"")


@pytest.fixture
def command_log(monkeypatch):
    log = CommandLog()
    monkeypatch.setattr("raft.cmake.execute", log.execute)
    return log


@pytest.fixture
def raft_config(tmp_path):
    return RaftConfig(template_root=RaftPath(str(tmp_path / "templates")))


@pytest.fixture
def make_project(tmp_path):
    """Create a project root holding Raft/raftfile.json with the given body."""

    def factory(manifest=None, root=None):
        root = Path(root) if root is not None else tmp_path / "project"
        raft_dir = root / "Raft"
        raft_dir.mkdir(parents=True, exist_ok=True)
        if manifest is not None:
            contents = manifest if isinstance(manifest, str) else json.dumps(manifest)
            (raft_dir / "raftfile.json").write_text(contents, encoding="utf-8")
        return root

    return factory


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--type",
        action="store",
        default="all",
        choices=("unit", "integration", "all"),
        help="Select which tests to run: unit, integration, or all.",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    selected = config.getoption("--type")
    if selected == "all":
        return

    skip_integration = pytest.mark.skip(reason="skipped by --type unit")
    skip_unit = pytest.mark.skip(reason="skipped by --type integration")

    for item in items:
        is_integration = item.get_closest_marker("integration") is not None
        if selected == "unit" and is_integration:
            item.add_marker(skip_integration)
        elif selected == "integration" and not is_integration:
            item.add_marker(skip_unit)
