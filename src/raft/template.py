"""Project templates: a prompt script plus a file tree with ``${key}`` placeholders."""

import importlib.util
import os
import shutil
from string import Template
from typing import Any, Callable, Mapping, NamedTuple, Optional

from raft.errors import TemplateError
from raft.paths import RaftPath
from raft.system import info


TEMPLATE_SCRIPT = "index.py"
TEMPLATE_FILES_DIR = "files"

type Validator = Callable[[str], Optional[str]]


class TemplateArgs(NamedTuple):
    ask: Callable[..., str]
    error_message: Callable[[str], str]
    RaftPath: type


def error_message(message: str) -> str:
    return f"error: {message}"


def ask(question: str, validator: Optional[Validator] = None) -> str:
    """Prompt until ``validator`` (if any) returns no complaint."""
    while True:
        try:
            answer = input(f"{question} ").strip()
        except EOFError:
            raise TemplateError(f"no answer given for {question!r}") from None
        complaint = validator(answer) if validator else None
        if not complaint:
            return answer
        print(complaint)


def _load_setup(script: RaftPath) -> Callable[[TemplateArgs], Any]:
    spec = importlib.util.spec_from_file_location("raft_template_index", str(script))
    if spec is None or spec.loader is None:
        raise TemplateError(f"cannot load {script}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise TemplateError(f"{script} failed to load: {exc}") from exc
    setup = getattr(module, "setup", None)
    if not callable(setup):
        raise TemplateError(f"{script} does not define setup(args)")
    return setup


def collect_context(template_dir: RaftPath) -> dict[str, Any]:
    script = template_dir.append(TEMPLATE_SCRIPT)
    if not script.exists():
        raise TemplateError(f"no {TEMPLATE_SCRIPT} at {template_dir}")
    setup = _load_setup(script)
    args = TemplateArgs(ask=ask, error_message=error_message, RaftPath=RaftPath)
    try:
        context = setup(args)
    except TemplateError:
        raise
    except Exception as exc:
        raise TemplateError(f"{script} setup() failed: {exc}") from exc
    if not isinstance(context, dict):
        raise TemplateError(f"{script} setup() must return a dict")
    return context


def _render(text: str, context: Mapping[str, Any]) -> str:
    return Template(text).safe_substitute({k: str(v) for k, v in context.items()})


def _copy_file(source: RaftPath, destination: RaftPath, context: Mapping[str, Any]) -> None:
    try:
        text = source.read_text()
    except UnicodeDecodeError:
        shutil.copyfile(str(source), str(destination))
        return
    with open(str(destination), "w", encoding="utf-8") as handle:
        handle.write(_render(text, context))


def instantiate_template(
    template_dir: RaftPath, target_dir: RaftPath, context: Mapping[str, Any]
) -> list[RaftPath]:
    """Copy the template's file tree into ``target_dir``; return created files."""
    files_dir = template_dir.append(TEMPLATE_FILES_DIR)
    if not files_dir.is_dir():
        raise TemplateError(f"template has no {TEMPLATE_FILES_DIR}/ directory: {files_dir}")

    created = []
    for dirpath, _dirnames, filenames in os.walk(str(files_dir)):
        for filename in sorted(filenames):
            source = RaftPath(dirpath).append(filename)
            relative = os.path.relpath(str(source), str(files_dir))
            destination = target_dir.append(_render(relative, context))
            if destination.exists():
                raise TemplateError(f"refusing to overwrite {destination}")
            destination.parent().create_directory()
            try:
                _copy_file(source, destination, context)
            except OSError as exc:
                raise TemplateError(f"failed to write {destination}: {exc}") from exc
            info(f"created {destination}", "Template")
            created.append(destination)
    return created


def create(template_type: str, target_dir: RaftPath, template_root: RaftPath) -> list[RaftPath]:
    template_dir = template_root.append(template_type)
    context = collect_context(template_dir)
    return instantiate_template(template_dir, target_dir, context)
