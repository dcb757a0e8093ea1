"""Project scaffolding and import-resolving source collection."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]

INIT_MANIFEST = 'name = "safe-project"\nversion = "1.0"\n'
INIT_MAIN_SAFE = (
    "safe fn main() {\n"
    "    let high_size: usize = 4\n"
    "    let high_buf = allocate_buffer(high_size)\n"
    "    deallocate_buffer(high_buf)\n"
    "}\n"
)


class ProjectError(Exception):
    """Raised when a project cannot be set up or its sources cannot be collected."""


def parse_import_line(line: str) -> Optional[str]:
    """Return the quoted path of an ``import "path"`` line, or None."""
    trimmed = line.strip()
    if not trimmed.startswith("import"):
        return None
    rest = trimmed[len("import"):].lstrip()
    if len(rest) >= 2 and rest.startswith('"') and rest.endswith('"'):
        return rest[1:-1]
    return None


def _canonicalize_existing(path: Path) -> Path:
    try:
        return path.resolve(strict=True)
    except OSError as exc:
        raise ProjectError(f"Path not found '{path}': {exc}") from exc


def _source_lines(content: str) -> list[str]:
    if not content:
        return []
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def collect_source_with_imports(entry_file: PathLike) -> str:
    """Merge a source file with everything it imports, dependencies first.

    Each file is included once; an import cycle raises ProjectError.
    """
    visited: set[Path] = set()
    visiting: set[Path] = set()
    stack: list[Path] = []
    cache: dict[Path, str] = {}
    output: list[str] = []

    def collect(file: Path) -> None:
        canonical = _canonicalize_existing(file)
        if canonical in visited:
            return
        if canonical in visiting:
            chain = " -> ".join(str(p) for p in [*stack, canonical])
            raise ProjectError(f"Import cycle detected: {chain}")

        visiting.add(canonical)
        stack.append(canonical)

        content = cache.get(canonical)
        if content is None:
            try:
                content = canonical.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ProjectError(f"Failed to read '{canonical}': {exc}") from exc
            cache[canonical] = content

        body_lines: list[str] = []
        for line in _source_lines(content):
            import_path = parse_import_line(line)
            if import_path is not None:
                collect(canonical.parent / import_path)
            else:
                body_lines.append(line + "\n")

        body = "".join(body_lines)
        output.append(body)
        if not body.endswith("\n"):
            output.append("\n")

        stack.pop()
        visiting.discard(canonical)
        visited.add(canonical)

    collect(Path(entry_file))
    return "".join(output)


def _write_if_missing(path: Path, content: str) -> None:
    if path.exists():
        return
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ProjectError(f"Failed to write '{path}': {exc}") from exc


def init_project_at(path: PathLike, create_root: bool) -> Path:
    """Create the manifest and ``src/main.safe`` at ``path`` unless they exist."""
    root = Path(path)
    if create_root:
        if root.exists():
            raise ProjectError(f"Directory already exists: {root}")
        try:
            root.mkdir(parents=True)
        except OSError as exc:
            raise ProjectError(f"Failed to create directory '{root}': {exc}") from exc
    elif not root.exists():
        raise ProjectError(f"Directory does not exist: {root}")

    src_dir = root / "src"
    if not src_dir.exists():
        try:
            src_dir.mkdir(parents=True)
        except OSError as exc:
            raise ProjectError(f"Failed to create '{src_dir}': {exc}") from exc

    _write_if_missing(root / "Safe.toml", INIT_MANIFEST)
    _write_if_missing(src_dir / "main.safe", INIT_MAIN_SAFE)

    print(f"Initialized SAFE project at {root}")
    return root


def _current_dir() -> Path:
    try:
        return Path.cwd()
    except OSError as exc:
        raise ProjectError(f"Failed to get current dir: {exc}") from exc


def init_current_dir() -> Path:
    """Initialise a project in the working directory."""
    return init_project_at(_current_dir(), False)


def init_new_project(name: str) -> Path:
    """Create a new project directory called ``name`` in the working directory."""
    if not name.strip():
        raise ProjectError("Project name cannot be empty")
    return init_project_at(_current_dir() / name, True)