from pathlib import Path

import pytest

from safelang.project import (
    INIT_MAIN_SAFE,
    INIT_MANIFEST,
    ProjectError,
    collect_source_with_imports,
    init_current_dir,
    init_new_project,
    init_project_at,
    parse_import_line,
)


def test_parse_import_line():
    assert parse_import_line('import "a.safe"') == "a.safe"
    assert parse_import_line('  import   "dir/b.safe"  ') == "dir/b.safe"
    assert parse_import_line("import a.safe") is None
    assert parse_import_line("let high_x = 1") is None


def test_parse_import_line_rejects_lone_quote():
    assert parse_import_line('import "') is None


def test_collect_source_with_imports_merges_dependencies(tmp_path):
    entry = tmp_path / "file1.safe"
    dep = tmp_path / "file2.safe"
    dep.write_text(
        "safe fn dep() {\n    let high_size: usize = 1\n"
        "    let high_buf = allocate_buffer(high_size)\n"
        "    deallocate_buffer(high_buf)\n}\n"
    )
    entry.write_text('import "file2.safe"\nsafe fn main() {\n    dep()\n}\n')

    merged = collect_source_with_imports(entry)
    assert "safe fn dep()" in merged
    assert "safe fn main()" in merged
    assert merged.index("safe fn dep()") < merged.index("safe fn main()")
    assert "import" not in merged


def test_collect_source_with_imports_detects_cycle(tmp_path):
    f1 = tmp_path / "file1.safe"
    f2 = tmp_path / "file2.safe"
    f1.write_text('import "file2.safe"\nsafe fn a() {}\n')
    f2.write_text('import "file1.safe"\nsafe fn b() {}\n')

    with pytest.raises(ProjectError, match="Import cycle detected"):
        collect_source_with_imports(f1)


def test_shared_dependency_is_included_once(tmp_path):
    (tmp_path / "common.safe").write_text("safe fn common() {}\n")
    (tmp_path / "a.safe").write_text('import "common.safe"\nsafe fn a() {}\n')
    (tmp_path / "b.safe").write_text('import "common.safe"\nsafe fn b() {}\n')
    entry = tmp_path / "main.safe"
    entry.write_text('import "a.safe"\nimport "b.safe"\nsafe fn main() {}\n')

    merged = collect_source_with_imports(entry)
    assert merged == (
        "safe fn common() {}\nsafe fn a() {}\nsafe fn b() {}\nsafe fn main() {}\n"
    )


def test_imports_resolve_relative_to_importing_file(tmp_path):
    sub = tmp_path / "lib"
    sub.mkdir()
    (sub / "inner.safe").write_text("safe fn inner() {}\n")
    (sub / "outer.safe").write_text('import "inner.safe"\nsafe fn outer() {}\n')
    entry = tmp_path / "main.safe"
    entry.write_text('import "lib/outer.safe"\nsafe fn main() {}\n')

    merged = collect_source_with_imports(entry)
    assert merged == "safe fn inner() {}\nsafe fn outer() {}\nsafe fn main() {}\n"


def test_missing_file_is_reported(tmp_path):
    with pytest.raises(ProjectError, match="Path not found"):
        collect_source_with_imports(tmp_path / "absent.safe")


def test_missing_import_is_reported(tmp_path):
    entry = tmp_path / "main.safe"
    entry.write_text('import "nowhere.safe"\nsafe fn main() {}\n')
    with pytest.raises(ProjectError, match="nowhere.safe"):
        collect_source_with_imports(entry)


def test_init_new_project_creates_files(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    root = init_new_project("demo")
    assert root == tmp_path / "demo"
    assert (tmp_path / "demo" / "Safe.toml").read_text() == INIT_MANIFEST
    assert (tmp_path / "demo" / "src" / "main.safe").read_text() == INIT_MAIN_SAFE
    assert "Initialized SAFE project at" in capsys.readouterr().out


def test_init_manifest_content(tmp_path):
    init_project_at(tmp_path, False)
    assert (tmp_path / "Safe.toml").read_text() == 'name = "safe-project"\nversion = "1.0"\n'
    assert (tmp_path / "src" / "main.safe").read_text().startswith("safe fn main() {\n")


def test_init_new_project_rejects_existing_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "demo").mkdir()
    with pytest.raises(ProjectError, match="Directory already exists"):
        init_new_project("demo")


def test_init_new_project_rejects_empty_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ProjectError, match="Project name cannot be empty"):
        init_new_project("   ")


def test_init_current_dir_keeps_existing_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "Safe.toml").write_text("custom\n")
    root = init_current_dir()
    assert Path(root).resolve() == tmp_path.resolve()
    assert (tmp_path / "Safe.toml").read_text() == "custom\n"
    assert (tmp_path / "src" / "main.safe").read_text() == INIT_MAIN_SAFE


def test_init_project_at_requires_existing_directory(tmp_path):
    with pytest.raises(ProjectError, match="Directory does not exist"):
        init_project_at(tmp_path / "missing", False)


def test_generated_project_collects(tmp_path):
    init_project_at(tmp_path, False)
    merged = collect_source_with_imports(tmp_path / "src" / "main.safe")
    assert merged == INIT_MAIN_SAFE