import io
import json
import sys

import pytest

from cctx.context import ContextError, ContextManager, SettingsLevel
from cctx.state import load_state


@pytest.fixture
def dirs(tmp_path):
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    return home, work


@pytest.fixture
def manager(dirs):
    home, work = dirs
    return ContextManager(SettingsLevel.USER, home_dir=home, current_dir=work)


def test_user_level_paths(manager, dirs):
    home, _ = dirs
    assert manager.claude_settings_path == home / ".claude" / "settings.json"
    assert manager.contexts_dir == home / ".claude" / "settings"
    assert manager.state_path == home / ".claude" / "settings" / ".cctx-state.json"
    assert manager.contexts_dir.is_dir()


def test_project_and_local_level_paths(dirs):
    home, work = dirs
    project = ContextManager(SettingsLevel.PROJECT, home_dir=home, current_dir=work)
    local = ContextManager(SettingsLevel.LOCAL, home_dir=home, current_dir=work)
    assert project.claude_settings_path == work / ".claude" / "settings.json"
    assert local.claude_settings_path == work / ".claude" / "settings.local.json"
    assert local.state_path == work / ".claude" / "settings" / ".cctx-state.local.json"
    assert project.contexts_dir == local.contexts_dir == work / ".claude" / "settings"


def test_create_empty_context(manager, capsys):
    manager.create_context("work")
    assert json.loads(manager.context_path("work").read_text()) == {}
    assert manager.list_contexts() == ["work"]
    assert "created (empty)" in capsys.readouterr().out


def test_create_from_current_settings(manager, capsys):
    manager.claude_settings_path.write_text('{"model": "opus"}')
    manager.create_context("copy")
    assert manager.context_path("copy").read_text() == '{"model": "opus"}'
    assert "created from current settings" in capsys.readouterr().out


@pytest.mark.parametrize("name", ["", "-", ".", "..", "a/b"])
def test_create_rejects_invalid_names(manager, name):
    with pytest.raises(ContextError, match="invalid context name"):
        manager.create_context(name)


def test_create_rejects_duplicates(manager):
    manager.create_context("work")
    with pytest.raises(ContextError, match="already exists"):
        manager.create_context("work")


def test_list_skips_hidden_and_non_json(manager):
    for name in ["b.json", "a.json", ".hidden.json", "notes.txt"]:
        (manager.contexts_dir / name).write_text("{}")
    assert manager.list_contexts() == ["a", "b"]


def test_switch_copies_settings_and_tracks_state(manager, capsys):
    manager.context_path("a").write_text('{"x": 1}')
    manager.context_path("b").write_text('{"x": 2}')
    manager.switch_context("a")
    manager.switch_context("b")
    assert manager.claude_settings_path.read_text() == '{"x": 2}'
    state = load_state(manager.state_path)
    assert (state.current, state.previous) == ("b", "a")
    assert 'Switched to context "b"' in capsys.readouterr().out


def test_switch_to_previous(manager):
    manager.context_path("a").write_text('{"x": 1}')
    manager.context_path("b").write_text('{"x": 2}')
    manager.switch_context("a")
    manager.switch_context("b")
    manager.switch_to_previous()
    assert manager.get_current_context() == "a"
    assert manager.claude_settings_path.read_text() == '{"x": 1}'


def test_switch_unknown_context(manager):
    with pytest.raises(ContextError, match='no context exists with the name "nope"'):
        manager.switch_context("nope")


def test_switch_to_previous_without_history(manager):
    with pytest.raises(ContextError, match="no previous context"):
        manager.switch_to_previous()


def test_delete_active_context_is_refused(manager):
    manager.create_context("a")
    manager.switch_context("a")
    with pytest.raises(ContextError, match="cannot delete the active context"):
        manager.delete_context("a")
    assert manager.context_path("a").exists()


def test_delete_clears_previous(manager):
    manager.create_context("a")
    manager.create_context("b")
    manager.switch_context("a")
    manager.switch_context("b")
    manager.delete_context("a")
    assert manager.list_contexts() == ["b"]
    assert load_state(manager.state_path).previous is None


def test_delete_missing_context(manager):
    with pytest.raises(ContextError, match="no context exists"):
        manager.delete_context("ghost")


def test_rename_updates_state(manager):
    manager.create_context("a")
    manager.create_context("b")
    manager.switch_context("a")
    manager.switch_context("b")
    manager.rename_context("a", "alpha")
    manager.rename_context("b", "beta")
    assert manager.list_contexts() == ["alpha", "beta"]
    state = load_state(manager.state_path)
    assert (state.current, state.previous) == ("beta", "alpha")


def test_rename_errors(manager):
    manager.create_context("a")
    manager.create_context("b")
    with pytest.raises(ContextError, match="already exists"):
        manager.rename_context("a", "b")
    with pytest.raises(ContextError, match="no context exists"):
        manager.rename_context("missing", "c")
    with pytest.raises(ContextError, match="invalid context name"):
        manager.rename_context("a", "..")


def test_show_pretty_prints_json(manager, capsys):
    manager.context_path("a").write_text('{"b": 1, "a": [true]}')
    manager.show_context("a")
    out = capsys.readouterr().out
    assert json.loads(out) == {"a": [True], "b": 1}
    assert out.index('"a"') < out.index('"b"')


def test_export_writes_raw_content(manager, capsys):
    manager.context_path("a").write_text('{"k":"v"}')
    manager.export_context("a")
    assert capsys.readouterr().out == '{"k":"v"}'


def test_export_missing_context(manager):
    with pytest.raises(ContextError, match="no context exists"):
        manager.export_context("nope")


def test_import_from_stream_round_trips_with_export(manager, capsys):
    payload = '{"env": {"A": "1"}}\n'
    manager.import_context("imported", io.StringIO(payload))
    capsys.readouterr()
    manager.export_context("imported")
    assert capsys.readouterr().out == payload


def test_import_rejects_invalid_json(manager):
    with pytest.raises(ContextError, match="invalid JSON input"):
        manager.import_context("bad", io.StringIO("{oops"))
    assert "bad" not in manager.list_contexts()


def test_import_rejects_existing_name(manager):
    manager.create_context("a")
    with pytest.raises(ContextError, match="already exists"):
        manager.import_context("a", io.StringIO("{}"))


def test_unset_removes_settings_and_clears_current(manager, capsys):
    manager.create_context("a")
    manager.switch_context("a")
    manager.unset_context()
    assert not manager.claude_settings_path.exists()
    state = load_state(manager.state_path)
    assert (state.current, state.previous) == (None, "a")
    assert "Unset current context" in capsys.readouterr().out


def test_edit_runs_editor(manager, monkeypatch):
    manager.create_context("a")
    monkeypatch.setenv("EDITOR", sys.executable)
    manager.edit_context("a")
    assert json.loads(manager.context_path("a").read_text()) == {}


def test_edit_reports_editor_failure(manager, monkeypatch):
    manager.context_path("broken").write_text("this is not python ?")
    monkeypatch.setenv("EDITOR", sys.executable)
    with pytest.raises(ContextError, match="editor exited with non-zero status"):
        manager.edit_context("broken")


def test_edit_missing_context(manager):
    with pytest.raises(ContextError, match="no context exists"):
        manager.edit_context("nope")


def test_list_quiet_shows_only_current(manager, capsys):
    manager.create_context("a")
    manager.create_context("b")
    manager.switch_context("b")
    capsys.readouterr()
    manager.list_contexts_with_current(quiet=True)
    assert capsys.readouterr().out == "b\n"


def test_list_marks_current(manager, capsys):
    manager.create_context("a")
    manager.create_context("b")
    manager.switch_context("a")
    capsys.readouterr()
    manager.list_contexts_with_current(quiet=False)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].endswith("User contexts:")
    assert lines[1:] == ["  a (current)", "  b"]


def test_list_empty_message(manager, capsys):
    manager.list_contexts_with_current(quiet=False)
    assert "No contexts found. Create one with: cctx -n <name>" in capsys.readouterr().out


def test_project_and_local_hints(manager, dirs, capsys):
    _, work = dirs
    assert not manager.has_project_contexts()
    assert not manager.has_local_contexts()
    project_dir = work / ".claude" / "settings"
    project_dir.mkdir(parents=True)
    (project_dir / "team.json").write_text("{}")
    (work / ".claude" / "settings.local.json").write_text("{}")
    assert manager.has_project_contexts()
    assert manager.has_local_contexts()
    manager.list_contexts_with_current(quiet=False)
    out = capsys.readouterr().out
    assert "run 'cctx --in-project' to manage" in out
    assert "run 'cctx --local' to manage" in out


def test_hidden_project_files_do_not_count(manager, dirs):
    _, work = dirs
    project_dir = work / ".claude" / "settings"
    project_dir.mkdir(parents=True)
    (project_dir / ".cctx-state.json").write_text("{}")
    assert manager.has_project_contexts() is False