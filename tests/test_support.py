import json

from core.config import ConfigManager
from core.hashing import get_text_hash, window_fingerprint
from core.processor import export_name, export_script
from main import main
from state_manager import AppState

from conftest import make_window


def test_export_name():
    assert export_name("script.lua") == "script.lua"
    assert export_name("hub.txt", "lua") == "hub.lua"
    assert export_name("script.lua", "txt") == "script.txt"
    assert export_name("noext") == "noext.lua"


def test_export_script_creates_directory(tmp_path):
    path = export_script("print(1)\n", "a.lua", str(tmp_path / "out"))
    with open(path, encoding="utf-8") as f:
        assert f.read() == "print(1)\n"


def test_fingerprints():
    assert window_fingerprint(make_window("A")) == window_fingerprint(make_window("A"))
    assert window_fingerprint(make_window("A")) != window_fingerprint(make_window("B"))
    assert get_text_hash("x") == get_text_hash("x")
    assert len(get_text_hash("x")) == 64


def test_config_defaults_and_overrides(tmp_path):
    path = tmp_path / "config.json"
    assert ConfigManager(str(path)).get("history_capacity") == 50

    path.write_text(json.dumps({"history_capacity": 20}))
    cfg = ConfigManager(str(path))
    assert cfg.get("history_capacity") == 20
    assert cfg.get_hotkey("undo") == "ctrl+z"

    path.write_text("{broken")
    assert ConfigManager(str(path)).get("history_capacity") == 50


def test_config_save(tmp_path):
    path = tmp_path / "config.json"
    cfg = ConfigManager(str(path))
    cfg.set_value("export_extension", "txt")
    assert ConfigManager(str(path)).get("export_extension") == "txt"


def test_app_state_console():
    state = AppState()
    state.add_log("hello")
    assert state.status_msg == "hello"
    assert not state.console_open
    entry = state.add_log("bad", "error")
    assert entry.type == "error"
    assert state.console_open
    assert len(entry.timestamp) == 8


def test_cli_generate_and_check(tmp_path, capsys):
    layout = tmp_path / "layout.json"
    layout.write_text(json.dumps({
        "title": "Hub",
        "folders": [{"id": "f1", "text": "Main", "elements": [
            {"type": "Toggle", "id": "t1", "text": "A", "flag": "same"},
            {"type": "Toggle", "id": "t2", "text": "B", "flag": "same"},
        ]}],
    }))
    out = tmp_path / "hub.lua"
    assert main(["generate", str(layout), "-o", str(out)]) == 0
    assert "AddToggle" in out.read_text()

    assert main(["check", str(layout)]) == 0
    assert 'Duplicate flag detected: "same"' in capsys.readouterr().out


def test_cli_diff(tmp_path, capsys):
    old = tmp_path / "old.json"
    new = tmp_path / "new.json"
    old.write_text(json.dumps({"title": "Old", "folders": []}))
    new.write_text(json.dumps({"title": "New", "folders": []}))
    assert main(["diff", str(old), str(new)]) == 0
    output = capsys.readouterr().out
    assert '+ local window = library:CreateWindow("New")' in output
    assert '- local window = library:CreateWindow("Old")' in output


def test_cli_reports_bad_input(tmp_path):
    assert main(["generate", str(tmp_path / "missing.json")]) == 1
