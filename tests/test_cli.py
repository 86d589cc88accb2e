import json
from pathlib import Path

import pytest
from rich.console import Console

from main import main
from pyeditor.core.config_manager import EditorConfig
from pyeditor.interfaces.cli import EditorCLI


@pytest.fixture
def cli():
    console = Console(record=True, width=200, color_system=None)
    return EditorCLI(EditorConfig(board_id="9900"), console=console)


def write_script(tmp_path: Path, code: str) -> Path:
    script = tmp_path / "main.py"
    script.write_text(code, encoding="utf-8")
    return script


def test_check_file_reports_unavailable_names(cli, tmp_path):
    script = write_script(tmp_path, "from microbit import microphone\n")

    assert not cli.check_file(script)
    assert "microbit.microphone" in cli.console.export_text()
    assert cli.check_file(script, board_id="9903")


def test_check_file_with_unknown_board(cli, tmp_path):
    script = write_script(tmp_path, "import radio\n")

    assert not cli.check_file(script, board_id="0000")
    assert "Could not recognise the Board ID" in cli.console.export_text()


def test_show_api_with_prefix(cli):
    assert cli.show_api("9903", prefix="microbit.microphone.")
    output = cli.console.export_text()
    assert "microbit.microphone.LOUD" in output
    assert "microbit.display" not in output


def test_show_imports_tree(cli, tmp_path):
    script = write_script(tmp_path, "from microbit import display\nimport music\n")

    assert cli.show_imports(script)
    output = cli.console.export_text()
    assert "display" in output
    assert "music" in output


def test_list_boards(cli):
    assert cli.list_boards()
    assert "9904" in cli.console.export_text()


def test_analyze_missing_directory(cli, tmp_path):
    assert not cli.analyze(tmp_path / "nope")


def test_main_exit_codes(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    script = write_script(tmp_path, "from microbit import pin_logo\n")

    with pytest.raises(SystemExit) as exc_info:
        main(["check", str(script), "--board", "9900"])
    assert exc_info.value.code == 1

    with pytest.raises(SystemExit) as exc_info:
        main(["check", str(script), "--board", "9904"])
    assert exc_info.value.code == 0


def test_main_rejects_invalid_log_level_in_config(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "pyeditor.json").write_text(json.dumps({"log_level": "LOUD"}))

    with pytest.raises(SystemExit) as exc_info:
        main(["boards"])

    assert exc_info.value.code == 2
    assert "Invalid log level" in capsys.readouterr().err


def test_main_exits_cleanly_when_logging_cannot_be_set_up(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    def broken_setup(level, log_file):
        raise ValueError("Unable to configure handler 'file'")

    monkeypatch.setattr("main.setup_logging", broken_setup)

    with pytest.raises(SystemExit) as exc_info:
        main(["--log-file", str(tmp_path / "missing" / "editor.log"), "boards"])

    assert exc_info.value.code == 2
    assert "Could not set up logging" in capsys.readouterr().err
