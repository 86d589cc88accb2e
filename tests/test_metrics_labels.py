import pytest

from pyeditor.metrics import labels


def test_bucket_label():
    assert labels.bucket_label(25, labels.LINES_RANGES) == "21-50"
    assert labels.bucket_label(-1, labels.LINES_RANGES) == ""


def test_viewport_label():
    assert labels.viewport_label(800) == "481-890"
    assert labels.viewport_label(1920) == "1281-10000"


def test_lines_label():
    code = "#first line" + "\n" * 21 + "#last line"
    assert labels.lines_label(code, default_script="") == "21-50"
    assert labels.lines_label("a\r\nb\rc") == "0-20"
    assert labels.lines_label("print(1)", default_script="print(1)") == "default"


def test_files_label():
    assert labels.files_label(0) == "0"
    assert labels.files_label(2) == "2"
    assert labels.files_label(10) == "10"
    assert labels.files_label(12) == "11-15"
    assert labels.files_label(30) == "26-1000"


def test_fs_size_label_uses_whole_kilobytes():
    assert labels.fs_size_label(12 * 1024) == "11-15"
    assert labels.fs_size_label(5 * 1024 + 512) == "0-5"
    assert labels.fs_size_label(30 * 1024) == "26-30"
    assert labels.fs_size_label(31 * 1024) == "30-1000"


@pytest.mark.parametrize("filename, expected", [
    ("main.py", "py"),
    ("Firmware.HEX", "hex"),
    ("archive.tar.gz", "gz"),
    ("README", "none"),
    ("trailing.", "none"),
])
def test_file_extension(filename, expected):
    assert labels.file_extension(filename) == expected


def test_load_label():
    assert labels.load_label("drop-editor", "main.py") == "drop-editor-py"
    assert labels.load_label("drop-load", "notes.txt") == "error-drop-load-type-txt"
    with pytest.raises(ValueError):
        labels.load_label("clipboard", "main.py")


def test_upload_label():
    assert labels.upload_label(["program.hex"]) == "file-upload-hex"
    assert labels.upload_label(["notes.txt"]) == "error-file-upload-type-txt"
    assert labels.upload_label(["a.py", "b.py"]) == "error-file-upload-multiple"


@pytest.mark.parametrize("milliseconds, expected", [
    (1999, "0-2"),
    (2000, "2-4"),
    (4000, "2-4"),
    (4001, "4-6"),
    (120000, "60-120"),
    (120001, "120+"),
])
def test_flash_time_label(milliseconds, expected):
    assert labels.flash_time_label(milliseconds) == expected


def test_webusb_event():
    assert labels.webusb_event("flash-time", "3500") == ("WebUSB-time", "2-4")
    assert labels.webusb_event("info", "partial-flash") == ("WebUSB-info", "partial-flash")
    assert labels.webusb_event("error", "timeout") == ("WebUSB-error", "timeout")
    assert labels.webusb_event("odd", "thing") == ("WebUSB-error", "unknown-event/odd/thing")


@pytest.mark.parametrize("message", ["n/a", "", None])
def test_webusb_flash_time_without_a_number(message):
    assert labels.webusb_event("flash-time", message) == ("WebUSB-time", "unknown")


@pytest.mark.parametrize("element_id, expected", [
    ("command-download", "download"),
    ("command-snippet", "snippet"),
    ("command-command-x", "command-x"),
    ("fs-file-main.py_save", "file-save"),
    ("fs-file-main.py_remove", "file-remove"),
    ("flashing-overlay-download", "webusb/error-modal/download-hex"),
    ("flashing-overlay-troubleshoot", "webusb/error-modal/troubleshoot"),
    (None, "unknown"),
    ("", "unknown"),
])
def test_action_id(element_id, expected):
    assert labels.action_id(element_id) == expected
