import logging

import pytest

from pyeditor.core.config_manager import EditorConfig
from pyeditor.metrics import get_available_sinks, get_sink
from pyeditor.metrics.sinks import CallbackSink, LogSink, MemorySink, MetricsSink
from pyeditor.metrics.tracker import FileListing, MetricsTracker, ScriptBuffer


def make_tracker(code="from microbit import *", files=None, storage_used=0, **config):
    config.setdefault("hostname", "python.microbit.org")
    sink = MemorySink()
    tracker = MetricsTracker(
        EditorConfig(**config),
        ScriptBuffer(code),
        FileListing(files, storage_used),
        sink,
    )
    return tracker, sink


def test_download_sends_transfer_metrics_before_click():
    tracker, sink = make_tracker(files=["main.py", "data.txt"], storage_used=12 * 1024)
    tracker.capture_default_script()

    tracker.track_action("command-download")

    assert [(e.action, e.label) for e in sink.events] == [
        ("files", "2"),
        ("fs-used", "11-15"),
        ("lines", "default"),
        ("click", "download"),
    ]
    assert all(e.value == 1 for e in sink.events)
    assert sink.events[0].category == "Python Editor 2.0.0"


def test_modified_script_reports_line_bucket():
    tracker, sink = make_tracker()
    tracker.capture_default_script()
    tracker.editor.set_code("\n".join(["pass"] * 30))

    tracker.track_action("command-flash")

    assert sink.find("lines")[0].label == "21-50"


def test_other_clicks_only_send_click():
    tracker, sink = make_tracker()
    events = tracker.track_action("command-connect")

    assert [e.label for e in events] == ["connect"]
    assert sink.find("files") == []


def test_missing_filesystem_skips_file_metrics():
    sink = MemorySink()
    tracker = MetricsTracker(
        EditorConfig(hostname="python.microbit.org"), ScriptBuffer(""), sink=sink
    )

    tracker.track_action("command-download")

    assert [e.action for e in sink.events] == ["lines", "click"]


def test_disabled_metrics_send_nothing():
    tracker, sink = make_tracker(metrics_enabled=False)

    assert tracker.track_action("command-download") == []
    tracker.send_page_view()
    assert sink.events == []
    assert sink.metrics == []


def test_page_view_and_other_events():
    tracker, sink = make_tracker()

    tracker.send_page_view()
    tracker.measure_viewport(800)
    tracker.track_load("drop-editor", "main.py")
    tracker.track_upload(["a.py", "b.py"])
    tracker.track_webusb("flash-time", 2500)

    assert sink.metrics == ["pyeditor-2.0.0/page-load"]
    assert [(e.action, e.label) for e in sink.events] == [
        ("viewport", "481-890"),
        ("load", "drop-editor-py"),
        ("load", "error-file-upload-multiple"),
        ("WebUSB-time", "2-4"),
    ]


def test_sink_failures_are_not_raised():
    class BrokenSink(MetricsSink):
        def send_event(self, event):
            raise RuntimeError("network down")

        def send_metric(self, slug):
            raise RuntimeError("network down")

    tracker = MetricsTracker(
        EditorConfig(hostname="python.microbit.org"), ScriptBuffer(""), sink=BrokenSink()
    )

    event = tracker.track_webusb("error", "timeout")
    tracker.send_page_view()

    assert event.action == "WebUSB-error"


def test_local_host_only_logs(caplog):
    sink = MemorySink()
    tracker = MetricsTracker(EditorConfig(hostname="localhost"), ScriptBuffer(""), sink=sink)
    caplog.set_level(logging.INFO, logger="pyeditor.metrics.sinks")

    tracker.track_action("command-help")

    assert isinstance(tracker.sink, LogSink)
    assert sink.events == []
    assert "metric: click help 1" in caplog.text


def test_callback_sink_forwards_to_transport():
    sent = []
    sink = CallbackSink(lambda action, label, value, category: sent.append((action, label, value)))
    tracker = MetricsTracker(
        EditorConfig(hostname="python.microbit.org"), ScriptBuffer(""), sink=sink
    )

    tracker.track_action("command-zoom-in")
    tracker.send_page_view()

    assert sent == [("click", "zoom-in", 1)]


def test_sink_registry():
    assert set(get_available_sinks()) == {"log", "callback", "memory"}
    assert isinstance(get_sink("memory"), MemorySink)
    with pytest.raises(ValueError):
        get_sink("carrier-pigeon")
