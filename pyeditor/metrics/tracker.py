"""Analytics for editor actions: downloads, flashing, file loads and clicks."""
from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

from pyeditor.core.config_manager import EditorConfig
from pyeditor.metrics import labels
from pyeditor.metrics.sinks import LogSink, MetricEvent, MetricsSink

logger = logging.getLogger(__name__)

# Clicking these also reports the size of what is being sent to the board
_TRANSFER_ACTIONS = ("flash", "download")


class Editor(Protocol):
    def get_code(self) -> str: ...


class Filesystem(Protocol):
    def ls(self) -> Sequence[str]: ...

    def get_storage_used(self) -> int: ...


class MetricsTracker:
    """Turns editor activity into bucketed analytics events.

    On development hosts (see :attr:`EditorConfig.is_local`) events are only
    logged, whatever sink was passed in.
    """

    def __init__(
            self,
            config: EditorConfig,
            editor: Editor,
            filesystem: Optional[Filesystem] = None,
            sink: Optional[MetricsSink] = None,
    ):
        self.config = config
        self.editor = editor
        self.filesystem = filesystem
        if config.is_local or sink is None:
            self.sink: MetricsSink = LogSink()
        else:
            self.sink = sink
        self.default_script = ""

    def capture_default_script(self) -> None:
        """Remember the script loaded at start-up to detect unmodified downloads."""
        self.default_script = self.editor.get_code()

    def _send(self, action: str, label: str, value: int = 1) -> Optional[MetricEvent]:
        if not self.config.metrics_enabled:
            return None
        event = MetricEvent(action, label, value, self.config.metrics_category)
        try:
            self.sink.send_event(event)
        except Exception as e:
            logger.warning(f"Failed to send metric {event.action}/{event.label}: {e}")
        return event

    def send_page_view(self) -> None:
        if not self.config.metrics_enabled:
            return
        slug = f"pyeditor-{self.config.editor_version}/page-load"
        try:
            self.sink.send_metric(slug)
        except Exception as e:
            logger.warning(f"Failed to send page view metric: {e}")

    def measure_viewport(self, width: int) -> Optional[MetricEvent]:
        return self._send("viewport", labels.viewport_label(width))

    def track_lines(self) -> Optional[MetricEvent]:
        code = self.editor.get_code()
        return self._send("lines", labels.lines_label(code, self.default_script))

    def track_files(self) -> Optional[MetricEvent]:
        if self.filesystem is None:
            logger.debug("No filesystem attached, skipping files metric")
            return None
        return self._send("files", labels.files_label(len(self.filesystem.ls())))

    def track_fs_size(self) -> Optional[MetricEvent]:
        if self.filesystem is None:
            logger.debug("No filesystem attached, skipping fs-used metric")
            return None
        return self._send("fs-used", labels.fs_size_label(self.filesystem.get_storage_used()))

    def track_load(self, source: str, filename: str) -> Optional[MetricEvent]:
        """A file dropped on the editor (``drop-editor``) or the load area (``drop-load``)."""
        return self._send("load", labels.load_label(source, filename))

    def track_upload(self, filenames: Sequence[str]) -> Optional[MetricEvent]:
        """Files chosen in the Load/Save dialog."""
        return self._send("load", labels.upload_label(filenames))

    def track_webusb(self, event_type: str, message) -> Optional[MetricEvent]:
        action, label = labels.webusb_event(event_type, message)
        return self._send(action, label)

    def track_action(self, element_id: Optional[str]) -> List[MetricEvent]:
        """Report a click on an ``.action`` element.

        Flash and download clicks are preceded by the files, fs-used and
        lines metrics of the script being transferred.
        """
        action = labels.action_id(element_id)
        events: List[Optional[MetricEvent]] = []
        if action in _TRANSFER_ACTIONS:
            events.append(self.track_files())
            events.append(self.track_fs_size())
            events.append(self.track_lines())
        events.append(self._send("click", action))
        return [event for event in events if event is not None]


class ScriptBuffer:
    """Minimal editor holding the current script text."""

    def __init__(self, code: str = ""):
        self.code = code

    def get_code(self) -> str:
        return self.code

    def set_code(self, text: str) -> None:
        self.code = text


class FileListing:
    """Minimal filesystem snapshot: file names and bytes used."""

    def __init__(self, files: Optional[Sequence[str]] = None, storage_used: int = 0):
        self.files = list(files or [])
        self.storage_used = storage_used

    def ls(self) -> List[str]:
        return list(self.files)

    def get_storage_used(self) -> int:
        return self.storage_used
