"""Destinations for analytics events."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricEvent:
    """A single analytics event."""
    action: str
    label: str
    value: int = 1
    category: str = ""

    def __str__(self) -> str:
        return f"metric: {self.action} {self.label} {self.value}"


class MetricsSink:
    """Base class for metrics destinations.

    Sinks are fire-and-forget: callers never look at a result and a sink
    must not be relied on for delivery. Subclasses override
    :meth:`send_event` and :meth:`send_metric`.
    """

    name: str = "base"

    def send_event(self, event: MetricEvent) -> None:
        """Report an action/label/value event."""
        raise NotImplementedError

    def send_metric(self, slug: str) -> None:
        """Report a plain counter, such as a page view."""
        raise NotImplementedError


class LogSink(MetricsSink):
    """Writes events to the log, used on development hosts."""

    name = "log"

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def send_event(self, event: MetricEvent) -> None:
        self.log.info(str(event))

    def send_metric(self, slug: str) -> None:
        self.log.info(f"metric: {slug}")


class CallbackSink(MetricsSink):
    """Forwards events to the analytics transport of the embedding app."""

    name = "callback"

    def __init__(
            self,
            send_event: Callable[[str, str, int, str], None],
            send_metric: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._send_event = send_event
        self._send_metric = send_metric

    def send_event(self, event: MetricEvent) -> None:
        self._send_event(event.action, event.label, event.value, event.category)

    def send_metric(self, slug: str) -> None:
        if self._send_metric is None:
            logger.debug(f"No metric transport configured, dropping {slug}")
            return
        self._send_metric(slug)


class MemorySink(MetricsSink):
    """Keeps every event in memory."""

    name = "memory"

    def __init__(self) -> None:
        self.events: List[MetricEvent] = []
        self.metrics: List[str] = []

    def send_event(self, event: MetricEvent) -> None:
        self.events.append(event)

    def send_metric(self, slug: str) -> None:
        self.metrics.append(slug)

    def find(self, action: str, label: Optional[str] = None) -> List[MetricEvent]:
        return [
            e for e in self.events
            if e.action == action and (label is None or e.label == label)
        ]
