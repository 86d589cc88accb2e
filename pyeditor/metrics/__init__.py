from typing import Dict, List, Type
import logging


from pyeditor.metrics.sinks import CallbackSink, LogSink, MemorySink, MetricEvent, MetricsSink

logger = logging.getLogger(__name__)

SINKS: Dict[str, Type[MetricsSink]] = {
    'log': LogSink,
    'callback': CallbackSink,
    'memory': MemorySink,
}


def get_available_sinks() -> List[str]:
    """Get list of available sink names."""
    return list(SINKS.keys())


def get_sink(sink_name: str, **kwargs) -> MetricsSink:
    """Create a metrics sink by name."""
    if sink_name not in SINKS:
        raise ValueError(f"Metrics sink '{sink_name}' not found.")

    sink = SINKS[sink_name](**kwargs)
    logger.debug(f"Created '{sink_name}' metrics sink")
    return sink


__all__ = [
    "MetricEvent",
    "MetricsSink",
    "LogSink",
    "CallbackSink",
    "MemorySink",
    "get_available_sinks",
    "get_sink",
]
