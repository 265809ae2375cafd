from .logging import JsonlLogSink, LogMessage, LogSink, MemoryLogSink, NullLogSink, StdoutLogSink, log_to_dict

__all__ = [
    "JsonlLogSink",
    "LogMessage",
    "LogSink",
    "MemoryLogSink",
    "NullLogSink",
    "StdoutLogSink",
    "log_to_dict",
]
