"""
Resolution logger for the ZNS resolution system.

Provides structured logging with dual-format output (JSON and human-readable
text), a minimum level filter, and masking of credentials that may appear
in RPC urls or configuration.
"""

import json
import sys
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, TextIO
from urllib.parse import urlsplit, urlunsplit

from .enums import LogLevel, ResolutionState


@dataclass
class LogEntry:
    """Represents a single log entry with all metadata."""

    timestamp: str
    level: LogLevel
    component: str
    message: str
    data: dict = field(default_factory=dict)


class ResolutionLogger:
    """
    Structured logger used by the resolution pipeline and CLI.

    Supports:
    - JSON and human-readable text output formats
    - Filtering below a minimum level
    - Automatic masking of sensitive data, including credentials carried
      in url userinfo or query parameters
    - An optional bounded history of recent entries
    """

    SENSITIVE_KEYS = frozenset({
        "token", "secret", "password", "api_key", "apikey", "authorization",
    })

    MASK_VALUE = "***MASKED***"

    def __init__(
        self,
        output_format: str = "text",
        output_stream: Optional[TextIO] = None,
        level: LogLevel = LogLevel.INFO,
        history_size: int = 0,
    ):
        """
        Initialize the logger.

        Args:
            output_format: Output format - 'json', 'text', or 'both'
            output_stream: Output stream for log entries (defaults to sys.stderr)
            level: Entries below this level are dropped
            history_size: Number of recent entries kept for inspection;
                0 keeps none
        """
        if output_format not in ("json", "text", "both"):
            raise ValueError(f"Invalid output_format: {output_format}")

        self._output_format = output_format
        self._output_stream = output_stream or sys.stderr
        self._level = level
        self._entries: deque[LogEntry] = deque(maxlen=history_size)

    @classmethod
    def from_config(cls, level: str, output_format: str, output_stream: Optional[TextIO] = None) -> "ResolutionLogger":
        """Build a logger from LoggingConfig-style strings."""
        try:
            log_level = LogLevel(level.lower())
        except ValueError:
            log_level = LogLevel.INFO
        if output_format not in ("json", "text", "both"):
            output_format = "text"
        return cls(output_format=output_format, output_stream=output_stream, level=log_level)

    @property
    def output_format(self) -> str:
        return self._output_format

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def entries(self) -> list[LogEntry]:
        """Recent entries, oldest first, up to history_size of them."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Log an entry in the configured format(s).

        Returns:
            The created LogEntry, or None if it was below the level filter
        """
        if level.severity < self._level.severity:
            return None

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            component=component,
            message=message,
            data=self.mask_sensitive_data(data or {}),
        )
        self._entries.append(entry)
        self._output_entry(entry)
        return entry

    def log_transition(
        self,
        domain: str,
        from_state: ResolutionState,
        to_state: ResolutionState,
    ) -> Optional[LogEntry]:
        """Record one step of the resolution state machine."""
        level = LogLevel.INFO if to_state is ResolutionState.UNCLAIMED else LogLevel.DEBUG
        return self.log(
            level,
            "resolution",
            f"{from_state.value} -> {to_state.value}",
            {"domain": domain, "from": from_state.value, "to": to_state.value},
        )

    def log_error(
        self,
        component: str,
        message: str,
        error: Optional[Exception] = None,
        request_url: Optional[str] = None,
        additional_data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Log an error with full context.

        Args:
            component: Component name generating the log
            message: Human-readable error message
            error: Optional exception object
            request_url: Optional URL of the failed request
            additional_data: Optional additional context data
        """
        data = additional_data.copy() if additional_data else {}

        if error is not None:
            data["error_message"] = str(error)
            data["error_type"] = type(error).__name__

        if request_url is not None:
            data["request_url"] = request_url

        return self.log(LogLevel.ERROR, component, message, data)

    def mask_sensitive_data(self, data: dict) -> dict:
        """Recursively mask sensitive values in a dictionary."""
        if not isinstance(data, dict):
            return data

        masked = {}
        for key, value in data.items():
            if self._is_sensitive(key):
                masked[key] = self.MASK_VALUE
            elif isinstance(value, str) and str(key).lower().endswith("url"):
                masked[key] = self.mask_url(value)
            elif isinstance(value, dict):
                masked[key] = self.mask_sensitive_data(value)
            elif isinstance(value, list):
                masked[key] = [
                    self.mask_sensitive_data(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                masked[key] = value
        return masked

    def _is_sensitive(self, key: object) -> bool:
        key_lower = str(key).lower()
        return any(sensitive in key_lower for sensitive in self.SENSITIVE_KEYS)

    def mask_url(self, url: str) -> str:
        """Mask the userinfo password and sensitive query values of a url."""
        parts = urlsplit(url)

        netloc = parts.netloc
        if parts.password:
            userinfo, _, host = netloc.rpartition("@")
            user = userinfo.split(":", 1)[0]
            netloc = f"{user}:{self.MASK_VALUE}@{host}"

        pairs = []
        for pair in parts.query.split("&"):
            name = pair.split("=", 1)[0]
            pairs.append(f"{name}={self.MASK_VALUE}" if self._is_sensitive(name) else pair)

        return urlunsplit(parts._replace(netloc=netloc, query="&".join(pairs)))

    def _output_entry(self, entry: LogEntry) -> None:
        if self._output_format in ("json", "both"):
            self._output_stream.write(self.format_json(entry) + "\n")
        if self._output_format in ("text", "both"):
            self._output_stream.write(self.format_text(entry) + "\n")
        self._output_stream.flush()

    def format_json(self, entry: LogEntry) -> str:
        """Format a log entry as a single JSON line."""
        return json.dumps({
            "timestamp": entry.timestamp,
            "level": entry.level.value,
            "component": entry.component,
            "message": entry.message,
            "data": entry.data,
        }, ensure_ascii=False, default=str)

    def format_text(self, entry: LogEntry) -> str:
        """Format: [TIMESTAMP] LEVEL [COMPONENT] MESSAGE {data}"""
        parts = [
            f"[{entry.timestamp}]",
            entry.level.value.upper(),
            f"[{entry.component}]",
            entry.message,
        ]
        if entry.data:
            parts.append(json.dumps(entry.data, ensure_ascii=False, default=str))
        return " ".join(parts)

    def clear_entries(self) -> None:
        self._entries.clear()


class NullLogger(ResolutionLogger):
    """Logger that keeps and writes nothing."""

    def __init__(self) -> None:
        super().__init__(output_format="text", level=LogLevel.ERROR)

    def log(self, level, component, message, data=None):
        return None
