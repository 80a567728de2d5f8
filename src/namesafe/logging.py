# ============================================================================
# SOURCEFILE: logging.py
# RELPATH: namesafe/src/namesafe/logging.py
# PROJECT: NameSafe Download Filename Sanitizer
# VERSION: 1.0.0
# LIFECYCLE: Proposed
# DESCRIPTION: Structured JSON session logging and UTF-8 console setup
# ============================================================================

"""
Structured Logging Module.

Writes one JSON object per line for every sanitize/check run, so a batch of
renamed downloads can be audited afterwards. Also makes sure the console
can print arbitrary Unicode filenames.
"""

from __future__ import annotations

import io
import json
import uuid
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Any
from enum import Enum
import sys


def _ensure_stream_utf8(stream: Optional[io.TextIOBase]) -> Optional[io.TextIOBase]:
    """Ensure a text stream writes UTF-8, wrapping if necessary."""
    if stream is None:
        return None

    encoding = getattr(stream, "encoding", None)
    is_utf8 = isinstance(encoding, str) and encoding.lower().replace("_", "-") in ("utf-8", "utf8")
    if is_utf8 and getattr(stream, "errors", None) != "strict":
        return stream

    reconfigure = getattr(stream, "reconfigure", None)
    if callable(reconfigure):
        try:
            # Lone surrogates in filenames must still print
            reconfigure(encoding="utf-8", errors="backslashreplace")
            return stream
        except (ValueError, io.UnsupportedOperation):
            pass

    if is_utf8:
        return stream

    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        return stream

    stream.flush()
    return io.TextIOWrapper(buffer, encoding="utf-8", errors="backslashreplace")


def configure_utf8_logging(force: bool = False) -> None:
    """Configure stdout/stderr and root logger handlers for UTF-8 output.

    Sanitized names are arbitrary Unicode; consoles that default to a
    legacy code page would otherwise fail with UnicodeEncodeError while
    printing them. Safe to call multiple times.
    """
    for name in ("stdout", "stderr"):
        stream = getattr(sys, name, None)
        if stream is None:
            continue
        new_stream = _ensure_stream_utf8(stream)
        if new_stream is not None and new_stream is not stream:
            setattr(sys, name, new_stream)

    root = logging.getLogger()
    if force and not root.handlers:
        root.addHandler(logging.StreamHandler(sys.stderr))

    for handler in root.handlers:
        stream = getattr(handler, "stream", None)
        if stream is None:
            continue
        new_stream = _ensure_stream_utf8(stream)
        if new_stream is not None and new_stream is not stream:
            handler.setStream(new_stream)


class LogEvent(Enum):
    """Enumeration of loggable events."""
    OPERATION_START = "operation_start"
    OPERATION_COMPLETE = "operation_complete"
    NAME_SANITIZED = "name_sanitized"
    VALIDATION = "validation"
    ERROR = "error"
    WARNING = "warning"


class StructuredLogger:
    """
    JSON-structured session logger for NameSafe runs.

    Every entry has the shape ``{sessionId, timestamp, event, details}``.
    Entries are kept in memory and, unless disabled, appended to one
    JSON-lines file per session.
    """

    def __init__(self,
                 log_dir: str = "logs",
                 session_id: Optional[str] = None,
                 write_to_file: bool = True):
        """
        Initialize structured logger.

        Args:
            log_dir: Directory for log files
            session_id: Optional session ID (generated if not provided)
            write_to_file: If False, entries are only kept in memory
        """
        self.log_dir = Path(log_dir)
        self.session_id = session_id or str(uuid.uuid4())
        self.start_time = datetime.now(timezone.utc)
        self.write_to_file = write_to_file

        timestamp = self.start_time.strftime("%Y%m%d_%H%M%S")
        self.log_file = self.log_dir / f"namesafe_session_{timestamp}_{self.session_id[:8]}.json"

        self.log_buffer: List[Dict] = []

        if self.write_to_file:
            self._ensure_log_file_exists()

    def _ensure_log_file_exists(self) -> None:
        """Create the log directory and touch the session file; never raises."""
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file.touch(exist_ok=True)
        except OSError as e:
            print(f"Warning: Cannot create log file {self.log_file}: {e}", file=sys.stderr)
            self.write_to_file = False

    def log_operation_start(self, command: str, count: int, options: Optional[Dict] = None) -> None:
        """
        Log the start of a CLI command.

        Args:
            command: Command name ("sanitize", "check", "path")
            count: Number of names to process
            options: Effective options (policy, output format, ...)
        """
        entry = self._create_log_entry(
            event=LogEvent.OPERATION_START,
            details={
                "command": command,
                "count": count,
                "options": options or {},
            }
        )
        self._write_log_entry(entry)

    def log_operation_complete(self,
                               command: str,
                               processed: int,
                               changed: int,
                               invalid: int,
                               elapsed_ms: int) -> None:
        """
        Log successful completion of a command.

        Args:
            command: Command name
            processed: Number of names processed
            changed: Number of names the sanitizer rewrote
            invalid: Number of names rejected or found invalid
            elapsed_ms: Duration in milliseconds
        """
        entry = self._create_log_entry(
            event=LogEvent.OPERATION_COMPLETE,
            details={
                "command": command,
                "counts": {
                    "processed": processed,
                    "changed": changed,
                    "invalid": invalid,
                },
                "elapsedMs": elapsed_ms,
            }
        )
        self._write_log_entry(entry)

    def log_name_sanitized(self, original: str, sanitized: str, rules: List[str]) -> None:
        entry = self._create_log_entry(
            event=LogEvent.NAME_SANITIZED,
            details={
                "original": original,
                "sanitized": sanitized,
                "rules": list(rules),
            }
        )
        self._write_log_entry(entry)

    def log_validation(self, name: str, valid: bool, violations: Optional[List[Dict]] = None) -> None:
        """
        Log the result of checking one name.

        Args:
            name: Name that was checked
            valid: Whether the name passed
            violations: Violation dictionaries for invalid names
        """
        entry = self._create_log_entry(
            event=LogEvent.VALIDATION,
            details={
                "name": name,
                "valid": valid,
                "violations": violations or [],
            }
        )
        self._write_log_entry(entry)

    def log_error(self,
                  command: str,
                  error_message: str,
                  error_type: str,
                  name: Optional[str] = None) -> None:
        """
        Log an error during a command.

        Args:
            command: Command name
            error_message: Human-readable error message
            error_type: Exception class name
            name: Name that caused the error (if applicable)
        """
        entry = self._create_log_entry(
            event=LogEvent.ERROR,
            details={
                "command": command,
                "errorMessage": error_message,
                "errorType": error_type,
                "name": name,
            }
        )
        self._write_log_entry(entry)

    def log_warning(self, message: str, context: Optional[Dict] = None) -> None:
        entry = self._create_log_entry(
            event=LogEvent.WARNING,
            details={
                "message": message,
                "context": context or {},
            }
        )
        self._write_log_entry(entry)

    def _create_log_entry(self, event: LogEvent, details: Dict[str, Any]) -> Dict:
        return {
            "sessionId": self.session_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": event.value,
            "details": details,
        }

    def _write_log_entry(self, entry: Dict) -> None:
        """
        Write log entry to buffer and, if enabled, to the session file.

        Args:
            entry: Log entry to write
        """
        self.log_buffer.append(entry)

        if not self.write_to_file:
            return

        try:
            with open(self.log_file, 'a', encoding='utf-8', errors='backslashreplace') as f:
                f.write(json.dumps(entry, ensure_ascii=False) + '\n')
        except OSError as e:
            print(f"Warning: Failed to write log entry: {e}", file=sys.stderr)

    def get_session_logs(self) -> List[Dict]:
        return list(self.log_buffer)

    def export_session_summary(self) -> Dict:
        """
        Export session summary statistics.

        Returns:
            Summary dictionary with counts per event type
        """
        summary = {
            "sessionId": self.session_id,
            "startTime": self.start_time.isoformat(),
            "endTime": datetime.now(timezone.utc).isoformat(),
            "totalEvents": len(self.log_buffer),
            "eventCounts": {},
        }

        for entry in self.log_buffer:
            event_type = entry["event"]
            summary["eventCounts"][event_type] = summary["eventCounts"].get(event_type, 0) + 1

        return summary


# ============================================================================
# Global Logger Instance
# ============================================================================

_global_logger: Optional[StructuredLogger] = None


def get_logger(log_dir: str = "logs") -> StructuredLogger:
    """
    Get the global logger instance, creating it on first use.

    Args:
        log_dir: Directory for log files

    Returns:
        StructuredLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = StructuredLogger(log_dir)
    return _global_logger


def new_session(log_dir: str = "logs", write_to_file: bool = True) -> StructuredLogger:
    """
    Start a new logging session and make it the global logger.

    Args:
        log_dir: Directory for log files
        write_to_file: If False, entries are only kept in memory

    Returns:
        New StructuredLogger instance
    """
    global _global_logger
    _global_logger = StructuredLogger(log_dir, write_to_file=write_to_file)
    return _global_logger


# ============================================================================
# LIFECYCLE STATUS: Proposed
# DEPENDENCIES: None (standalone logging)
# TESTS: tests/unit/test_logging.py
# ============================================================================
