# ============================================================================
# SOURCEFILE: test_logging.py
# RELPATH: namesafe/tests/unit/test_logging.py
# PROJECT: NameSafe Download Filename Sanitizer
# VERSION: 1.0.0
# LIFECYCLE: Proposed
# DESCRIPTION: Unit tests for StructuredLogger session logs
# ============================================================================

"""
Unit tests for structured JSON logging.

Tests the entry schema ({sessionId, timestamp, event, details}), the
JSON-lines session file, and failure handling.
"""

import builtins
import io
import json
import pytest
from datetime import datetime
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from namesafe.logging import (
    StructuredLogger,
    LogEvent,
    configure_utf8_logging,
    get_logger,
    new_session,
    _ensure_stream_utf8,
)


class TestStructuredLoggerBasics:
    """Tests for basic StructuredLogger operations."""

    def test_create_logger_default(self, temp_dir):
        logger = StructuredLogger(log_dir=str(temp_dir))

        assert logger.log_dir == temp_dir
        assert logger.session_id is not None
        assert logger.start_time is not None
        assert logger.log_file.exists()

    def test_create_logger_custom_session_id(self, temp_dir):
        logger = StructuredLogger(log_dir=str(temp_dir), session_id='test-session-123')
        assert logger.session_id == 'test-session-123'

    def test_log_file_name(self, temp_dir):
        logger = StructuredLogger(log_dir=str(temp_dir))

        assert logger.log_file.suffix == '.json'
        assert logger.log_file.name.startswith('namesafe_session_')
        assert logger.session_id[:8] in logger.log_file.name

    def test_log_directory_created(self, temp_dir):
        log_path = temp_dir / 'nested' / 'logs'
        StructuredLogger(log_dir=str(log_path))
        assert log_path.is_dir()

    def test_memory_only_logger_creates_nothing(self, temp_dir):
        log_path = temp_dir / 'logs'
        logger = StructuredLogger(log_dir=str(log_path), write_to_file=False)
        logger.log_warning('kept in memory')

        assert not log_path.exists()
        assert len(logger.get_session_logs()) == 1


class TestLogEntryFormat:
    """Tests for log entry format."""

    def test_log_entry_has_required_fields(self, memory_logger):
        memory_logger.log_operation_start('sanitize', 3)
        entry = memory_logger.log_buffer[0]

        assert set(entry) == {'sessionId', 'timestamp', 'event', 'details'}

    def test_session_id_consistent(self, memory_logger):
        memory_logger.log_operation_start('check', 1)
        memory_logger.log_operation_complete('check', 1, 0, 1, 12)

        session_ids = {entry['sessionId'] for entry in memory_logger.log_buffer}
        assert session_ids == {memory_logger.session_id}

    def test_timestamp_format(self, memory_logger):
        memory_logger.log_warning('test warning')
        parsed = datetime.fromisoformat(memory_logger.log_buffer[0]['timestamp'])
        assert parsed.tzinfo is not None

    def test_event_types_valid(self, memory_logger):
        memory_logger.log_operation_start('path', 1)
        memory_logger.log_error('path', 'bad', 'PathTraversalError', name='../x')
        memory_logger.log_validation('a.txt', True)
        memory_logger.log_name_sanitized('a?', 'a_', ['ntfs_reserved'])

        valid_events = {e.value for e in LogEvent}
        assert all(entry['event'] in valid_events for entry in memory_logger.log_buffer)


class TestOperationLogging:
    """Tests for event-specific details."""

    def test_log_operation_start(self, memory_logger):
        memory_logger.log_operation_start('path', 2, {'policy': 'split'})
        details = memory_logger.log_buffer[0]['details']

        assert memory_logger.log_buffer[0]['event'] == LogEvent.OPERATION_START.value
        assert details == {'command': 'path', 'count': 2, 'options': {'policy': 'split'}}

    def test_log_operation_complete(self, memory_logger):
        memory_logger.log_operation_complete(
            'sanitize', processed=10, changed=4, invalid=0, elapsed_ms=7
        )
        details = memory_logger.log_buffer[0]['details']

        assert details['counts'] == {'processed': 10, 'changed': 4, 'invalid': 0}
        assert details['elapsedMs'] == 7

    def test_log_name_sanitized(self, memory_logger):
        memory_logger.log_name_sanitized('con.txt', '___.txt', ['reserved_device_name'])
        entry = memory_logger.log_buffer[0]

        assert entry['event'] == LogEvent.NAME_SANITIZED.value
        assert entry['details']['original'] == 'con.txt'
        assert entry['details']['sanitized'] == '___.txt'

    def test_log_validation(self, memory_logger):
        violations = [{'index': 0, 'rule': 'boundary'}]
        memory_logger.log_validation('.x', False, violations)
        details = memory_logger.log_buffer[0]['details']

        assert details['valid'] is False
        assert details['violations'] == violations

    def test_log_error(self, memory_logger):
        memory_logger.log_error('check', 'No names given', 'NameSafeError')
        details = memory_logger.log_buffer[0]['details']

        assert details['errorMessage'] == 'No names given'
        assert details['errorType'] == 'NameSafeError'
        assert details['name'] is None


class TestLogFile:
    """Tests for the JSON-lines session file."""

    def test_entries_written_as_json_lines(self, temp_dir):
        logger = StructuredLogger(log_dir=str(temp_dir))
        logger.log_operation_start('sanitize', 1)
        logger.log_name_sanitized('a\u200db', 'a_b', ['format'])

        lines = logger.log_file.read_text(encoding='utf-8').splitlines()
        assert len(lines) == 2
        entries = [json.loads(line) for line in lines]
        assert entries[1]['details']['original'] == 'a\u200db'

    def test_lone_surrogate_does_not_break_file(self, temp_dir):
        logger = StructuredLogger(log_dir=str(temp_dir))
        logger.log_name_sanitized('a\ud800?', 'a\ud800_', ['ntfs_reserved'])

        assert logger.log_file.read_text(encoding='utf-8').strip()

    def test_write_failure_does_not_crash(self, temp_dir, monkeypatch, capsys):
        logger = StructuredLogger(log_dir=str(temp_dir))

        def bad_open(*a, **kw):
            raise OSError("disk full")
        monkeypatch.setattr(builtins, "open", bad_open, raising=True)

        logger.log_warning("x")

        assert logger.get_session_logs()
        assert "Failed to write log entry" in capsys.readouterr().err


class TestSessionManagement:
    """Tests for summaries and the global logger."""

    def test_export_session_summary(self, memory_logger):
        memory_logger.log_name_sanitized('a?', 'a_', ['ntfs_reserved'])
        memory_logger.log_name_sanitized('b?', 'b_', ['ntfs_reserved'])
        memory_logger.log_warning('w')

        summary = memory_logger.export_session_summary()

        assert summary['sessionId'] == memory_logger.session_id
        assert summary['totalEvents'] == 3
        assert summary['eventCounts'] == {'name_sanitized': 2, 'warning': 1}

    def test_new_session_replaces_global(self, temp_dir):
        first = new_session(str(temp_dir), write_to_file=False)
        assert get_logger() is first

        second = new_session(str(temp_dir), write_to_file=False)
        assert get_logger() is second
        assert second.session_id != first.session_id


class TestUtf8Streams:
    """Tests for console UTF-8 configuration."""

    def test_utf8_stream_returned_as_is(self):
        stream = io.TextIOWrapper(io.BytesIO(), encoding='utf-8')
        assert _ensure_stream_utf8(stream) is stream

    def test_strict_utf8_stream_prints_lone_surrogate(self):
        buffer = io.BytesIO()
        stream = io.TextIOWrapper(buffer, encoding='utf-8', errors='strict')
        result = _ensure_stream_utf8(stream)

        result.write('a\udcffb')
        result.flush()
        assert result.errors == 'backslashreplace'
        assert buffer.getvalue() == b'a\\udcffb'

    def test_non_utf8_stream_reconfigured(self):
        stream = io.TextIOWrapper(io.BytesIO(), encoding='cp1252')
        result = _ensure_stream_utf8(stream)

        result.write('\U0001F468\u200d\U0001F469')
        result.flush()
        assert result.encoding == 'utf-8'

    def test_none_stream(self):
        assert _ensure_stream_utf8(None) is None

    def test_configure_utf8_logging_is_repeatable(self):
        configure_utf8_logging()
        configure_utf8_logging()
