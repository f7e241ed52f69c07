"""
Tests for crossing.logging: levels, sinks and env configuration.
"""

import json

import pytest

from crossing import logging as crossing_logging
from crossing.logging import (
    FileSink,
    LogLevel,
    MemorySink,
    NullSink,
    configure_logging,
    create_sink_for_module,
    disable_logging,
    emit_record,
    get_logger,
    register_sink,
)


class TestLogger:
    """Tests for CrossingLogger level filtering and output."""

    def test_cached_per_module(self):
        assert get_logger('session') is get_logger('session')

    def test_below_level_suppressed(self, logging_config, capsys):
        configure_logging(level='WARNING')
        log = get_logger('test_module')
        log.info("hidden")
        log.warning("shown %d", 3)
        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "[test_module] WARN: shown 3" in out

    def test_module_level_overrides_default(self, logging_config, capsys):
        configure_logging(level='ERROR', modules={'noisy': 'DEBUG'})
        get_logger('noisy').debug("detail")
        get_logger('quiet').debug("detail")
        out = capsys.readouterr().out
        assert "[noisy] DEBUG: detail" in out
        assert "[quiet]" not in out

    def test_trace_below_debug(self, logging_config):
        configure_logging(level='DEBUG')
        log = get_logger('tracer')
        assert log.is_enabled_for(LogLevel.DEBUG)
        assert not log.is_enabled_for(LogLevel.TRACE)

    def test_bad_format_args_still_logged(self, logging_config, capsys):
        configure_logging(level='INFO')
        get_logger('fmt').info("value %d", "not a number")
        assert "value %d ('not a number',)" in capsys.readouterr().out

    def test_disable_logging(self, logging_config, capsys):
        disable_logging()
        get_logger('anything').critical("gone")
        assert capsys.readouterr().out == ""

    def test_unknown_level_defaults_to_info(self, logging_config):
        configure_logging(level='CHATTY')
        assert logging_config['default_level'] == LogLevel.INFO


class TestSinks:
    """Tests for structured record sinks."""

    def test_emit_without_sink(self):
        assert emit_record('unregistered_module', {'type': 'x'}) is False

    def test_memory_sink(self):
        sink = MemorySink()
        register_sink('memory_test', sink)
        try:
            assert emit_record('memory_test', {'type': 'start'}) is True
        finally:
            crossing_logging._sinks.pop('memory_test', None)
        assert sink.records == [{'module': 'memory_test', 'type': 'start'}]

    def test_only_registered_module_receives_records(self):
        """Records for other modules are dropped, not routed to a fallback."""
        sink = MemorySink()
        register_sink('routed', sink)
        try:
            assert emit_record('elsewhere', {'type': 'x'}) is False
        finally:
            crossing_logging._sinks.pop('routed', None)
        assert sink.records == []

    def test_close_all_sinks_unregisters(self, tmp_path):
        sink = FileSink(log_dir=str(tmp_path), session_name='closed')
        register_sink('closing', sink)
        sink.emit('closing', {'type': 'start'})
        crossing_logging.close_all_sinks()
        assert emit_record('closing', {'type': 'late'}) is False
        lines = (tmp_path / 'closed_closing.jsonl').read_text().splitlines()
        assert json.loads(lines[-1])['type'] == 'footer'

    def test_file_sink_writes_jsonl(self, tmp_path):
        sink = FileSink(log_dir=str(tmp_path), session_name='run1')
        sink.emit('session', {'type': 'start', 'game': 1})
        path = sink.log_paths['session']
        sink.close()

        lines = [json.loads(line) for line in path.read_text().splitlines()]
        assert [line['type'] for line in lines] == ['header', 'start', 'footer']
        assert lines[0]['session_name'] == 'run1'
        assert lines[1]['game'] == 1
        assert 'wall_time' in lines[1]

    def test_file_sink_context_manager(self, tmp_path):
        with FileSink(log_dir=str(tmp_path), session_name='ctx') as sink:
            sink.emit('loop', {'type': 'tick'})
        assert (tmp_path / 'ctx_loop.jsonl').exists()

    def test_null_sink_when_disabled(self, logging_config):
        logging_config['modules'] = {}
        assert isinstance(create_sink_for_module('session'), NullSink)

    def test_file_sink_when_enabled(self, logging_config, tmp_path):
        logging_config['modules'] = {'session': {'enabled': True, 'dir': str(tmp_path)}}
        sink = create_sink_for_module('session', session_name='enabled')
        assert isinstance(sink, FileSink)
        sink.emit('session', {'type': 'stop'})
        sink.close()
        assert (tmp_path / 'enabled_session.jsonl').exists()


class TestEnvConfig:
    """Tests for environment variable parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ('true', True),
        ('ON', True),
        ('0', False),
        ('no', False),
        ('42', 42),
        ('2.5', 2.5),
        ('/tmp/logs', '/tmp/logs'),
    ])
    def test_parse_env_value(self, raw, expected):
        assert crossing_logging._parse_env_value(raw) == expected

    def test_load_env_config(self, logging_config, monkeypatch):
        monkeypatch.setenv('CROSSING_LOG_LEVEL', 'ERROR')
        monkeypatch.setenv('CROSSING_LOG_LOOP', 'TRACE')
        monkeypatch.setenv('CROSSING_LOG_DIR', '/tmp/crossing-test')
        monkeypatch.setenv('CROSSING_LOGGING_SESSION_ENABLED', 'true')
        crossing_logging._load_env_config()

        assert logging_config['default_level'] == LogLevel.ERROR
        assert logging_config['module_levels']['loop'] == LogLevel.TRACE
        assert crossing_logging.get_log_dir() == '/tmp/crossing-test'
        assert crossing_logging.get_module_config('session') == {'enabled': True}
