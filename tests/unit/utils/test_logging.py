"""Unit tests for the JSON log formatter."""

import json
import logging
import sys

from linkregistry.constants import Event
from linkregistry.utils.logging import JsonFormatter, initialize_logging


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name='linkregistry.test',
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='Stored %s.',
        args=('link',),
        exc_info=None,
    )
    record.created = 1766750400.0  # 2025-12-26T12:00:00Z
    record.__dict__.update(extra)
    return record


def test_format_includes_extras():
    log = json.loads(JsonFormatter().format(make_record(event=Event.LINK_STORED, link_id='🐶🐱')))

    assert log == {
        'timestamp': '2025-12-26T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'linkregistry.test',
        'message': 'Stored link.',
        'event': 'LINK_STORED',
        'link_id': '🐶🐱',
    }


def test_format_includes_exception():
    try:
        raise ValueError('boom')
    except ValueError:
        record = make_record()
        record.exc_info = sys.exc_info()

    log = json.loads(JsonFormatter().format(record))

    assert 'ValueError: boom' in log['exception']


def test_format_serializes_unknown_types():
    log = json.loads(JsonFormatter().format(make_record(digests={'a'})))
    assert log['digests'] == "{'a'}"


def test_initialize_logging_sets_level(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    try:
        initialize_logging()
        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    finally:
        root.setLevel(level)
        root.handlers[:] = handlers


def test_format_omits_record_attributes():
    """Ensure only the four base fields and `extra` fields are emitted."""
    log = json.loads(JsonFormatter().format(make_record()))
    assert set(log) == {'timestamp', 'level', 'logger', 'message'}
