"""JSON structured logging for the link registry lambdas

Every registry decision is logged with an `event` extra holding one of the
`linkregistry.constants.Event` codes, so CloudWatch Logs Insights can filter on it:

    INVALID_IDENTIFIER, INVALID_LINK, INVALID_REQUEST_BODY   request rejected (400)
    ACCESS_DENIED                                            bad credentials (403)
    LINK_NOT_FOUND                                           unknown identifier (404)
    LINK_ALREADY_EXISTS                                      identifier taken (400)
    LINK_STORED, LINK_DEDUPLICATED                           registration succeeded
    LINK_REDIRECT                                            redirect served (307)
    DATA_STORE_UNAVAILABLE                                   Redis failure (500/503)
    INCONSISTENT_WRITE                                       link.id written, link.hash not (ERROR)

Other extras (`link_id`, `requested_id`, `link_hash_key`, ...) are copied as
top-level fields. Tracebacks go under `exception`.

    {"timestamp": "2025-12-26T12:00:00.000Z", "level": "ERROR",
     "logger": "linkregistry.dao.redis.link_redis_dao",
     "message": "Link record written without its hash index entry. Keyspaces are out of sync.",
     "event": "INCONSISTENT_WRITE", "link_id": "🐶🐱🐭🐹🐰", ...}

IMPORTANT: `initialize_logging()` runs from each lambda package's `__init__.py`,
before the handler module logs anything.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkregistry.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRS = frozenset(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None).__dict__) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render a LogRecord, its `extra` fields and its traceback as one JSON line"""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        log = {
            'timestamp': created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in record.__dict__.items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Emoji identifiers stay readable; sets, enums and exceptions fall back to str()
        return json.dumps(log, default=str, ensure_ascii=False)


def initialize_logging() -> None:
    """Send JSON lines to stdout at the LOG_LEVEL environment level (INFO by default)."""
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper(),
                'handlers': ['stdout'],
            },
        }
    )
