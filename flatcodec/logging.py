# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Logging setup for applications and tools that want to see what the codec logs.

Codec modules log with `structlog.get_logger()`, the stdlib logger behind each one is named after its module, so
everything lives under the `flatcodec` namespace. `setup_logging` only attaches handlers to that namespace, an
embedding application keeps control over its own loggers. Buffers in log events (payloads, frames) are rendered as
hex, truncated to `MAX_LOGGED_BUFFER_BYTES`.
"""

import logging
import logging.config
from collections import OrderedDict
from enum import IntEnum, auto
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

LOGGER_NAMESPACE = 'flatcodec'

MAX_LOGGED_BUFFER_BYTES = 32


class LoggingOutput(IntEnum):
    NULL = auto()
    PRETTY = auto()
    JSON = auto()


def hexlify_buffers(_logger: WrappedLogger, _method_name: str, event_dict: EventDict) -> EventDict:
    """Render bytes-like values as hex, so JSON output stays valid and console output stays short.

    >>> hexlify_buffers(None, 'info', {'event': 'x', 'data': b'\\x00\\xff', 'size': 2})
    {'event': 'x', 'data': '00ff', 'size': 2}
    >>> hexlify_buffers(None, 'info', {'data': memoryview(bytes(40))})['data']
    '0000000000000000000000000000000000000000000000000000000000000000... (40 bytes)'
    """
    for key, value in event_dict.items():
        if isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
            text = data[:MAX_LOGGED_BUFFER_BYTES].hex()
            if len(data) > MAX_LOGGED_BUFFER_BYTES:
                text = f'{text}... ({len(data)} bytes)'
            event_dict[key] = text
    return event_dict


def _renderer(logging_output: LoggingOutput) -> Any:
    if logging_output == LoggingOutput.JSON:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def setup_logging(
    *,
    logging_output: LoggingOutput = LoggingOutput.PRETTY,
    debug: bool = False,
    extra_log_info: dict[str, str] | None = None,
    _test_logging: bool = False,
) -> None:
    """Route the `flatcodec` loggers to stderr (or nowhere, for `LoggingOutput.NULL`).

    Plain stdlib loggers under the namespace go through the same renderer as the structlog ones. `extra_log_info` is
    added to every event, e.g. to tell apart the processes of a deployment.
    """
    timestamper = structlog.processors.TimeStamper(fmt='%Y-%m-%d %H:%M:%S')
    extra_log_info = dict(extra_log_info or {})

    def add_extra_log_info(_logger: WrappedLogger, _method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in extra_log_info.items():
            assert key not in event_dict, 'extra log info conflicting with existing log key'
            event_dict[key] = value
        return event_dict

    if logging_output == LoggingOutput.NULL:
        handler: dict[str, Any] = {'class': 'logging.NullHandler'}
    else:
        handler = {
            'class': 'logging.StreamHandler',
            'formatter': 'codec',
            'level': 'DEBUG',
        }

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'codec': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': _renderer(logging_output),
                'foreign_pre_chain': [
                    structlog.stdlib.add_log_level,
                    structlog.stdlib.add_logger_name,
                    timestamper,
                    hexlify_buffers,
                ],
            },
        },
        'handlers': {'codec': handler},
        'loggers': {
            LOGGER_NAMESPACE: {
                'handlers': ['codec'],
                'level': 'DEBUG' if debug else 'INFO',
                'propagate': False,
            },
        },
    })

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_extra_log_info,
            hexlify_buffers,
            timestamper,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=OrderedDict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # loggers must stay reconfigurable in tests, e.g. for structlog.testing.capture_logs()
        cache_logger_on_first_use=not _test_logging,
    )
