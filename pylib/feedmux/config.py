'''
Runtime configuration. Values come from an optional .env file, overridden by
the process environment, overridden in turn by CLI flags.
'''

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import structlog
from dotenv import dotenv_values

from feedmux.fetchers.protocol import DEFAULT_TIMEOUT_MS

logger = structlog.get_logger()

DEFAULT_SOURCES_PATH = 'feeds.txt'
DEFAULT_DEADLINE_SECONDS = 30.0


def _number(values: dict[str, str], key: str, default, cast):
    '''Parse a numeric setting; a bad value falls back to default with a warning.'''
    raw = values.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning('invalid config value, using default', key=key, value=raw, default=default)
        return default


@dataclass
class FeedConfig:
    '''Configuration for one pipeline run.'''

    sources_path: Path
    connect_timeout_ms: int = DEFAULT_TIMEOUT_MS
    read_timeout_ms: int = DEFAULT_TIMEOUT_MS
    deadline_seconds: float = DEFAULT_DEADLINE_SECONDS  # end-to-end cutoff, applied by the runner
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> FeedConfig:
        '''Build config from FEEDMUX_* vars in env_file (if it exists) and os.environ.'''
        values: dict[str, str] = {}
        if env_file and Path(env_file).exists():
            values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
        values.update({k: v for k, v in os.environ.items() if k.startswith('FEEDMUX_')})
        return cls(
            sources_path=Path(values.get('FEEDMUX_SOURCES') or DEFAULT_SOURCES_PATH),
            connect_timeout_ms=_number(values, 'FEEDMUX_CONNECT_TIMEOUT_MS', DEFAULT_TIMEOUT_MS, int),
            read_timeout_ms=_number(values, 'FEEDMUX_READ_TIMEOUT_MS', DEFAULT_TIMEOUT_MS, int),
            deadline_seconds=_number(values, 'FEEDMUX_DEADLINE', DEFAULT_DEADLINE_SECONDS, float),
            log_level=(values.get('FEEDMUX_LOG_LEVEL') or 'INFO').upper(),
        )
