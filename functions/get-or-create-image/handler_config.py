"""
Handler Configuration
Settings for the resize-on-demand origin-response handler.

Lambda@Edge functions receive no environment variables, so the defaults
below are the values used in production. Overrides are honoured when the
handler runs as a regular Lambda or locally.
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DAYS_TO_CACHE = 60 * 60 * 24 * 365  # 365 days, in seconds
DEFAULT_QUALITY = 80
DEFAULT_STORAGE_CLASS = 'STANDARD'


@dataclass(frozen=True)
class HandlerConfig:
    cache_max_age: int = DAYS_TO_CACHE
    quality: int = DEFAULT_QUALITY
    storage_class: str = DEFAULT_STORAGE_CLASS
    log_level: str = 'INFO'
    metrics_namespace: Optional[str] = None

    @property
    def cache_control(self) -> str:
        return f'public, max-age={self.cache_max_age}'


def _int_setting(environ: Mapping[str, str], name: str, default: int,
                 minimum: int, maximum: Optional[int] = None) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == '':
        return default

    try:
        value = int(raw, 10)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}')

    if value < minimum or (maximum is not None and value > maximum):
        bounds = f'>= {minimum}' if maximum is None else f'between {minimum} and {maximum}'
        raise ValueError(f'{name} must be {bounds}, got {value}')
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> HandlerConfig:
    """
    Build handler settings from environment variables.

    Args:
        environ: Mapping to read from, defaults to os.environ

    Returns:
        HandlerConfig with defaults for anything unset

    Raises:
        ValueError: A numeric setting is malformed or out of range
    """
    if environ is None:
        environ = os.environ

    log_level = (environ.get('LOG_LEVEL') or 'INFO').upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f'LOG_LEVEL must be a logging level name, got {log_level!r}')

    return HandlerConfig(
        cache_max_age=_int_setting(environ, 'RESIZE_CACHE_MAX_AGE', DAYS_TO_CACHE, minimum=0),
        quality=_int_setting(environ, 'RESIZE_QUALITY', DEFAULT_QUALITY, minimum=1, maximum=100),
        storage_class=environ.get('RESIZE_STORAGE_CLASS') or DEFAULT_STORAGE_CLASS,
        log_level=log_level,
        metrics_namespace=environ.get('RESIZE_METRICS_NAMESPACE') or None,
    )
