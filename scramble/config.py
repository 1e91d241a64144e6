"""Server configuration, read from the environment and an optional .env file."""

from typing import List

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = find_dotenv(usecwd=True) or None


class ServerSettings(BaseSettings):
    """Settings for the scramble server. Environment variables use the ``SCRAMBLE_`` prefix."""

    word_list_path: str = 'word-list.txt'
    """Tab separated ``WORD<TAB>definition`` file loaded at startup."""

    host: str = '0.0.0.0'
    port: int = 8172

    log_level: str = 'info'
    """One of debug, info, warning, error, critical."""

    cors_origins: List[str] = ['*']

    best_answers_limit: int = 10
    """How many best answers are attached to each round."""

    scan_yield_interval: int = 1000
    """Dictionary entries scanned between yields to the event loop during a best answer search."""

    draw_warn_attempts: int = 100
    """Log a warning every this many rejected tile draws."""

    model_config = SettingsConfigDict(
        env_prefix='SCRAMBLE_',
        env_file=ENV_FILE,
        env_file_encoding='utf-8',
        extra='ignore',
    )
