"""
Configuration settings for the wordboard hosts.
Values come from environment variables, optionally read from a .env file.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini/gemini-2.5-flash-lite"


class Settings:
    """Settings shared by the terminal and LLM hosts."""

    def __init__(self, env_file: Optional[Path] = None):
        # Load environment variables from .env file if present
        load_dotenv(env_file)

        # Path or http(s) URL of the curated word list; unset means built-in words only
        self.DICTIONARY = os.getenv('WORDBOARD_DICTIONARY') or None
        self.SEED = self._int_or_none('WORDBOARD_SEED')
        self.MODEL = os.getenv('WORDBOARD_MODEL', DEFAULT_MODEL)
        self.LOG_LEVEL = os.getenv('WORDBOARD_LOG_LEVEL', 'WARNING').upper()
        self.LOG_DIR = Path(os.getenv('WORDBOARD_LOG_DIR', 'logs'))

    @staticmethod
    def _int_or_none(name: str) -> Optional[int]:
        value = os.getenv(name)
        if not value:
            return None
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {value!r}") from None
