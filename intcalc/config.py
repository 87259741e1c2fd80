# config.py

"""
Runtime configuration: settings loaded from the environment (and an optional
.env file) and the logging setup driven by the verbosity level.
"""

import logging
import os
from typing import Dict, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# Below DEBUG: per-token cursor output
TRACE = 5
logging.addLevelName(TRACE, 'TRACE')

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

VERBOSITY_LEVELS: Dict[str, int] = {
    'trace': TRACE,
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
}

DEFAULT_VERBOSITY = 'warn'
DEFAULT_HISTORY_FILE = os.path.join('~', '.intcalc_history')
DEFAULT_PROMPT = '> '


class Settings(BaseModel):
    """Settings for the calculator REPL."""
    model_config = ConfigDict(validate_default=True)

    verbosity: str = DEFAULT_VERBOSITY
    history_file: str = DEFAULT_HISTORY_FILE
    prompt: str = DEFAULT_PROMPT

    @field_validator('verbosity')
    @classmethod
    def verbosity_must_be_known(cls, v: str) -> str:
        level = v.strip().lower()
        if level not in VERBOSITY_LEVELS:
            raise ValueError(
                f"Unknown verbosity '{v}', expected one of: {', '.join(VERBOSITY_LEVELS)}"
            )
        return level

    @field_validator('history_file')
    @classmethod
    def expand_history_file(cls, v: str) -> str:
        v = v.strip()
        return os.path.expanduser(v) if v else ''

    @property
    def log_level(self) -> int:
        return VERBOSITY_LEVELS[self.verbosity]


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Build Settings from INTCALC_* environment variables.

    The .env file is looked up from the working directory unless env_file is
    given. Variables already set in the environment win over values from it.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))
    return Settings(
        verbosity=os.getenv('INTCALC_VERBOSITY', DEFAULT_VERBOSITY),
        history_file=os.getenv('INTCALC_HISTORY_FILE', DEFAULT_HISTORY_FILE),
        prompt=os.getenv('INTCALC_PROMPT', DEFAULT_PROMPT),
    )


def configure_logging(verbosity: str) -> int:
    """Configure root logging for the given verbosity name and return the numeric level."""
    level = VERBOSITY_LEVELS[verbosity.lower()]
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    return level
