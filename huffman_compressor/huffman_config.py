# filename: huffman_config.py

import logging
import os
from dataclasses import dataclass

# Widest code the one-byte length field can describe
MAX_CODE_LENGTH = 255

ENV_MAX_CODE_LENGTH = "HUFFMAN_MAX_CODE_LENGTH"
ENV_LOG_LEVEL = "HUFFMAN_LOG_LEVEL"


@dataclass(frozen=True)
class CompressorConfig:
    max_code_length: int = MAX_CODE_LENGTH
    log_level: str = "WARNING"

    def __post_init__(self):
        if not 1 <= self.max_code_length <= MAX_CODE_LENGTH:
            raise ValueError(
                f"max_code_length must be between 1 and {MAX_CODE_LENGTH}, "
                f"got {self.max_code_length}"
            )
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ=None):
        """Build a config from HUFFMAN_* environment variables, falling back to defaults."""
        if environ is None:
            environ = os.environ
        kwargs = {}
        if environ.get(ENV_MAX_CODE_LENGTH):
            kwargs["max_code_length"] = int(environ[ENV_MAX_CODE_LENGTH])
        if environ.get(ENV_LOG_LEVEL):
            kwargs["log_level"] = environ[ENV_LOG_LEVEL].upper()
        return cls(**kwargs)
