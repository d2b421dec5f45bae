"""
docdiff.config — Settings and logging setup.

Settings come from DOCDIFF_* environment variables; command-line flags
override them.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .formats import DEFAULT_OUTPUT_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ENV_PREFIX = "DOCDIFF_"


@dataclass
class DiffSettings:
    """Options for reading, diffing and writing documents."""

    # File written next to the original when no output path is given
    output_name: str = DEFAULT_OUTPUT_NAME

    # JSON indentation of written results; None writes a single line
    indent: Optional[int] = 2

    # Written in place of unchanged array positions (None → JSON null)
    unchanged_marker: Optional[str] = None

    log_level: str = "WARNING"

    def __post_init__(self):
        if self.indent is not None and self.indent < 0:
            raise ValueError(f"indent must be non-negative, got {self.indent}")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'DiffSettings':
        """Load settings from environment variables."""
        env = os.environ if environ is None else environ
        indent = env.get(ENV_PREFIX + 'INDENT', '2')
        return cls(
            output_name=env.get(ENV_PREFIX + 'OUTPUT_NAME', DEFAULT_OUTPUT_NAME),
            indent=None if indent.lower() in ('', 'none') else int(indent),
            unchanged_marker=env.get(ENV_PREFIX + 'UNCHANGED_MARKER'),
            log_level=env.get(ENV_PREFIX + 'LOG_LEVEL', 'WARNING'),
        )


def verbosity_level(verbose: int, default: str = "WARNING") -> int:
    """Map a -v count onto a logging level: 0 → default, 1 → INFO, 2+ → DEBUG."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.getLevelName(default.upper())


def configure_logging(level: int = logging.WARNING) -> None:
    """Send log records to stderr in the package's format."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
