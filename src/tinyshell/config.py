"""Shell settings read from the environment."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

PROMPT_VAR = "TINYSHELL_PROMPT"
STRICT_QUOTES_VAR = "TINYSHELL_STRICT_QUOTES"
LOG_LEVEL_VAR = "TINYSHELL_LOG_LEVEL"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    prompt: str = "$ "
    strict_quotes: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from TINYSHELL_* variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            prompt=env.get(PROMPT_VAR, defaults.prompt),
            strict_quotes=env.get(STRICT_QUOTES_VAR, "").strip().lower() in _TRUE_VALUES,
            log_level=env.get(LOG_LEVEL_VAR, defaults.log_level).strip().upper(),
        )
