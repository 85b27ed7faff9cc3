"""Runtime settings for rdcalc sessions.

Settings come from RDCALC_* environment variables first; command-line
options override them field by field.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(env: Mapping[str, str], key: str) -> bool:
    return env.get(key, "").strip().lower() in _TRUTHY


def _env_int(env: Mapping[str, str], key: str) -> Optional[int]:
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


@dataclass
class Settings:
    """Knobs for one calculator session."""

    prompt: str = ""
    verbose: bool = False
    recursion_limit: Optional[int] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Settings:
        """Build settings from RDCALC_PROMPT, RDCALC_VERBOSE and RDCALC_RECURSION_LIMIT.

        Args:
            env: Mapping to read instead of os.environ.

        Raises:
            ValueError: if RDCALC_RECURSION_LIMIT is not a positive integer.
        """
        env = os.environ if env is None else env
        return cls(
            prompt=env.get("RDCALC_PROMPT", ""),
            verbose=_env_flag(env, "RDCALC_VERBOSE"),
            recursion_limit=_env_int(env, "RDCALC_RECURSION_LIMIT"),
        )

    def apply(self) -> None:
        """Raise the interpreter recursion limit if one is configured.

        Deeply parenthesized input recurses once per nesting level, so the
        limit bounds how deep an expression can be.
        """
        if self.recursion_limit and self.recursion_limit > sys.getrecursionlimit():
            sys.setrecursionlimit(self.recursion_limit)
