"""Runtime configuration for artifact-tools commands."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_ATTR_ENTRY = "android/R$attr.class"

_LINE_SEPARATORS = {
    "lf": "\n",
    "crlf": "\r\n",
    "native": os.linesep,
}
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True)
class Settings:
    """Settings resolved from environment, overridable by CLI flags."""

    attr_entry: str = DEFAULT_ATTR_ENTRY
    line_separator: str = "native"
    log_level: str = "WARNING"

    @classmethod
    def from_env(
        cls,
        *,
        attr_entry: str | None = None,
        line_separator: str | None = None,
        log_level: str | None = None,
    ) -> Settings:
        """Load settings from environment; explicit arguments win over env values."""

        return cls(
            attr_entry=attr_entry or os.getenv("ARTIFACT_TOOLS_ATTR_ENTRY", DEFAULT_ATTR_ENTRY),
            line_separator=(
                line_separator or os.getenv("ARTIFACT_TOOLS_LINE_SEPARATOR", "native")
            ).lower(),
            log_level=(log_level or os.getenv("ARTIFACT_TOOLS_LOG_LEVEL", "WARNING")).upper(),
        )

    def validate(self) -> None:
        if not self.attr_entry.strip():
            raise ValueError("ARTIFACT_TOOLS_ATTR_ENTRY must not be empty.")
        if self.line_separator not in _LINE_SEPARATORS:
            allowed = ", ".join(sorted(_LINE_SEPARATORS))
            raise ValueError(
                f"Unsupported ARTIFACT_TOOLS_LINE_SEPARATOR={self.line_separator!r}. "
                f"Use one of: {allowed}.",
            )
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Unsupported ARTIFACT_TOOLS_LOG_LEVEL={self.log_level!r}.")

    @property
    def resolved_line_separator(self) -> str:
        return _LINE_SEPARATORS[self.line_separator]

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level)
