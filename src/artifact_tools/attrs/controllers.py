"""Controllers for attribute extraction CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from artifact_tools.attrs.extractor import run_attr_extraction
from artifact_tools.config import Settings


@dataclass(slots=True)
class AttrExtractCommand:
    """CLI inputs for the attr extraction command."""

    input_path: Path
    output_path: Path
    entry: str | None = None


class AttrsCliController:
    """Coordinates attribute command execution."""

    def extract(self, command: AttrExtractCommand) -> list[str]:
        settings = Settings.from_env(attr_entry=command.entry)
        settings.validate()
        count = run_attr_extraction(
            command.input_path,
            command.output_path,
            entry=settings.attr_entry,
        )
        return [f"Extracted {count} attributes to {command.output_path}"]
