"""Controllers for dependency list CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from artifact_tools.config import Settings
from artifact_tools.deps.filtered import FilteredArtifactCollection
from artifact_tools.deps.identity import artifact_identity
from artifact_tools.deps.manifest import load_artifact_collection
from artifact_tools.deps.writer import write_transitive_deps


@dataclass(slots=True)
class WriteTransitiveDepsCommand:
    """CLI inputs for the transitive deps writer command."""

    manifest_path: Path
    output_path: Path
    line_separator: str | None = None


@dataclass(slots=True)
class FilterArtifactsCommand:
    """CLI inputs for the artifact filter command."""

    manifest_path: Path
    exclusion_files: tuple[Path, ...]
    output_path: Path | None = None


class DepsCliController:
    """Coordinates dependency list command execution."""

    def write_transitive(self, command: WriteTransitiveDepsCommand) -> list[str]:
        settings = Settings.from_env(line_separator=command.line_separator)
        settings.validate()
        collection = load_artifact_collection(command.manifest_path)
        identities = write_transitive_deps(
            collection.artifacts,
            command.output_path,
            line_separator=settings.resolved_line_separator,
        )
        return [f"Wrote {len(identities)} identities to {command.output_path}"]

    def filter(self, command: FilterArtifactsCommand) -> list[str]:
        collection = FilteredArtifactCollection(
            load_artifact_collection(command.manifest_path),
            command.exclusion_files,
        )
        lines = [f"WARNING: resolution failure: {failure}" for failure in collection.failures]
        if command.output_path is not None:
            files = collection.artifact_files
            command.output_path.parent.mkdir(parents=True, exist_ok=True)
            command.output_path.write_text(
                "".join(f"{path}\n" for path in files),
                "utf-8",
            )
            lines.append(f"Kept {len(files)} artifact files in {command.output_path}")
            return lines
        lines.extend(artifact_identity(artifact) for artifact in collection.artifacts)
        return lines
