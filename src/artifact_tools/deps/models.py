"""Resolved dependency artifacts and their component identifiers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

VARIANT_ATTRIBUTE = "variant"


@dataclass(frozen=True, slots=True)
class ProjectComponentId:
    """Build module inside the current build, addressed by its project path."""

    project_path: str

    def __str__(self) -> str:
        return f"project {self.project_path}"


@dataclass(frozen=True, slots=True)
class ModuleComponentId:
    """External published package addressed by group/module coordinates."""

    group: str
    module: str
    version: str = ""

    def __str__(self) -> str:
        if self.version:
            return f"{self.group}:{self.module}:{self.version}"
        return f"{self.group}:{self.module}"


@dataclass(frozen=True, slots=True)
class OpaqueComponentId:
    """Any other component, e.g. a local file dependency."""

    display_name: str

    def __str__(self) -> str:
        return self.display_name


ComponentId = ProjectComponentId | ModuleComponentId | OpaqueComponentId


@dataclass(frozen=True, slots=True, eq=False)
class ResolvedArtifact:
    """One resolved artifact: component identity, variant attributes and materialized file.

    Compared and hashed by object identity, like the resolver results it stands for.
    """

    component_id: ComponentId
    file: Path
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    @property
    def variant(self) -> str | None:
        return self.attribute(VARIANT_ATTRIBUTE)


class ArtifactCollection(Protocol):
    """Resolved artifacts as provided by the dependency resolver."""

    @property
    def artifacts(self) -> Sequence[ResolvedArtifact]:
        """Artifacts in resolution order."""

    @property
    def artifact_files(self) -> Sequence[Path]:
        """Files of ``artifacts``, in the same order."""

    @property
    def failures(self) -> Sequence[BaseException]:
        """Errors recorded while resolving the collection."""


@dataclass(slots=True)
class ResolvedArtifactCollection:
    """In-memory artifact collection."""

    artifacts: tuple[ResolvedArtifact, ...] = ()
    failures: tuple[BaseException, ...] = ()

    @property
    def artifact_files(self) -> tuple[Path, ...]:
        return tuple(artifact.file for artifact in self.artifacts)

    def __iter__(self) -> Iterator[ResolvedArtifact]:
        return iter(self.artifacts)

    def __len__(self) -> int:
        return len(self.artifacts)
