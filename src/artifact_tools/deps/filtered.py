"""Artifact collection minus components already provided by another module.

The main use case is the runtime classpath of a test or feature module with the
dependencies of the tested/base module removed, to avoid duplicate classes at
runtime. The removed components come from identity list files written by
:mod:`artifact_tools.deps.writer`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from artifact_tools.deps.exclusions import read_excluded_identities
from artifact_tools.deps.identity import artifact_identity
from artifact_tools.deps.lazy import Lazy
from artifact_tools.deps.models import ArtifactCollection, ResolvedArtifact

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FilterState:
    """Retained artifacts and their files, computed once per collection."""

    artifacts: tuple[ResolvedArtifact, ...]
    files: tuple[Path, ...]


class FilteredArtifactCollection:
    """View of ``main`` without artifacts whose identity is listed in ``exclusion_files``."""

    def __init__(self, main: ArtifactCollection, exclusion_files: Iterable[Path]) -> None:
        self.main = main
        self.exclusion_files = tuple(exclusion_files)
        self._state: Lazy[FilterState] = Lazy(self._compute)

    def get_excluded_identities(self) -> set[str]:
        return read_excluded_identities(self.exclusion_files)

    def get_filtered_artifacts(self) -> tuple[ResolvedArtifact, ...]:
        return self._state.get().artifacts

    def get_filtered_files(self) -> tuple[Path, ...]:
        return self._state.get().files

    def get_failures(self) -> list[BaseException]:
        return list(self.main.failures)

    @property
    def artifacts(self) -> tuple[ResolvedArtifact, ...]:
        return self.get_filtered_artifacts()

    @property
    def artifact_files(self) -> tuple[Path, ...]:
        return self.get_filtered_files()

    @property
    def failures(self) -> list[BaseException]:
        return self.get_failures()

    def __iter__(self) -> Iterator[ResolvedArtifact]:
        return iter(self.get_filtered_artifacts())

    def __len__(self) -> int:
        return len(self.get_filtered_artifacts())

    def _compute(self) -> FilterState:
        excluded = self.get_excluded_identities()
        if not excluded:
            # Nothing to exclude: keep the main collection as is, without computing identities.
            return FilterState(
                artifacts=tuple(self.main.artifacts),
                files=tuple(self.main.artifact_files),
            )

        retained: dict[ResolvedArtifact, None] = {}
        files: list[Path] = []
        for artifact in self.main.artifacts:
            if artifact_identity(artifact) not in excluded:
                retained[artifact] = None
                files.append(artifact.file)
        logger.info(
            "Filtered artifacts: kept=%d removed=%d excluded_identities=%d",
            len(retained),
            len(self.main.artifacts) - len(files),
            len(excluded),
        )
        return FilterState(artifacts=tuple(retained), files=tuple(files))
