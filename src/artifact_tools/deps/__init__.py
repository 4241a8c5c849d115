"""Dependency identity lists and the artifact collection filter built on them."""

from artifact_tools.deps.exclusions import read_excluded_identities
from artifact_tools.deps.filtered import FilteredArtifactCollection, FilterState
from artifact_tools.deps.identity import artifact_identity
from artifact_tools.deps.lazy import Lazy
from artifact_tools.deps.models import (
    VARIANT_ATTRIBUTE,
    ArtifactCollection,
    ComponentId,
    ModuleComponentId,
    OpaqueComponentId,
    ProjectComponentId,
    ResolvedArtifact,
    ResolvedArtifactCollection,
)
from artifact_tools.deps.writer import collect_identities, write_transitive_deps

__all__ = [
    "VARIANT_ATTRIBUTE",
    "ArtifactCollection",
    "ComponentId",
    "FilterState",
    "FilteredArtifactCollection",
    "Lazy",
    "ModuleComponentId",
    "OpaqueComponentId",
    "ProjectComponentId",
    "ResolvedArtifact",
    "ResolvedArtifactCollection",
    "artifact_identity",
    "collect_identities",
    "read_excluded_identities",
    "write_transitive_deps",
]
