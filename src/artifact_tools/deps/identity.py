"""Identity strings used by transitive dependency lists.

The format is shared by the writer producing the lists and by the filter
consuming them, so it has to stay byte-for-byte stable:

- project component: ``<project path>`` or ``<project path>::<variant>``
- module component: ``<group>:<module>``
- anything else: the identifier's string form
"""

from __future__ import annotations

from artifact_tools.deps.models import (
    ModuleComponentId,
    OpaqueComponentId,
    ProjectComponentId,
    ResolvedArtifact,
)


def artifact_identity(artifact: ResolvedArtifact) -> str:
    component_id = artifact.component_id
    if isinstance(component_id, ProjectComponentId):
        variant = artifact.variant
        if variant is None:
            return component_id.project_path
        return f"{component_id.project_path}::{variant}"
    if isinstance(component_id, ModuleComponentId):
        return f"{component_id.group}:{component_id.module}"
    if isinstance(component_id, OpaqueComponentId):
        return str(component_id)
    raise TypeError(f"Unsupported component identifier: {component_id!r}")
