"""JSON manifest describing a resolved artifact collection."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from artifact_tools.deps.models import (
    ComponentId,
    ModuleComponentId,
    OpaqueComponentId,
    ProjectComponentId,
    ResolvedArtifact,
    ResolvedArtifactCollection,
)
from artifact_tools.errors import ArtifactResolutionError


def load_artifact_collection(path: Path) -> ResolvedArtifactCollection:
    """Load a collection; relative artifact files resolve against the manifest directory."""

    payload = json.loads(path.read_text("utf-8"))
    if not isinstance(payload, dict):
        raise TypeError(f"Expected JSON object in {path}")
    base_dir = path.parent
    try:
        artifacts = tuple(
            _artifact_from_dict(item, base_dir=base_dir) for item in payload.get("artifacts", [])
        )
    except KeyError as exc:
        raise ValueError(f"Manifest {path}: missing key {exc}") from exc
    failures = tuple(ArtifactResolutionError(str(item)) for item in payload.get("failures", []))
    return ResolvedArtifactCollection(artifacts=artifacts, failures=failures)


def dump_artifact_collection(collection: ResolvedArtifactCollection, path: Path) -> None:
    payload = {
        "artifacts": [
            {
                "component": _component_to_dict(artifact.component_id),
                "file": str(artifact.file),
                "attributes": dict(artifact.attributes),
            }
            for artifact in collection.artifacts
        ],
        "failures": [str(failure) for failure in collection.failures],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")


def _artifact_from_dict(item: dict[str, Any], *, base_dir: Path) -> ResolvedArtifact:
    _require_object(item, "artifact")
    file_path = Path(str(item["file"]))
    if not file_path.is_absolute():
        file_path = base_dir / file_path
    attributes = item.get("attributes") or {}
    _require_object(attributes, "attributes")
    return ResolvedArtifact(
        component_id=_component_from_dict(item["component"]),
        file=file_path,
        attributes={str(key): str(value) for key, value in attributes.items()},
    )


def _component_from_dict(payload: dict[str, Any]) -> ComponentId:
    _require_object(payload, "component")
    kind = payload.get("kind")
    if kind == "project":
        return ProjectComponentId(project_path=str(payload["project_path"]))
    if kind == "module":
        return ModuleComponentId(
            group=str(payload["group"]),
            module=str(payload["module"]),
            version=str(payload.get("version", "")),
        )
    if kind == "opaque":
        return OpaqueComponentId(display_name=str(payload["display_name"]))
    raise ValueError(f"Unsupported component kind: {kind!r}")


def _require_object(value: object, what: str) -> None:
    if not isinstance(value, dict):
        raise ValueError(f"Expected JSON object for {what}, got {type(value).__name__}")


def _component_to_dict(component_id: ComponentId) -> dict[str, str]:
    if isinstance(component_id, ProjectComponentId):
        return {"kind": "project", "project_path": component_id.project_path}
    if isinstance(component_id, ModuleComponentId):
        return {
            "kind": "module",
            "group": component_id.group,
            "module": component_id.module,
            "version": component_id.version,
        }
    return {"kind": "opaque", "display_name": component_id.display_name}
