"""Shared test fixtures."""

from __future__ import annotations

import struct
import zipfile
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from artifact_tools.deps.models import (
    ModuleComponentId,
    OpaqueComponentId,
    ProjectComponentId,
    ResolvedArtifact,
)

FieldSpec = tuple[str, str | None, object]

_DESCRIPTORS = {
    None: "I",
    "integer": "I",
    "long": "J",
    "float": "F",
    "double": "D",
    "string": "Ljava/lang/String;",
}


class _PoolBuilder:
    def __init__(self) -> None:
        self.entries: list[bytes] = []
        self.count = 1

    def _add(self, payload: bytes, *, wide: bool = False) -> int:
        index = self.count
        self.entries.append(payload)
        self.count += 2 if wide else 1
        return index

    def utf8(self, value: str) -> int:
        raw = value.encode("utf-8")
        return self._add(bytes([1]) + struct.pack(">H", len(raw)) + raw)

    def integer(self, value: int) -> int:
        return self._add(bytes([3]) + struct.pack(">i", value))

    def float(self, value: float) -> int:
        return self._add(bytes([4]) + struct.pack(">f", value))

    def long(self, value: int) -> int:
        return self._add(bytes([5]) + struct.pack(">q", value), wide=True)

    def double(self, value: float) -> int:
        return self._add(bytes([6]) + struct.pack(">d", value), wide=True)

    def string(self, value: str) -> int:
        return self._add(bytes([8]) + struct.pack(">H", self.utf8(value)))

    def class_ref(self, name: str) -> int:
        return self._add(bytes([7]) + struct.pack(">H", self.utf8(name)))


def build_class(
    fields: Sequence[FieldSpec],
    *,
    class_name: str = "android/R$attr",
    deprecated_fields: bool = False,
) -> bytes:
    """Assemble a class file with the given ``(name, constant kind, value)`` fields.

    A ``None`` kind declares an int field without ``ConstantValue``.
    """

    pool = _PoolBuilder()
    this_class = pool.class_ref(class_name)
    super_class = pool.class_ref("java/lang/Object")
    constant_value = pool.utf8("ConstantValue")
    deprecated = pool.utf8("Deprecated")

    field_blobs = []
    for name, kind, value in fields:
        name_index = pool.utf8(name)
        descriptor_index = pool.utf8(_DESCRIPTORS[kind])
        attributes = []
        if deprecated_fields:
            attributes.append(struct.pack(">HI", deprecated, 0))
        if kind is not None:
            value_index = getattr(pool, kind)(value)
            attributes.append(struct.pack(">HIH", constant_value, 2, value_index))
        field_blobs.append(
            struct.pack(">HHHH", 0x0019, name_index, descriptor_index, len(attributes))
            + b"".join(attributes),
        )

    return (
        struct.pack(">IHHH", 0xCAFEBABE, 0, 52, pool.count)
        + b"".join(pool.entries)
        + struct.pack(">HHHH", 0x0031, this_class, super_class, 0)
        + struct.pack(">H", len(field_blobs))
        + b"".join(field_blobs)
        + struct.pack(">HH", 0, 0)
    )


@pytest.fixture()
def make_jar(tmp_path: Path) -> Callable[..., Path]:
    """Write a jar with the given ``{entry name: bytes}`` content."""

    def _make_jar(entries: dict[str, bytes], name: str = "classes.jar") -> Path:
        jar_path = tmp_path / name
        with zipfile.ZipFile(jar_path, "w") as archive:
            for entry_name, data in entries.items():
                archive.writestr(entry_name, data)
        return jar_path

    return _make_jar


def project_artifact(path: str, file: Path, variant: str | None = None) -> ResolvedArtifact:
    attributes = {"variant": variant} if variant is not None else {}
    return ResolvedArtifact(ProjectComponentId(path), file, attributes)


def module_artifact(group: str, module: str, file: Path, version: str = "1.0") -> ResolvedArtifact:
    return ResolvedArtifact(ModuleComponentId(group, module, version), file)


def opaque_artifact(name: str, file: Path) -> ResolvedArtifact:
    return ResolvedArtifact(OpaqueComponentId(name), file)
