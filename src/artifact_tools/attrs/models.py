"""Value types for attribute extraction."""

from __future__ import annotations

from dataclasses import dataclass

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


@dataclass(frozen=True, slots=True)
class AttributeRecord:
    """One named 32-bit integer constant declared by the constants holder class."""

    name: str
    value: int

    def __post_init__(self) -> None:
        if not INT32_MIN <= self.value <= INT32_MAX:
            raise ValueError(f"Attribute {self.name!r} value {self.value} is outside int32 range")

    def to_line(self) -> str:
        return f"int attr {self.name} 0x{self.value & 0xFFFFFFFF:08x}\n"
