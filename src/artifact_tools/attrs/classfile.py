"""Minimal JVM class-file reader for constant field values.

Only the parts of the format needed to reach the field table are decoded: the
constant pool, the class header and the fields with their attributes. Method
and class-level attributes are never read.
"""

from __future__ import annotations

import struct

from artifact_tools.attrs.models import AttributeRecord
from artifact_tools.errors import ClassFormatError

CLASS_MAGIC = 0xCAFEBABE
CONSTANT_VALUE_ATTRIBUTE = "ConstantValue"

TAG_UTF8 = 1
TAG_INTEGER = 3
TAG_FLOAT = 4
TAG_LONG = 5
TAG_DOUBLE = 6
TAG_CLASS = 7
TAG_STRING = 8
TAG_FIELDREF = 9
TAG_METHODREF = 10
TAG_INTERFACE_METHODREF = 11
TAG_NAME_AND_TYPE = 12
TAG_METHOD_HANDLE = 15
TAG_METHOD_TYPE = 16
TAG_DYNAMIC = 17
TAG_INVOKE_DYNAMIC = 18
TAG_MODULE = 19
TAG_PACKAGE = 20

# Payload size in bytes for every fixed-width constant pool entry.
_FIXED_ENTRY_SIZES = {
    TAG_INTEGER: 4,
    TAG_FLOAT: 4,
    TAG_LONG: 8,
    TAG_DOUBLE: 8,
    TAG_CLASS: 2,
    TAG_STRING: 2,
    TAG_FIELDREF: 4,
    TAG_METHODREF: 4,
    TAG_INTERFACE_METHODREF: 4,
    TAG_NAME_AND_TYPE: 4,
    TAG_METHOD_HANDLE: 3,
    TAG_METHOD_TYPE: 2,
    TAG_DYNAMIC: 4,
    TAG_INVOKE_DYNAMIC: 4,
    TAG_MODULE: 2,
    TAG_PACKAGE: 2,
}
_WIDE_TAGS = frozenset({TAG_LONG, TAG_DOUBLE})

_U2 = struct.Struct(">H")
_U4 = struct.Struct(">I")
_S4 = struct.Struct(">i")


class _ByteReader:
    """Big-endian cursor over class-file bytes with bounds checking."""

    __slots__ = ("_data", "offset")

    def __init__(self, data: bytes) -> None:
        self._data = data
        self.offset = 0

    def take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self._data):
            raise ClassFormatError("Truncated class file", offset=self.offset)
        chunk = self._data[self.offset : end]
        self.offset = end
        return chunk

    def skip(self, size: int) -> None:
        self.take(size)

    def u2(self) -> int:
        return _U2.unpack(self.take(2))[0]

    def u4(self) -> int:
        return _U4.unpack(self.take(4))[0]


class ConstantPool:
    """Decoded constant pool keyed by 1-based index.

    Utf8 and Integer entries keep their values; every other entry keeps only its
    tag, which is enough to reject a ``ConstantValue`` that is not an integer.
    """

    def __init__(
        self,
        tags: dict[int, int],
        strings: dict[int, str],
        integers: dict[int, int],
        count: int,
    ) -> None:
        self._tags = tags
        self._strings = strings
        self._integers = integers
        self.count = count

    @classmethod
    def read(cls, reader: _ByteReader) -> ConstantPool:
        count = reader.u2()
        tags: dict[int, int] = {}
        strings: dict[int, str] = {}
        integers: dict[int, int] = {}
        index = 1
        while index < count:
            entry_offset = reader.offset
            tag = reader.take(1)[0]
            tags[index] = tag
            if tag == TAG_UTF8:
                length = reader.u2()
                strings[index] = _decode_modified_utf8(reader.take(length), entry_offset)
            elif tag == TAG_INTEGER:
                integers[index] = _S4.unpack(reader.take(4))[0]
            elif tag in _FIXED_ENTRY_SIZES:
                reader.skip(_FIXED_ENTRY_SIZES[tag])
            else:
                raise ClassFormatError(f"Unknown constant pool tag {tag}", offset=entry_offset)
            # Long and Double occupy two pool slots.
            index += 2 if tag in _WIDE_TAGS else 1
        return cls(tags, strings, integers, count)

    def tag(self, index: int) -> int:
        try:
            return self._tags[index]
        except KeyError:
            raise ClassFormatError(
                f"Invalid constant pool index {index} (pool size {self.count})",
            ) from None

    def utf8(self, index: int) -> str:
        if self.tag(index) != TAG_UTF8:
            raise ClassFormatError(f"Constant pool entry {index} is not Utf8")
        return self._strings[index]

    def integer(self, index: int) -> int | None:
        """Return the Integer constant at ``index`` or ``None`` for any other kind."""

        if self.tag(index) != TAG_INTEGER:
            return None
        return self._integers[index]


def read_int_constant_fields(data: bytes) -> list[AttributeRecord]:
    """Return every field of the class whose ``ConstantValue`` is a 32-bit integer.

    Records keep field declaration order. Fields without a ``ConstantValue``
    attribute, or whose constant is a Long, Float, Double or String, are skipped.
    Raises ``ClassFormatError`` when the bytes are not a well-formed class file.
    """

    reader = _ByteReader(data)
    if reader.u4() != CLASS_MAGIC:
        raise ClassFormatError("Bad class file magic", offset=0)
    reader.skip(4)  # minor_version, major_version
    pool = ConstantPool.read(reader)
    reader.skip(6)  # access_flags, this_class, super_class
    interfaces_count = reader.u2()
    reader.skip(2 * interfaces_count)

    records: list[AttributeRecord] = []
    fields_count = reader.u2()
    for _ in range(fields_count):
        reader.skip(2)  # access_flags
        name = pool.utf8(reader.u2())
        reader.skip(2)  # descriptor_index
        value = _read_field_constant(reader, pool)
        if value is not None:
            records.append(AttributeRecord(name=name, value=value))
    return records


def _read_field_constant(reader: _ByteReader, pool: ConstantPool) -> int | None:
    value: int | None = None
    for _ in range(reader.u2()):
        attribute_name = pool.utf8(reader.u2())
        length = reader.u4()
        if attribute_name != CONSTANT_VALUE_ATTRIBUTE:
            reader.skip(length)
            continue
        if length != 2:
            raise ClassFormatError(
                f"ConstantValue attribute has length {length}, expected 2",
                offset=reader.offset,
            )
        value = pool.integer(reader.u2())
    return value


def _decode_modified_utf8(raw: bytes, offset: int) -> str:
    # Class files encode NUL as C0 80 and supplementary characters as surrogate pairs.
    try:
        text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
        return text.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeError as exc:
        raise ClassFormatError(f"Malformed Utf8 constant: {exc}", offset=offset) from exc
