from __future__ import annotations

import struct
import zipfile
from pathlib import Path

import allure
import pytest
from conftest import build_class

from artifact_tools.attrs import (
    ATTR_CLASS_ENTRY,
    AttributeRecord,
    extract_attributes,
    format_attributes,
    run_attr_extraction,
    write_attributes,
)
from artifact_tools.errors import ArchiveError, ClassFormatError

pytestmark = [
    allure.epic("Resource Attributes"),
    allure.feature("R.txt Extraction"),
]


def test_jar_without_attr_class_produces_empty_file(make_jar, tmp_path: Path) -> None:
    jar = make_jar({"com/example/R$id.class": build_class([("x", "integer", 1)])})
    output = tmp_path / "R.txt"
    output.write_text("stale content\n", "utf-8")

    count = run_attr_extraction(jar, output)

    assert count == 0
    assert output.read_bytes() == b""


def test_attr_constants_are_written_as_r_txt_lines(make_jar, tmp_path: Path) -> None:
    jar = make_jar({ATTR_CLASS_ENTRY: build_class([("A", "integer", 1), ("B", "integer", 255)])})
    output = tmp_path / "R.txt"

    count = run_attr_extraction(jar, output)

    assert count == 2
    assert output.read_bytes() == b"int attr A 0x00000001\nint attr B 0x000000ff\n"


def test_non_integer_fields_never_reach_output(make_jar, tmp_path: Path) -> None:
    jar = make_jar(
        {
            ATTR_CLASS_ENTRY: build_class(
                [
                    ("label", "string", "hello"),
                    ("noConstant", None, None),
                    ("ratio", "float", 0.5),
                    ("actionBarSize", "integer", 0x7F010001),
                ],
            ),
        },
    )
    output = tmp_path / "R.txt"

    run_attr_extraction(jar, output)

    assert output.read_text("utf-8") == "int attr actionBarSize 0x7f010001\n"


def test_custom_entry_path(make_jar, tmp_path: Path) -> None:
    entry = "com/example/R$attr.class"
    jar = make_jar({entry: build_class([("custom", "integer", 16)])})

    assert extract_attributes(jar, entry) == [AttributeRecord("custom", 16)]
    assert extract_attributes(jar) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "0x00000000"),
        (-1, "0xffffffff"),
        (2**31 - 1, "0x7fffffff"),
        (-(2**31), "0x80000000"),
        (0x7F040000, "0x7f040000"),
    ],
)
def test_hex_is_eight_lowercase_digits(value: int, expected: str) -> None:
    assert format_attributes([AttributeRecord("v", value)]) == f"int attr v {expected}\n"


def test_format_of_missing_records_is_empty() -> None:
    assert format_attributes(None) == ""
    assert format_attributes([]) == ""


def test_record_rejects_values_outside_int32() -> None:
    with pytest.raises(ValueError, match="int32"):
        AttributeRecord("big", 2**31)


def test_write_attributes_truncates_existing_output(tmp_path: Path) -> None:
    output = tmp_path / "R.txt"
    output.write_text("int attr old 0x00000001\nint attr older 0x00000002\n", "utf-8")

    write_attributes([AttributeRecord("new", 3)], output)

    assert output.read_text("utf-8") == "int attr new 0x00000003\n"


def test_corrupt_archive_raises_io_error(tmp_path: Path) -> None:
    jar = tmp_path / "broken.jar"
    jar.write_bytes(b"this is not a zip file")

    with pytest.raises(ArchiveError) as exc_info:
        extract_attributes(jar)
    assert isinstance(exc_info.value, OSError)


def test_missing_archive_raises_io_error(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        run_attr_extraction(tmp_path / "missing.jar", tmp_path / "R.txt")
    assert not (tmp_path / "R.txt").exists()


def test_malformed_attr_class_propagates_parse_error(make_jar, tmp_path: Path) -> None:
    jar = make_jar({ATTR_CLASS_ENTRY: b"\xca\xfe\xba\xbe\x00"})
    output = tmp_path / "R.txt"

    with pytest.raises(ClassFormatError):
        run_attr_extraction(jar, output)
    assert not output.exists()


def test_unwritable_output_raises_io_error(make_jar, tmp_path: Path) -> None:
    jar = make_jar({ATTR_CLASS_ENTRY: build_class([("A", "integer", 1)])})

    with pytest.raises(OSError):
        run_attr_extraction(jar, tmp_path / "missing-dir" / "R.txt")


def _corrupt_deflated_entry(jar: Path, entry: str) -> None:
    with zipfile.ZipFile(jar) as archive:
        info = archive.getinfo(entry)
    raw = bytearray(jar.read_bytes())
    name_length, extra_length = struct.unpack(
        "<HH",
        raw[info.header_offset + 26 : info.header_offset + 30],
    )
    start = info.header_offset + 30 + name_length + extra_length
    for index in range(start, start + info.compress_size):
        raw[index] ^= 0xFF
    jar.write_bytes(bytes(raw))


def test_corrupt_compressed_entry_raises_io_error(tmp_path: Path) -> None:
    jar = tmp_path / "classes.jar"
    fields = [(f"attr{index}", "integer", 0x7F010000 + index) for index in range(64)]
    with zipfile.ZipFile(jar, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(ATTR_CLASS_ENTRY, build_class(fields))
    _corrupt_deflated_entry(jar, ATTR_CLASS_ENTRY)
    output = tmp_path / "R.txt"

    with pytest.raises(ArchiveError, match="Cannot read archive") as exc_info:
        run_attr_extraction(jar, output)
    assert isinstance(exc_info.value, OSError)
    assert not output.exists()
