"""尺寸解析与目录扫描逻辑测试。"""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from image_cropper.core.exceptions import DirectoryNotFound, InvalidSizeFormat
from image_cropper.core.models import SizeSpec
from image_cropper.core.scanner import scan_directory
from image_cropper.utils.size import parse_size


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("400x300", SizeSpec(400, 300)),
        ("400X300", SizeSpec(400, 300)),
        ("1x1", SizeSpec(1, 1)),
        (" 1920x1080 ", SizeSpec(1920, 1080)),
    ],
)
def test_parse_size_accepts_valid_values(raw: str, expected: SizeSpec) -> None:
    assert parse_size(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["", "400", "400x", "x300", "400x300x2", "abcxdef", "4.5x3", "0x300", "400x0", "-400x300", "400*300"],
)
def test_parse_size_rejects_malformed_values(raw: str) -> None:
    with pytest.raises(InvalidSizeFormat):
        parse_size(raw)


def test_size_spec_is_immutable() -> None:
    size = SizeSpec(10, 20)
    with pytest.raises(AttributeError):
        size.width = 30  # type: ignore[misc]
    assert str(size) == "10x20"


def test_scan_filters_by_extension(tmp_path: Path) -> None:
    names = ["a.jpg", "b.JPEG", "c.png", "d.gif", "e.WebP"]
    for name in names:
        (tmp_path / name).write_bytes(b"")
    # 无关扩展名与子目录都应被忽略。
    (tmp_path / "notes.txt").write_text("hello")
    (tmp_path / "image.bmp").write_bytes(b"")
    (tmp_path / "noext").write_bytes(b"")
    nested = tmp_path / "nested.png"
    nested.mkdir()
    Image.new("RGB", (8, 8)).save(nested / "inner.png")

    candidates = scan_directory(tmp_path)

    assert sorted(c.file_name for c in candidates) == sorted(names)
    for candidate in candidates:
        assert candidate.source_path.parent == tmp_path.resolve()
        assert candidate.source_path.name == candidate.file_name


def test_scan_empty_directory_returns_empty_list(tmp_path: Path) -> None:
    assert scan_directory(tmp_path) == []


def test_scan_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(DirectoryNotFound):
        scan_directory(tmp_path / "missing")


def test_scan_file_path_raises(tmp_path: Path) -> None:
    file_path = tmp_path / "image.png"
    Image.new("RGB", (8, 8)).save(file_path)

    with pytest.raises(DirectoryNotFound):
        scan_directory(file_path)
