"""命令行入口测试。"""

from __future__ import annotations

from pathlib import Path

from PIL import Image
from typer.testing import CliRunner

from image_cropper.cli.main import app

runner = CliRunner()


def test_cli_crops_directory(tmp_path: Path) -> None:
    source = tmp_path / "input"
    output = tmp_path / "output"
    source.mkdir()
    Image.new("RGB", (800, 600), "blue").save(source / "a.jpg")
    (source / "broken.png").write_text("not an image")

    result = runner.invoke(app, ["-i", str(source), "-o", str(output), "-s", "400x300"])

    assert result.exit_code == 0, result.output
    assert "成功 1 张" in result.output
    assert "失败 1 张" in result.output
    with Image.open(output / "a.jpg") as img:
        assert img.size == (400, 300)


def test_cli_invalid_size_exits_with_error(tmp_path: Path) -> None:
    source = tmp_path / "input"
    source.mkdir()

    result = runner.invoke(app, ["-i", str(source), "-o", str(tmp_path / "out"), "-s", "400by300"])

    assert result.exit_code == 1
    assert "错误" in result.output


def test_cli_missing_input_dir_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, ["-i", str(tmp_path / "missing"), "-o", str(tmp_path / "out"), "-s", "10x10"])

    assert result.exit_code == 1
    assert not (tmp_path / "out").exists()


def test_cli_empty_directory_is_success(tmp_path: Path) -> None:
    source = tmp_path / "input"
    source.mkdir()

    result = runner.invoke(app, ["-i", str(source), "-o", str(tmp_path / "out"), "-s", "10x10"])

    assert result.exit_code == 0
    assert "没有支持的图片文件" in result.output
    assert (tmp_path / "out").is_dir()


def test_cli_rejects_out_of_range_workers(tmp_path: Path) -> None:
    source = tmp_path / "input"
    source.mkdir()

    result = runner.invoke(
        app, ["-i", str(source), "-o", str(tmp_path / "out"), "-s", "10x10", "--workers", "0"]
    )

    assert result.exit_code != 0
