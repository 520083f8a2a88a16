"""输出目录管理与文件写入模块。"""

from __future__ import annotations

import logging
from pathlib import Path

from image_cropper.core.exceptions import FileProcessingError

LOGGER = logging.getLogger(__name__)


class WriteError(FileProcessingError):
    """输出写入失败。"""


class OutputSink:
    """负责创建输出目录，并以源文件名写入裁剪结果。"""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir.expanduser().resolve()

    def prepare(self) -> Path:
        """创建输出目录（含父目录），目录已存在时不报错。"""

        if not self.output_dir.exists():
            LOGGER.info("创建输出目录: %s", self.output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(f"无法创建输出目录: {self.output_dir}") from exc
        return self.output_dir

    def destination_for(self, file_name: str) -> Path:
        # 与源文件同名同扩展名，已存在时直接覆盖。
        return self.output_dir / file_name

    def write(self, file_name: str, data: bytes) -> Path:
        """写入编码后的图片字节，返回输出路径。"""

        destination = self.destination_for(file_name)
        try:
            self.prepare()
            destination.write_bytes(data)
        except OSError as exc:
            raise WriteError(f"写入文件失败: {destination}: {exc}") from exc
        return destination


def write_output(output_dir: Path, file_name: str, data: bytes) -> Path:
    """便捷函数：确保目录存在后写入单个文件。"""

    return OutputSink(output_dir).write(file_name, data)
