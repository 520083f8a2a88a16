"""输入目录扫描与筛选逻辑。"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from image_cropper.core.exceptions import DirectoryNotFound
from image_cropper.core.models import ImageCandidate

LOGGER = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def ensure_input_dir(input_dir: Path) -> Path:
    """确认输入目录存在且可读，返回解析后的绝对路径。"""

    resolved = input_dir.expanduser().resolve()
    if not resolved.is_dir():
        raise DirectoryNotFound(f"输入目录不存在: {input_dir}")
    if not os.access(resolved, os.R_OK | os.X_OK):
        raise DirectoryNotFound(f"输入目录不可读: {input_dir}")
    return resolved


def is_supported_image(name: str) -> bool:
    return Path(name).suffix.lower() in IMAGE_EXTENSIONS


def scan_directory(input_dir: Path) -> list[ImageCandidate]:
    """列出输入目录下一层的图片文件，保持目录列举顺序。

    子目录直接忽略；没有匹配文件时返回空列表。
    """

    root = ensure_input_dir(input_dir)

    try:
        entries = list(os.scandir(root))
    except OSError as exc:
        raise DirectoryNotFound(f"无法读取输入目录: {input_dir}") from exc

    collected: list[ImageCandidate] = []
    for entry in entries:
        try:
            is_file = entry.is_file()
        except OSError:
            LOGGER.debug("无法读取文件信息，忽略: %s", entry.path)
            continue
        if not is_file:
            continue
        if not is_supported_image(entry.name):
            continue
        collected.append(ImageCandidate(source_path=Path(entry.path), file_name=entry.name))

    LOGGER.debug("扫描 %s 得到 %d 个候选文件（共 %d 项）", root, len(collected), len(entries))
    return collected
