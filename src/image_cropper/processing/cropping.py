"""裁剪核心：cover 缩放后居中截取目标尺寸。"""

from __future__ import annotations

import logging

from PIL import Image

from image_cropper.core.models import ImageCandidate, SizeSpec
from image_cropper.processing.codec import (
    DecodeError,
    crop_window,
    decode_image,
    encode_image,
    resize_image,
)

LOGGER = logging.getLogger(__name__)


def compute_cover_size(source_size: tuple[int, int], target: SizeSpec) -> tuple[int, int]:
    """计算刚好覆盖目标区域的等比缩放尺寸。"""

    width, height = source_size
    scale = max(target.width / width, target.height / height)
    # 浮点误差可能让结果比目标少 1 像素，这里兜底。
    scaled_w = max(target.width, round(width * scale))
    scaled_h = max(target.height, round(height * scale))
    return scaled_w, scaled_h


def compute_crop_offset(scaled_size: tuple[int, int], target: SizeSpec) -> tuple[int, int]:
    """居中截取窗口的左上角坐标。"""

    scaled_w, scaled_h = scaled_size
    return (scaled_w - target.width) // 2, (scaled_h - target.height) // 2


def cover_crop(image: Image.Image, target: SizeSpec) -> Image.Image:
    """将图片缩放至覆盖目标尺寸，再从中心截取 target 大小的区域。"""

    scaled_size = compute_cover_size(image.size, target)
    if scaled_size != image.size:
        scaled = resize_image(image, *scaled_size)
    else:
        scaled = image

    x, y = compute_crop_offset(scaled_size, target)
    cropped = crop_window(scaled, x, y, target.width, target.height)

    if scaled is not image:
        scaled.close()
    return cropped


def crop_bytes(data: bytes, target: SizeSpec) -> bytes:
    """解码、裁剪并按源格式重新编码。"""

    decoded = decode_image(data)
    try:
        LOGGER.debug(
            "源尺寸 %dx%d (%s) -> 目标 %s", decoded.width, decoded.height, decoded.format, target
        )
        cropped = cover_crop(decoded.image, target)
        try:
            return encode_image(cropped, decoded.format)
        finally:
            cropped.close()
    finally:
        decoded.image.close()


def crop_candidate(candidate: ImageCandidate, target: SizeSpec) -> bytes:
    """读取候选文件并返回裁剪后的图片字节，不写磁盘。"""

    try:
        data = candidate.source_path.read_bytes()
    except OSError as exc:
        raise DecodeError(f"无法读取文件: {candidate.source_path}: {exc}") from exc
    return crop_bytes(data, target)
