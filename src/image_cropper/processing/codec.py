"""基于 Pillow 的解码、缩放、裁剪与编码能力。"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from image_cropper.core.exceptions import FileProcessingError

LOGGER = logging.getLogger(__name__)

# MPO 是部分相机输出的多帧 JPEG，按 JPEG 处理。
FORMAT_ALIASES = {"MPO": "JPEG"}
SUPPORTED_FORMATS = {"JPEG", "PNG", "GIF", "WEBP"}
HIGH_BIT_DEPTH_MODES = {"I;16", "I;16B", "I;16L", "I;16N", "I"}

ENCODE_PARAMS: dict[str, dict] = {
    "JPEG": {"quality": 95, "subsampling": 1, "optimize": True},
    "PNG": {"optimize": True},
    "GIF": {"optimize": True},
    "WEBP": {"quality": 95, "method": 4},
}


class DecodeError(FileProcessingError):
    """源图片无法读取或解码。"""


class EncodeError(FileProcessingError):
    """裁剪结果无法按原格式编码。"""


@dataclass(slots=True)
class DecodedImage:
    """解码结果：像素数据、尺寸与源格式。"""

    image: Image.Image
    width: int
    height: int
    format: str


def decode_image(data: bytes) -> DecodedImage:
    """解码图片字节，执行 EXIF 旋转与模式归一化。

    返回值中的 Image 为新对象，调用者负责关闭。动图只保留第一帧。
    """

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            image_format = FORMAT_ALIASES.get(img.format or "", img.format)

            # EXIF Orientation 校正
            oriented = ImageOps.exif_transpose(img)
            image = _normalize_mode(oriented).copy()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        LOGGER.debug("无法识别图像数据: %s", exc)
        raise DecodeError(f"无法解码图像: {exc}") from exc

    if image_format not in SUPPORTED_FORMATS:
        image.close()
        raise DecodeError(f"不支持的图像格式: {image_format}")

    width, height = image.size
    if width <= 0 or height <= 0:
        image.close()
        raise DecodeError(f"图像尺寸无效: {width}x{height}")

    return DecodedImage(image=image, width=width, height=height, format=image_format)


def resize_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """使用 Lanczos 重采样缩放到指定尺寸。"""

    return image.resize((width, height), Image.LANCZOS)


def crop_window(image: Image.Image, x: int, y: int, width: int, height: int) -> Image.Image:
    """截取以 (x, y) 为左上角的窗口。"""

    return image.crop((x, y, x + width, y + height))


def encode_image(image: Image.Image, image_format: str) -> bytes:
    """按指定格式编码为字节。"""

    image_to_save = _prepare_for_format(image, image_format)
    buffer = io.BytesIO()
    try:
        image_to_save.save(buffer, format=image_format, **ENCODE_PARAMS.get(image_format, {}))
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"无法编码为 {image_format}: {exc}") from exc
    finally:
        if image_to_save is not image:
            image_to_save.close()
    return buffer.getvalue()


def _normalize_mode(img: Image.Image) -> Image.Image:
    """将调色板等模式转换为可做高质量重采样的模式。"""

    if img.mode in {"RGB", "RGBA", "L", "CMYK"}:
        return img

    if img.mode in {"LA", "PA", "RGBa", "La"}:
        return img.convert("RGBA")

    if img.mode in HIGH_BIT_DEPTH_MODES:
        # 16 位灰度直接转 RGB 会在 255 处截断，先按比例压缩到 0..255。
        return img.convert("I").point(lambda value: value * (1 / 256)).convert("L")

    if img.mode == "P" and "transparency" in img.info:
        return img.convert("RGBA")

    return img.convert("RGB")


def _prepare_for_format(image: Image.Image, image_format: str) -> Image.Image:
    """转换为目标格式可写入的模式。"""

    if image_format == "JPEG":
        if image.mode in {"RGB", "L", "CMYK"}:
            return image
        if image.mode == "RGBA":
            # JPEG 不支持 Alpha，使用白色背景混合。
            background = Image.new("RGB", image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[-1])
            return background
        return image.convert("RGB")

    if image.mode == "CMYK":
        return image.convert("RGB")

    if image_format == "WEBP" and image.mode == "L":
        return image.convert("RGB")

    return image
