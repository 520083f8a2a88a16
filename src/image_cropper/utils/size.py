"""尺寸字符串解析工具。"""

from __future__ import annotations

import re

from image_cropper.core.exceptions import InvalidSizeFormat
from image_cropper.core.models import SizeSpec

INTEGER_RE = re.compile(r"^[+-]?\d+$")
SIZE_SEPARATOR = "x"


def parse_size(value: str) -> SizeSpec:
    """将 ``WxH`` 字符串（分隔符不区分大小写）解析为 SizeSpec。"""

    if not value or not value.strip():
        raise InvalidSizeFormat("尺寸不能为空，请使用 WxH 形式，例如 400x300")

    parts = value.strip().lower().split(SIZE_SEPARATOR)
    if len(parts) != 2:
        raise InvalidSizeFormat(f"无法解析尺寸: {value}，请使用 WxH 形式，例如 400x300")

    width_token, height_token = (part.strip() for part in parts)
    if not INTEGER_RE.match(width_token):
        raise InvalidSizeFormat(f"宽度必须为整数: {value}")
    if not INTEGER_RE.match(height_token):
        raise InvalidSizeFormat(f"高度必须为整数: {value}")

    width = int(width_token)
    height = int(height_token)
    if width <= 0 or height <= 0:
        raise InvalidSizeFormat(f"宽高必须大于 0: {value}")

    return SizeSpec(width=width, height=height)
