"""裁剪任务的配置模型。"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(slots=True)
class CropJobConfig:
    """单次批量裁剪任务的配置集合。

    ``size`` 保留原始字符串，由批处理的校验阶段负责解析。
    """

    input_dir: Path
    output_dir: Path
    size: str
    max_workers: int = 1
    report_path: Optional[Path] = None
