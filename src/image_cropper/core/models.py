"""核心数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class SizeSpec:
    """目标输出尺寸（像素）。"""

    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(slots=True)
class ImageCandidate:
    """扫描阶段得到的待裁剪图片。"""

    source_path: Path
    file_name: str


@dataclass(slots=True)
class CropSuccess:
    """单个文件裁剪并写入成功。"""

    source_path: Path
    file_name: str
    output_path: Path


@dataclass(slots=True)
class CropFailure:
    """单个文件处理失败的记录。"""

    source_path: Path
    file_name: str
    reason: str
    status: str = "error-decode"


CropResult = Union[CropSuccess, CropFailure]


@dataclass(slots=True)
class RunSummary:
    """一次批处理的汇总结果。"""

    attempted: int = 0
    succeeded: int = 0
    failures: list[CropFailure] = field(default_factory=list)
    results: list[CropResult] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def failed(self) -> int:
        return len(self.failures)

    def record(self, result: CropResult) -> None:
        """按扫描顺序追加一个文件的结果。"""

        self.attempted += 1
        self.results.append(result)
        if isinstance(result, CropSuccess):
            self.succeeded += 1
        else:
            self.failures.append(result)
