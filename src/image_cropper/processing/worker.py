"""单个文件的处理单元，可在工作进程中执行。"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from image_cropper.core.models import CropFailure, CropResult, CropSuccess, ImageCandidate, SizeSpec
from image_cropper.core.output_manager import WriteError, write_output
from image_cropper.processing.codec import DecodeError, EncodeError
from image_cropper.processing.cropping import crop_candidate

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class CropTask:
    """描述单个图片裁剪任务。"""

    index: int
    candidate: ImageCandidate
    target: SizeSpec
    output_dir: Path


def run_task(task: CropTask) -> CropResult:
    """裁剪并写入一个文件，单文件错误转换为 CropFailure 返回。"""

    candidate = task.candidate

    try:
        data = crop_candidate(candidate, task.target)
    except DecodeError as exc:
        return _failure(candidate, "error-decode", exc)
    except EncodeError as exc:
        return _failure(candidate, "error-encode", exc)

    try:
        output_path = write_output(task.output_dir, candidate.file_name, data)
    except WriteError as exc:
        return _failure(candidate, "error-write", exc)

    LOGGER.debug("已裁剪: %s -> %s", candidate.source_path, output_path)
    return CropSuccess(
        source_path=candidate.source_path,
        file_name=candidate.file_name,
        output_path=output_path,
    )


def _failure(candidate: ImageCandidate, status: str, exc: Exception) -> CropFailure:
    return CropFailure(
        source_path=candidate.source_path,
        file_name=candidate.file_name,
        reason=str(exc),
        status=status,
    )
