"""批处理流水线：校验、扫描、逐个裁剪并写出，汇总结果。"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from enum import Enum
from typing import Callable, Optional

from image_cropper.core.config import CropJobConfig
from image_cropper.core.models import CropFailure, CropResult, RunSummary
from image_cropper.core.output_manager import OutputSink, WriteError
from image_cropper.core.progress import ProgressUpdate
from image_cropper.core.report import write_csv_report
from image_cropper.core.scanner import ensure_input_dir, scan_directory
from image_cropper.processing.worker import CropTask, run_task
from image_cropper.utils.size import parse_size

LOGGER = logging.getLogger(__name__)


ProgressCallback = Optional[Callable[[ProgressUpdate], None]]


class BatchState(str, Enum):
    """批处理所处阶段。"""

    IDLE = "idle"
    VALIDATING = "validating"
    SCANNING = "scanning"
    PROCESSING = "processing"
    DONE = "done"


def run_batch(config: CropJobConfig, progress_callback: ProgressCallback = None) -> RunSummary:
    """批量裁剪入口。

    参数校验失败时抛出 InvalidSizeFormat 或 DirectoryNotFound，此时不会处理任何文件；
    单个文件的解码、编码与写入错误记录在返回的 RunSummary 中，不会中断批处理。
    """

    started = time.perf_counter()

    _emit_progress(progress_callback, 0, 0, "校验参数", BatchState.VALIDATING)
    target = parse_size(config.size)
    input_dir = ensure_input_dir(config.input_dir)

    _emit_progress(progress_callback, 0, 0, "扫描输入目录", BatchState.SCANNING)
    LOGGER.info("开始扫描输入目录: %s", input_dir)
    candidates = scan_directory(input_dir)
    total = len(candidates)
    LOGGER.info("发现 %d 个候选图片文件", total)

    sink = OutputSink(config.output_dir)
    try:
        sink.prepare()
    except WriteError as exc:
        # 不视为致命错误，后续每个文件写入时会各自记录失败。
        LOGGER.error("%s", exc)

    summary = RunSummary()

    if total == 0:
        LOGGER.info("输入目录中没有支持的图片文件")
        summary.elapsed_seconds = time.perf_counter() - started
        _emit_progress(progress_callback, 0, 0, "没有需要处理的图片", BatchState.DONE)
        _write_report(config, summary)
        return summary

    tasks = [
        CropTask(index=idx, candidate=candidate, target=target, output_dir=sink.output_dir)
        for idx, candidate in enumerate(candidates)
    ]

    _emit_progress(progress_callback, 0, total, "开始执行裁剪任务", BatchState.PROCESSING)

    if config.max_workers <= 1 or total == 1:
        for task in tasks:
            outcome = _run_guarded(task)
            _record_outcome(summary, outcome)
            _emit_progress(
                progress_callback, summary.attempted, total, _describe(outcome), BatchState.PROCESSING
            )
    else:
        for outcome in _run_parallel(tasks, config.max_workers, progress_callback):
            _record_outcome(summary, outcome)

    summary.elapsed_seconds = time.perf_counter() - started
    LOGGER.info(
        "裁剪完成：尝试 %d 张，成功 %d 张，失败 %d 张，耗时 %.2f 秒",
        summary.attempted,
        summary.succeeded,
        summary.failed,
        summary.elapsed_seconds,
    )
    _write_report(config, summary)
    _emit_progress(progress_callback, total, total, "处理完成", BatchState.DONE)
    return summary


def _run_parallel(
    tasks: list[CropTask],
    max_workers: int,
    progress_callback: ProgressCallback,
) -> list[CropResult]:
    """在进程池中执行任务，结果按扫描顺序返回。"""

    total = len(tasks)
    slots: list[Optional[CropResult]] = [None] * total
    completed = 0

    with ProcessPoolExecutor(max_workers=min(max_workers, total)) as executor:
        future_map = {executor.submit(run_task, task): task for task in tasks}
        for future in as_completed(future_map):
            task = future_map[future]
            try:
                outcome = future.result()
            except Exception as exc:  # noqa: BLE001
                outcome = _worker_failure(task, exc)
            slots[task.index] = outcome
            completed += 1
            _emit_progress(progress_callback, completed, total, _describe(outcome), BatchState.PROCESSING)

    return [outcome for outcome in slots if outcome is not None]


def _run_guarded(task: CropTask) -> CropResult:
    """顺序模式下执行任务，意外异常同样只记为该文件失败。"""

    try:
        return run_task(task)
    except Exception as exc:  # noqa: BLE001
        return _worker_failure(task, exc)


def _worker_failure(task: CropTask, exc: BaseException) -> CropFailure:
    LOGGER.exception("任务执行异常：%s", exc)
    return CropFailure(
        source_path=task.candidate.source_path,
        file_name=task.candidate.file_name,
        reason=str(exc) or exc.__class__.__name__,
        status="error-worker",
    )


def _record_outcome(summary: RunSummary, outcome: CropResult) -> None:
    summary.record(outcome)
    if isinstance(outcome, CropFailure):
        LOGGER.warning("裁剪失败 %s: %s", outcome.file_name, outcome.reason)


def _describe(outcome: CropResult) -> str:
    if isinstance(outcome, CropFailure):
        return f"失败 {outcome.file_name}: {outcome.reason}"
    return f"完成 {outcome.file_name}"


def _emit_progress(
    callback: ProgressCallback,
    completed: int,
    total: int,
    message: Optional[str],
    state: BatchState,
) -> None:
    if not callback:
        return
    callback(ProgressUpdate(total=total, completed=completed, message=message, status=state.value))


def _write_report(config: CropJobConfig, summary: RunSummary) -> None:
    if config.report_path is None:
        return
    try:
        report_path = write_csv_report(summary.results, config.report_path)
    except OSError as exc:
        LOGGER.error("写入报告失败：%s", exc)
        return
    LOGGER.info("报告已写入: %s", report_path)
