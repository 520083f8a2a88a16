"""命令行入口。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from image_cropper.core.config import CropJobConfig
from image_cropper.core.exceptions import InvalidConfigurationError
from image_cropper.core.progress import ProgressUpdate
from image_cropper.processing.pipeline import run_batch
from image_cropper.utils.logging import setup_logging

app = typer.Typer(help="批量将图片按中心裁剪为固定尺寸。")


def _build_progress_callback(progress: Progress):
    task_id: Optional[int] = None

    def callback(update: ProgressUpdate) -> None:
        nonlocal task_id
        if update.total == 0:
            return
        if task_id is None:
            task_id = progress.add_task("裁剪图片", total=update.total)
        progress.update(task_id, completed=update.completed)
        if update.message and update.message.startswith("失败"):
            progress.log(update.message)

    return callback


@app.command("crop")
def crop_cli(
    input_dir: Path = typer.Option(..., "--input-dir", "-i", help="包含图片的输入目录"),
    output_dir: Path = typer.Option(..., "--output-dir", "-o", help="裁剪结果的输出目录"),
    size: str = typer.Option(..., "--size", "-s", help="裁剪尺寸，形如 400x300"),
    max_workers: int = typer.Option(1, "--workers", "-c", min=1, max=64, help="并发进程数量"),
    report: Optional[Path] = typer.Option(None, "--report", help="CSV 报告输出路径"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """执行批量裁剪。"""

    setup_logging(logging.DEBUG if verbose else logging.INFO)
    logging.getLogger(__name__).debug("CLI 参数解析完成")

    job = CropJobConfig(
        input_dir=input_dir.expanduser(),
        output_dir=output_dir.expanduser(),
        size=size,
        max_workers=max_workers,
        report_path=report.expanduser().resolve() if report else None,
    )

    typer.echo(f"输入目录：{job.input_dir}")
    typer.echo(f"裁剪尺寸：{job.size}")
    typer.echo(f"并发进程：{job.max_workers}")
    typer.echo(f"输出目录：{job.output_dir}")

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn(),
    )

    try:
        with progress:
            summary = run_batch(job, progress_callback=_build_progress_callback(progress))
    except InvalidConfigurationError as exc:
        typer.echo(f"错误：{exc}", err=True)
        raise typer.Exit(code=1) from exc

    if summary.attempted == 0:
        typer.echo("输入目录中没有支持的图片文件。")

    typer.echo(
        f"处理完成：尝试 {summary.attempted} 张，成功 {summary.succeeded} 张，"
        f"失败 {summary.failed} 张（耗时 {summary.elapsed_seconds:.2f} 秒）。"
    )
    for failure in summary.failures:
        typer.echo(f"  失败 {failure.file_name}: {failure.reason}", err=True)
    if job.report_path:
        typer.echo(f"报告文件：{job.report_path}")


if __name__ == "__main__":
    app()
