"""报告生成工具。"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from image_cropper.core.models import CropResult, CropSuccess

HEADER = ["source_path", "output_path", "status", "message"]


def write_csv_report(results: Iterable[CropResult], report_path: Path) -> Path:
    """将每个文件的处理结果写入 CSV 报告。"""

    report_path.parent.mkdir(parents=True, exist_ok=True)
    with report_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(HEADER)
        for record in results:
            if isinstance(record, CropSuccess):
                writer.writerow([str(record.source_path), str(record.output_path), "processed", ""])
            else:
                writer.writerow([str(record.source_path), "", record.status, record.reason])
    return report_path
