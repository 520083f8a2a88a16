"""日志配置工具。"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(processName)s] %(levelname)s %(name)s: %(message)s"

# 第三方库在 DEBUG 级别输出逐块解码信息，单独限制。
NOISY_LOGGERS = ("PIL",)


def setup_logging(level: int = logging.INFO) -> None:
    """初始化日志；--verbose 时只放开本项目的调试日志。"""

    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
