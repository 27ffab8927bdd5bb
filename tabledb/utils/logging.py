"""
日志配置
"""

import logging
import sys

from .constants import LOG_LEVEL

__all__ = ["get_logger"]


def get_logger(name: str = "tabledb", level: str = LOG_LEVEL) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger
    # 结果文本走 stdout，日志只写 stderr
    handler = logging.StreamHandler(stream=sys.stderr)
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    return logger
