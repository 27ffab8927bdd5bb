"""
引擎行为开关
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineOptions:
    # True 时 CREATE_TABLE 中任一列定义非法即整条失败，默认沿用静默丢弃
    strict_schema: bool = False
