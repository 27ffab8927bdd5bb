"""
表结构与值模型
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ...utils.constants import INT_MAX, INT_MIN, NAME_PATTERN
from ...utils.exceptions import ExecutionError

Value = Union[int, str]
Row = Dict[str, Value]

_re_name = re.compile(NAME_PATTERN)
_re_int = re.compile(r"[+-]?[0-9]+")


def is_valid_name(name: str) -> bool:
    return bool(_re_name.fullmatch(name))


class DataType(Enum):
    INT = "INT"
    STRING = "STRING"

    @classmethod
    def parse(cls, text: str) -> Optional["DataType"]:
        """按名字解析类型（不区分大小写），未知类型返回 None。"""
        try:
            return cls[text.upper()]
        except KeyError:
            return None

    def accepts(self, value: Any) -> bool:
        if self is DataType.INT:
            # bool 是 int 的子类，这里显式排除
            return isinstance(value, int) and not isinstance(value, bool) and INT_MIN <= value <= INT_MAX
        return isinstance(value, str)


@dataclass(frozen=True)
class Column:
    name: str
    type: DataType

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.type.value}


def parse_literal(column: Column, token: str) -> Value:
    """
    把命令中的字面量转换为列类型对应的值

    Args:
        column: 目标列
        token: 已去除首尾空白的字面量文本

    Returns:
        INT 列返回 int，STRING 列返回去掉双引号后的文本

    Raises:
        ExecutionError: 字面量与列类型不符
    """
    if column.type is DataType.INT:
        if not _re_int.fullmatch(token):
            raise ExecutionError(f"列 {column.name} 应为INT: {token!r}")
        value = int(token)
        if not INT_MIN <= value <= INT_MAX:
            raise ExecutionError(f"列 {column.name} 超出INT范围: {token}")
        return value
    # 不支持转义，文本内部不能再出现双引号
    if len(token) < 2 or not (token.startswith('"') and token.endswith('"')):
        raise ExecutionError(f"列 {column.name} 应为带双引号的STRING: {token!r}")
    return token[1:-1]


@dataclass(eq=False)
class Table:
    """一张表：名字与结构创建后不可变，行列表受 lock 保护。"""

    name: str
    schema: Tuple[Column, ...]
    rows: List[Row] = field(default_factory=list)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def column_names(self) -> List[str]:
        return [c.name for c in self.schema]

    def get_column(self, name: str) -> Optional[Column]:
        for col in self.schema:
            if col.name == name:
                return col
        return None

    def snapshot(self) -> List[Row]:
        """返回行的浅拷贝列表，调用方可在锁外安全遍历。"""
        with self.lock:
            return [dict(r) for r in self.rows]

    # --- 序列化 ---
    def to_dict(self) -> Dict[str, Any]:
        with self.lock:
            return {
                "name": self.name,
                "columns": [c.to_dict() for c in self.schema],
                "rows": [dict(r) for r in self.rows],
            }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Table":
        """从持久化文档恢复表，文档不合法时抛出 ValueError。"""
        name = data.get("name")
        if not isinstance(name, str) or not is_valid_name(name):
            raise ValueError(f"非法表名: {name!r}")
        schema: List[Column] = []
        for col in data.get("columns") or []:
            col_type = DataType.parse(str(col.get("type", "")))
            col_name = col.get("name")
            if col_type is None or not isinstance(col_name, str) or not is_valid_name(col_name):
                raise ValueError(f"非法列定义: {col!r}")
            schema.append(Column(col_name, col_type))
        if not schema:
            raise ValueError(f"表 {name} 没有列")
        names = [c.name for c in schema]
        if len(set(names)) != len(names):
            raise ValueError(f"表 {name} 列名重复: {names}")
        rows: List[Row] = []
        for raw in data.get("rows") or []:
            if not isinstance(raw, dict) or set(raw) != {c.name for c in schema}:
                raise ValueError(f"表 {name} 行结构不符: {raw!r}")
            for col in schema:
                if not col.type.accepts(raw[col.name]):
                    raise ValueError(f"表 {name} 列 {col.name} 值类型不符: {raw[col.name]!r}")
            rows.append({c.name: raw[c.name] for c in schema})
        return cls(name, tuple(schema), rows)
