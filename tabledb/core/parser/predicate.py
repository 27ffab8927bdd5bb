"""
WHERE 条件求值

只支持 `列=字面量` 形式的等值比较，多个比较可以用 ` AND ` 或 ` OR `
连接，但同一条件中二者不能混用，也没有括号与优先级。先找 ` AND `，
找不到再找 ` OR `，都没有则视为单个比较。

比较按文本进行：行中的值转成字符串，字面量去掉所有双引号，两者
逐字相等才算匹配。因此 `id=01` 不匹配存储的 1。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

AND = " AND "
OR = " OR "


@dataclass(frozen=True)
class Term:
    column: str
    literal: str

    def matches(self, row: Mapping[str, object]) -> bool:
        value = row.get(self.column)
        if value is None:
            return False
        return str(value) == self.literal


@dataclass(frozen=True)
class Condition:
    """解析后的条件。terms 中的 None 表示写法不合法的比较，恒为假。"""

    mode: str  # AND | OR | SINGLE
    terms: Tuple[Optional[Term], ...]

    def matches(self, row: Mapping[str, object]) -> bool:
        results = (t is not None and t.matches(row) for t in self.terms)
        if self.mode == "OR":
            return any(results)
        return all(results)


def _parse_term(text: str) -> Optional[Term]:
    parts = text.split("=")
    if len(parts) != 2:
        return None
    column, literal = parts[0].strip(), parts[1].strip()
    if not literal:
        return None
    return Term(column, literal.replace('"', ""))


def parse_condition(text: str) -> Condition:
    if AND in text:
        return Condition("AND", tuple(_parse_term(t.strip()) for t in text.split(AND)))
    if OR in text:
        return Condition("OR", tuple(_parse_term(t.strip()) for t in text.split(OR)))
    return Condition("SINGLE", (_parse_term(text.strip()),))


def evaluate(row: Mapping[str, object], condition: str) -> bool:
    return parse_condition(condition).matches(row)
