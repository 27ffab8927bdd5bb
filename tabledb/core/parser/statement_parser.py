"""
命令解析器
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Tuple, Union

from ...utils.exceptions import SQLSyntaxError
from ..catalog.schema import Column, DataType, is_valid_name


@dataclass(frozen=True)
class CreateTable:
    type: ClassVar[str] = "CREATE_TABLE"
    table: str
    columns: Tuple[Column, ...]
    # 校验失败而被丢弃的列定义原文
    rejected: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Insert:
    type: ClassVar[str] = "INSERT"
    table: str
    values: Tuple[str, ...]


@dataclass(frozen=True)
class Select:
    type: ClassVar[str] = "SELECT"
    table: str
    columns: Optional[Tuple[str, ...]]  # None 表示 *
    where: Optional[str] = None


@dataclass(frozen=True)
class Update:
    type: ClassVar[str] = "UPDATE"
    table: str
    assignments: Tuple[Tuple[str, str], ...]
    where: str


@dataclass(frozen=True)
class Delete:
    type: ClassVar[str] = "DELETE"
    table: str
    where: str


@dataclass(frozen=True)
class ShowTables:
    type: ClassVar[str] = "SHOW_TABLES"


@dataclass(frozen=True)
class Stop:
    type: ClassVar[str] = "STOP"


@dataclass(frozen=True)
class PurgeAndStop:
    type: ClassVar[str] = "PURGE_AND_STOP"


Operation = Union[CreateTable, Insert, Select, Update, Delete, ShowTables, Stop, PurgeAndStop]


class StatementParser:
    """
    行命令解析器，支持 CREATE_TABLE / INSERT / SELECT / UPDATE / DELETE /
    SHOW / STOP / PURGE_AND_STOP。

    动词不区分大小写；动词之后的关键字（INTO、VALUES、FROM、WHERE、SET）
    以及表名、列名、值都区分大小写。解析只检查语法，是否符合表结构
    由执行器负责。
    """

    _re_list_sep = re.compile(r"[\s,]+")

    def parse(self, command: str) -> Operation:
        parts = command.strip().split(None, 1)
        if not parts:
            raise SQLSyntaxError("空命令")
        head = parts[0].upper()
        rest = parts[1] if len(parts) > 1 else ""
        if head == "CREATE_TABLE":
            return self._parse_create_table(rest)
        if head == "INSERT":
            return self._parse_insert(rest)
        if head == "SELECT":
            return self._parse_select(rest)
        if head == "UPDATE":
            return self._parse_update(rest)
        if head == "DELETE":
            return self._parse_delete(rest)
        if head == "SHOW":
            if rest and rest.strip().upper() != "TABLES":
                raise SQLSyntaxError(f"SHOW 不支持参数: {rest}")
            return ShowTables()
        if head == "STOP":
            self._expect_no_args(head, rest)
            return Stop()
        if head == "PURGE_AND_STOP":
            self._expect_no_args(head, rest)
            return PurgeAndStop()
        raise SQLSyntaxError(f"不支持的命令: {parts[0]}")

    def _parse_create_table(self, s: str) -> CreateTable:
        # name ( col TYPE, col TYPE, ... )
        name, paren, body = s.partition("(")
        if not paren or "(" in body:
            raise SQLSyntaxError("CREATE_TABLE 语法错误")
        name = name.strip()
        if not is_valid_name(name):
            raise SQLSyntaxError(f"非法表名: {name!r}")
        columns: List[Column] = []
        rejected: List[str] = []
        for clause in body.replace(")", "").split(","):
            col = self._parse_column(clause)
            if col is None:
                rejected.append(clause.strip())
            else:
                columns.append(col)
        return CreateTable(name, tuple(columns), tuple(rejected))

    def _parse_insert(self, s: str) -> Insert:
        if not s.startswith("INTO "):
            raise SQLSyntaxError("INSERT 缺少 INTO")
        table, values = self._split_keyword(s[5:], "VALUES")
        values = values.strip()
        if not (values.startswith("(") and values.endswith(")")):
            raise SQLSyntaxError("VALUES 需要用括号包围")
        return Insert(self._table_name(table), tuple(v.strip() for v in values[1:-1].split(",")))

    def _parse_select(self, s: str) -> Select:
        projection, source = self._split_keyword(s, "FROM")
        cols = [c for c in self._re_list_sep.split(projection.strip()) if c]
        if not cols:
            raise SQLSyntaxError("SELECT 缺少列")
        columns: Optional[Tuple[str, ...]] = tuple(cols)
        if "*" in cols:
            if cols != ["*"]:
                raise SQLSyntaxError("* 不能与其他列混用")
            columns = None
        table, where = self._split_where(source, required=False)
        return Select(self._table_name(table), columns, where)

    def _parse_update(self, s: str) -> Update:
        table, tail = self._split_keyword(s, "SET")
        assignments_text, where = self._split_where(tail, required=True)
        assignments: List[Tuple[str, str]] = []
        for assignment in assignments_text.split(","):
            pair = assignment.split("=")
            if len(pair) != 2:
                raise SQLSyntaxError(f"赋值语法错误: {assignment.strip()!r}")
            assignments.append((pair[0].strip(), pair[1].strip()))
        return Update(self._table_name(table), tuple(assignments), where)

    def _parse_delete(self, s: str) -> Delete:
        if not s.startswith("FROM "):
            raise SQLSyntaxError("DELETE 缺少 FROM")
        table, where = self._split_where(s[5:], required=True)
        return Delete(self._table_name(table), where)

    # --- helpers ---
    def _parse_column(self, clause: str) -> Optional[Column]:
        tokens = clause.split()
        if len(tokens) != 2 or not is_valid_name(tokens[0]):
            return None
        col_type = DataType.parse(tokens[1])
        if col_type is None:
            return None
        return Column(tokens[0], col_type)

    def _split_keyword(self, s: str, keyword: str) -> Tuple[str, str]:
        parts = re.split(rf"\b{keyword}\b", s, maxsplit=1)
        if len(parts) != 2:
            raise SQLSyntaxError(f"缺少 {keyword}")
        return parts[0], parts[1]

    def _split_where(self, s: str, required: bool) -> Tuple[str, Optional[str]]:
        parts = re.split(r"\bWHERE\b", s, maxsplit=1)
        if len(parts) == 1:
            if required:
                raise SQLSyntaxError("缺少 WHERE")
            return parts[0], None
        condition = parts[1].strip()
        if not condition:
            raise SQLSyntaxError("WHERE 条件为空")
        return parts[0], condition

    def _table_name(self, s: str) -> str:
        name = s.strip()
        if not name:
            raise SQLSyntaxError("缺少表名")
        return name

    def _expect_no_args(self, head: str, rest: str) -> None:
        if rest.strip():
            raise SQLSyntaxError(f"{head} 不接受参数: {rest}")
