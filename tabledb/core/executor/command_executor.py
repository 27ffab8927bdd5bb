"""
命令执行器：把解析后的操作落到表目录与存储层，并生成结果文本
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Dict, List, Optional

from ...storage.file_storage import FileStorage
from ...utils.constants import Result
from ...utils.exceptions import ExecutionError, StorageError, TableExistsError, TableNotFoundError
from ..catalog.schema import Row, Table, Value, parse_literal
from ..catalog.table_store import TableStore
from ..options import EngineOptions
from ..parser.predicate import parse_condition
from ..parser.statement_parser import (
    CreateTable,
    Delete,
    Insert,
    Operation,
    Select,
    Update,
)

logger = logging.getLogger(__name__)


class CommandExecutor:
    def __init__(self, store: TableStore, storage: FileStorage, options: Optional[EngineOptions] = None):
        self.store = store
        self.storage = storage
        self.options = options or EngineOptions()

    # --- public ---
    def execute(self, op: Operation) -> str:
        typ = op.type
        if typ == "CREATE_TABLE":
            return self._exec_create_table(op)
        if typ == "INSERT":
            return self._exec_insert(op)
        if typ == "SELECT":
            return self._exec_select(op)
        if typ == "UPDATE":
            return self._exec_update(op)
        if typ == "DELETE":
            return self._exec_delete(op)
        if typ == "SHOW_TABLES":
            return self._exec_show_tables()
        if typ == "STOP":
            return self._exec_stop()
        if typ == "PURGE_AND_STOP":
            return self._exec_purge_and_stop()
        raise ExecutionError(f"未知操作类型: {typ}")

    def flush_all(self) -> None:
        for table in self.store.tables():
            with table.lock:
                if self.store.get(table.name) is table:
                    self._persist(table)

    # --- operators ---
    def _exec_create_table(self, p: CreateTable) -> str:
        # 表已存在时不再检查列定义
        if p.table in self.store:
            raise TableExistsError(f"表已存在: {p.table}")
        if p.rejected:
            if self.options.strict_schema:
                raise ExecutionError(f"非法列定义: {list(p.rejected)}")
            logger.debug(f"丢弃非法列定义: 表={p.table}, 列={list(p.rejected)}")
        if not p.columns:
            raise ExecutionError(f"表 {p.table} 没有合法的列")
        names = [c.name for c in p.columns]
        if len(set(names)) != len(names):
            raise ExecutionError(f"列名重复: {names}")
        table = Table(p.table, p.columns)
        with table.lock:
            self.store.add(table)
            self._persist(table)
        logger.info(f"创建表: 表={p.table}, 列={names}")
        return Result.SUCCESS

    def _exec_insert(self, p: Insert) -> str:
        table = self.store.require(p.table)
        if len(p.values) != len(table.schema):
            raise ExecutionError(f"值个数 {len(p.values)} 与列数 {len(table.schema)} 不符")
        row = {col.name: parse_literal(col, token) for col, token in zip(table.schema, p.values)}
        with table.lock:
            self._ensure_live(table)
            table.rows.append(row)
            self._persist(table)
        return Result.SUCCESS

    def _exec_select(self, p: Select) -> str:
        table = self.store.require(p.table)
        if p.columns is None:
            columns = table.column_names()
        else:
            columns = list(p.columns)
            for name in columns:
                if table.get_column(name) is None:
                    raise ExecutionError(f"列不存在: {name}")
        rows = table.snapshot()
        if p.where is not None:
            cond = parse_condition(p.where)
            rows = [r for r in rows if cond.matches(r)]
        if not rows:
            return Result.NO_ROWS_FOUND
        return "\n".join(self._format_row(r, columns) for r in rows)

    def _exec_update(self, p: Update) -> str:
        table = self.store.require(p.table)
        updates: Dict[str, Value] = {}
        for name, token in p.assignments:
            col = table.get_column(name)
            if col is None:
                raise ExecutionError(f"列不存在: {name}")
            updates[name] = parse_literal(col, token)
        cond = parse_condition(p.where)
        with table.lock:
            self._ensure_live(table)
            matched = [i for i, r in enumerate(table.rows) if cond.matches(r)]
            if not matched:
                return Result.NO_ROWS_UPDATED
            # 整行替换，读者只会看到旧行或新行
            for i in matched:
                table.rows[i] = {**table.rows[i], **updates}
            self._persist(table)
        return Result.updated(len(matched))

    def _exec_delete(self, p: Delete) -> str:
        table = self.store.require(p.table)
        cond = parse_condition(p.where)
        with table.lock:
            self._ensure_live(table)
            keep: List[Row] = [r for r in table.rows if not cond.matches(r)]
            removed = len(table.rows) - len(keep)
            if removed == 0:
                return Result.NO_ROWS_DELETED
            table.rows[:] = keep
            self._persist(table)
        return Result.deleted(removed)

    def _exec_show_tables(self) -> str:
        names = self.store.names()
        if not names:
            return Result.NO_TABLES_AVAILABLE
        return "\n".join(names)

    def _exec_stop(self) -> str:
        self.flush_all()
        logger.info(f"已落盘全部表: 表数={len(self.store)}")
        return Result.GOODBYE

    def _exec_purge_and_stop(self) -> str:
        # 持有全部表锁，正在进行的修改结束后才清空；按表名顺序加锁
        with ExitStack() as stack:
            for table in sorted(self.store.tables(), key=lambda t: t.name):
                stack.enter_context(table.lock)
            self.store.clear()
            removed = self.storage.delete_all()
        logger.info(f"已清空全部表: 删除文件数={removed}")
        return Result.PURGED

    # --- helpers ---
    def _ensure_live(self, table: Table) -> None:
        # 调用方持有 table.lock；表可能已被 PURGE_AND_STOP 移除
        if self.store.get(table.name) is not table:
            raise TableNotFoundError(f"表不存在: {table.name}")

    def _persist(self, table: Table) -> None:
        # 写盘失败只记录日志，内存中的修改仍然生效
        try:
            self.storage.write_table(table)
        except StorageError as exc:
            logger.warning(f"表落盘失败: 表={table.name}: {exc}")

    @staticmethod
    def _format_row(row: Row, columns: List[str]) -> str:
        return ", ".join(f"{name}: {row[name]}" for name in columns)
