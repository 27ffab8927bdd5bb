"""
基于文件的表持久化
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, List

from ..core.catalog.schema import Table
from ..utils.constants import TABLE_FILE_SUFFIX
from ..utils.exceptions import StorageError
from ..utils.helpers import ensure_dir, read_json, write_json

logger = logging.getLogger(__name__)


class FileStorage:
    """每个表一个数据文件 `<表名>.dat`，保存表结构和全部行的快照。"""

    def __init__(self, base_dir: str | Path):
        self.base_dir = ensure_dir(base_dir)
        self._locks_guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def _table_path(self, table_name: str) -> Path:
        return self.base_dir / f"{table_name}{TABLE_FILE_SUFFIX}"

    def _lock_for(self, table_name: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(table_name)
            if lock is None:
                lock = self._locks[table_name] = threading.Lock()
            return lock

    def write_table(self, table: Table) -> None:
        """把表的当前状态完整写入文件，同一张表的写入互斥。"""
        path = self._table_path(table.name)
        # 调用方持有 table.lock 时，快照与写盘顺序和内存修改顺序一致
        data = table.to_dict()
        with self._lock_for(table.name):
            try:
                write_json(path, data)
            except OSError as exc:
                raise StorageError(f"写入表文件失败: {path}: {exc}") from exc
        logger.debug(f"表已落盘: 表={table.name}, 行数={len(data['rows'])}")

    def read_table(self, path: str | Path) -> Table:
        path = Path(path)
        try:
            data = read_json(path)
        except (OSError, ValueError) as exc:
            raise StorageError(f"读取表文件失败: {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"表文件格式错误: {path}")
        try:
            table = Table.from_dict(data)
        except (ValueError, TypeError, AttributeError) as exc:
            raise StorageError(f"表文件内容非法: {path}: {exc}") from exc
        # 文件名必须与表名一致，否则之后的写入会落到另一个文件
        if path.name[: -len(TABLE_FILE_SUFFIX)] != table.name:
            raise StorageError(f"文件名与表名不符: {path.name} != {table.name}")
        return table

    def table_files(self) -> List[Path]:
        return sorted(p for p in self.base_dir.glob(f"*{TABLE_FILE_SUFFIX}") if p.is_file())

    def load_all(self) -> List[Table]:
        """加载目录下全部表文件，无法解析的文件记录日志后跳过。"""
        tables: List[Table] = []
        for path in self.table_files():
            try:
                table = self.read_table(path)
            except StorageError as exc:
                logger.error(f"跳过表文件: {exc}")
                continue
            tables.append(table)
            logger.info(f"加载表: 表={table.name}, 行数={len(table.rows)}")
        return tables

    def delete_all(self) -> int:
        """删除全部表文件，返回删除的文件数。"""
        removed = 0
        for path in self.table_files():
            with self._lock_for(path.name[: -len(TABLE_FILE_SUFFIX)]):
                try:
                    path.unlink()
                    removed += 1
                except FileNotFoundError:
                    pass
                except OSError as exc:
                    logger.warning(f"删除表文件失败: {path}: {exc}")
        return removed
