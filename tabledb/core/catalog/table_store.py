"""
内存表目录：表名 -> Table
"""

from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional

from ...utils.exceptions import TableExistsError, TableNotFoundError
from .schema import Table


class TableStore:
    """进程内唯一的表集合，支持多线程并发查找、创建与清空。"""

    def __init__(self, tables: Iterable[Table] = ()):
        self._lock = threading.Lock()
        self._tables: Dict[str, Table] = {}
        for table in tables:
            self._tables[table.name] = table

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._tables

    # --- API ---
    def add(self, table: Table) -> None:
        with self._lock:
            if table.name in self._tables:
                raise TableExistsError(f"表已存在: {table.name}")
            self._tables[table.name] = table

    def get(self, name: str) -> Optional[Table]:
        with self._lock:
            return self._tables.get(name)

    def require(self, name: str) -> Table:
        table = self.get(name)
        if table is None:
            raise TableNotFoundError(f"表不存在: {name}")
        return table

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._tables)

    def tables(self) -> List[Table]:
        with self._lock:
            return list(self._tables.values())

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()
