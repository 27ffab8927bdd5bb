"""
数据库核心引擎
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from ..storage.file_storage import FileStorage
from ..utils.constants import DEFAULT_DATA_DIR, Result
from ..utils.exceptions import DatabaseError
from .catalog.table_store import TableStore
from .executor.command_executor import CommandExecutor
from .options import EngineOptions
from .parser.statement_parser import StatementParser

__all__ = ['TableDB', 'EngineOptions']

logger = logging.getLogger(__name__)


class TableDB:
    """数据库核心引擎：一条命令进，一条结果文本出。"""

    def __init__(self, data_dir: str | Path = DEFAULT_DATA_DIR, options: Optional[EngineOptions] = None):
        """
        初始化数据库引擎，加载数据目录中的全部表

        Args:
            data_dir: 表文件所在目录，不存在时自动创建
            options: 行为开关，默认兼容模式
        """
        self.options = options or EngineOptions()
        self.storage = FileStorage(data_dir)
        self.store = TableStore(self.storage.load_all())
        self.parser = StatementParser()
        self.executor = CommandExecutor(self.store, self.storage, self.options)
        logger.info(f"引擎就绪: 目录={self.storage.base_dir}, 表数={len(self.store)}")

    def process_command(self, command: str) -> str:
        """
        执行一条命令

        Returns:
            结果文本。所有错误都转换为固定的结果文本，不会抛出异常。
        """
        try:
            op = self.parser.parse(command)
            return self.executor.execute(op)
        except DatabaseError as e:
            logger.debug(f"命令被拒绝: {command!r}: {e}")
            return e.result
        except Exception:
            logger.exception(f"执行命令时发生未预期错误: {command!r}")
            return Result.INVALID_COMMAND

    def get_tables(self) -> List[str]:
        """获取所有表名"""
        return self.store.names()

    def close(self) -> None:
        """把全部表写回磁盘"""
        self.executor.flush_all()
