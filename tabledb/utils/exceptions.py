"""
自定义异常类

每个异常携带它在命令边界上呈现的结果文本（result），
调用方只会看到这些固定文本，不会看到异常细节。
"""

from .constants import Result


class DatabaseError(Exception):
    """通用数据库错误。"""

    result = Result.INVALID_COMMAND


class SQLSyntaxError(DatabaseError):
    """命令语法错误。"""


class ExecutionError(DatabaseError):
    """执行阶段错误：类型不符、值个数不符、列不存在等。"""


class CatalogError(DatabaseError):
    """表目录错误。"""


class TableExistsError(CatalogError):
    """表已存在。"""

    result = Result.TABLE_EXISTS


class TableNotFoundError(CatalogError):
    """表不存在。"""

    result = Result.TABLE_NOT_FOUND


class StorageError(DatabaseError):
    """存储层错误。"""
