"""
系统常量定义
"""

# 数据目录与表文件
DEFAULT_DATA_DIR = "db_data"
TABLE_FILE_SUFFIX = ".dat"

# 日志级别：DEBUG, INFO, WARNING, ERROR
LOG_LEVEL = "INFO"

# 表名与列名只允许字母和数字
NAME_PATTERN = r"[A-Za-z0-9]+"

# 64 位有符号整数范围
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


class Result:
    """命令返回的固定文本，对外兼容，不可修改。"""

    SUCCESS = "SUCCESS"
    TABLE_EXISTS = "TABLE_EXISTS"
    TABLE_NOT_FOUND = "TABLE_NOT_FOUND"
    INVALID_COMMAND = "INVALID_COMMAND"
    NO_ROWS_FOUND = "NO_ROWS_FOUND"
    NO_ROWS_DELETED = "NO_ROWS_DELETED"
    NO_ROWS_UPDATED = "NO_ROWS_UPDATED"
    NO_TABLES_AVAILABLE = "NO_TABLES_AVAILABLE"
    GOODBYE = "Goodbye!"
    PURGED = "PURGED, Goodbye!"

    TERMINAL = (GOODBYE, PURGED)

    @staticmethod
    def deleted(count: int) -> str:
        return f"DELETED {count}"

    @staticmethod
    def updated(count: int) -> str:
        return f"UPDATED {count}"
