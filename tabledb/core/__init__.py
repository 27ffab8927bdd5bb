"""
核心模块：表目录、命令解析、执行与引擎
"""
