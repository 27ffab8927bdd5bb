"""
TableDB：基于行命令协议的极简关系型数据存储
"""

from .core.engine import EngineOptions, TableDB

__all__ = ['TableDB', 'EngineOptions']

__version__ = "0.1.0"
