from .schema import Column, DataType, Table, parse_literal
from .table_store import TableStore

__all__ = ['Column', 'DataType', 'Table', 'TableStore', 'parse_literal']
