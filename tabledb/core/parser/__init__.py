from .predicate import Condition, evaluate, parse_condition
from .statement_parser import (
    CreateTable,
    Delete,
    Insert,
    PurgeAndStop,
    Select,
    ShowTables,
    StatementParser,
    Stop,
    Update,
)

__all__ = [
    'Condition', 'evaluate', 'parse_condition',
    'StatementParser', 'CreateTable', 'Insert', 'Select', 'Update', 'Delete',
    'ShowTables', 'Stop', 'PurgeAndStop',
]
