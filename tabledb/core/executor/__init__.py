from .command_executor import CommandExecutor

__all__ = ['CommandExecutor']
