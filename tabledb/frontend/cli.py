"""
命令行界面
"""

import sys

import click

from ..core.engine import EngineOptions, TableDB
from ..utils.constants import DEFAULT_DATA_DIR, LOG_LEVEL, Result
from ..utils.logging import get_logger

_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option('--data-dir', default=DEFAULT_DATA_DIR, show_default=True,
              type=click.Path(file_okay=False), help='表文件目录')
@click.option('--log-level', default=LOG_LEVEL, show_default=True,
              type=click.Choice(_LEVELS, case_sensitive=False), help='日志级别')
@click.option('--strict-schema', is_flag=True, help='CREATE_TABLE 中出现非法列定义时整条失败')
@click.pass_context
def cli(ctx, data_dir, log_level, strict_schema):
    """TableDB 命令行工具"""
    get_logger("tabledb", log_level)
    ctx.obj = {
        'data_dir': data_dir,
        'options': EngineOptions(strict_schema=strict_schema),
    }


def _open_engine(ctx) -> TableDB:
    return TableDB(ctx.obj['data_dir'], ctx.obj['options'])


@cli.command()
@click.pass_context
def shell(ctx):
    """从标准输入逐行读取命令并输出结果"""
    db = _open_engine(ctx)
    stream = click.get_text_stream('stdin')
    for line in stream:
        result = db.process_command(line.rstrip("\r\n"))
        click.echo(result)
        if result in Result.TERMINAL:
            return
    # 输入结束但没有收到 STOP
    db.close()


@cli.command()
@click.argument('commands', nargs=-1, required=True)
@click.pass_context
def run(ctx, commands):
    """依次执行参数中的命令"""
    db = _open_engine(ctx)
    for command in commands:
        result = db.process_command(command)
        click.echo(result)
        if result in Result.TERMINAL:
            return
    db.close()


def main():
    """主函数"""
    cli(prog_name="tabledb")


if __name__ == "__main__":
    sys.exit(main())
