"""
数据库系统主程序入口
"""

from tabledb.frontend.cli import main


if __name__ == '__main__':
    main()
