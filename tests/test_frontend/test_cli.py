"""
命令行界面测试
"""

import logging
import os
import shutil
import tempfile
import unittest

from click.testing import CliRunner

from tabledb.frontend.cli import cli


class TestCLI(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.runner = CliRunner()

    def tearDown(self):
        # 处理器绑定的是 CliRunner 的临时 stderr
        logger = logging.getLogger("tabledb")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        shutil.rmtree(self.temp_dir)

    def invoke(self, *args, input=None):
        return self.runner.invoke(cli, ['--data-dir', self.temp_dir, '--log-level', 'ERROR', *args], input=input)

    def test_shell_session(self):
        """测试逐行读取并在 STOP 后退出"""
        script = "\n".join([
            "CREATE_TABLE users ( id INT, name STRING )",
            'INSERT INTO users VALUES ( 1, "Alice" )',
            "SELECT * FROM users",
            "STOP",
            "SHOW TABLES",
        ]) + "\n"
        result = self.invoke('shell', input=script)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.splitlines(), ["SUCCESS", "SUCCESS", "id: 1, name: Alice", "Goodbye!"])

    def test_shell_end_of_input_flushes(self):
        """测试输入结束时落盘"""
        result = self.invoke('shell', input="CREATE_TABLE t ( id INT )\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(os.path.exists(os.path.join(self.temp_dir, "t.dat")))

    def test_run_commands(self):
        """测试 run 子命令"""
        result = self.invoke('run', 'CREATE_TABLE a ( id INT )', 'SHOW TABLES', 'PURGE_AND_STOP', 'SHOW TABLES')
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.splitlines(), ["SUCCESS", "a", "PURGED, Goodbye!"])
        self.assertEqual(os.listdir(self.temp_dir), [])

    def test_strict_schema_flag(self):
        """测试 --strict-schema"""
        result = self.runner.invoke(cli, ['--data-dir', self.temp_dir, '--log-level', 'ERROR', '--strict-schema',
                                          'run', 'CREATE_TABLE t ( id INT, x FLOAT )'])
        self.assertEqual(result.output.splitlines(), ["INVALID_COMMAND"])

    def test_state_survives_between_invocations(self):
        """测试两次调用之间数据保留"""
        self.invoke('run', 'CREATE_TABLE t ( id INT )', 'INSERT INTO t VALUES ( 9 )')
        result = self.invoke('run', 'SELECT * FROM t')
        self.assertEqual(result.output.splitlines(), ["id: 9"])


if __name__ == '__main__':
    unittest.main()
