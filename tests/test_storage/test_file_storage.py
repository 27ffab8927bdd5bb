"""
存储系统测试
"""

import json
import os
import shutil
import tempfile
import threading
import unittest

from tabledb.core.catalog.schema import Column, DataType, Table
from tabledb.storage.file_storage import FileStorage
from tabledb.utils.exceptions import StorageError


class TestFileStorage(unittest.TestCase):

    def setUp(self):
        # 创建临时目录
        self.temp_dir = tempfile.mkdtemp()
        self.storage = FileStorage(base_dir=self.temp_dir)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _table(self, name="users", rows=()):
        table = Table(name, (Column("id", DataType.INT), Column("name", DataType.STRING)))
        table.rows.extend(dict(r) for r in rows)
        return table

    def test_directory_creation(self):
        """测试目录自动创建"""
        new_dir = os.path.join(self.temp_dir, 'new_subdir')
        FileStorage(base_dir=new_dir)
        self.assertTrue(os.path.isdir(new_dir))

    def test_write_and_read(self):
        """测试写入后读取"""
        table = self._table(rows=[{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}])
        self.storage.write_table(table)

        path = self.storage._table_path("users")
        self.assertTrue(path.exists())
        self.assertEqual(path.name, "users.dat")

        restored = self.storage.read_table(path)
        self.assertEqual(restored.name, "users")
        self.assertEqual(restored.schema, table.schema)
        self.assertEqual(restored.rows, table.rows)

    def test_rewrite_replaces_snapshot(self):
        """测试重写覆盖旧快照，且不留下临时文件"""
        table = self._table(rows=[{"id": 1, "name": "Alice"}])
        self.storage.write_table(table)
        table.rows.clear()
        self.storage.write_table(table)

        restored = self.storage.read_table(self.storage._table_path("users"))
        self.assertEqual(restored.rows, [])
        self.assertEqual(os.listdir(self.temp_dir), ["users.dat"])

    def test_load_all_skips_bad_files(self):
        """测试加载时跳过损坏文件"""
        self.storage.write_table(self._table("good", rows=[{"id": 1, "name": "x"}]))
        with open(os.path.join(self.temp_dir, "broken.dat"), "w") as f:
            f.write("{not json")
        with open(os.path.join(self.temp_dir, "wrongtype.dat"), "w") as f:
            json.dump({"name": "wrongtype", "columns": [{"name": "id", "type": "INT"}],
                       "rows": [{"id": "one"}]}, f)
        with open(os.path.join(self.temp_dir, "notes.txt"), "w") as f:
            f.write("ignored")

        with self.assertLogs("tabledb.storage.file_storage", level="ERROR") as logs:
            tables = self.storage.load_all()
        self.assertEqual([t.name for t in tables], ["good"])
        self.assertEqual(len(logs.records), 2)

    def test_file_name_must_match_table_name(self):
        """测试文件名与表名不一致的文件被跳过"""
        path = os.path.join(self.temp_dir, "a.dat")
        with open(path, "w") as f:
            json.dump({"name": "b", "columns": [{"name": "id", "type": "INT"}], "rows": [{"id": 1}]}, f)

        with self.assertRaises(StorageError):
            self.storage.read_table(path)
        with self.assertLogs("tabledb.storage.file_storage", level="ERROR"):
            self.assertEqual(self.storage.load_all(), [])

    def test_empty_directory(self):
        """测试空目录加载"""
        self.assertEqual(self.storage.load_all(), [])

    def test_delete_all(self):
        """测试删除全部表文件"""
        self.storage.write_table(self._table("a"))
        self.storage.write_table(self._table("b"))
        with open(os.path.join(self.temp_dir, "keep.txt"), "w") as f:
            f.write("not a table")

        self.assertEqual(self.storage.delete_all(), 2)
        self.assertEqual(os.listdir(self.temp_dir), ["keep.txt"])

    def test_concurrent_writes(self):
        """测试并发写同一张表后文件仍然完整"""
        table = self._table()

        def writer(i):
            with table.lock:
                table.rows.append({"id": i, "name": f"n{i}"})
                self.storage.write_table(table)

        threads = [threading.Thread(target=writer, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        restored = self.storage.read_table(self.storage._table_path("users"))
        self.assertEqual(len(restored.rows), 20)
        self.assertEqual(sorted(r["id"] for r in restored.rows), list(range(20)))


if __name__ == "__main__":
    unittest.main()
