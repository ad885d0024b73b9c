import shutil
import tempfile
import unittest
from pathlib import Path
from planner.utilities.backup import BackupManager


class TestBackupManager(unittest.TestCase):

    def setUp(self):
        self.data_dir = Path(tempfile.mkdtemp())
        self.source = self.data_dir / "student_agenda_data.json"
        self.source.write_text('{"2024-03-10": {}}', encoding="utf-8")
        self.manager = BackupManager(self.data_dir)

    def tearDown(self):
        shutil.rmtree(self.data_dir, ignore_errors=True)

    def test_create_and_list(self):
        self.assertTrue(self.manager.create_backup(self.source.name))
        backups = self.manager.list_backups(self.source.name)
        self.assertEqual(len(backups), 1)
        self.assertTrue(backups[0]["name"].startswith("student_agenda_data__"))

    def test_missing_file(self):
        self.assertFalse(self.manager.create_backup("nope.json"))

    def test_keeps_only_recent_backups(self):
        for _ in range(13):
            self.manager.create_backup(self.source.name)
        self.assertEqual(len(self.manager.list_backups(self.source.name)), 10)

    def test_restore(self):
        self.manager.create_backup(self.source.name)
        name = self.manager.list_backups(self.source.name)[0]["name"]
        self.source.write_text("{}", encoding="utf-8")
        self.assertTrue(self.manager.restore_backup(name))
        self.assertEqual(self.source.read_text(encoding="utf-8"), '{"2024-03-10": {}}')

    def test_restore_rejects_unknown_or_outside_names(self):
        self.assertFalse(self.manager.restore_backup("student_agenda_data__1.json"))
        self.assertFalse(self.manager.restore_backup("../student_agenda_data.json"))

    def test_original_name(self):
        self.assertEqual(BackupManager.original_name("student_agenda_theme__20240101_120000_000001.json"),
                         "student_agenda_theme.json")


if __name__ == '__main__':
    unittest.main()
