"""
Tests for drivesweep.core.snapshot module.
"""

import json
import shutil
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from drivesweep.core.snapshot import load_records, load_snapshot, normalize_record
from drivesweep.utils.exceptions import SnapshotError, ValidationError


class TestNormalizeRecord(unittest.TestCase):
    def test_drive_field_names(self):
        record = normalize_record({
            "id": "1AbC",
            "name": "report.pdf",
            "size": "2048",
            "md5Checksum": "d41d8cd98f00b204e9800998ecf8427e",
            "mimeType": "application/pdf",
            "modifiedTime": "2024-03-01T10:15:00.000Z",
            "parents": ["root"],
            "webViewLink": "https://drive.example/1AbC",
        })

        self.assertEqual(record.size, 2048)
        self.assertEqual(record.checksum, "d41d8cd98f00b204e9800998ecf8427e")
        self.assertEqual(record.mime_type, "application/pdf")
        self.assertEqual(record.modified_time, datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc))
        self.assertEqual(record.parents, ["root"])

    def test_missing_id_is_skipped(self):
        with self.assertLogs("drivesweep.core.snapshot", level="WARNING"):
            record = normalize_record({"name": "a.txt", "modifiedTime": "2024-01-01"})
        self.assertIsNone(record)

    def test_missing_id_strict(self):
        with self.assertRaises(ValidationError) as cm:
            normalize_record({"id": "", "name": "a.txt", "modifiedTime": "2024-01-01"}, strict=True)
        self.assertEqual(cm.exception.field, "id")

    def test_missing_modified_time(self):
        with self.assertLogs("drivesweep.core.snapshot", level="WARNING"):
            self.assertIsNone(normalize_record({"id": "1", "name": "a.txt"}))

    def test_bad_size_becomes_zero(self):
        with self.assertLogs("drivesweep.core.snapshot", level="WARNING") as cm:
            record = normalize_record({"id": "1", "name": "a.txt", "size": "lots", "modifiedTime": "2024-01-01"})
        self.assertEqual(record.size, 0)
        self.assertIn("non-numeric size", cm.output[0])

        with self.assertLogs("drivesweep.core.snapshot", level="WARNING"):
            record = normalize_record({"id": "2", "name": "b.txt", "size": -5, "modifiedTime": "2024-01-01"})
        self.assertEqual(record.size, 0)

    def test_infinite_size_becomes_zero(self):
        for size in (float("inf"), "inf", "1e400"):
            with self.assertLogs("drivesweep.core.snapshot", level="WARNING"):
                record = normalize_record({"id": "1", "name": "a.txt", "size": size, "modifiedTime": "2024-01-01"})
            self.assertEqual(record.size, 0)

    def test_epoch_seconds_time(self):
        record = normalize_record({"id": "1", "name": "a.txt", "modifiedTime": "1704067200"})
        self.assertEqual(record.modified_time, datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_date_only_and_blank_checksum(self):
        record = normalize_record({
            "id": "1",
            "name": "a.txt",
            "md5Checksum": "  ",
            "modifiedTime": "2024-01-31",
        })
        self.assertIsNone(record.checksum)
        self.assertEqual(record.modified_time, datetime(2024, 1, 31, tzinfo=timezone.utc))

    def test_unparseable_time(self):
        with self.assertRaises(ValidationError):
            normalize_record({"id": "1", "name": "a.txt", "modifiedTime": "yesterday"}, strict=True)

    def test_load_records_keeps_order(self):
        with self.assertLogs("drivesweep.core.snapshot", level="WARNING"):
            records = load_records([
                {"id": "b", "name": "b.txt", "modifiedTime": "2024-01-01"},
                "not a record",
                {"id": "a", "name": "a.txt", "modifiedTime": "2024-01-01"},
            ])
        self.assertEqual([r.id for r in records], ["b", "a"])


class TestLoadSnapshot(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.dir = Path(self.test_dir)
        self.records = [
            {"id": "1", "name": "report.pdf", "size": 1000, "md5Checksum": "abc123",
             "modifiedTime": "2024-01-01T00:00:00Z"},
            {"id": "2", "name": "report.pdf", "size": 1000, "md5Checksum": "abc123",
             "modifiedTime": "2024-01-02T00:00:00Z"},
        ]

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_json_list(self):
        path = self.dir / "files.json"
        path.write_text(json.dumps(self.records), encoding="utf-8")

        records = load_snapshot(path)
        self.assertEqual([r.id for r in records], ["1", "2"])
        self.assertEqual(records[0].checksum, "abc123")

    def test_json_files_key(self):
        path = self.dir / "files.json"
        path.write_text(json.dumps({"kind": "drive#fileList", "files": self.records}), encoding="utf-8")
        self.assertEqual(len(load_snapshot(path)), 2)

    def test_json_wrong_shape(self):
        path = self.dir / "files.json"
        path.write_text(json.dumps({"items": []}), encoding="utf-8")
        with self.assertRaises(SnapshotError):
            load_snapshot(path)

    def test_jsonl(self):
        path = self.dir / "files.jsonl"
        path.write_text("\n".join(json.dumps(r) for r in self.records) + "\n\n", encoding="utf-8")
        self.assertEqual(len(load_snapshot(path)), 2)

    def test_jsonl_bad_line(self):
        path = self.dir / "files.jsonl"
        path.write_text(json.dumps(self.records[0]) + "\n{broken\n", encoding="utf-8")
        with self.assertRaises(SnapshotError) as cm:
            load_snapshot(path)
        self.assertIn("line 2", str(cm.exception))

    def test_csv(self):
        path = self.dir / "files.csv"
        path.write_text(
            "id,name,size,md5Checksum,modifiedTime,parents\n"
            "007,report.pdf,1000,abc123,2024-01-01T00:00:00Z,root;folder1\n"
            "008,notes.txt,,,2024-01-02,\n",
            encoding="utf-8",
        )
        records = load_snapshot(path)

        self.assertEqual(records[0].id, "007")
        self.assertEqual(records[0].parents, ["root", "folder1"])
        self.assertEqual(records[1].size, 0)
        self.assertIsNone(records[1].checksum)

    def test_explicit_format(self):
        path = self.dir / "export.txt"
        path.write_text(json.dumps(self.records), encoding="utf-8")
        self.assertEqual(len(load_snapshot(path, format="json")), 2)

    def test_unsupported_suffix(self):
        path = self.dir / "files.xml"
        path.write_text("<files/>", encoding="utf-8")
        with self.assertRaises(SnapshotError):
            load_snapshot(path)

    def test_missing_file(self):
        with self.assertRaises(SnapshotError):
            load_snapshot(self.dir / "nope.json")

    def test_invalid_json(self):
        path = self.dir / "files.json"
        path.write_text("[{", encoding="utf-8")
        with self.assertRaises(SnapshotError):
            load_snapshot(path)

    def test_json_overflowing_size(self):
        path = self.dir / "files.json"
        path.write_text(
            '[{"id": "a", "name": "x.txt", "size": 1e400, "modifiedTime": "2024-01-01T00:00:00Z"}]',
            encoding="utf-8",
        )
        with self.assertLogs("drivesweep.core.snapshot", level="WARNING"):
            records = load_snapshot(path)
        self.assertEqual(records[0].size, 0)

    def test_strict_mode(self):
        path = self.dir / "files.json"
        path.write_text(json.dumps(self.records + [{"name": "orphan.txt"}]), encoding="utf-8")

        with self.assertLogs("drivesweep.core.snapshot", level="WARNING"):
            self.assertEqual(len(load_snapshot(path)), 2)
        with self.assertRaises(ValidationError):
            load_snapshot(path, strict=True)


if __name__ == '__main__':
    unittest.main()
