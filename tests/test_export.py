"""
Tests for drivesweep.export module.
"""

import csv
import json
import shutil
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from drivesweep.core.models import FileRecord
from drivesweep.detection import DuplicateDetector
from drivesweep.export.csv_exporter import FIELDNAMES, CSVExporter
from drivesweep.export.json_exporter import JSONExporter


class TestExporters(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.output_dir = Path(self.test_dir)

        t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
        files = [
            FileRecord(id="a", name="report.pdf", size=1000, checksum="abc123", modified_time=t0),
            FileRecord(id="b", name="report.pdf", size=1000, checksum="abc123", modified_time=t0),
            FileRecord(id="c", name="Invoice_v1.pdf", size=400, modified_time=t0),
            FileRecord(
                id="d",
                name="Invoice_v2.pdf",
                size=450,
                modified_time=datetime(2024, 2, 1, tzinfo=timezone.utc),
                web_view_link="https://drive.example/d",
            ),
        ]
        self.report = DuplicateDetector(files).analyze()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_json_report(self):
        exporter = JSONExporter(output_dir=self.output_dir)
        output_file = exporter.export_report(self.report, "report")

        self.assertEqual(output_file.name, "report.json")
        with open(output_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        self.assertEqual(data["file_count"], 4)
        self.assertEqual(len(data["groups"]), 2)
        self.assertEqual(data["groups"][0]["kind"], "identical_checksum")
        self.assertEqual(data["groups"][1]["members"][0]["id"], "d")
        self.assertEqual(data["total_wasted_bytes"], 1400)
        self.assertEqual(data["recommendations"][0]["priority"], "high")
        self.assertEqual(data["statistics"]["duplicate_groups"], 2)

    def test_csv_rows(self):
        exporter = CSVExporter(output_dir=self.output_dir)
        output_file = exporter.export_report(self.report, "groups.csv")

        self.assertEqual(output_file.name, "groups.csv")
        with open(output_file, 'r', encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            self.assertEqual(reader.fieldnames, FIELDNAMES)
            rows = list(reader)

        self.assertEqual(len(rows), 4)
        self.assertEqual([r["keep"] for r in rows], ["True", "False", "True", "False"])
        self.assertEqual(rows[2]["file_id"], "d")
        self.assertEqual(rows[2]["web_view_link"], "https://drive.example/d")
        self.assertEqual(rows[3]["checksum"], "")
        self.assertEqual(rows[3]["group_index"], "1")

    def test_creates_output_dir(self):
        nested = self.output_dir / "a" / "b"
        JSONExporter(output_dir=nested).export_report(self.report, "report")
        self.assertTrue((nested / "report.json").exists())


if __name__ == '__main__':
    unittest.main()
