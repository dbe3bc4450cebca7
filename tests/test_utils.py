"""
Tests for drivesweep.utils module.
"""

import logging
import unittest

from drivesweep.utils.exceptions import DriveSweepError, SnapshotError, ValidationError
from drivesweep.utils.formatting import format_bytes
from drivesweep.utils.logging import PerformanceLogger, verbosity_to_level


class TestFormatBytes(unittest.TestCase):
    def test_units(self):
        self.assertEqual(format_bytes(0), "0 Bytes")
        self.assertEqual(format_bytes(512), "512 Bytes")
        self.assertEqual(format_bytes(1536), "1.5 KB")
        self.assertEqual(format_bytes(5 * 1024 * 1024), "5 MB")
        self.assertEqual(format_bytes(1024 ** 3), "1 GB")
        self.assertEqual(format_bytes(3 * 1024 ** 4), "3 TB")

    def test_rounding(self):
        self.assertEqual(format_bytes(1000), "1000 Bytes")
        self.assertEqual(format_bytes(1234567), "1.18 MB")


class TestExceptions(unittest.TestCase):
    def test_details_in_message(self):
        error = SnapshotError("Could not parse snapshot", path="files.json")
        self.assertIsInstance(error, DriveSweepError)
        self.assertEqual(str(error), "Could not parse snapshot (path=files.json)")
        self.assertEqual(error.path, "files.json")

    def test_to_dict(self):
        data = ValidationError("Record is missing required field 'id'", field="id").to_dict()
        self.assertEqual(data["type"], "ValidationError")
        self.assertEqual(data["details"], {"field": "id"})
        self.assertIn("timestamp", data)


class TestLoggingHelpers(unittest.TestCase):
    def test_verbosity_to_level(self):
        self.assertEqual(verbosity_to_level(), "WARNING")
        self.assertEqual(verbosity_to_level(1), "INFO")
        self.assertEqual(verbosity_to_level(3), "DEBUG")
        self.assertEqual(verbosity_to_level(2, quiet=True), "ERROR")

    def test_performance_logger(self):
        logger = logging.getLogger("drivesweep.test")
        with self.assertLogs(logger, level="INFO") as cm:
            with PerformanceLogger("Scan", logger=logger) as perf:
                pass

        self.assertIsNotNone(perf.elapsed)
        self.assertIn("Scan completed in", cm.output[-1])

    def test_performance_logger_failure(self):
        logger = logging.getLogger("drivesweep.test")
        with self.assertLogs(logger, level="ERROR") as cm:
            with self.assertRaises(RuntimeError):
                with PerformanceLogger("Scan", logger=logger):
                    raise RuntimeError("boom")

        self.assertIn("Scan failed after", cm.output[0])


if __name__ == '__main__':
    unittest.main()
