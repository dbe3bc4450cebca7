"""
Tests for drivesweep.core.config module.
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from drivesweep.core.config import (
    MIB,
    DetectionConfig,
    SweepConfig,
    load_config,
    load_config_from_dict,
    merge_configs,
    save_config,
)
from drivesweep.core.models import DuplicateKind
from drivesweep.utils.exceptions import ConfigurationError


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.config_path = Path(self.test_dir) / "drivesweep.yml"

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_defaults(self):
        config = SweepConfig()
        self.assertEqual(config.log_level, "WARNING")
        self.assertEqual(config.detection.similarity_threshold, 0.8)
        self.assertEqual(config.detection.min_cluster_size, MIB)
        self.assertEqual(config.detection.max_time_gap_seconds, 3600)
        self.assertEqual(config.detection.min_base_length, 3)
        self.assertEqual(config.detection.enabled_strategies, list(DuplicateKind))
        self.assertEqual(config.output.format, "json")

    def test_load_with_env_expansion(self):
        self.config_path.write_text(
            "log_level: ${SWEEP_LEVEL:-info}\n"
            "detection:\n"
            "  similarity_threshold: ${SWEEP_THRESHOLD}\n"
            "  enabled_strategies: [identical_checksum, exact_name]\n",
            encoding="utf-8",
        )
        with mock.patch.dict(os.environ, {"SWEEP_THRESHOLD": "0.9"}):
            config = load_config(self.config_path)

        self.assertEqual(config.log_level, "INFO")
        self.assertEqual(config.detection.similarity_threshold, 0.9)
        self.assertEqual(
            config.detection.enabled_strategies,
            [DuplicateKind.IDENTICAL_CHECKSUM, DuplicateKind.EXACT_NAME],
        )

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(Path(self.test_dir) / "missing.yml")

    def test_invalid_values(self):
        self.config_path.write_text("detection:\n  similarity_threshold: 2.5\n", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_unknown_detection_key(self):
        self.config_path.write_text("detection:\n  threshold: 0.5\n", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_invalid_yaml(self):
        self.config_path.write_text("detection: [unclosed\n", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_non_mapping_root(self):
        self.config_path.write_text("- just\n- a list\n", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(self.config_path)

    def test_invalid_output_format(self):
        with self.assertRaises(ValueError):
            load_config_from_dict({"output": {"format": "xml"}})

    def test_save_and_reload(self):
        config = load_config_from_dict({
            "log_level": "debug",
            "detection": {"min_base_length": 4, "enabled_strategies": ["backup_pattern"]},
            "output": {"directory": "reports", "format": "CSV"},
        })
        save_config(config, self.config_path)
        reloaded = load_config(self.config_path)

        self.assertEqual(reloaded.log_level, "DEBUG")
        self.assertEqual(reloaded.detection.min_base_length, 4)
        self.assertEqual(reloaded.detection.enabled_strategies, [DuplicateKind.BACKUP_PATTERN])
        self.assertEqual(reloaded.output.directory, Path("reports"))
        self.assertEqual(reloaded.output.format, "csv")

    def test_merge_configs(self):
        base = SweepConfig(detection=DetectionConfig(min_cluster_size=10))
        merged = merge_configs(base, {"detection": {"similarity_threshold": 0.5}})

        self.assertEqual(merged.detection.similarity_threshold, 0.5)
        self.assertEqual(merged.detection.min_cluster_size, 10)
        self.assertEqual(base.detection.similarity_threshold, 0.8)


if __name__ == '__main__':
    unittest.main()
