# tests/test_config.py
import logging
import os
import sys
import tempfile
import types
import unittest
from pathlib import Path

from viewextract.config import Config, configure_logging


class ConfigTestCase(unittest.TestCase):

    def setUp(self):
        Config.reset()
        self._cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()
        os.chdir(self._tmp.name)

    def tearDown(self):
        os.chdir(self._cwd)
        self._tmp.cleanup()
        sys.modules.pop("_test_embedded_config", None)
        Config.reset()

    def write(self, text, name="viewextract.yaml"):
        Path(self._tmp.name, name).write_text(text, encoding="utf-8")


class DefaultsTests(ConfigTestCase):

    def test_defaults_without_any_source(self):
        cfg = Config()
        self.assertIsNone(cfg.source)
        self.assertEqual(cfg.get_nested("scheduler.backend"), "qt")
        self.assertFalse(cfg.get_nested("extractor.deduplicate"))
        self.assertEqual(cfg.get("log_level"), "WARNING")

    def test_singleton(self):
        self.assertIs(Config(), Config())

    def test_missing_nested_key(self):
        cfg = Config()
        self.assertEqual(cfg.get_nested("extractor.nope", "fallback"), "fallback")
        self.assertEqual(cfg.get_nested("log_level.deeper", 3), 3)
        self.assertIsNone(cfg.get_nested(""))


class FileTests(ConfigTestCase):

    def test_yaml_file_overrides_defaults(self):
        self.write("scheduler:\n  backend: manual\nextractor:\n  deduplicate: true\n")
        cfg = Config()
        self.assertEqual(cfg.source, "file")
        self.assertEqual(cfg.get_nested("scheduler.backend"), "manual")
        self.assertTrue(cfg.get_nested("extractor.deduplicate"))
        self.assertEqual(cfg.get("log_level"), "WARNING")

    def test_empty_file_uses_defaults(self):
        self.write("")
        cfg = Config()
        self.assertEqual(cfg.source, "file")
        self.assertEqual(cfg.get_nested("scheduler.backend"), "qt")

    def test_invalid_yaml_is_ignored(self):
        self.write("scheduler: [unclosed\n")
        with self.assertLogs("viewextract.config", level="WARNING"):
            cfg = Config()
        self.assertIsNone(cfg.source)

    def test_non_mapping_is_ignored(self):
        self.write("- just\n- a list\n")
        with self.assertLogs("viewextract.config", level="WARNING"):
            cfg = Config()
        self.assertIsNone(cfg.source)

    def test_reload_picks_up_changes(self):
        self.write("log_level: INFO\n")
        cfg = Config()
        self.write("log_level: DEBUG\n")
        cfg.reload()
        self.assertEqual(cfg.get("log_level"), "DEBUG")

    def test_as_dict_is_a_copy(self):
        cfg = Config()
        snapshot = cfg.as_dict()
        snapshot["scheduler"]["backend"] = "changed"
        self.assertEqual(cfg.get_nested("scheduler.backend"), "qt")


class EmbeddedTests(ConfigTestCase):

    def test_embedded_module_preferred(self):
        module = types.ModuleType("_test_embedded_config")
        module.CONFIG = {"scheduler": {"backend": "manual"}}
        sys.modules["_test_embedded_config"] = module
        self.write("scheduler:\n  backend: qt\n")
        cfg = Config(embedded_module_name="_test_embedded_config")
        self.assertEqual(cfg.source, "embedded")
        self.assertEqual(cfg.get_nested("scheduler.backend"), "manual")

        cfg.reload(prefer_embedded=False)
        self.assertEqual(cfg.source, "file")
        self.assertEqual(cfg.get_nested("scheduler.backend"), "qt")


class LoggingTests(ConfigTestCase):

    def tearDown(self):
        logging.getLogger("viewextract").setLevel(logging.NOTSET)
        super().tearDown()

    def test_configure_logging_from_config(self):
        self.write("log_level: debug\n")
        configure_logging()
        self.assertEqual(logging.getLogger("viewextract").level, logging.DEBUG)

    def test_explicit_level_wins(self):
        configure_logging("error")
        self.assertEqual(logging.getLogger("viewextract").level, logging.ERROR)


if __name__ == '__main__':
    unittest.main()
