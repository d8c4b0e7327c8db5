"""Tests for the centralized logging setup."""

import logging
import unittest

from authtrees.logging_config import ROOT_LOGGER_NAME, get_logger, get_test_logger, setup_logging


class TestLoggingConfig(unittest.TestCase):

    def test_module_loggers_are_children_of_root(self):
        self.assertEqual(get_logger("authtrees.smt.proofs").name, "authtrees.smt.proofs")
        self.assertEqual(get_logger("bench").name, "authtrees.bench")
        self.assertTrue(logging.getLogger(ROOT_LOGGER_NAME).handlers)

    def test_setup_is_idempotent(self):
        root = setup_logging()
        handlers = list(root.handlers)
        self.assertIs(setup_logging(), root)
        self.assertEqual(root.handlers, handlers)
        self.assertFalse(root.propagate)

    def test_test_logger(self):
        logger = get_test_logger("logging")
        self.assertEqual(logger.name, "Tests.logging")
        self.assertEqual(logger.level, logging.DEBUG)


class TestConfiguredRootLogger(unittest.TestCase):
    """The global root logger already has a handler, as under basicConfig."""

    def setUp(self):
        self.global_root = logging.getLogger()
        self.global_handler = logging.NullHandler()
        self.global_root.addHandler(self.global_handler)

        self.project = logging.getLogger(ROOT_LOGGER_NAME)
        self.saved = (list(self.project.handlers), self.project.level, self.project.propagate)
        for handler in self.saved[0]:
            self.project.removeHandler(handler)
        self.project.setLevel(logging.NOTSET)
        self.project.propagate = True

    def tearDown(self):
        self.global_root.removeHandler(self.global_handler)
        for handler in list(self.project.handlers):
            self.project.removeHandler(handler)
            handler.close()
        handlers, level, propagate = self.saved
        for handler in handlers:
            self.project.addHandler(handler)
        self.project.setLevel(level)
        self.project.propagate = propagate

    def test_setup_configures_project_logger(self):
        logger = setup_logging(level=logging.WARNING)
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.WARNING)
        self.assertFalse(logger.propagate)

    def test_get_logger_configures_project_logger(self):
        get_logger("store")
        self.assertTrue(self.project.handlers)
        self.assertFalse(self.project.propagate)

    def test_fresh_test_logger_gets_own_handler(self):
        logger = get_test_logger("configured_root")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertFalse(logger.propagate)


if __name__ == "__main__":
    unittest.main()
