"""Unit tests for the composition root and logging setup."""
import logging
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch
from tempora import main as tempora_main
from tempora.config import Config
from tempora.db import BlobBackend, KeyValueStore
from tempora.logging_setup import LOGGER_NAME, setup_logging


class TestBuildAppContext(unittest.IsolatedAsyncioTestCase):
    """The services share the single repository built at startup."""

    async def asyncSetUp(self) -> None:
        self.tmpdir = tempfile.mkdtemp()
        self.backend = BlobBackend(KeyValueStore(os.path.join(self.tmpdir, "store.json")), "k")
        self.config = Config(os.path.join(self.tmpdir, "settings.json"))

    async def asyncTearDown(self) -> None:
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    async def test_wires_one_repository(self) -> None:
        with patch.object(tempora_main, "select_backend", return_value=self.backend) as select:
            context = tempora_main.build_app_context("blob", self.config)

        select.assert_called_once_with("blob")
        self.assertIs(context.repository.backend, self.backend)
        self.assertIs(context.stats_service.repository, context.repository)
        self.assertIs(context.search_service.repository, context.repository)
        self.assertIs(context.config, self.config)

        await context.repository.initialize()
        await context.repository.create("x", "", "2024-01-01")
        stats = await context.stats_service.compute_stats()
        self.assertEqual(stats.total, 1)


class TestSetupLogging(unittest.TestCase):
    """Test handler installation."""

    def setUp(self) -> None:
        self.tmpdir = tempfile.mkdtemp()
        self.logger = logging.getLogger(LOGGER_NAME)
        self.saved_handlers = self.logger.handlers[:]
        self.saved_level = self.logger.level
        self.logger.handlers = []

    def tearDown(self) -> None:
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers = self.saved_handlers
        self.logger.setLevel(self.saved_level)
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_idempotent(self) -> None:
        setup_logging(debug=False)
        setup_logging(debug=False)
        self.assertEqual(len(self.logger.handlers), 1)

    def test_debug_mode_writes_file(self) -> None:
        path = os.path.join(self.tmpdir, "logs", "debug.log")
        setup_logging(debug=True, debug_log_path=path)
        logging.getLogger("tempora.db").debug("hello from the store")
        for handler in self.logger.handlers:
            handler.flush()

        with open(path) as f:
            self.assertIn("hello from the store", f.read())


if __name__ == "__main__":
    unittest.main()
