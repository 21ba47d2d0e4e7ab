"""Tests for StructlogAdapter — default LoggingPort implementation."""

import logging

from aspectdemo.core.config import Config
from aspectdemo.logging.port import LoggingPort
from aspectdemo.logging.structlog_adapter import StructlogAdapter


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"aspectdemo": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"aspectdemo": {"logging": {"format": "JSON"}}}))
        assert adapter._format == "json"

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"aspectdemo": {"logging": {"level": {"root": "INFO", "aspectdemo.aop": "debug"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"aspectdemo.aop": "DEBUG"}
        assert logging.getLogger("aspectdemo.aop").level == logging.DEBUG


class TestStructlogAdapterLoggers:
    def test_get_logger_has_level_methods(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("aspectdemo.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "warning", None))

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("aspectdemo.service", "WARNING")
        assert logging.getLogger("aspectdemo.service").level == logging.WARNING
