"""Tests for petcare.core.utils.logging."""

import pytest
from loguru import logger

from petcare.core.config import Config
from petcare.core.utils.logging import setup_from_config, setup_logging


@pytest.fixture(autouse=True)
def restore_loguru():
    yield
    logger.remove()


class TestSetupLogging:
    def test_file_sink_creates_directories(self, tmp_path):
        log_file = tmp_path / "logs" / "petcare.log"
        setup_logging(level="info", log_file=str(log_file))
        logger.info("walk logged")
        logger.debug("hidden")
        logger.complete()

        text = log_file.read_text()
        assert "walk logged" in text
        assert "hidden" not in text

    def test_console_level(self, capsys):
        setup_logging(level="WARNING")
        logger.info("quiet")
        logger.warning("loud")
        err = capsys.readouterr().err
        assert "loud" in err
        assert "quiet" not in err


class TestSetupFromConfig:
    def test_uses_logging_section(self, tmp_path):
        config = Config(data_dir=str(tmp_path), env_prefix="")
        log_file = tmp_path / "petcare.log"
        config.set("logging.file", str(log_file))
        config.set("logging.level", "ERROR")

        setup_from_config(config)
        logger.warning("not written")
        logger.error("written")

        text = log_file.read_text()
        assert "written" in text
        assert "not written" not in text

    def test_verbose_lowers_to_info(self, tmp_path, capsys):
        setup_from_config(Config(data_dir=str(tmp_path), env_prefix=""), verbose=True)
        logger.info("loaded 2 pets")
        assert "loaded 2 pets" in capsys.readouterr().err

    def test_verbose_keeps_debug(self, tmp_path, capsys):
        config = Config(data_dir=str(tmp_path), env_prefix="")
        config.set("logging.level", "DEBUG")
        setup_from_config(config, verbose=True)
        logger.debug("coalescing")
        assert "coalescing" in capsys.readouterr().err
