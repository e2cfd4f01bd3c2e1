import pytest
import yaml
from loguru import logger

from autotest_tools.common import init_logger
from autotest_tools.common.config_loader import ConfigLoader


@pytest.fixture
def logging_config(monkeypatch, tmp_path):
    log_file = tmp_path / "logs" / "ui_tests.log"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"logging": {"level": "ERROR", "file": str(log_file), "rotation": "1 MB", "retention": "1 day"}}),
        encoding="utf-8",
    )
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOGGING_LEVEL", raising=False)

    ConfigLoader.reset()
    ConfigLoader(config_path=config_path)
    yield log_file

    monkeypatch.undo()
    ConfigLoader.reset()
    init_logger(force=True)


def test_level_and_file_come_from_logging_config(logging_config):
    init_logger(force=True)

    logger.info("navigation started")
    logger.error("results never appeared")

    content = logging_config.read_text(encoding="utf-8")
    assert "results never appeared" in content
    assert "navigation started" not in content


def test_log_level_env_wins_over_config(monkeypatch, logging_config):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    init_logger(force=True)

    logger.debug("locator resolved")

    assert "locator resolved" in logging_config.read_text(encoding="utf-8")


def test_explicit_level_wins_over_env(monkeypatch, logging_config):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    init_logger(level="WARNING", force=True)

    logger.info("page loaded")
    logger.warning("slow page")

    content = logging_config.read_text(encoding="utf-8")
    assert "slow page" in content
    assert "page loaded" not in content
