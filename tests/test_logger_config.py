import os

import pytest

from catalog_service.config.logger_config import configure_logger, log


@pytest.fixture
def log_dir(tmp_path):
    yield tmp_path
    configure_logger(env="test", log_dir=os.environ["LOG_DIR"])


def test_file_sinks_write_app_and_error_logs(log_dir):
    configure_logger(env="test", console_level="ERROR", log_dir=str(log_dir))

    log.info("Category created successfully", category_id="2.1")
    log.error("Unexpected error", category_id="2.1")

    app_log = (log_dir / "app.log").read_text()
    error_log = (log_dir / "error.log").read_text()
    assert "Category created successfully" in app_log
    assert "Unexpected error" in app_log
    assert "Unexpected error" in error_log
    assert "Category created successfully" not in error_log
