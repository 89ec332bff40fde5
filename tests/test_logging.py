import logging
from datetime import date
from unittest.mock import patch

import pytest

from resume_matcher.utils import logging_config, settings
from resume_matcher.utils.logging_config import PerformanceMonitor, configure_for_environment, get_logger


@pytest.fixture(autouse=True)
def restore_test_logging():
    yield
    configure_for_environment("testing")


class TestEnvironmentPresets:
    """Test cases for the per-environment logging presets"""

    def test_testing_preset_is_console_only(self):
        with patch.object(logging_config, "setup_logging") as mock_setup:
            configure_for_environment("testing")
        mock_setup.assert_called_once_with(level="WARNING", enable_file=False, format_style="simple")

    @pytest.mark.parametrize("environment,log_level,expected", [
        ("development", None, "DEBUG"),
        ("production", None, "INFO"),
        ("staging", None, "INFO"),
        ("production", "warning", "WARNING"),
    ])
    def test_level_defaults(self, monkeypatch, environment, log_level, expected):
        monkeypatch.setattr(settings, "LOG_LEVEL", log_level)
        with patch.object(logging_config, "setup_logging") as mock_setup:
            configure_for_environment(environment)
        mock_setup.assert_called_once_with(level=expected)

    def test_environment_read_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "Testing ")
        with patch.object(logging_config, "setup_logging") as mock_setup:
            configure_for_environment()
        assert mock_setup.call_args[1]["enable_file"] is False

    def test_log_files_written(self, tmp_path):
        logging_config.setup_logging(level="INFO", log_dir=str(tmp_path / "logs"))
        get_logger("tests").error("disk full")

        stamp = date.today().strftime("%Y%m%d")
        names = sorted(p.name for p in (tmp_path / "logs").iterdir())
        assert names == [f"resume_matcher_{stamp}.log", f"resume_matcher_errors_{stamp}.log"]
        assert "disk full" in (tmp_path / "logs" / names[1]).read_text(encoding="utf8")
        assert logging.getLogger("pdfminer").level == logging.ERROR


class TestGetLogger:
    def test_namespaced(self):
        assert get_logger("services.db").name == "resume_matcher.services.db"
        assert get_logger("resume_matcher.services.db").name == "resume_matcher.services.db"
        assert get_logger("resume_matcher_other").name == "resume_matcher.resume_matcher_other"


class TestPerformanceMonitor:
    """Test cases for block timing"""

    def test_fast_block(self):
        logger = logging.getLogger("resume_matcher.tests.perf")
        with patch.object(logger, "debug") as mock_debug:
            with PerformanceMonitor("parse", logger) as monitor:
                pass
        assert monitor.elapsed_ms is not None
        mock_debug.assert_called_once()

    def test_slow_block_warns(self):
        logger = logging.getLogger("resume_matcher.tests.perf")
        with patch.object(logger, "warning") as mock_warning:
            with PerformanceMonitor("parse", logger, threshold_ms=-1):
                pass
        assert "threshold" in mock_warning.call_args[0][0]

    def test_failure_logged_and_reraised(self):
        logger = logging.getLogger("resume_matcher.tests.perf")
        with patch.object(logger, "error") as mock_error:
            with pytest.raises(ValueError):
                with PerformanceMonitor("parse", logger):
                    raise ValueError("boom")
        assert "boom" in mock_error.call_args[0][0]
