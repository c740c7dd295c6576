"""
Tests for the ambient core: config key loading, logger capture, tracker,
and the error taxonomy.
"""
import os
from unittest.mock import patch

from rankboard.core import config
from rankboard.core.errors import (
    GENERIC_USER_MESSAGE,
    AnalysisError,
    MalformedResponseError,
    RemoteExtractionError,
    ValidationError,
)
from rankboard.core.infisical_manager import InfisicalManager
from rankboard.core.logger import AppLogger
from rankboard.core.tracker import ExecutionTracker


class TestConfig:

    def test_key_from_environment(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "env-key"}):
            assert config.load_gemini_api_key() == "env-key"

    def test_missing_key_is_none(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": ""}):
            assert config.load_gemini_api_key() is None

    @patch.object(InfisicalManager, "get_secret", return_value="vault-key")
    def test_infisical_wins(self, mock_secret):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "env-key"}):
            assert config.load_gemini_api_key() == "vault-key"
        mock_secret.assert_called_once_with(config.GEMINI_KEY_SECRET_NAME)

    def test_retry_constants(self):
        assert config.MAX_RETRIES == 5
        assert config.INITIAL_BACKOFF_MS == 1000


def test_infisical_disabled_is_offline():
    with patch.dict(os.environ, {"DISABLE_INFISICAL": "1"}):
        manager = InfisicalManager()
    assert manager.is_connected is False
    assert manager.get_secret("ANY") is None


class TestLogger:

    def test_captures_levels(self):
        logger = AppLogger("test_capture")
        logger.log("started")
        logger.warning("slow")
        logger.error("broken")
        assert logger.get_full_log() == "INFO: started\nWARNING: slow\nERROR: broken"

    def test_clear(self):
        logger = AppLogger("test_clear")
        logger.log("x")
        logger.clear()
        assert logger.get_full_log() == ""

    def test_no_duplicate_handlers(self):
        AppLogger("test_dupes")
        logger = AppLogger("test_dupes")
        assert len(logger.logger.handlers) == 1


class TestTracker:

    def test_records_run(self):
        tracker = ExecutionTracker()
        tracker.start()
        tracker.log_attempt()
        tracker.log_retry(1000, "down")
        tracker.log_attempt()
        tracker.log_success()
        tracker.finish()

        assert tracker.metrics.attempts == 2
        assert tracker.metrics.delays_ms == [1000]
        assert tracker.summary().startswith("✅ SUCCESS | Attempts: 2, Retries: 1")

    def test_failure_summary(self):
        tracker = ExecutionTracker()
        tracker.start()
        tracker.log_failure("Max Retries Exhausted")
        assert tracker.summary().startswith("❌ FAILED")

    def test_start_resets(self):
        tracker = ExecutionTracker()
        tracker.log_attempt()
        tracker.start()
        assert tracker.metrics.attempts == 0


def test_error_taxonomy():
    for cls in (ValidationError, RemoteExtractionError, MalformedResponseError):
        assert issubclass(cls, AnalysisError)
    assert RemoteExtractionError("x").user_message == GENERIC_USER_MESSAGE
    assert MalformedResponseError("x").user_message == GENERIC_USER_MESSAGE
    assert ValidationError("upload more").user_message == "upload more"
