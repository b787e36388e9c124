"""Tests for core infrastructure modules."""

from unittest.mock import patch
import logging
import threading
import time

import pytest
from pydantic import ValidationError

from logplane.base.cancellation import CancellationToken
from logplane.base.config import (
    AWSConfig,
    LifecycleSettings,
    MemoryConfig,
    validate_config,
)
from logplane.base.exceptions import ThrottlingError
from logplane.base.logger import LogplaneLogger, StructuredFormatter
from logplane.base.retry import retry


# ══════════════════════════════════════════════════════════════════════
# Config
# ══════════════════════════════════════════════════════════════════════

class TestAWSConfig:
    def test_explicit_values(self):
        cfg = AWSConfig(
            aws_access_key_id="AKIA",
            aws_secret_access_key="secret",
            region_name="us-west-2",
        )
        assert cfg.aws_access_key_id == "AKIA"
        assert cfg.region_name == "us-west-2"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "env_key")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "env_secret")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
        cfg = AWSConfig()
        assert cfg.aws_access_key_id == "env_key"
        assert cfg.region_name == "eu-west-1"

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            AWSConfig(project_id="p")


class TestLifecycleSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOGPLANE_RETRY_INTERVAL", raising=False)
        monkeypatch.delenv("LOGPLANE_DEFAULT_TIMEOUT", raising=False)
        settings = LifecycleSettings()
        assert settings.retry_interval == 0.05
        assert settings.default_timeout == 30.0

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("LOGPLANE_RETRY_INTERVAL", "0.25")
        assert LifecycleSettings().retry_interval == 0.25

    def test_explicit_beats_env(self, monkeypatch):
        monkeypatch.setenv("LOGPLANE_DEFAULT_TIMEOUT", "99")
        assert LifecycleSettings(default_timeout=5).default_timeout == 5

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            LifecycleSettings(retry_interval=0)


class TestValidateConfig:
    def test_aws(self):
        cfg = validate_config("aws", {"region_name": "us-east-1"})
        assert isinstance(cfg, AWSConfig)

    def test_memory(self):
        cfg = validate_config("memory", {"visibility_delay": 0.5})
        assert isinstance(cfg, MemoryConfig)
        assert cfg.page_size == 50

    def test_memory_rejects_negative_delay(self):
        with pytest.raises(ValidationError):
            validate_config("memory", {"visibility_delay": -1})

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="No config model"):
            validate_config("azure", {"key": "val"})


# ══════════════════════════════════════════════════════════════════════
# Retry
# ══════════════════════════════════════════════════════════════════════

class TestRetry:
    def test_success_no_retry(self):
        call_count = 0

        @retry(base_delay=0)
        def ok():
            nonlocal call_count
            call_count += 1
            return "ok"

        assert ok() == "ok"
        assert call_count == 1

    def test_retries_throttling_by_default(self):
        call_count = 0

        @retry(max_attempts=3, base_delay=0)
        def throttled_twice():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ThrottlingError("slow down", "ThrottlingException")
            return "ok"

        assert throttled_twice() == "ok"
        assert call_count == 3

    def test_backoff_is_capped(self):
        @retry(max_attempts=5, base_delay=1.0, max_delay=3.0)
        def always_throttled():
            raise ThrottlingError("slow down")

        with patch("logplane.base.retry.time.sleep") as mock_sleep:
            with pytest.raises(ThrottlingError):
                always_throttled()
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0, 3.0, 3.0]

    def test_non_retryable_raises_immediately(self):
        call_count = 0

        @retry(max_attempts=3, base_delay=0)
        def type_err():
            nonlocal call_count
            call_count += 1
            raise TypeError("not retryable")

        with pytest.raises(TypeError):
            type_err()
        assert call_count == 1

    def test_invalid_attempts(self):
        with pytest.raises(ValueError):
            retry(max_attempts=0)


# ══════════════════════════════════════════════════════════════════════
# Logger
# ══════════════════════════════════════════════════════════════════════

class TestLogplaneLogger:
    def test_log_operation(self, capfd):
        logger = LogplaneLogger("test_lp")
        logger.logger.setLevel(logging.DEBUG)
        logger.warning("timeout", provider="aws", operation="create_log_group", resource="/app")
        captured = capfd.readouterr()
        assert "timeout" in captured.err
        assert "/app" in captured.err

    def test_debug_respects_level(self, capfd):
        logger = LogplaneLogger("test_lp_debug")
        logger.logger.setLevel(logging.WARNING)
        logger.debug("quiet", operation="list_log_groups")
        assert "quiet" not in capfd.readouterr().err
        logger.logger.setLevel(logging.DEBUG)
        logger.debug("loud", operation="list_log_groups")
        assert "loud" in capfd.readouterr().err

    def test_structured_formatter(self):
        fmt = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="hi", args=(), exc_info=None,
        )
        record.resource = "g/s"
        record.request_id = "abc"
        output = fmt.format(record)
        assert '"resource": "g/s"' in output
        assert '"request_id": "abc"' in output
        assert "provider" not in output


# ══════════════════════════════════════════════════════════════════════
# Cancellation
# ══════════════════════════════════════════════════════════════════════

class TestCancellationToken:
    def test_sleep_completes(self):
        assert CancellationToken().sleep(0.01) is True

    def test_sleep_interrupted(self):
        token = CancellationToken()
        threading.Timer(0.05, token.cancel).start()
        start = time.monotonic()
        assert token.sleep(5.0) is False
        assert time.monotonic() - start < 1.0
        assert token.cancelled

    def test_zero_sleep_reports_state(self):
        token = CancellationToken()
        assert token.sleep(0) is True
        token.cancel()
        assert token.sleep(0) is False
