"""Tests for outbox configuration."""
from pathlib import Path

import pytest

from lighthouse.config import OutboxConfig


class TestOutboxConfig:
    def test_defaults(self):
        config = OutboxConfig()

        assert config.queue_path == Path.home() / ".lighthouse" / "offline_queue.jsonl"
        assert config.request_timeout_ms == 10000
        assert config.retention_days == 7
        assert config.validate() == []

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LIGHTHOUSE_QUEUE_PATH", str(tmp_path / "q.jsonl"))
        monkeypatch.setenv("LIGHTHOUSE_BASE_URL", "https://study.example.com")
        monkeypatch.setenv("LIGHTHOUSE_AUTH_TOKEN", "secret")
        monkeypatch.setenv("LIGHTHOUSE_REQUEST_TIMEOUT_MS", "2500")
        monkeypatch.setenv("LIGHTHOUSE_PROBE_HOST", "study.example.com")
        monkeypatch.setenv("LIGHTHOUSE_PROBE_PORT", "443")
        monkeypatch.setenv("LIGHTHOUSE_PROBE_TIMEOUT_S", "1.5")
        monkeypatch.setenv("LIGHTHOUSE_POLL_INTERVAL_S", "10")
        monkeypatch.setenv("LIGHTHOUSE_RETENTION_DAYS", "14")

        config = OutboxConfig.from_env()

        assert config.queue_path == tmp_path / "q.jsonl"
        assert config.base_url == "https://study.example.com"
        assert config.auth_token == "secret"
        assert config.request_timeout_ms == 2500
        assert config.probe_host == "study.example.com"
        assert config.probe_port == 443
        assert config.probe_timeout_s == 1.5
        assert config.poll_interval_s == 10.0
        assert config.retention_days == 14

    def test_validate_reports_every_problem(self):
        config = OutboxConfig(
            base_url="ftp://nope",
            request_timeout_ms=0,
            probe_port=70000,
            probe_timeout_s=0,
            poll_interval_s=-1,
            retention_days=0,
        )

        assert len(config.validate()) == 6

    @pytest.mark.parametrize("name, raw", [
        ("LIGHTHOUSE_PROBE_PORT", "https"),
        ("LIGHTHOUSE_REQUEST_TIMEOUT_MS", "2.5s"),
        ("LIGHTHOUSE_POLL_INTERVAL_S", ""),
    ])
    def test_from_env_names_malformed_number(self, monkeypatch, name, raw):
        monkeypatch.setenv(name, raw)

        with pytest.raises(ValueError, match=f"{name} must be a number"):
            OutboxConfig.from_env()
