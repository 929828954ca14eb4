"""Tests for shared LoggingConfig."""

import pytest
from pydantic import ValidationError
from crcfold.common import LoggingConfig


class TestLoggingConfig:
    """Test shared LoggingConfig validation."""

    def test_default_values(self):
        """Test default values keep stderr quiet."""
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert config.format == "simple"
        assert config.file is None
        assert config.max_file_size_mb == 10
        assert config.backup_count == 5

    def test_all_valid_log_levels(self):
        """Test that all valid log levels are accepted."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR"]:
            config = LoggingConfig(level=level)
            assert config.level == level

    def test_all_valid_formats(self):
        """Test that all valid formats are accepted."""
        for fmt in ["simple", "detailed", "json"]:
            config = LoggingConfig(format=fmt)
            assert config.format == fmt

    def test_format_is_case_insensitive(self):
        """Test that format names are normalized to lowercase."""
        config = LoggingConfig(format="JSON")
        assert config.format == "json"

    def test_log_level_is_case_insensitive(self):
        """Test that log levels are normalized to uppercase."""
        assert LoggingConfig(level="info").level == "INFO"
        assert LoggingConfig(level="Debug").level == "DEBUG"

    def test_rejects_invalid_log_level(self):
        """Test that invalid log levels are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")

    def test_rejects_invalid_format(self):
        """Test that invalid formats are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(format="xml")

    def test_rejects_invalid_rotation(self):
        """Test rotation bounds."""
        with pytest.raises(ValidationError):
            LoggingConfig(max_file_size_mb=0)

        with pytest.raises(ValidationError):
            LoggingConfig(backup_count=-1)

    def test_rejects_unknown_fields(self):
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            LoggingConfig(level="INFO", unknown_field="value")

        error_msg = str(exc_info.value).lower()
        assert "extra_forbidden" in error_msg or "extra fields not permitted" in error_msg
