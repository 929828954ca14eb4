"""Tests for the crcfold-hash command line entry point."""

import logging
import os

import pytest
import toml

from crcfold.file_hasher import cli


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Keep user config files and config env vars out of CLI runs."""
    user_dir = tmp_path / "user-config"
    user_dir.mkdir()
    monkeypatch.setattr(
        "crcfold.common.config.platformdirs.user_config_dir",
        lambda appname=None, appauthor=None: str(user_dir),
    )
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("CRCFOLD_FILE_HASHER_"):
            monkeypatch.delenv(name)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield tmp_path
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def check_file(isolated_env):
    path = isolated_env / "check.txt"
    path.write_bytes(b"123456789")
    return path


def test_app_name():
    """Test the application name derived from the package."""
    assert cli.APP_NAME == "crcfold-file-hasher"


def test_prints_decimal_and_hex(check_file, capsys):
    """Test output for a single file."""
    exit_code = cli.main([str(check_file), "--max-concurrency", "4"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert str(check_file) in out
    assert "crc64 (dec): 11051210869376104954" in out
    assert "crc64 (hex): 0x995dc9bbdf1939fa" in out


def test_algorithm_override(check_file, capsys):
    """Test selecting another CRC64 variant."""
    exit_code = cli.main([str(check_file), "--algorithm", "crc-64-ecma-182"])

    assert exit_code == 0
    assert "0x6c40df5f0b497347" in capsys.readouterr().out


def test_process_executor(check_file, capsys):
    """Test hashing with the process executor."""
    exit_code = cli.main([str(check_file), "--executor", "process", "--max-concurrency", "3"])

    assert exit_code == 0
    assert "0x995dc9bbdf1939fa" in capsys.readouterr().out


def test_missing_file_fails(check_file, isolated_env, capsys):
    """Test that a missing file gives exit code 1 but other files are still hashed."""
    exit_code = cli.main([str(isolated_env / "missing.bin"), str(check_file)])

    assert exit_code == 1
    assert "0x995dc9bbdf1939fa" in capsys.readouterr().out


def test_unknown_algorithm(check_file):
    """Test that an unknown variant name is rejected."""
    assert cli.main([str(check_file), "--algorithm", "crc-64-nope"]) == 1


def test_config_file(check_file, isolated_env, capsys):
    """Test settings loaded from an explicit config file."""
    config_file = isolated_env / "hasher.toml"
    config_file.write_text(toml.dumps({"hasher": {"algorithm": "crc-64-we"}}))

    exit_code = cli.main([str(check_file), "--config", str(config_file)])

    assert exit_code == 0
    assert "0x62ec59e3f1a4f00a" in capsys.readouterr().out


def test_missing_config_file(check_file, isolated_env, capsys):
    """Test that a missing explicit config file is reported."""
    exit_code = cli.main([str(check_file), "--config", str(isolated_env / "nope.toml")])

    assert exit_code == 1
    assert "Failed to load configuration" in capsys.readouterr().err


def test_env_override(check_file, monkeypatch, capsys):
    """Test that environment variables override config values."""
    monkeypatch.setenv("CRCFOLD_FILE_HASHER_HASHER_ALGORITHM", "crc-64-go-iso")

    exit_code = cli.main([str(check_file)])

    assert exit_code == 0
    assert "0xb90956c775a41001" in capsys.readouterr().out


def test_zero_concurrency_rejected(check_file, capsys):
    """Test that --max-concurrency 0 fails instead of using the default."""
    exit_code = cli.main([str(check_file), "--max-concurrency", "0"])

    assert exit_code == 1
    assert "crc64" not in capsys.readouterr().out
