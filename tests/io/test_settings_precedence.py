from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from bnfc.io.config import GeneratorSettings, generation_timestamp

ENV_KEYS = ["BNFC_OUT_DIR", "BNFC_LOG_LEVEL", "BNFC_TIMESTAMP", "SOURCE_DATE_EPOCH"]


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "bnfc.toml").write_text(
        """
        [bnfc]
        out_dir = "toml_out"
        log_level = "debug"
        """.strip()
    )
    monkeypatch.setenv("BNFC_OUT_DIR", "env_out")

    s = GeneratorSettings.load()

    assert s.out_dir == "env_out"  # env override
    assert s.log_level == "DEBUG"  # from TOML
    assert s.timestamp is None


def test_settings_top_level_toml_keys(tmp_path: Path) -> None:
    (tmp_path / "bnfc.toml").write_text('timestamp = "fixed"\nlog_level = "loud"\n')

    s = GeneratorSettings.load()

    assert s.timestamp == "fixed"
    assert s.log_level == "INFO"  # unknown level ignored


def test_settings_from_pyproject_tool_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.bnfc]\nout_dir = "gen"\n')
    assert GeneratorSettings.load().out_dir == "gen"


def test_settings_defaults_when_no_config() -> None:
    s = GeneratorSettings.load()
    assert s == GeneratorSettings()
    assert s.out_dir == "."
    assert s.log_level == "INFO"


def test_settings_explicit_path_and_unreadable_toml(tmp_path: Path) -> None:
    cfg = tmp_path / "custom.toml"
    cfg.write_text('out_dir = "custom"\n')
    assert GeneratorSettings.from_toml(cfg).out_dir == "custom"

    cfg.write_text("not = [valid toml\n")
    assert GeneratorSettings.from_toml(cfg) == GeneratorSettings()


def test_generation_timestamp_sources(monkeypatch) -> None:
    now = datetime(2024, 5, 6, 7, 8, tzinfo=UTC)
    assert generation_timestamp(GeneratorSettings(timestamp="then")) == "then"
    assert generation_timestamp(GeneratorSettings(), now=now) == "2024-05-06 07:08 UTC"

    monkeypatch.setenv("SOURCE_DATE_EPOCH", "0")
    assert generation_timestamp(GeneratorSettings(), now=now) == "1970-01-01 00:00 UTC"

    monkeypatch.setenv("SOURCE_DATE_EPOCH", "yesterday")
    assert generation_timestamp(GeneratorSettings(), now=now) == "2024-05-06 07:08 UTC"


@pytest.mark.parametrize("epoch", ["99999999999999999999", "-99999999999999999999"])
def test_out_of_range_source_date_epoch_is_ignored(epoch: str, monkeypatch) -> None:
    now = datetime(2024, 5, 6, 7, 8, tzinfo=UTC)
    monkeypatch.setenv("SOURCE_DATE_EPOCH", epoch)
    assert generation_timestamp(GeneratorSettings(), now=now) == "2024-05-06 07:08 UTC"
