"""
Tests for configuration loading and validation
"""

import pytest

from memorial.config import MemorialConfig, get_config, load_config, validate_config

ENV_VARS = [
    "MEMORIAL_CONFRONTING_TOLERANCE",
    "MEMORIAL_PUBLIC_SPACE_LABEL",
    "MEMORIAL_CLOSING_TOLERANCE",
    "MEMORIAL_REAR_TOLERANCE_DEG",
    "MEMORIAL_SAMPLE_INTERVAL",
    "MEMORIAL_LENGTH_DECIMALS",
    "MEMORIAL_DECIMAL_SEPARATOR",
    "MEMORIAL_OUTPUT_DIR",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a stray .env in the working directory out of the picture
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults():
    cfg = MemorialConfig()
    assert cfg.confronting.tolerance == 1.0
    assert cfg.confronting.public_space_label == "Public Area"
    assert cfg.ring.closing_tolerance == 0.001
    assert cfg.classification.rear_tolerance_deg == 45.0
    assert cfg.narrative.length_decimals == 3
    assert "RUA" in cfg.classification.street_keywords
    validate_config(cfg)


def test_global_config_is_shared():
    assert get_config() is get_config()


def test_environment_overrides(clean_env):
    clean_env.setenv("MEMORIAL_CONFRONTING_TOLERANCE", "0.25")
    clean_env.setenv("MEMORIAL_PUBLIC_SPACE_LABEL", "Área Pública")
    clean_env.setenv("MEMORIAL_LENGTH_DECIMALS", "2")
    clean_env.setenv("MEMORIAL_DECIMAL_SEPARATOR", ",")

    cfg = load_config()

    assert cfg.confronting.tolerance == 0.25
    assert cfg.confronting.public_space_label == "Área Pública"
    assert cfg.narrative.length_decimals == 2
    assert cfg.narrative.decimal_separator == ","
    assert cfg.ring.closing_tolerance == 0.001


def test_env_file_is_read(clean_env, tmp_path):
    env_file = tmp_path / "memorial.env"
    env_file.write_text(
        "MEMORIAL_REAR_TOLERANCE_DEG=30\nMEMORIAL_OUTPUT_DIR=deliverables\n",
        encoding="utf-8",
    )

    cfg = load_config(str(env_file))

    assert cfg.classification.rear_tolerance_deg == 30.0
    assert cfg.output_dir == "deliverables"


def test_environment_wins_over_env_file(clean_env, tmp_path):
    env_file = tmp_path / "memorial.env"
    env_file.write_text("MEMORIAL_SAMPLE_INTERVAL=5\n", encoding="utf-8")
    clean_env.setenv("MEMORIAL_SAMPLE_INTERVAL", "2")

    assert load_config(str(env_file)).alignment.sample_interval == 2.0


def test_missing_env_file_uses_defaults(clean_env, tmp_path):
    cfg = load_config(str(tmp_path / "missing.env"))
    assert cfg.confronting.tolerance == 1.0


def test_invalid_override_is_rejected(clean_env):
    clean_env.setenv("MEMORIAL_CONFRONTING_TOLERANCE", "-1")
    with pytest.raises(ValueError, match="confronting.tolerance"):
        load_config()


def test_validate_collects_every_error():
    cfg = MemorialConfig()
    cfg.ring.closing_tolerance = 0
    cfg.classification.rear_tolerance_deg = 200
    cfg.narrative.decimal_separator = ""

    with pytest.raises(ValueError) as exc_info:
        validate_config(cfg)

    message = str(exc_info.value)
    assert "ring.closing_tolerance" in message
    assert "rear_tolerance_deg" in message
    assert "decimal_separator" in message
