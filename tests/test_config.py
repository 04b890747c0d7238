import pytest

from phish_triage.config.settings import load_config
from phish_triage.core.errors import ConfigError


def test_load_config_defaults(monkeypatch):
    monkeypatch.delenv("PHISH_TRIAGE_DEFAULT_CONFIG_PATH", raising=False)
    monkeypatch.delenv("PHISH_TRIAGE_REDACT_NAMES", raising=False)
    cfg, raw = load_config()
    assert isinstance(raw, dict)
    assert cfg.hash_workers == 4
    assert cfg.log_level == "WARNING"
    options = cfg.redaction_options()
    assert options.redact_names and options.redact_emails
    assert options.custom_patterns == ()
    assert cfg.rule_set().weight("dangerous_attachment") == 30


def test_env_overrides_redaction_flags(monkeypatch):
    monkeypatch.setenv("PHISH_TRIAGE_REDACT_NAMES", "false")
    monkeypatch.setenv("PHISH_TRIAGE_HASH_WORKERS", "2")
    cfg, _ = load_config()
    assert cfg.redaction_options().redact_names is False
    assert cfg.hash_workers == 2


def test_yaml_file_overrides_rule_set(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "scoring:\n"
        "  url_shorteners: [evil.ly]\n"
        "  weights:\n"
        "    dangerous_attachment: 40\n"
        "redaction:\n"
        "  custom_patterns: ['ACCT-\\d+']\n",
        encoding="utf-8",
    )
    cfg, _ = load_config(path)
    rules = cfg.rule_set()
    assert rules.url_shorteners == ("evil.ly",)
    assert rules.weight("dangerous_attachment") == 40
    assert rules.weight("spf_fail") == 25
    assert cfg.redaction_options().custom_patterns == ("ACCT-\\d+",)


def test_invalid_yaml_raises_config_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("scoring: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_invalid_scoring_pattern_raises_config_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("scoring:\n  urgency_patterns: ['(oops']\n", encoding="utf-8")
    cfg, _ = load_config(path)
    with pytest.raises(ConfigError):
        cfg.rule_set()


def test_explicit_missing_config_file_raises_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yaml")


def test_env_pointing_at_missing_config_file_raises_config_error(monkeypatch, tmp_path):
    monkeypatch.setenv("PHISH_TRIAGE_DEFAULT_CONFIG_PATH", str(tmp_path / "absent.yaml"))
    with pytest.raises(ConfigError):
        load_config()
