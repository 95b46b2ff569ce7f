import os

from config import DEFAULT_DATA_PATH, get_settings
from formatting import format_currency, format_percent, make_currency_formatter


def test_settings_defaults(tmp_path, monkeypatch):
    for key in ("ANALYTICS_DATA_PATH", "ANALYTICS_CURRENCY_SYMBOL", "ANALYTICS_STORE_NAME_PREFIX", "ANALYTICS_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    settings = get_settings(tmp_path)
    assert settings.data_path == os.path.join(str(tmp_path), DEFAULT_DATA_PATH)
    assert settings.log_level == "INFO"


def test_settings_from_env_file(tmp_path, monkeypatch):
    for key in ("ANALYTICS_DATA_PATH", "ANALYTICS_CURRENCY_SYMBOL", "ANALYTICS_STORE_NAME_PREFIX", "ANALYTICS_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    (tmp_path / ".env").write_text(
        "ANALYTICS_DATA_PATH=/srv/reports.csv\nANALYTICS_CURRENCY_SYMBOL=$\nANALYTICS_LOG_LEVEL=debug\n",
        encoding="utf-8",
    )
    settings = get_settings(tmp_path)
    assert settings.data_path == "/srv/reports.csv"
    assert settings.currency_symbol == "$"
    assert settings.log_level == "DEBUG"
    for key in ("ANALYTICS_DATA_PATH", "ANALYTICS_CURRENCY_SYMBOL", "ANALYTICS_LOG_LEVEL"):
        os.environ.pop(key, None)


def test_formatters():
    assert format_currency(1234567.4) == "¥1,234,567"
    assert format_currency(-500) == "-¥500"
    assert make_currency_formatter("$", 2)(12.5) == "$12.50"
    assert format_percent(12.345) == "12.3%"
