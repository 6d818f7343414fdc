import pytest

from goal_card.settings import Settings


def test_settings_load_provider_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOOTBALL_DATA_TOKEN", "fd-token")
    monkeypatch.setenv("GOAL_CARD_RAPIDAPI_KEY", "rapid-key")
    monkeypatch.delenv("ODDS_API_KEY", raising=False)
    monkeypatch.delenv("GOAL_CARD_ODDS_API_KEY", raising=False)

    settings = Settings(_env_file=None)

    assert settings.football_data_token == "fd-token"
    assert settings.rapidapi_key == "rapid-key"
    assert settings.odds_api_key == ""


def test_settings_credential_lookup() -> None:
    settings = Settings(_env_file=None, odds_api_key="  key  ")

    assert settings.credential("odds_api_key") == "key"
    assert settings.credential("unknown_field") == ""
    assert settings.credential("") == ""
