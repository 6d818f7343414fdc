"""Application settings for goal-card."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Provider credentials; an empty credential disables that provider."""

    model_config = SettingsConfigDict(
        env_prefix="GOAL_CARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    football_data_token: str = Field(
        default="",
        validation_alias=AliasChoices("FOOTBALL_DATA_TOKEN", "GOAL_CARD_FOOTBALL_DATA_TOKEN"),
    )
    rapidapi_key: str = Field(
        default="",
        validation_alias=AliasChoices("RAPIDAPI_KEY", "GOAL_CARD_RAPIDAPI_KEY"),
    )
    odds_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("ODDS_API_KEY", "GOAL_CARD_ODDS_API_KEY"),
    )

    def credential(self, name: str) -> str:
        """Resolve a credential by settings field name."""
        if not name or name not in type(self).model_fields:
            return ""
        return str(getattr(self, name) or "").strip()
