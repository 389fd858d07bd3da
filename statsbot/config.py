from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Telegram
    telegram_bot_token: str = ""
    telegram_api_base: str = "https://api.telegram.org"

    # Channel gate
    channel_username: str = "@zxreep"
    channel_invite_url: str = "https://t.me/+3jQzaUHhffJlODE1"

    # Menu button labels
    bt1_label: str = "bt1"
    bt2_label: str = "bt2"
    bt3_label: str = "bt3"

    # Stats lookup endpoints ({uid} / {keyword} are URL-encoded on substitution)
    bt1_template: str = (
        "https://freefire-apis.vercel.app/get_player_stats"
        "?server=ind&uid={uid}&matchmode=RANKED&gamemode=br"
    )
    bt2_template: str = (
        "https://freefire-apis.vercel.app/get_player_personal_show"
        "?server=ind&uid={uid}"
    )
    bt3_template: str = (
        "https://freefire-apis.vercel.app/get_search_account_by_keyword"
        "?server=ind&keyword={keyword}"
    )

    # Seconds, applies to both Telegram and lookup calls
    request_timeout: float = 15.0

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
