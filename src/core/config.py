"""Configuration management for shoplistr."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Telegram Bot API Configuration
    telegram_bot_token: str | None = Field(default=None, description="Bot token issued by @BotFather")
    telegram_api_base_url: str = Field(default="https://api.telegram.org", description="Telegram Bot API base URL")
    telegram_webhook_url: str | None = Field(
        default=None, description="Public URL of POST /webhook, registered with Telegram at startup"
    )
    telegram_webhook_secret: str | None = Field(
        default=None, description="Secret echoed by Telegram in X-Telegram-Bot-Api-Secret-Token"
    )
    telegram_use_polling: bool = Field(
        default=False, description="Receive updates with getUpdates long polling instead of the webhook"
    )
    telegram_allowed_chat_id: int | None = Field(
        default=None, description="If set, updates from any other chat are ignored"
    )

    # Document Storage
    data_file_path: Path = Field(
        default=Path("./shopping_list_bot.json"), description="JSON file holding the shopping list document"
    )

    # Conversation behaviour
    comment_prefix: str = Field(default="#", description="Text messages starting with this prefix are ignored")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value

    def is_allowed_chat(self, chat_id: int) -> bool:
        """Return True if updates from this chat should be handled."""
        return self.telegram_allowed_chat_id is None or self.telegram_allowed_chat_id == chat_id


# Application Constants
class Constants:
    """Application-wide constants."""

    # API Configuration
    API_TIMEOUT_SECONDS: int = 30

    # Long polling
    POLL_TIMEOUT_SECONDS: int = 25  # getUpdates long-poll window
    POLL_RETRY_DELAY_SECONDS: float = 5.0  # Back-off after a failed getUpdates call

    # Telegram limits
    CALLBACK_DATA_MAX_BYTES: int = 64

    # Webhook
    WEBHOOK_SECRET_HEADER: str = "X-Telegram-Bot-Api-Secret-Token"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
