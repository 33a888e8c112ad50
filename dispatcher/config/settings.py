from enum import Enum
from typing import Literal

from fastapi import Depends
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PushProvider(str, Enum):
    FCM = "fcm"
    STUB = "stub"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Push Dispatcher", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment")
    debug: bool = Field(default=True, description="Debug mode")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )

    # Server
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    workers: int = Field(default=1, description="Number of workers")

    # Jobs
    jobs_collection: str = Field(
        default="notification_jobs",
        description="Document collection whose creations trigger a push",
    )
    push_provider: PushProvider = Field(
        default=PushProvider.STUB, description="Push-messaging provider"
    )

    # Firebase Admin
    firebase_project_id: str | None = Field(
        default=None, description="Firebase project id (defaults to the credentials')"
    )
    firebase_credentials_file: str | None = Field(
        default=None,
        description="Service account JSON; application default credentials if unset",
    )
    firebase_app_name: str = Field(
        default="[DEFAULT]", description="Firebase Admin app name"
    )
    fcm_dry_run: bool = Field(
        default=False, description="Validate FCM messages without delivering them"
    )

    # Firebase web client (background receiver)
    firebase_web_api_key: str = Field(default="", description="Web API key")
    firebase_auth_domain: str = Field(default="", description="Auth domain")
    firebase_storage_bucket: str = Field(default="", description="Storage bucket")
    firebase_messaging_sender_id: str = Field(
        default="", description="Messaging sender id"
    )
    firebase_web_app_id: str = Field(default="", description="Web app id")
    firebase_js_sdk_version: str = Field(
        default="9.23.0", description="Firebase JS compat SDK version"
    )

    # Background notification presentation
    notification_default_title: str = Field(
        default="BrightBuds Notification",
        description="Title shown when a message carries none",
    )
    notification_icon: str | None = Field(
        default="/assets/profile_placeholder.png", description="Notification icon URL"
    )

    def model_post_init(self, __context) -> None:
        """Validate settings after initialization."""
        if self.environment == "production" and self.push_provider == PushProvider.STUB:
            raise ValueError(
                f"PUSH_PROVIDER={self.push_provider.value} is not allowed in production environment. "
                "Use PUSH_PROVIDER=fcm for production deployments."
            )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Dependency injection function for settings."""
    return settings


# Convenience type alias for dependency injection
SettingsDep = Depends(get_settings)
