"""
empoweru/config.py - Application configuration.

This module defines a Pydantic BaseSettings class that loads configuration from the
environment (or a `.env` file). Firebase itself is initialised by `empoweru.database`
when the application starts, so importing this module has no side effects.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    firebase_cred_file: str = "firebase_service_account.json"
    firebase_project_id: Optional[str] = None
    firebase_database_id: Optional[str] = None

    # Firebase credentials from environment variables (for Cloud Run)
    firebase_private_key_id: Optional[str] = None
    firebase_private_key: Optional[str] = None
    firebase_client_email: Optional[str] = None
    firebase_client_id: Optional[str] = None
    firebase_auth_uri: Optional[str] = None
    firebase_token_uri: Optional[str] = None
    firebase_auth_provider_x509_cert_url: Optional[str] = None
    firebase_client_x509_cert_url: Optional[str] = None

    iyzico_api_key: str = ""
    iyzico_secret_key: str = ""
    iyzico_base_url: str = "sandbox-api.iyzipay.com"
    iyzico_callback_url: str = "http://localhost:5173/payment/callback"
    payment_currency: str = "USD"

    debug: bool = False
    log_level: str = "INFO"
    # Comma-separated list or '*' for all
    allowed_origins: str = "http://localhost:5173,https://ph-assignment-12-empoweru-spa.surge.sh"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def has_env_credentials(self) -> bool:
        return all([
            self.firebase_private_key_id,
            self.firebase_private_key,
            self.firebase_client_email,
            self.firebase_client_id,
            self.firebase_auth_uri,
            self.firebase_token_uri,
            self.firebase_auth_provider_x509_cert_url,
            self.firebase_client_x509_cert_url,
        ])

    @property
    def origins(self) -> list:
        if not self.allowed_origins or self.allowed_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
