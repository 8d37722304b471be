"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
import ssl
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from eprinter.exceptions import SettingsError

logger = logging.getLogger(__name__)

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "eprinter"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )
    http_proxy: str | None = Field(default=None, validation_alias="HTTP_PROXY", description="HTTP proxy URL.")
    https_proxy: str | None = Field(
        default=None,
        validation_alias="HTTPS_PROXY",
        description="HTTPS proxy URL.",
    )
    all_proxy: str | None = Field(default=None, validation_alias="ALL_PROXY", description="All proxy URL.")

    cert_path: str | None = Field(
        default=None,
        validation_alias="CERT_PATH",
        description="Path to SSL certificate.",
    )

    pricing_url: str | None = Field(
        default=None,
        validation_alias="PRICING_URL",
        description="Base URL of the settings API that publishes prices.",
    )
    pricing_timeout: float = Field(
        default=5.0,
        gt=0,
        validation_alias="PRICING_TIMEOUT",
        description="Timeout in seconds for one pricing fetch.",
    )
    pricing_monochrome: Decimal | None = Field(
        default=None,
        ge=0,
        validation_alias="PRICING_MONOCHROME",
        description="Static monochrome price per impression, used only without PRICING_URL.",
    )
    pricing_color: Decimal | None = Field(
        default=None,
        ge=0,
        validation_alias="PRICING_COLOR",
        description="Static color price per impression, used only without PRICING_URL.",
    )
    max_copies: int = Field(
        default=50,
        ge=1,
        validation_alias="MAX_COPIES",
        description="Copy limit applied when the pricing source does not publish one.",
    )
    currency_symbol: str = Field(
        default="₹",
        validation_alias="CURRENCY_SYMBOL",
        description="Symbol used when formatting amounts.",
    )

    @field_validator("pricing_url")
    @classmethod
    def _validate_pricing_url(cls, value: str | None) -> str | None:
        """Require https for remote pricing endpoints.

        Args:
            value (str | None): Raw URL.

        Raises:
            ValueError: If the URL is malformed or uses plain http off localhost.

        Returns:
            str | None: URL without trailing slash.
        """
        if not value:
            return None
        parsed = urlparse(value)
        if parsed.scheme not in {"http", "https"} or not parsed.hostname:
            raise ValueError("PRICING_URL must be an absolute http(s) URL")  # noqa: TRY003
        if parsed.scheme == "http" and parsed.hostname not in _LOCAL_HOSTS:
            raise ValueError("PRICING_URL must use https outside local development")  # noqa: TRY003
        return value.rstrip("/")

    @property
    def proxy_url(self) -> str | None:
        """Return the proxy that outbound requests should use."""
        return self.https_proxy or self.http_proxy or self.all_proxy


def _cert_store_has_ca(ssl_context: ssl.SSLContext) -> bool:
    """Return whether the host trust store loaded any CA certificate."""
    return bool(ssl_context.cert_store_stats().get("x509_ca"))


def _get_certifi_cafile() -> str:
    """Return the CA bundle shipped with certifi."""
    import certifi  # noqa: PLC0415

    return certifi.where()


def build_ssl_context(settings: Settings) -> ssl.SSLContext:
    """Build a strict SSL context from settings.

    Without `CERT_PATH`, an empty host trust store falls back to the certifi bundle.

    Args:
        settings (Settings): Runtime settings.

    Returns:
        ssl.SSLContext: Configured TLS context.
    """
    ssl_context = ssl.create_default_context(cafile=settings.cert_path)
    if settings.cert_path is None and not _cert_store_has_ca(ssl_context):
        ssl_context = ssl.create_default_context(cafile=_get_certifi_cafile())
    ssl_context.verify_mode = ssl.CERT_REQUIRED
    ssl_context.minimum_version = ssl.TLSVersion.TLSv1_2
    return ssl_context


def build_httpx_client_kwargs(settings: Settings, *, target_url: str | None = None) -> dict[str, Any]:
    """Build kwargs used for `httpx.Client` and `httpx.AsyncClient`.

    Local targets never go through the proxy.

    Args:
        settings (Settings): Runtime settings.
        target_url (str | None): Optional target URL used to decide on proxying.

    Returns:
        dict[str, Any]: Arguments for client constructors.
    """
    kwargs: dict[str, Any] = {
        "verify": build_ssl_context(settings),
        "timeout": settings.pricing_timeout,
    }

    host = urlparse(target_url).hostname if target_url else None
    if settings.proxy_url and host not in _LOCAL_HOSTS:
        kwargs["proxy"] = settings.proxy_url

    return kwargs


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            try:
                ensure_env_file_exists()
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
