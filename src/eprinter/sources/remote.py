"""Pricing source backed by the E-Printer settings API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

try:
    import httpx
except Exception:  # pragma: no cover - optional dependency at runtime
    httpx: Any
    httpx = None

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from eprinter import logger
from eprinter.exceptions import PricingUnavailableError
from eprinter.settings import build_httpx_client_kwargs
from eprinter.typing.models import BusinessHours, FileConstraints, PricingPolicy, PricingTable

if TYPE_CHECKING:
    from eprinter.settings import Settings


class _SystemSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    maintenance_mode: bool = Field(default=False, validation_alias="maintenanceMode")
    accepting_orders: bool = Field(default=True, validation_alias="acceptingOrders")


class _PrintSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    max_copies: int | None = Field(default=None, ge=1, validation_alias="maxCopies")


class _PublicSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    pricing: PricingTable
    file_settings: FileConstraints = Field(default_factory=FileConstraints, validation_alias="fileSettings")
    business_hours: BusinessHours = Field(default_factory=BusinessHours, validation_alias="businessHours")
    system_settings: _SystemSettings = Field(default_factory=_SystemSettings, validation_alias="systemSettings")
    print_settings: _PrintSettings = Field(default_factory=_PrintSettings, validation_alias="printSettings")
    updated_at: str | None = Field(default=None, validation_alias="updatedAt")


class _SettingsEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool
    data: _PublicSettings | None = None
    message: str | None = None


class HttpPricingSource:
    """Fetch the public settings document and turn it into a pricing snapshot.

    Every call performs a fresh request. A failed request is reported as
    `PricingUnavailableError`; no earlier or default price is substituted.
    """

    settings_path = "/settings"

    def __init__(
        self,
        settings: Settings,
        *,
        base_url: str | None = None,
        client: Any = None,
        async_client: Any = None,
    ) -> None:
        """Initialize the source.

        Args:
            settings (Settings): Runtime settings (timeout, TLS, proxy, copy-limit default).
            base_url (str | None): Settings API base URL; defaults to `PRICING_URL`.
            client: Optional `httpx.Client` to reuse instead of a per-call client.
            async_client: Optional `httpx.AsyncClient` to reuse in `afetch`.
        """
        self._settings = settings
        self._base_url = (base_url or settings.pricing_url or "").rstrip("/")
        self._client = client
        self._async_client = async_client

    @property
    def url(self) -> str:
        """Return the settings document URL."""
        return f"{self._base_url}{self.settings_path}"

    def _ensure_ready(self) -> None:
        if not self._base_url:
            raise PricingUnavailableError(reason="PRICING_URL is not configured")
        if httpx is None:
            raise PricingUnavailableError(reason="httpx is required to fetch prices over HTTP")

    def fetch(self) -> PricingPolicy:
        """Fetch the current pricing snapshot.

        Raises:
            PricingUnavailableError: If the request fails, times out or returns an invalid payload.

        Returns:
            PricingPolicy: Current snapshot.
        """
        self._ensure_ready()
        timeout = self._settings.pricing_timeout
        try:
            if self._client is not None:
                response = self._client.get(self.url, timeout=timeout)
            else:
                with httpx.Client(**build_httpx_client_kwargs(self._settings, target_url=self.url)) as client:
                    response = client.get(self.url, timeout=timeout)
            response.raise_for_status()
            payload = response.json()
        except Exception as exc:
            raise self._unavailable(exc) from exc
        return self._to_policy(payload)

    async def afetch(self) -> PricingPolicy:
        """Asynchronously fetch the current pricing snapshot.

        Raises:
            PricingUnavailableError: If the request fails, times out or returns an invalid payload.

        Returns:
            PricingPolicy: Current snapshot.
        """
        self._ensure_ready()
        timeout = self._settings.pricing_timeout
        try:
            if self._async_client is not None:
                response = await self._async_client.get(self.url, timeout=timeout)
            else:
                kwargs = build_httpx_client_kwargs(self._settings, target_url=self.url)
                async with httpx.AsyncClient(**kwargs) as client:
                    response = await client.get(self.url, timeout=timeout)
            response.raise_for_status()
            payload = response.json()
        except Exception as exc:
            raise self._unavailable(exc) from exc
        return self._to_policy(payload)

    def _unavailable(self, exc: Exception) -> PricingUnavailableError:
        """Translate a transport failure into `PricingUnavailableError`.

        Args:
            exc (Exception): Failure raised while requesting or decoding the payload.

        Returns:
            PricingUnavailableError: Error to raise.
        """
        if isinstance(exc, httpx.TimeoutException):
            reason = f"settings API did not answer within {self._settings.pricing_timeout}s"
        elif isinstance(exc, httpx.HTTPStatusError):
            reason = f"settings API returned status {exc.response.status_code}"
        elif isinstance(exc, httpx.HTTPError):
            reason = f"settings API request failed: {exc}"
        elif isinstance(exc, ValueError):
            reason = "settings API returned a non-JSON body"
        else:
            reason = f"unexpected failure: {exc}"
        logger.warning("Pricing fetch failed", extra={"url": self.url, "reason": reason})
        return PricingUnavailableError(reason=reason)

    def _to_policy(self, payload: object) -> PricingPolicy:
        """Validate the settings envelope and build a snapshot.

        Args:
            payload (object): Decoded JSON body.

        Raises:
            PricingUnavailableError: If the envelope is unsuccessful or malformed.

        Returns:
            PricingPolicy: Snapshot built from the payload.
        """
        try:
            envelope = _SettingsEnvelope.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Pricing payload rejected", extra={"url": self.url, "errors": exc.error_count()})
            raise PricingUnavailableError(reason="settings API returned an invalid pricing document") from exc

        if not envelope.success or envelope.data is None:
            reason = envelope.message or "settings API reported a failure"
            logger.warning("Pricing fetch failed", extra={"url": self.url, "reason": reason})
            raise PricingUnavailableError(reason=reason)

        data = envelope.data
        pricing = data.pricing
        if pricing.version is None and data.updated_at is not None:
            pricing = pricing.model_copy(update={"version": data.updated_at})

        policy = PricingPolicy(
            pricing=pricing,
            max_copies=data.print_settings.max_copies or self._settings.max_copies,
            file_constraints=data.file_settings,
            business_hours=data.business_hours,
            maintenance_mode=data.system_settings.maintenance_mode,
            accepting_orders=data.system_settings.accepting_orders,
        )
        logger.info(
            "Fetched pricing snapshot",
            extra={"url": self.url, "pricing_version": pricing.version, "max_copies": policy.max_copies},
        )
        return policy
