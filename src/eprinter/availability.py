"""Service availability checks against the published business hours."""

from __future__ import annotations

from datetime import datetime

from eprinter.exceptions import ServiceUnavailableError
from eprinter.typing.models import BusinessHours, PricingPolicy, ServiceStatus


def is_within_business_hours(hours: BusinessHours, now: datetime) -> bool:
    """Return whether `now` falls inside the business-hours window.

    Both ends are inclusive at minute precision. A window whose end is
    earlier than its start runs overnight.

    Args:
        hours (BusinessHours): Opening window.
        now (datetime): Moment to check, in the service's local time.

    Returns:
        bool: True when submissions are allowed at `now`.
    """
    current = now.strftime("%H:%M")
    if hours.start <= hours.end:
        return hours.start <= current <= hours.end
    return current >= hours.start or current <= hours.end


def check_service_status(policy: PricingPolicy, now: datetime | None = None) -> ServiceStatus:
    """Report whether the service accepts new jobs, with reasons when it does not.

    Args:
        policy (PricingPolicy): Snapshot carrying the service flags and hours.
        now (datetime | None): Moment to check; defaults to local now. Aware values are
            converted to local time, naive values are taken as local time.

    Returns:
        ServiceStatus: Availability and its reasons.
    """
    moment = now or datetime.now()  # noqa: DTZ005
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    within_hours = is_within_business_hours(policy.business_hours, moment)

    reasons: list[str] = []
    if policy.maintenance_mode:
        reasons.append("System is under maintenance")
    if not policy.accepting_orders:
        reasons.append("Not accepting new orders currently")
    if not within_hours:
        hours = policy.business_hours
        reasons.append(f"Service available only during business hours ({hours.start} - {hours.end})")

    return ServiceStatus(
        available=not reasons,
        maintenance_mode=policy.maintenance_mode,
        accepting_orders=policy.accepting_orders,
        within_business_hours=within_hours,
        business_hours=policy.business_hours,
        current_time=moment.time().replace(second=0, microsecond=0),
        reasons=tuple(reasons),
    )


def ensure_service_available(policy: PricingPolicy, now: datetime | None = None) -> ServiceStatus:
    """Raise when the service does not accept new jobs.

    Args:
        policy (PricingPolicy): Snapshot carrying the service flags and hours.
        now (datetime | None): Moment to check; defaults to local now.

    Raises:
        ServiceUnavailableError: If maintenance, a paused queue or closing time blocks submissions.

    Returns:
        ServiceStatus: Status, when available.
    """
    status = check_service_status(policy, now)
    if not status.available:
        raise ServiceUnavailableError(reasons=status.reasons)
    return status
