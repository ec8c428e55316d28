"""Subscription domain entities."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping

from kmEvents_checkout.shared.domain.exceptions import CheckoutValidationError

FREE_PLAN_NAME = "Free"
OTHER_CATEGORY = "Other"


def _decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal(0)
    return Decimal(str(value))


def _feature_label(key: str, feature: Mapping[str, Any]) -> str:
    """`emailNotifications` with limit 500 -> `Email Notifications (500)`."""
    name = key[:1].upper() + re.sub(r"([A-Z])", r" \1", key[1:])
    limit = feature.get("limit")
    return f"{name} ({limit})" if limit else name


@dataclass(frozen=True)
class SubscriptionPlan:
    """A plan an organizer can pick when requesting an event."""

    name: str
    display_name: str
    monthly_fee: Decimal = Decimal(0)
    events_per_month: int | None = None
    description: str = ""
    features: tuple[str, ...] = ()
    display_order: int = 0
    plan_id: str | None = None
    price_label: str | None = None

    @property
    def is_free(self) -> bool:
        return self.monthly_fee <= 0

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "SubscriptionPlan":
        name = str(data.get("name") or "")
        features = tuple(
            _feature_label(key, feature)
            for key, feature in (data.get("features") or {}).items()
            if isinstance(feature, Mapping) and feature.get("enabled")
        )
        fallback = FALLBACK_PLANS.get(name)
        if not features and fallback is not None:
            features = fallback.features
        fee = data.get("monthlyFee", data.get("price"))
        limits = data.get("limits") or {}
        events = limits.get("eventsPerMonth")
        return cls(
            name=name,
            display_name=str(data.get("displayName") or name),
            monthly_fee=_decimal(fee),
            events_per_month=int(events) if events is not None else None,
            description=str(data.get("description") or ""),
            features=features,
            display_order=int(data.get("displayOrder") or 0),
            plan_id=data.get("_id") or data.get("id"),
            price_label=fallback.price_label if fallback is not None else None,
        )


FALLBACK_PLANS: dict[str, SubscriptionPlan] = {
    plan.name: plan
    for plan in (
        SubscriptionPlan(
            name="Basic",
            display_name="Basic",
            monthly_fee=Decimal(999),
            events_per_month=1,
            display_order=1,
            features=(
                "Up to 100 tickets",
                "QR code generation",
                "Email notifications",
                "Basic analytics",
                "Payment gateway",
                "5% platform fee",
            ),
        ),
        SubscriptionPlan(
            name="Standard",
            display_name="Standard",
            monthly_fee=Decimal(2499),
            events_per_month=3,
            display_order=2,
            features=(
                "Up to 500 tickets",
                "QR code generation",
                "Email & SMS notifications",
                "Advanced analytics",
                "Custom branding",
                "4% platform fee",
            ),
        ),
        SubscriptionPlan(
            name="Professional",
            display_name="Professional",
            monthly_fee=Decimal(4999),
            events_per_month=10,
            display_order=3,
            features=(
                "Up to 2,000 tickets",
                "Multi-channel notifications",
                "Real-time analytics",
                "Full branding",
                "Promotional tools",
                "3% platform fee",
            ),
        ),
        SubscriptionPlan(
            name="Enterprise",
            display_name="Enterprise",
            monthly_fee=Decimal(0),
            events_per_month=None,
            display_order=4,
            price_label="Custom",
            features=(
                "Unlimited tickets",
                "Custom analytics",
                "White-label platform",
                "API access",
                "Dedicated manager",
                "Custom platform fee",
            ),
        ),
    )
}


@dataclass(frozen=True)
class OrganizerSubscription:
    """The organizer's current plan as the backend reports it."""

    plan_name: str = FREE_PLAN_NAME
    status: str = "active"
    monthly_fee: Decimal = Decimal(0)
    events_per_month: int | None = None
    plan_id: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def is_paid(self) -> bool:
        return self.monthly_fee > 0

    @classmethod
    def free(cls) -> "OrganizerSubscription":
        return cls()

    @classmethod
    def from_api(cls, data: Mapping[str, Any] | None) -> "OrganizerSubscription":
        """Build from the `data` of `GET /subscriptions/my-subscription`."""
        if not data:
            return cls.free()
        plan = data.get("plan") or {}
        if not isinstance(plan, Mapping):
            plan = {}
        limits = plan.get("limits") or {}
        events = limits.get("eventsPerMonth")
        return cls(
            plan_name=str(plan.get("name") or FREE_PLAN_NAME),
            status=str(data.get("status") or "active"),
            monthly_fee=_decimal(plan.get("monthlyFee", plan.get("price"))),
            events_per_month=int(events) if events is not None else None,
            plan_id=plan.get("_id") or plan.get("id"),
        )


@dataclass
class EventRequestForm:
    """An organizer's request to create an event."""

    title: str = ""
    description: str = ""
    date: str = ""
    location: str = ""
    total_tickets: int | str = ""
    organizer_phone: str = ""
    plan_selected: str = "Standard"
    category: str = "Conference"
    custom_category: str = ""
    location_details: str = ""
    price: Decimal | int = 0
    ticket_types: list[dict[str, Any]] = field(default_factory=list)
    organizer_company: str = ""
    image: str = ""

    def validate(self) -> None:
        """
        Raises:
            CheckoutValidationError: with the first problem found.
        """
        if not self.title.strip():
            raise CheckoutValidationError("Event title is required")
        if not self.description.strip():
            raise CheckoutValidationError("Event description is required")
        if not self.date:
            raise CheckoutValidationError("Event date is required")
        if not self.location.strip():
            raise CheckoutValidationError("Event location is required")
        if self.category == OTHER_CATEGORY and not self.custom_category.strip():
            raise CheckoutValidationError("Please specify a custom category")
        if self._tickets() < 1:
            raise CheckoutValidationError("Total tickets must be at least 1")
        if not self.organizer_phone.strip():
            raise CheckoutValidationError("Phone number is required")
        if not self.plan_selected:
            raise CheckoutValidationError("Please select a plan")

    def _tickets(self) -> int:
        try:
            return int(self.total_tickets)
        except (TypeError, ValueError):
            return 0

    @property
    def resolved_category(self) -> str:
        if self.category == OTHER_CATEGORY:
            return self.custom_category.strip() or OTHER_CATEGORY
        return self.category

    def to_payload(self, plan_name: str | None = None) -> dict[str, Any]:
        event_date = self.date
        if isinstance(event_date, (date, datetime)):
            event_date = event_date.isoformat()
        price = Decimal(str(self.price or 0))
        return {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "category": self.resolved_category,
            "date": event_date,
            "location": self.location.strip(),
            "locationDetails": self.location_details,
            "price": int(price) if price == price.to_integral_value() else float(price),
            "totalTickets": self._tickets(),
            "ticketTypes": list(self.ticket_types),
            "organizerPhone": self.organizer_phone.strip(),
            "organizerCompany": self.organizer_company,
            "image": self.image,
            "planSelected": plan_name or self.plan_selected,
        }
