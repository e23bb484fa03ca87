"""Shared types, enums, and base models used across BCX domain models."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def new_uuid7() -> UUID:
    """Generate a new time-sortable UUID v7."""
    return uuid7()


# --- Reusable annotated types ---

UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]
SDGGoal = Annotated[int, Field(ge=1, le=17, description="UN SDG identifier.")]


# --- Shared enums ---


class ProjectSector(StrEnum):
    """The seven carbon-project sectors traded on the exchange."""

    RENEWABLE_ENERGY = "Renewable Energy"
    AFFORESTATION = "Afforestation"
    METHANE_CAPTURE = "Methane Capture"
    ENERGY_EFFICIENCY = "Energy Efficiency"
    BLUE_CARBON = "Blue Carbon"
    SOIL_CARBON = "Soil Carbon"
    WASTE_MANAGEMENT = "Waste Management"


class RiskLevel(StrEnum):
    """Integrity risk tier, derived solely from the integrity score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UserRole(StrEnum):
    """Portal roles."""

    ADMIN = "admin"
    DEVELOPER = "developer"
    BUYER = "buyer"


class ProjectStatus(StrEnum):
    """Lifecycle status for a registered project."""

    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ACTIVE = "active"


class TransactionType(StrEnum):
    """Ledger transaction categories."""

    ISSUANCE = "issuance"
    TRANSFER = "transfer"
    RETIREMENT = "retirement"
    PURCHASE = "purchase"


class TransactionStatus(StrEnum):
    """Ledger confirmation state."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
    FAILED = "failed"


class AlertType(StrEnum):
    """Compliance alert severity."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


# --- Base model ---


class BCXBase(BaseModel):
    """Base model with common configuration for all BCX Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "ser_json_timedelta": "iso8601",
        "protected_namespaces": (),
    }
