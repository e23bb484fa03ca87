"""Registry domain models: users, projects, ledger, portfolio, cart.

Values mirror what the exchange portal renders; prices are in INR and
quantities in credits (1 credit = 1 tCO2e).
"""

from datetime import datetime

from pydantic import Field

from src.models.common import (
    AlertType,
    BCXBase,
    ProjectSector,
    ProjectStatus,
    SDGGoal,
    TransactionStatus,
    TransactionType,
    UserRole,
    UTCTimestamp,
)


class User(BCXBase):
    """A portal account (mock; no credentials stored here)."""

    id: str
    name: str
    email: str
    role: UserRole
    organization: str | None = None
    created_at: UTCTimestamp


class CarbonProject(BCXBase):
    """A carbon project as listed in the registry and marketplace."""

    id: str
    name: str
    developer_id: str
    developer_name: str
    sector: ProjectSector
    location: str
    state: str
    vintage: int
    total_credits: int = Field(ge=0)
    available_credits: int = Field(ge=0)
    price_per_credit: int = Field(ge=0)
    status: ProjectStatus
    integrity_score: int = Field(ge=0, le=100)
    methodology: str
    description: str = ""
    co2_reduction: int = Field(ge=0)
    sdg_goals: list[SDGGoal] = Field(default_factory=list)
    created_at: UTCTimestamp
    approved_at: datetime | None = None
    image_url: str | None = None


class Transaction(BCXBase):
    """A single ledger entry."""

    id: str
    type: TransactionType
    project_id: str
    project_name: str
    from_party: str
    to_party: str
    quantity: int = Field(gt=0)
    price_per_credit: int | None = None
    total_value: int | None = None
    timestamp: UTCTimestamp
    block_hash: str | None = None
    status: TransactionStatus = TransactionStatus.CONFIRMED


class ComplianceAlert(BCXBase):
    """An admin-facing compliance alert."""

    id: str
    type: AlertType
    entity: str
    message: str
    project_id: str | None = None
    timestamp: UTCTimestamp
    resolved: bool = False


class MonthlyVolume(BCXBase):
    month: str
    volume: int
    value: int


class AdminStats(BCXBase):
    """Aggregate registry figures for the admin dashboard."""

    total_credits_issued: int
    total_credits_traded: int
    total_credits_retired: int
    pending_approvals: int
    active_projects: int
    registered_developers: int
    registered_buyers: int
    monthly_volume: list[MonthlyVolume] = Field(default_factory=list)


class Holding(BCXBase):
    project_id: str
    project_name: str
    sector: ProjectSector
    quantity: int
    avg_price: int
    current_price: int
    purchased_at: UTCTimestamp


class BuyerPortfolio(BCXBase):
    """Credits held and retired by a buyer."""

    total_credits_owned: int
    total_credits_retired: int
    total_spent: int
    carbon_offset: int
    holdings: list[Holding] = Field(default_factory=list)


class CartItem(BCXBase):
    """A marketplace cart line."""

    project_id: str
    project_name: str
    quantity: int
    price_per_credit: int


class ProjectRegistration(BCXBase):
    """Developer submission for a new project listing."""

    name: str = Field(min_length=1)
    developer_id: str
    developer_name: str
    sector: ProjectSector
    location: str
    state: str
    methodology: str
    co2_reduction: int = Field(ge=0)
    total_credits: int = Field(ge=0)
    price_per_credit: int = Field(ge=0)
    vintage: int
    description: str = ""
    sdg_goals: list[SDGGoal] = Field(default_factory=list)


class LedgerPage(BCXBase):
    """One page of ledger transactions, newest first."""

    transactions: list[Transaction]
    total: int
    page: int
    page_size: int
