"""In-memory registry service — MVP-1.

Admin review and issuance, project registration, marketplace, ledger and
buyer operations over fixture data. State lives in the service instance;
nothing is persisted.

Unknown ids raise KeyError, invalid arguments raise ValueError, failed
logins raise AuthenticationError. The API layer maps these to HTTP codes.
"""

import logging
from collections.abc import Callable, Container
from datetime import datetime

from src.models.common import (
    ProjectStatus,
    TransactionType,
    UserRole,
    new_uuid7,
    utc_now,
)
from src.models.registry import (
    AdminStats,
    BuyerPortfolio,
    CarbonProject,
    ComplianceAlert,
    Holding,
    LedgerPage,
    ProjectRegistration,
    Transaction,
    User,
)
from src.registry import fixtures
from src.scoring.integrity import IntegrityScorer
from src.scoring.models import IntegrityScoreInput
from src.scoring.narrative import round_half_up

logger = logging.getLogger(__name__)

SERIAL_VINTAGE = 2024
MAX_SERIALS_RETURNED = 5
REGISTRY_PARTY = "BCX Registry"
RETIRED_PARTY = "Retired"

# Statuses an admin may still approve or reject
_REVIEWABLE = frozenset({ProjectStatus.DRAFT, ProjectStatus.PENDING})

# Statuses eligible for credit issuance
_ISSUABLE = frozenset({ProjectStatus.APPROVED, ProjectStatus.ACTIVE})


class AuthenticationError(Exception):
    """Credentials did not match a demo account."""


class RegistryService:
    """Mock registry backed by fixtures."""

    def __init__(
        self,
        scorer: IntegrityScorer | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._scorer = scorer or IntegrityScorer()
        self._clock = clock
        self._credentials = dict(fixtures.DEMO_CREDENTIALS)
        self._users: dict[str, User] = {u.id: u for u in fixtures.build_users()}
        self._projects: dict[str, CarbonProject] = {
            p.id: p for p in fixtures.build_projects()
        }
        self._transactions: list[Transaction] = fixtures.build_transactions()
        self._alerts: list[ComplianceAlert] = fixtures.build_alerts()
        self._portfolios: dict[str, BuyerPortfolio] = {
            "usr003": fixtures.build_portfolio(),
        }
        self._retirement_ids: set[str] = set()

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def login(self, email: str, password: str) -> User:
        if self._credentials.get(email) != password:
            msg = "Invalid email or password."
            raise AuthenticationError(msg)

        user = next((u for u in self._users.values() if u.email == email), None)
        if user is None:
            msg = "User record not found."
            raise AuthenticationError(msg)

        logger.info("Login: %s (%s)", user.id, user.role.value)
        return user

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def get_admin_stats(self) -> AdminStats:
        """Aggregate live registry state; monthly volume comes from fixtures."""
        by_type: dict[TransactionType, int] = {t: 0 for t in TransactionType}
        for tx in self._transactions:
            by_type[tx.type] += tx.quantity

        statuses = [p.status for p in self._projects.values()]
        roles = [u.role for u in self._users.values()]
        developer_ids = {p.developer_id for p in self._projects.values()}

        return AdminStats(
            total_credits_issued=by_type[TransactionType.ISSUANCE],
            total_credits_traded=(
                by_type[TransactionType.PURCHASE] + by_type[TransactionType.TRANSFER]
            ),
            total_credits_retired=by_type[TransactionType.RETIREMENT],
            pending_approvals=statuses.count(ProjectStatus.PENDING),
            active_projects=statuses.count(ProjectStatus.ACTIVE),
            registered_developers=len(developer_ids),
            registered_buyers=roles.count(UserRole.BUYER),
            monthly_volume=fixtures.build_monthly_volume(),
        )

    def get_compliance_alerts(self) -> list[ComplianceAlert]:
        return list(self._alerts)

    def approve_project(self, project_id: str) -> CarbonProject:
        project = self._get_reviewable(project_id)
        updated = project.model_copy(
            update={"status": ProjectStatus.APPROVED, "approved_at": self._clock()}
        )
        self._projects[project_id] = updated
        logger.info("Approved project %s", project_id)
        return updated

    def reject_project(self, project_id: str, reason: str) -> CarbonProject:
        project = self._get_reviewable(project_id)
        if not reason.strip():
            msg = "A rejection reason is required."
            raise ValueError(msg)

        updated = project.model_copy(update={"status": ProjectStatus.REJECTED})
        self._projects[project_id] = updated
        logger.info("Rejected project %s: %s", project_id, reason)
        return updated

    def issue_credits(self, project_id: str, quantity: int) -> list[str]:
        """Issue credits and return the first serial numbers of the batch.

        Issuing to an approved project activates its marketplace listing.
        """
        if quantity <= 0:
            msg = f"Quantity must be positive, got {quantity}."
            raise ValueError(msg)

        project = self._require(project_id)
        if project.status not in _ISSUABLE:
            msg = (
                f"Project {project_id} is {project.status.value}; "
                "only approved or active projects can receive credits."
            )
            raise ValueError(msg)

        self._record(
            TransactionType.ISSUANCE,
            project,
            from_party=REGISTRY_PARTY,
            to_party=project.developer_name,
            quantity=quantity,
        )
        self._projects[project_id] = project.model_copy(
            update={
                "status": ProjectStatus.ACTIVE,
                "total_credits": project.total_credits + quantity,
                "available_credits": project.available_credits + quantity,
            }
        )

        serials = [
            f"BCX-{project_id.upper()}-{SERIAL_VINTAGE}-{i + 1001:04d}"
            for i in range(min(quantity, MAX_SERIALS_RETURNED))
        ]
        logger.info("Issued %d credits to %s", quantity, project_id)
        return serials

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def get_projects(
        self,
        *,
        status: ProjectStatus | None = None,
        developer_id: str | None = None,
        sector: str | None = None,
    ) -> list[CarbonProject]:
        projects = list(self._projects.values())
        if status is not None:
            projects = [p for p in projects if p.status == status]
        if developer_id is not None:
            projects = [p for p in projects if p.developer_id == developer_id]
        if sector is not None:
            projects = [p for p in projects if p.sector == sector]
        return projects

    def get_project(self, project_id: str) -> CarbonProject | None:
        return self._projects.get(project_id)

    def register_project(self, data: ProjectRegistration) -> CarbonProject:
        """List a new project as pending, pre-scored by the integrity engine."""
        now = self._clock()
        project_id = self._timestamped_id("prj", now, taken=self._projects)

        integrity = self._scorer.score(
            IntegrityScoreInput(
                project_id=project_id,
                methodology=data.methodology,
                co2_reduction=data.co2_reduction,
                vintage=data.vintage,
                location=data.location,
                sector=data.sector,
            )
        )

        project = CarbonProject(
            **data.model_dump(),
            id=project_id,
            available_credits=data.total_credits,
            status=ProjectStatus.PENDING,
            integrity_score=integrity.integrity_score,
            created_at=now,
        )
        self._projects[project_id] = project
        logger.info(
            "Registered project %s (%s), integrity %d",
            project_id,
            data.name,
            integrity.integrity_score,
        )
        return project

    # ------------------------------------------------------------------
    # Marketplace
    # ------------------------------------------------------------------

    def get_marketplace(
        self,
        *,
        sector: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
        min_score: int | None = None,
    ) -> list[CarbonProject]:
        """Active listings, filtered with inclusive bounds."""
        projects = self.get_projects(status=ProjectStatus.ACTIVE, sector=sector)
        if min_price is not None:
            projects = [p for p in projects if p.price_per_credit >= min_price]
        if max_price is not None:
            projects = [p for p in projects if p.price_per_credit <= max_price]
        if min_score is not None:
            projects = [p for p in projects if p.integrity_score >= min_score]
        return projects

    def purchase_credits(
        self, project_id: str, quantity: int, buyer_id: str
    ) -> Transaction:
        if quantity <= 0:
            msg = f"Quantity must be positive, got {quantity}."
            raise ValueError(msg)

        project = self._require(project_id)
        if project.status != ProjectStatus.ACTIVE:
            msg = f"Project {project_id} is not listed on the marketplace."
            raise ValueError(msg)
        if quantity > project.available_credits:
            msg = (
                f"Only {project.available_credits} credits available "
                f"for {project_id}, requested {quantity}."
            )
            raise ValueError(msg)

        self._projects[project_id] = project.model_copy(
            update={"available_credits": project.available_credits - quantity}
        )
        tx = self._record(
            TransactionType.PURCHASE,
            project,
            from_party=project.developer_name,
            to_party=self._party_name(buyer_id),
            quantity=quantity,
            price_per_credit=project.price_per_credit,
        )
        self._add_holding(buyer_id, project, quantity, tx.timestamp)
        logger.info("Purchase %s: %d credits of %s by %s", tx.id, quantity, project_id, buyer_id)
        return tx

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    def get_ledger(self, page: int = 1, page_size: int = 20) -> LedgerPage:
        if page < 1 or page_size < 1:
            msg = f"page and page_size must be >= 1, got {page}/{page_size}."
            raise ValueError(msg)

        # Same-timestamp entries keep newest-recorded first.
        ordered = [
            tx
            for _, tx in sorted(
                enumerate(self._transactions),
                key=lambda item: (item[1].timestamp, item[0]),
                reverse=True,
            )
        ]
        start = (page - 1) * page_size
        return LedgerPage(
            transactions=ordered[start : start + page_size],
            total=len(ordered),
            page=page,
            page_size=page_size,
        )

    # ------------------------------------------------------------------
    # Buyer
    # ------------------------------------------------------------------

    def get_buyer_portfolio(self, buyer_id: str) -> BuyerPortfolio:
        portfolio = self._portfolios.get(buyer_id)
        if portfolio is None:
            return BuyerPortfolio(
                total_credits_owned=0,
                total_credits_retired=0,
                total_spent=0,
                carbon_offset=0,
            )
        return portfolio

    def retire_credits(
        self, project_id: str, quantity: int, buyer_id: str, reason: str
    ) -> str:
        """Retire credits from a buyer's holding; returns the retirement id."""
        if quantity <= 0:
            msg = f"Quantity must be positive, got {quantity}."
            raise ValueError(msg)

        project = self._require(project_id)
        portfolio = self.get_buyer_portfolio(buyer_id)
        holding = next(
            (h for h in portfolio.holdings if h.project_id == project_id), None
        )
        if holding is None or holding.quantity < quantity:
            held = holding.quantity if holding else 0
            msg = f"Buyer {buyer_id} holds {held} credits of {project_id}, cannot retire {quantity}."
            raise ValueError(msg)

        holdings = [
            h.model_copy(update={"quantity": h.quantity - quantity})
            if h.project_id == project_id
            else h
            for h in portfolio.holdings
        ]
        self._portfolios[buyer_id] = portfolio.model_copy(
            update={
                "holdings": holdings,
                "total_credits_owned": portfolio.total_credits_owned - quantity,
                "total_credits_retired": portfolio.total_credits_retired + quantity,
            }
        )

        now = self._clock()
        retirement_id = self._timestamped_id("RET-", now, taken=self._retirement_ids)
        self._retirement_ids.add(retirement_id)
        self._record(
            TransactionType.RETIREMENT,
            project,
            from_party=self._party_name(buyer_id),
            to_party=RETIRED_PARTY,
            quantity=quantity,
        )
        logger.info(
            "Retired %d credits of %s for %s (%s): %s",
            quantity,
            project_id,
            buyer_id,
            retirement_id,
            reason,
        )
        return retirement_id

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, project_id: str) -> CarbonProject:
        project = self._projects.get(project_id)
        if project is None:
            msg = f"Project {project_id} not found."
            raise KeyError(msg)
        return project

    def _get_reviewable(self, project_id: str) -> CarbonProject:
        project = self._require(project_id)
        if project.status not in _REVIEWABLE:
            msg = f"Project {project_id} is already {project.status.value}."
            raise ValueError(msg)
        return project

    def _add_holding(
        self,
        buyer_id: str,
        project: CarbonProject,
        quantity: int,
        purchased_at: datetime,
    ) -> None:
        """Fold a purchase into the buyer's holding at a weighted average price."""
        portfolio = self.get_buyer_portfolio(buyer_id)
        spent = quantity * project.price_per_credit
        existing = next(
            (h for h in portfolio.holdings if h.project_id == project.id), None
        )

        if existing is None:
            holdings = [
                *portfolio.holdings,
                Holding(
                    project_id=project.id,
                    project_name=project.name,
                    sector=project.sector,
                    quantity=quantity,
                    avg_price=project.price_per_credit,
                    current_price=project.price_per_credit,
                    purchased_at=purchased_at,
                ),
            ]
        else:
            total_qty = existing.quantity + quantity
            avg_price = round_half_up(
                (existing.avg_price * existing.quantity + spent) / total_qty
            )
            holdings = [
                h.model_copy(
                    update={
                        "quantity": total_qty,
                        "avg_price": avg_price,
                        "current_price": project.price_per_credit,
                    }
                )
                if h.project_id == project.id
                else h
                for h in portfolio.holdings
            ]

        self._portfolios[buyer_id] = portfolio.model_copy(
            update={
                "holdings": holdings,
                "total_credits_owned": portfolio.total_credits_owned + quantity,
                "total_spent": portfolio.total_spent + spent,
                "carbon_offset": portfolio.carbon_offset + quantity,
            }
        )

    def _party_name(self, user_id: str) -> str:
        user = self._users.get(user_id)
        if user is None:
            return user_id
        return user.organization or user.name

    @staticmethod
    def _timestamped_id(prefix: str, now: datetime, taken: Container[str]) -> str:
        """``{prefix}{epoch_ms}``, bumped by 1 ms until unused."""
        stamp = int(now.timestamp() * 1000)
        candidate = f"{prefix}{stamp}"
        while candidate in taken:
            stamp += 1
            candidate = f"{prefix}{stamp}"
        return candidate

    def _record(
        self,
        tx_type: TransactionType,
        project: CarbonProject,
        *,
        from_party: str,
        to_party: str,
        quantity: int,
        price_per_credit: int | None = None,
    ) -> Transaction:
        now = self._clock()
        taken = {t.id for t in self._transactions}
        tx = Transaction(
            id=self._timestamped_id("txn", now, taken=taken),
            type=tx_type,
            project_id=project.id,
            project_name=project.name,
            from_party=from_party,
            to_party=to_party,
            quantity=quantity,
            price_per_credit=price_per_credit,
            total_value=price_per_credit * quantity if price_per_credit else None,
            timestamp=now,
            block_hash=f"0x{new_uuid7().hex[-16:]}",
        )
        self._transactions.append(tx)
        return tx
