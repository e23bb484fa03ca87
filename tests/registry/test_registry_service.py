"""Tests for RegistryService — auth, admin review, issuance, marketplace, buyer."""

from datetime import datetime, timezone

import pytest

from src.models.common import (
    ProjectSector,
    ProjectStatus,
    TransactionStatus,
    TransactionType,
    UserRole,
)
from src.models.registry import ProjectRegistration
from src.registry.service import AuthenticationError, RegistryService

NOW = datetime(2024, 11, 5, 9, 30, tzinfo=timezone.utc)
NOW_MS = int(NOW.timestamp() * 1000)


@pytest.fixture
def registry() -> RegistryService:
    return RegistryService(clock=lambda: NOW)


def _registration(**overrides) -> ProjectRegistration:
    fields = dict(
        name="Bhitarkanika Mangrove Revival",
        developer_id="usr002",
        developer_name="Green Energy Pvt Ltd",
        sector=ProjectSector.BLUE_CARBON,
        location="Kendrapara",
        state="Odisha",
        methodology="VM0033",
        co2_reduction=50_000,
        total_credits=40_000,
        price_per_credit=1100,
        vintage=2024,
        sdg_goals=[13, 14],
    )
    fields.update(overrides)
    return ProjectRegistration(**fields)


# ===================================================================
# Auth
# ===================================================================


class TestLogin:
    @pytest.mark.parametrize(
        ("email", "password", "user_id", "role"),
        [
            ("admin@bcx.gov.in", "Admin@123", "usr001", UserRole.ADMIN),
            ("dev@greenenergy.in", "Dev@123", "usr002", UserRole.DEVELOPER),
            ("buyer@tatasteel.com", "Buyer@123", "usr003", UserRole.BUYER),
        ],
    )
    def test_demo_accounts(
        self,
        registry: RegistryService,
        email: str,
        password: str,
        user_id: str,
        role: UserRole,
    ) -> None:
        user = registry.login(email, password)
        assert user.id == user_id
        assert user.role == role

    def test_wrong_password(self, registry: RegistryService) -> None:
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            registry.login("admin@bcx.gov.in", "admin@123")

    def test_unknown_email(self, registry: RegistryService) -> None:
        with pytest.raises(AuthenticationError):
            registry.login("nobody@example.com", "Admin@123")


# ===================================================================
# Admin
# ===================================================================


class TestAdminStats:
    def test_fixture_aggregates(self, registry: RegistryService) -> None:
        stats = registry.get_admin_stats()
        assert stats.total_credits_issued == 240_000
        assert stats.total_credits_traded == 50_800
        assert stats.total_credits_retired == 10_000
        assert stats.pending_approvals == 2
        assert stats.active_projects == 3
        assert stats.registered_developers == 2
        assert stats.registered_buyers == 1
        assert len(stats.monthly_volume) == 6

    def test_reflects_mutations(self, registry: RegistryService) -> None:
        registry.approve_project("prj005")
        registry.purchase_credits("prj003", 200, "usr003")
        stats = registry.get_admin_stats()
        assert stats.pending_approvals == 1
        assert stats.total_credits_traded == 51_000

    def test_alerts(self, registry: RegistryService) -> None:
        alerts = registry.get_compliance_alerts()
        assert [a.id for a in alerts] == ["alt001", "alt002", "alt003"]
        assert alerts[2].resolved is True


class TestReview:
    def test_approve_pending(self, registry: RegistryService) -> None:
        project = registry.approve_project("prj005")
        assert project.status == ProjectStatus.APPROVED
        assert project.approved_at == NOW
        assert registry.get_project("prj005").status == ProjectStatus.APPROVED

    def test_approve_active_rejected(self, registry: RegistryService) -> None:
        with pytest.raises(ValueError, match="already active"):
            registry.approve_project("prj001")

    def test_approve_unknown(self, registry: RegistryService) -> None:
        with pytest.raises(KeyError):
            registry.approve_project("prj999")

    def test_reject_with_reason(self, registry: RegistryService) -> None:
        project = registry.reject_project("prj006", "Baseline data incomplete")
        assert project.status == ProjectStatus.REJECTED

    def test_reject_requires_reason(self, registry: RegistryService) -> None:
        with pytest.raises(ValueError, match="reason"):
            registry.reject_project("prj006", "   ")
        assert registry.get_project("prj006").status == ProjectStatus.PENDING

    def test_reject_already_rejected(self, registry: RegistryService) -> None:
        with pytest.raises(ValueError):
            registry.reject_project("prj007", "Duplicate")

    def test_reject_unknown_checked_before_reason(
        self, registry: RegistryService
    ) -> None:
        with pytest.raises(KeyError):
            registry.reject_project("prj999", "   ")


class TestIssueCredits:
    def test_serials_and_activation(self, registry: RegistryService) -> None:
        serials = registry.issue_credits("prj004", 3)
        assert serials == [
            "BCX-PRJ004-2024-1001",
            "BCX-PRJ004-2024-1002",
            "BCX-PRJ004-2024-1003",
        ]
        project = registry.get_project("prj004")
        assert project.status == ProjectStatus.ACTIVE
        assert project.total_credits == 95_003
        assert project.available_credits == 95_003

    def test_at_most_five_serials(self, registry: RegistryService) -> None:
        serials = registry.issue_credits("prj001", 10_000)
        assert len(serials) == 5
        assert serials[-1] == "BCX-PRJ001-2024-1005"

    def test_records_issuance(self, registry: RegistryService) -> None:
        registry.issue_credits("prj001", 500)
        newest = registry.get_ledger(page_size=1).transactions[0]
        assert newest.type == TransactionType.ISSUANCE
        assert newest.quantity == 500
        assert newest.from_party == "BCX Registry"
        assert newest.block_hash.startswith("0x")

    def test_pending_project_cannot_receive(self, registry: RegistryService) -> None:
        with pytest.raises(ValueError, match="pending"):
            registry.issue_credits("prj005", 10)

    def test_non_positive_quantity(self, registry: RegistryService) -> None:
        with pytest.raises(ValueError):
            registry.issue_credits("prj001", 0)


# ===================================================================
# Projects
# ===================================================================


class TestProjects:
    def test_all(self, registry: RegistryService) -> None:
        assert len(registry.get_projects()) == 7

    def test_filter_by_status(self, registry: RegistryService) -> None:
        ids = [p.id for p in registry.get_projects(status=ProjectStatus.PENDING)]
        assert ids == ["prj005", "prj006"]

    def test_filter_by_developer(self, registry: RegistryService) -> None:
        ids = [p.id for p in registry.get_projects(developer_id="usr004")]
        assert ids == ["prj003", "prj005", "prj007"]

    def test_filter_by_sector(self, registry: RegistryService) -> None:
        projects = registry.get_projects(sector="Blue Carbon")
        assert [p.id for p in projects] == ["prj002"]

    def test_get_unknown_is_none(self, registry: RegistryService) -> None:
        assert registry.get_project("prj999") is None


class TestRegisterProject:
    def test_pending_and_scored(self, registry: RegistryService) -> None:
        project = registry.register_project(_registration())
        assert project.id == f"prj{NOW_MS}"
        assert project.status == ProjectStatus.PENDING
        assert project.integrity_score == 98
        assert project.available_credits == 40_000
        assert project.created_at == NOW
        assert registry.get_project(project.id) == project

    def test_ids_unique_within_same_millisecond(
        self, registry: RegistryService
    ) -> None:
        a = registry.register_project(_registration())
        b = registry.register_project(_registration(name="Second"))
        assert a.id != b.id
        assert b.id == f"prj{NOW_MS + 1}"

    def test_large_old_project_scores_lower(self, registry: RegistryService) -> None:
        project = registry.register_project(
            _registration(
                sector=ProjectSector.WASTE_MANAGEMENT,
                vintage=2021,
                co2_reduction=250_000,
            )
        )
        assert project.integrity_score == 67


# ===================================================================
# Marketplace
# ===================================================================


class TestMarketplace:
    def test_active_only(self, registry: RegistryService) -> None:
        ids = [p.id for p in registry.get_marketplace()]
        assert ids == ["prj001", "prj002", "prj003"]

    def test_price_bounds_inclusive(self, registry: RegistryService) -> None:
        assert [p.id for p in registry.get_marketplace(min_price=820)] == [
            "prj001",
            "prj002",
        ]
        assert [p.id for p in registry.get_marketplace(max_price=820)] == [
            "prj001",
            "prj003",
        ]

    def test_min_score(self, registry: RegistryService) -> None:
        ids = [p.id for p in registry.get_marketplace(min_score=93)]
        assert ids == ["prj001", "prj002"]

    def test_sector(self, registry: RegistryService) -> None:
        assert [p.id for p in registry.get_marketplace(sector="Afforestation")] == [
            "prj003"
        ]


class TestPurchase:
    def test_decrements_and_records(self, registry: RegistryService) -> None:
        tx = registry.purchase_credits("prj003", 100, "usr003")
        assert tx.id == f"txn{NOW_MS}"
        assert tx.type == TransactionType.PURCHASE
        assert tx.to_party == "Tata Steel"
        assert tx.total_value == 68_000
        assert tx.status == TransactionStatus.CONFIRMED
        assert registry.get_project("prj003").available_credits == 31_100

    def test_adds_holding(self, registry: RegistryService) -> None:
        registry.purchase_credits("prj003", 100, "usr003")
        portfolio = registry.get_buyer_portfolio("usr003")
        assert portfolio.total_credits_owned == 37_100
        assert portfolio.total_spent == 34_368_000
        holding = next(h for h in portfolio.holdings if h.project_id == "prj003")
        assert holding.quantity == 100
        assert holding.avg_price == 680

    def test_merges_existing_holding(self, registry: RegistryService) -> None:
        registry.purchase_credits("prj001", 5_000, "usr003")
        holding = next(
            h
            for h in registry.get_buyer_portfolio("usr003").holdings
            if h.project_id == "prj001"
        )
        assert holding.quantity == 30_000
        assert holding.avg_price == 820

    def test_new_buyer_gets_portfolio(self, registry: RegistryService) -> None:
        registry.purchase_credits("prj002", 10, "usr099")
        portfolio = registry.get_buyer_portfolio("usr099")
        assert portfolio.total_credits_owned == 10
        assert portfolio.total_spent == 11_500

    def test_unique_txn_ids(self, registry: RegistryService) -> None:
        a = registry.purchase_credits("prj001", 1, "usr003")
        b = registry.purchase_credits("prj001", 1, "usr003")
        assert b.id == f"txn{NOW_MS + 1}"
        assert a.id != b.id

    def test_not_listed(self, registry: RegistryService) -> None:
        with pytest.raises(ValueError, match="not listed"):
            registry.purchase_credits("prj004", 10, "usr003")

    def test_exceeds_available(self, registry: RegistryService) -> None:
        with pytest.raises(ValueError, match="available"):
            registry.purchase_credits("prj003", 31_201, "usr003")
        assert registry.get_project("prj003").available_credits == 31_200

    def test_unknown_project(self, registry: RegistryService) -> None:
        with pytest.raises(KeyError):
            registry.purchase_credits("prj999", 1, "usr003")


# ===================================================================
# Ledger
# ===================================================================


class TestLedger:
    def test_newest_first(self, registry: RegistryService) -> None:
        page = registry.get_ledger()
        assert page.total == 6
        assert [t.id for t in page.transactions] == [
            "txn006",
            "txn005",
            "txn004",
            "txn002",
            "txn001",
            "txn003",
        ]

    def test_paging(self, registry: RegistryService) -> None:
        page = registry.get_ledger(page=2, page_size=4)
        assert [t.id for t in page.transactions] == ["txn001", "txn003"]
        assert page.page == 2
        assert page.page_size == 4

    def test_past_end_is_empty(self, registry: RegistryService) -> None:
        assert registry.get_ledger(page=5, page_size=10).transactions == []

    def test_invalid_page(self, registry: RegistryService) -> None:
        with pytest.raises(ValueError):
            registry.get_ledger(page=0)

    def test_same_timestamp_newest_recorded_first(
        self, registry: RegistryService
    ) -> None:
        registry.purchase_credits("prj001", 10, "usr003")
        registry.retire_credits("prj001", 5, "usr003", "Q4 offset")
        newest = registry.get_ledger(page=1, page_size=2).transactions
        assert [t.type for t in newest] == [
            TransactionType.RETIREMENT,
            TransactionType.PURCHASE,
        ]

    def test_pending_transfer_has_no_hash(self, registry: RegistryService) -> None:
        txn006 = registry.get_ledger().transactions[0]
        assert txn006.status == TransactionStatus.PENDING
        assert txn006.block_hash is None


# ===================================================================
# Buyer
# ===================================================================


class TestPortfolio:
    def test_fixture_portfolio(self, registry: RegistryService) -> None:
        portfolio = registry.get_buyer_portfolio("usr003")
        assert portfolio.total_credits_owned == 37_000
        assert portfolio.carbon_offset == 47_000
        assert [h.project_id for h in portfolio.holdings] == ["prj001", "prj002"]

    def test_unknown_buyer_empty(self, registry: RegistryService) -> None:
        portfolio = registry.get_buyer_portfolio("usr404")
        assert portfolio.total_credits_owned == 0
        assert portfolio.holdings == []


class TestRetire:
    def test_retire_from_holding(self, registry: RegistryService) -> None:
        retirement_id = registry.retire_credits(
            "prj001", 1_000, "usr003", "FY24 scope 1 offset"
        )
        assert retirement_id == f"RET-{NOW_MS}"

        portfolio = registry.get_buyer_portfolio("usr003")
        assert portfolio.total_credits_owned == 36_000
        assert portfolio.total_credits_retired == 11_000
        holding = next(h for h in portfolio.holdings if h.project_id == "prj001")
        assert holding.quantity == 24_000

    def test_records_retirement(self, registry: RegistryService) -> None:
        registry.retire_credits("prj002", 500, "usr003", "Annual report")
        newest = registry.get_ledger(page_size=1).transactions[0]
        assert newest.type == TransactionType.RETIREMENT
        assert newest.from_party == "Tata Steel"
        assert newest.to_party == "Retired"
        assert registry.get_admin_stats().total_credits_retired == 10_500

    def test_ids_unique_within_same_millisecond(
        self, registry: RegistryService
    ) -> None:
        first = registry.retire_credits("prj001", 1, "usr003", "a")
        second = registry.retire_credits("prj001", 1, "usr003", "b")
        assert first == f"RET-{NOW_MS}"
        assert second == f"RET-{NOW_MS + 1}"

    def test_cannot_retire_more_than_held(self, registry: RegistryService) -> None:
        with pytest.raises(ValueError, match="holds 12000"):
            registry.retire_credits("prj002", 12_001, "usr003", "")

    def test_no_holding(self, registry: RegistryService) -> None:
        with pytest.raises(ValueError, match="holds 0"):
            registry.retire_credits("prj003", 1, "usr003", "")
