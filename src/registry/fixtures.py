"""Seed data for the in-memory registry.

Demo accounts, projects across every status, a short ledger history,
compliance alerts and one buyer portfolio. Builders return fresh copies so
each ``RegistryService`` mutates its own state.
"""

from datetime import datetime, timezone

from src.models.common import (
    AlertType,
    ProjectSector,
    ProjectStatus,
    TransactionStatus,
    TransactionType,
    UserRole,
)
from src.models.registry import (
    BuyerPortfolio,
    CarbonProject,
    ComplianceAlert,
    Holding,
    MonthlyVolume,
    Transaction,
    User,
)


def _ts(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


DEMO_CREDENTIALS: dict[str, str] = {
    "admin@bcx.gov.in": "Admin@123",
    "dev@greenenergy.in": "Dev@123",
    "buyer@tatasteel.com": "Buyer@123",
}


def build_users() -> list[User]:
    return [
        User(
            id="usr001",
            name="Registry Administrator",
            email="admin@bcx.gov.in",
            role=UserRole.ADMIN,
            organization="Bureau of Carbon Exchange",
            created_at=_ts(2023, 1, 10),
        ),
        User(
            id="usr002",
            name="Green Energy Developers",
            email="dev@greenenergy.in",
            role=UserRole.DEVELOPER,
            organization="Green Energy Pvt Ltd",
            created_at=_ts(2023, 3, 2),
        ),
        User(
            id="usr003",
            name="Tata Steel Sustainability Desk",
            email="buyer@tatasteel.com",
            role=UserRole.BUYER,
            organization="Tata Steel",
            created_at=_ts(2023, 4, 18),
        ),
    ]


def build_projects() -> list[CarbonProject]:
    return [
        CarbonProject(
            id="prj001",
            name="Rajasthan Wind Power Initiative",
            developer_id="usr002",
            developer_name="Green Energy Pvt Ltd",
            sector=ProjectSector.RENEWABLE_ENERGY,
            location="Jaisalmer",
            state="Rajasthan",
            vintage=2024,
            total_credits=180_000,
            available_credits=142_500,
            price_per_credit=820,
            status=ProjectStatus.ACTIVE,
            integrity_score=93,
            methodology="ACM0002",
            description="150 MW grid-connected wind farm displacing coal generation.",
            co2_reduction=180_000,
            sdg_goals=[7, 13],
            created_at=_ts(2024, 1, 15),
            approved_at=_ts(2024, 2, 20),
        ),
        CarbonProject(
            id="prj002",
            name="Sundarbans Mangrove Restoration",
            developer_id="usr002",
            developer_name="Green Energy Pvt Ltd",
            sector=ProjectSector.BLUE_CARBON,
            location="South 24 Parganas",
            state="West Bengal",
            vintage=2023,
            total_credits=60_000,
            available_credits=48_000,
            price_per_credit=1150,
            status=ProjectStatus.ACTIVE,
            integrity_score=98,
            methodology="VM0033",
            description="Restoration of 2,400 ha of degraded mangrove forest.",
            co2_reduction=60_000,
            sdg_goals=[13, 14, 15],
            created_at=_ts(2023, 9, 1),
            approved_at=_ts(2023, 11, 12),
        ),
        CarbonProject(
            id="prj003",
            name="Western Ghats Agroforestry",
            developer_id="usr004",
            developer_name="Sahyadri Forest Collective",
            sector=ProjectSector.AFFORESTATION,
            location="Kodagu",
            state="Karnataka",
            vintage=2022,
            total_credits=45_000,
            available_credits=31_200,
            price_per_credit=680,
            status=ProjectStatus.ACTIVE,
            integrity_score=88,
            methodology="AR-ACM0003",
            description="Smallholder agroforestry on degraded coffee estates.",
            co2_reduction=45_000,
            sdg_goals=[1, 13, 15],
            created_at=_ts(2022, 6, 20),
            approved_at=_ts(2022, 9, 5),
        ),
        CarbonProject(
            id="prj004",
            name="Pune Landfill Gas Capture",
            developer_id="usr002",
            developer_name="Green Energy Pvt Ltd",
            sector=ProjectSector.METHANE_CAPTURE,
            location="Pune",
            state="Maharashtra",
            vintage=2024,
            total_credits=95_000,
            available_credits=95_000,
            price_per_credit=900,
            status=ProjectStatus.APPROVED,
            integrity_score=83,
            methodology="ACM0001",
            description="Flaring and power generation from municipal landfill gas.",
            co2_reduction=95_000,
            sdg_goals=[7, 11],
            created_at=_ts(2024, 5, 3),
            approved_at=_ts(2024, 7, 1),
        ),
        CarbonProject(
            id="prj005",
            name="Punjab Soil Carbon Programme",
            developer_id="usr004",
            developer_name="Sahyadri Forest Collective",
            sector=ProjectSector.SOIL_CARBON,
            location="Ludhiana",
            state="Punjab",
            vintage=2024,
            total_credits=30_000,
            available_credits=30_000,
            price_per_credit=640,
            status=ProjectStatus.PENDING,
            integrity_score=81,
            methodology="VM0042",
            description="No-burn residue management across 12,000 ha of cropland.",
            co2_reduction=30_000,
            sdg_goals=[2, 13],
            created_at=_ts(2024, 8, 14),
        ),
        CarbonProject(
            id="prj006",
            name="Chennai Municipal Composting",
            developer_id="usr002",
            developer_name="Green Energy Pvt Ltd",
            sector=ProjectSector.WASTE_MANAGEMENT,
            location="Chennai",
            state="Tamil Nadu",
            vintage=2021,
            total_credits=250_000,
            available_credits=250_000,
            price_per_credit=680,
            status=ProjectStatus.PENDING,
            integrity_score=67,
            methodology="AMS-III.F",
            description="Aerobic composting of segregated municipal organic waste.",
            co2_reduction=250_000,
            sdg_goals=[11, 12],
            created_at=_ts(2024, 9, 2),
        ),
        CarbonProject(
            id="prj007",
            name="Gujarat Textile Efficiency Retrofit",
            developer_id="usr004",
            developer_name="Sahyadri Forest Collective",
            sector=ProjectSector.ENERGY_EFFICIENCY,
            location="Surat",
            state="Gujarat",
            vintage=2019,
            total_credits=12_000,
            available_credits=12_000,
            price_per_credit=720,
            status=ProjectStatus.REJECTED,
            integrity_score=70,
            methodology="AMS-II.D",
            description="Boiler and motor upgrades across 40 textile units.",
            co2_reduction=12_000,
            sdg_goals=[9],
            created_at=_ts(2023, 12, 11),
        ),
    ]


def build_transactions() -> list[Transaction]:
    return [
        Transaction(
            id="txn001",
            type=TransactionType.ISSUANCE,
            project_id="prj001",
            project_name="Rajasthan Wind Power Initiative",
            from_party="BCX Registry",
            to_party="Green Energy Pvt Ltd",
            quantity=180_000,
            timestamp=_ts(2024, 3, 1, 10),
            block_hash="0x8f3a1c9e2b7d4f60",
        ),
        Transaction(
            id="txn002",
            type=TransactionType.PURCHASE,
            project_id="prj001",
            project_name="Rajasthan Wind Power Initiative",
            from_party="Green Energy Pvt Ltd",
            to_party="Tata Steel",
            quantity=25_000,
            price_per_credit=820,
            total_value=20_500_000,
            timestamp=_ts(2024, 4, 12, 14),
            block_hash="0x2c7e9a41d05b8f13",
        ),
        Transaction(
            id="txn003",
            type=TransactionType.ISSUANCE,
            project_id="prj002",
            project_name="Sundarbans Mangrove Restoration",
            from_party="BCX Registry",
            to_party="Green Energy Pvt Ltd",
            quantity=60_000,
            timestamp=_ts(2024, 1, 8, 9),
            block_hash="0x5d1b6e0fa3c94728",
        ),
        Transaction(
            id="txn004",
            type=TransactionType.PURCHASE,
            project_id="prj002",
            project_name="Sundarbans Mangrove Restoration",
            from_party="Green Energy Pvt Ltd",
            to_party="Tata Steel",
            quantity=12_000,
            price_per_credit=1150,
            total_value=13_800_000,
            timestamp=_ts(2024, 6, 3, 11),
            block_hash="0x9a04c3e7b1f65d28",
        ),
        Transaction(
            id="txn005",
            type=TransactionType.RETIREMENT,
            project_id="prj001",
            project_name="Rajasthan Wind Power Initiative",
            from_party="Tata Steel",
            to_party="Retired",
            quantity=10_000,
            timestamp=_ts(2024, 7, 20, 16),
            block_hash="0x47be2d9c08a1f3e6",
        ),
        Transaction(
            id="txn006",
            type=TransactionType.TRANSFER,
            project_id="prj003",
            project_name="Western Ghats Agroforestry",
            from_party="Sahyadri Forest Collective",
            to_party="Infosys Climate Fund",
            quantity=13_800,
            timestamp=_ts(2024, 8, 2, 13),
            status=TransactionStatus.PENDING,
        ),
    ]


def build_alerts() -> list[ComplianceAlert]:
    return [
        ComplianceAlert(
            id="alt001",
            type=AlertType.CRITICAL,
            entity="Chennai Municipal Composting",
            message="Integrity score below 70; third-party verification required.",
            project_id="prj006",
            timestamp=_ts(2024, 9, 5, 8),
        ),
        ComplianceAlert(
            id="alt002",
            type=AlertType.WARNING,
            entity="Punjab Soil Carbon Programme",
            message="MRV report pending for more than 30 days.",
            project_id="prj005",
            timestamp=_ts(2024, 9, 18, 12),
        ),
        ComplianceAlert(
            id="alt003",
            type=AlertType.INFO,
            entity="Tata Steel",
            message="Quarterly retirement statement generated.",
            timestamp=_ts(2024, 10, 1, 9),
            resolved=True,
        ),
    ]


def build_monthly_volume() -> list[MonthlyVolume]:
    return [
        MonthlyVolume(month="May", volume=18_500, value=15_170_000),
        MonthlyVolume(month="Jun", volume=24_000, value=23_400_000),
        MonthlyVolume(month="Jul", volume=21_300, value=18_960_000),
        MonthlyVolume(month="Aug", volume=27_800, value=24_190_000),
        MonthlyVolume(month="Sep", volume=31_200, value=29_640_000),
        MonthlyVolume(month="Oct", volume=29_400, value=26_760_000),
    ]


def build_portfolio() -> BuyerPortfolio:
    return BuyerPortfolio(
        total_credits_owned=37_000,
        total_credits_retired=10_000,
        total_spent=34_300_000,
        carbon_offset=47_000,
        holdings=[
            Holding(
                project_id="prj001",
                project_name="Rajasthan Wind Power Initiative",
                sector=ProjectSector.RENEWABLE_ENERGY,
                quantity=25_000,
                avg_price=820,
                current_price=820,
                purchased_at=_ts(2024, 4, 12, 14),
            ),
            Holding(
                project_id="prj002",
                project_name="Sundarbans Mangrove Restoration",
                sector=ProjectSector.BLUE_CARBON,
                quantity=12_000,
                avg_price=1150,
                current_price=1180,
                purchased_at=_ts(2024, 6, 3, 11),
            ),
        ],
    )
