"""FastAPI registry endpoints — MVP-1.

POST /v1/auth/login                        — demo login
GET  /v1/projects                          — list projects (status/developer/sector)
POST /v1/projects                          — register a project (pending)
GET  /v1/projects/{project_id}             — get project
POST /v1/projects/{project_id}/approve     — admin approve
POST /v1/projects/{project_id}/reject      — admin reject
POST /v1/projects/{project_id}/credits     — admin issue credits
GET  /v1/marketplace                       — active listings
POST /v1/marketplace/purchases             — buy credits
GET  /v1/ledger                            — paged ledger, newest first
GET  /v1/admin/stats                       — dashboard aggregates
GET  /v1/admin/alerts                      — compliance alerts
GET  /v1/buyers/{buyer_id}/portfolio       — buyer holdings
POST /v1/buyers/{buyer_id}/retirements     — retire credits

In-memory fixtures only; no persistence.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from src.api.dependencies import get_latency, get_registry_service
from src.models.common import ProjectStatus
from src.models.registry import (
    AdminStats,
    BuyerPortfolio,
    CarbonProject,
    ComplianceAlert,
    LedgerPage,
    ProjectRegistration,
    Transaction,
    User,
)
from src.registry.service import AuthenticationError, RegistryService
from src.simulation.latency import LatencyStrategy

router = APIRouter(prefix="/v1", tags=["registry"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    email: str
    password: str


class RejectRequest(BaseModel):
    reason: str = Field(min_length=1)


class IssueCreditsRequest(BaseModel):
    quantity: int = Field(gt=0)


class IssueCreditsResponse(BaseModel):
    project_id: str
    serial_numbers: list[str]


class PurchaseRequest(BaseModel):
    project_id: str
    quantity: int = Field(gt=0)
    buyer_id: str


class RetireRequest(BaseModel):
    project_id: str
    quantity: int = Field(gt=0)
    reason: str = ""


class RetireResponse(BaseModel):
    retirement_id: str


def _not_found(exc: KeyError) -> HTTPException:
    # KeyError str() wraps the message in quotes.
    return HTTPException(status_code=404, detail=exc.args[0] if exc.args else str(exc))


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


@router.post("/auth/login", response_model=User)
async def login(
    body: LoginRequest,
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> User:
    await latency.wait("registry")
    try:
        return registry.login(body.email, body.password)
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@router.get("/projects", response_model=list[CarbonProject])
async def list_projects(
    status: ProjectStatus | None = None,
    developer_id: str | None = None,
    sector: str | None = None,
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> list[CarbonProject]:
    await latency.wait("registry")
    return registry.get_projects(
        status=status, developer_id=developer_id, sector=sector
    )


@router.post("/projects", status_code=201, response_model=CarbonProject)
async def register_project(
    body: ProjectRegistration,
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> CarbonProject:
    await latency.wait("registry")
    return registry.register_project(body)


@router.get("/projects/{project_id}", response_model=CarbonProject)
async def get_project(
    project_id: str,
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> CarbonProject:
    await latency.wait("registry")
    project = registry.get_project(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail=f"Project {project_id} not found.")
    return project


@router.post("/projects/{project_id}/approve", response_model=CarbonProject)
async def approve_project(
    project_id: str,
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> CarbonProject:
    await latency.wait("registry")
    try:
        return registry.approve_project(project_id)
    except KeyError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/projects/{project_id}/reject", response_model=CarbonProject)
async def reject_project(
    project_id: str,
    body: RejectRequest,
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> CarbonProject:
    await latency.wait("registry")
    try:
        return registry.reject_project(project_id, body.reason)
    except KeyError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post(
    "/projects/{project_id}/credits",
    status_code=201,
    response_model=IssueCreditsResponse,
)
async def issue_credits(
    project_id: str,
    body: IssueCreditsRequest,
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> IssueCreditsResponse:
    await latency.wait("registry")
    try:
        serials = registry.issue_credits(project_id, body.quantity)
    except KeyError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return IssueCreditsResponse(project_id=project_id, serial_numbers=serials)


# ---------------------------------------------------------------------------
# Marketplace
# ---------------------------------------------------------------------------


@router.get("/marketplace", response_model=list[CarbonProject])
async def marketplace(
    sector: str | None = None,
    min_price: int | None = Query(default=None, ge=0),
    max_price: int | None = Query(default=None, ge=0),
    min_score: int | None = Query(default=None, ge=0, le=100),
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> list[CarbonProject]:
    await latency.wait("registry")
    return registry.get_marketplace(
        sector=sector, min_price=min_price, max_price=max_price, min_score=min_score
    )


@router.post("/marketplace/purchases", status_code=201, response_model=Transaction)
async def purchase_credits(
    body: PurchaseRequest,
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> Transaction:
    await latency.wait("registry")
    try:
        return registry.purchase_credits(body.project_id, body.quantity, body.buyer_id)
    except KeyError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------


@router.get("/ledger", response_model=LedgerPage)
async def ledger(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=200),
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> LedgerPage:
    await latency.wait("registry")
    return registry.get_ledger(page=page, page_size=page_size)


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@router.get("/admin/stats", response_model=AdminStats)
async def admin_stats(
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> AdminStats:
    await latency.wait("registry")
    return registry.get_admin_stats()


@router.get("/admin/alerts", response_model=list[ComplianceAlert])
async def compliance_alerts(
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> list[ComplianceAlert]:
    await latency.wait("registry")
    return registry.get_compliance_alerts()


# ---------------------------------------------------------------------------
# Buyer
# ---------------------------------------------------------------------------


@router.get("/buyers/{buyer_id}/portfolio", response_model=BuyerPortfolio)
async def buyer_portfolio(
    buyer_id: str,
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> BuyerPortfolio:
    await latency.wait("registry")
    return registry.get_buyer_portfolio(buyer_id)


@router.post(
    "/buyers/{buyer_id}/retirements",
    status_code=201,
    response_model=RetireResponse,
)
async def retire_credits(
    buyer_id: str,
    body: RetireRequest,
    registry: RegistryService = Depends(get_registry_service),
    latency: LatencyStrategy = Depends(get_latency),
) -> RetireResponse:
    await latency.wait("registry")
    try:
        retirement_id = registry.retire_credits(
            body.project_id, body.quantity, buyer_id, body.reason
        )
    except KeyError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return RetireResponse(retirement_id=retirement_id)
