"""Statistics routes."""

from dataclasses import asdict

from fastapi import APIRouter

from forumx.auth.dependencies import AdminUser

from .dependencies import StatsServiceDep
from .schemas import AdminStatsResponse, CountsResponse


router = APIRouter(tags=["stats"])


@router.get("/admin/stats", response_model=AdminStatsResponse, summary="Dashboard totals")
async def admin_stats(_admin: AdminUser, service: StatsServiceDep) -> AdminStatsResponse:
    return AdminStatsResponse(**asdict(await service.admin_stats()))


@router.get("/stats/counts", response_model=CountsResponse, summary="Public badge counts")
async def public_counts(service: StatsServiceDep) -> CountsResponse:
    return CountsResponse(**asdict(await service.public_counts()))
