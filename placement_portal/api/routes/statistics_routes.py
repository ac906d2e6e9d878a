"""
Statistics Routes

GET /statistics/placements - Placements by academic year and branch (recruiter only)
"""

from fastapi import APIRouter, Depends

from placement_portal.core.auth import get_current_recruiter
from placement_portal.services.mongo_service import ApplicationService, get_application_service
from placement_portal.services.statistics_service import (
    PLACED_STATUSES, compute_placement_stats, total_placements, years_sorted
)
from placement_portal.schemas.schemas import PlacementStatsResponse

router = APIRouter(prefix="/statistics", tags=["Statistics"])


@router.get("/placements", response_model=PlacementStatsResponse)
async def placement_stats(
    recruiter: dict = Depends(get_current_recruiter),
    applications: ApplicationService = Depends(get_application_service)
):
    """
    Aggregate accepted applications.

    Academic years run June to May and are listed most recent first.
    """
    stats = compute_placement_stats(applications.list_by_status(PLACED_STATUSES))
    return PlacementStatsResponse(
        years=years_sorted(stats),
        data=stats,
        total_placements=total_placements(stats)
    )
