from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from salon.api.schemas import DashboardStatsSchema
from salon.wiring.dependencies import Container, get_container, require_admin

router = APIRouter(prefix="/api/dashboard", dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=DashboardStatsSchema)
def dashboard_stats(
    day: date | None = Query(None),
    container: Container = Depends(get_container),
):
    if day is None:
        day = container.dashboard.today()
    return DashboardStatsSchema.model_validate(container.dashboard.for_day(day))
