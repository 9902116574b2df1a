"""Health check endpoint."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from tokiwa.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


@router.get("/health")
async def health_check(settings: FromDishka[Settings]) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "environment": settings.environment}
