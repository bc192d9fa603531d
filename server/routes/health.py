"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from server.dependencies import get_config
from server.schemas.responses import HealthResponseDTO

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponseDTO)
async def health_check(config=Depends(get_config)):
    """Health check endpoint."""
    return HealthResponseDTO(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version="1.0.0",
        model=config.get_model_info(),
        search_provider=config.SEARCH_PROVIDER,
    )
