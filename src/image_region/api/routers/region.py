"""
Image Region API Router - render a region of an image plane
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from image_region.api.dependencies import get_app_settings, get_region_service
from image_region.api.exceptions import (
    ImageNotFoundException,
    RenderingException,
    safe_endpoint,
)
from image_region.common.constants import APIConstants
from image_region.common.enums import RenderStatus
from image_region.config import Settings
from image_region.schemas.region import RegionQuery
from image_region.services.region_service import RegionService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/webgateway/render_image_region/{image_id}/{z}/{t}")
@router.get("/webclient/render_image_region/{image_id}/{z}/{t}")
@safe_endpoint
async def render_image_region(
    image_id: int,
    z: int,
    t: int,
    tile: Optional[str] = Query(None, description="res,x,y[,w,h]"),
    region: Optional[str] = Query(None, description="x,y,w,h"),
    c: Optional[str] = Query(None, description="Channels, e.g. 1|0:255$FF0000,-2"),
    m: Optional[str] = Query(None, description="Rendering model"),
    q: Optional[str] = Query(None, description="Compression quality 0.0-1.0"),
    region_service: RegionService = Depends(get_region_service),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Render a region of one image plane.

    Responds with ``image/jpeg`` bytes on success. A missing or invisible
    image and a rendering failure both map to configurable error statuses.

    Raises:
        InvalidRequestParameterException 400: If a query parameter is malformed
        InvalidRegionException 400: If neither tile nor region was given
        ImageNotFoundException: If the image does not exist
        RenderingException: If the rendering engine failed
    """
    region_request = RegionQuery(
        image_id=image_id, z=z, t=t, tile=tile, region=region, c=c, m=m, q=q
    ).to_request()

    # Remote calls block; keep them off the event loop
    outcome = await run_in_threadpool(region_service.render, region_request)

    if outcome.status == RenderStatus.NOT_FOUND:
        raise ImageNotFoundException(image_id, status_code=settings.api.not_found_status_code)
    if outcome.status == RenderStatus.FAILED:
        raise RenderingException(
            image_id, outcome.reason or "unknown", status_code=settings.api.failure_status_code
        )

    logger.info(f"Rendered region of Image:{image_id} ({len(outcome.data)} bytes)")
    return Response(content=outcome.data, media_type=APIConstants.IMAGE_MEDIA_TYPE)
