from typing import Optional

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse, Response

from fashion_variations.api.downloads.service import fetch_remote_image
from fashion_variations.config import DOWNLOAD_FILENAME
from fashion_variations.logger import json_logger as logger

router = APIRouter()


@router.get("/download-image", tags=["Downloads"])
async def download_image_endpoint(
    url: Optional[str] = Query(None, description="Remote image URL to re-serve as an attachment."),
):
    """
    Re-fetches a remote image server-side and returns it with attachment headers,
    so the browser downloads it instead of hitting cross-origin restrictions.
    """
    if not url:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Image URL is required"})

    try:
        data, content_type = await fetch_remote_image(url)
    except Exception as e:
        logger.error(f"Download proxy error for {url}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to download image"},
        )

    return Response(
        content=data,
        media_type=content_type,
        headers={
            "Content-Length": str(len(data)),
            "Content-Disposition": f'attachment; filename="{DOWNLOAD_FILENAME}"',
        },
    )
