from typing import Dict, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from openai import AsyncOpenAI

from fashion_variations.api.variations.provider import get_provider_client
from fashion_variations.api.variations.schemas import ErrorResponse, GenerationResponse, UploadedImage
from fashion_variations.api.variations.service import demo_response, error_response, generate_variations
from fashion_variations.api.variations.uploads import read_variation_uploads
from fashion_variations.logger import json_logger as logger

router = APIRouter()

MISSING_IMAGES_ERROR = "Both dress and person images are required"


@router.post(
    "/generate-variations",
    response_model=GenerationResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": GenerationResponse}},
    tags=["Variations"],
)
async def generate_variations_endpoint(
    uploads: Dict[str, UploadedImage] = Depends(read_variation_uploads),
    client: Optional[AsyncOpenAI] = Depends(get_provider_client),
):
    """
    Generates five pose variations of the uploaded person wearing the uploaded dress.

    Always answers with five image entries once both uploads are present;
    failed generations are filled with the placeholder image.
    """
    dress = uploads.get("dress")
    person = uploads.get("person")
    if dress is None or person is None:
        logger.warning(f"Generation request missing uploads, received: {sorted(uploads)}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": MISSING_IMAGES_ERROR})

    try:
        if client is None:
            logger.warning("OpenAI API key not configured, returning placeholder results")
            return demo_response()

        logger.info(
            f"Received generation request: dress={dress.filename} ({len(dress.data)}B) "
            f"person={person.filename} ({len(person.data)}B)"
        )
        return await generate_variations(client, dress, person)
    except Exception:
        logger.exception("Error in generate-variations")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response().model_dump(exclude_none=True),
        )
