from typing import List

from openai import AsyncOpenAI

from fashion_variations.api.variations.prompts import (
    ANALYSIS_EMPTY,
    ANALYSIS_FAILED,
    ANALYSIS_INSTRUCTION,
    POSES,
    build_prompt,
    select_template,
)
from fashion_variations.api.variations.schemas import (
    GeneratedImageRef,
    GenerationOutcome,
    GenerationResponse,
    UploadedImage,
)
from fashion_variations.config import (
    ANALYSIS_MAX_TOKENS,
    IMAGE_MODEL,
    IMAGE_QUALITY,
    IMAGE_SIZE,
    PLACEHOLDER_IMAGE_URL,
    VARIATION_COUNT,
    VISION_MODEL,
)
from fashion_variations.logger import json_logger as logger

DEMO_MESSAGE = "Demo mode - OpenAI API key not configured"
SUCCESS_MESSAGE = "Images generated successfully"
FAILURE_ERROR = "Failed to generate images, showing placeholders"
FAILURE_MESSAGE = "Error occurred during generation"


def placeholder_refs(prefix: str) -> List[GeneratedImageRef]:
    return [
        GeneratedImageRef(id=f"{prefix}-{i + 1}", url=PLACEHOLDER_IMAGE_URL)
        for i in range(VARIATION_COUNT)
    ]


def demo_response() -> GenerationResponse:
    return GenerationResponse(images=placeholder_refs("placeholder"), message=DEMO_MESSAGE)


def error_response() -> GenerationResponse:
    return GenerationResponse(
        images=placeholder_refs("error-placeholder"),
        error=FAILURE_ERROR,
        message=FAILURE_MESSAGE,
    )


async def analyze_images(client: AsyncOpenAI, dress: UploadedImage, person: UploadedImage) -> str:
    """
    Asks the vision model for one description covering both the garment and the person.

    Never raises: any provider or payload failure yields ``ANALYSIS_FAILED``
    so the caller can fall back to the generic prompt.
    """
    logger.info("Analyzing uploaded images with the vision model...")
    try:
        response = await client.chat.completions.create(
            model=VISION_MODEL,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": ANALYSIS_INSTRUCTION},
                        {"type": "image_url", "image_url": {"url": dress.to_data_url()}},
                        {"type": "image_url", "image_url": {"url": person.to_data_url()}},
                    ],
                }
            ],
            max_tokens=ANALYSIS_MAX_TOKENS,
        )
        content = response.choices[0].message.content if response.choices else None
    except Exception as e:
        logger.error(f"Vision API error: {e}")
        return ANALYSIS_FAILED

    if not isinstance(content, str) or not content:
        content = ANALYSIS_EMPTY
    logger.debug(f"Image analysis complete: {content}")
    return content


async def generate_pose_image(client: AsyncOpenAI, prompt: str, index: int) -> GenerationOutcome:
    """Runs one image generation call. Failures come back as an outcome, never as an exception."""
    try:
        response = await client.images.generate(
            model=IMAGE_MODEL,
            prompt=prompt,
            n=1,
            size=IMAGE_SIZE,
            quality=IMAGE_QUALITY,
        )
        url = response.data[0].url if response.data else None
    except Exception as e:
        logger.error(f"Error generating image {index + 1}: {e}")
        return GenerationOutcome(error=str(e))

    if not isinstance(url, str) or not url:
        logger.warning(f"No image data received for variation {index + 1}")
        return GenerationOutcome(error="No image data received")

    logger.info(f"Successfully generated variation {index + 1}")
    return GenerationOutcome(url=url)


async def generate_variations(
    client: AsyncOpenAI, dress: UploadedImage, person: UploadedImage
) -> GenerationResponse:
    """
    Runs the two-stage pipeline: one vision analysis, then one generation per pose.

    Generations are awaited one at a time so pose ``i`` always lands at index
    ``i``. Exactly ``VARIATION_COUNT`` refs are returned whatever the number of
    failed calls.
    """
    analysis = await analyze_images(client, dress, person)
    template = select_template(analysis)
    logger.info(f"Using {template.name.lower()} prompt template for {len(POSES)} poses")

    images: List[GeneratedImageRef] = []
    for index, pose in enumerate(POSES):
        logger.info(f"Generating variation {index + 1} with pose: {pose}")
        outcome = await generate_pose_image(client, build_prompt(analysis, pose), index)
        if outcome.ok:
            images.append(GeneratedImageRef(id=f"generated-{index + 1}", url=outcome.url))
        else:
            images.append(GeneratedImageRef(id=f"fallback-{index + 1}", url=PLACEHOLDER_IMAGE_URL))

    return GenerationResponse(images=images, message=SUCCESS_MESSAGE)
