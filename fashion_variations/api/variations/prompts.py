"""
Prompt text for the two provider stages.

The vision stage uses a single fixed instruction. The generation stage picks
one of two templates depending on whether the vision stage produced a usable
description.
"""

from enum import Enum
from typing import Tuple

ANALYSIS_FAILED = "Image analysis failed - will use basic generation"
ANALYSIS_EMPTY = "Could not analyze images"

POSES: Tuple[str, ...] = (
    "standing straight with arms at sides, front-facing view",
    "three-quarter turn pose with one hand on hip",
    "walking pose with natural arm swing",
    "sitting elegantly on a minimalist stool",
    "side profile pose with arms gracefully positioned",
)

ANALYSIS_INSTRUCTION = (
    "Analyze these two images carefully: 1) A dress/outfit, 2) A person/model. "
    "Provide a detailed description that will be used for AI image generation. Focus on:\n\n"
    "For the DRESS:\n"
    "- Exact color, style, length, cut\n"
    "- Fabric type and texture\n"
    "- Sleeves, neckline, silhouette\n"
    "- Any patterns, prints, or details\n"
    "- Overall design characteristics\n\n"
    "For the PERSON:\n"
    "- Body type, height, build\n"
    "- Skin tone, hair color and style\n"
    "- Facial features (if visible)\n"
    "- Any distinctive characteristics\n\n"
    "Provide a comprehensive description that will help generate images of this exact "
    "person wearing this exact dress in different poses."
)

GROUNDED_TEMPLATE = """Create a professional fashion photograph based on these specifications:

PERSON & DRESS ANALYSIS:
{analysis}

POSE REQUIREMENT: {pose}

GENERATION INSTRUCTIONS:
- Use the EXACT person described above wearing the EXACT dress described above
- The person's appearance must match the analysis (body type, skin tone, hair, facial features)
- The dress must be identical in every detail (color, pattern, fabric, cut, style, length)
- Only change the pose/positioning as specified
- Maintain high-quality fashion photography standards
- Use professional studio lighting with clean, neutral background
- Ensure the dress fits the person naturally and realistically
- Keep consistent lighting and background across all variations

Style: Professional fashion photography, studio quality, clean composition"""

GENERIC_TEMPLATE = """Create a professional fashion photograph of a model wearing a dress in this pose: {pose}.

Professional fashion photography style, studio lighting, clean neutral background, high quality, detailed dress design, elegant pose."""


class PromptTemplate(Enum):
    GROUNDED = GROUNDED_TEMPLATE
    GENERIC = GENERIC_TEMPLATE


def analysis_succeeded(analysis: str) -> bool:
    return bool(analysis) and analysis != ANALYSIS_FAILED


def select_template(analysis: str) -> PromptTemplate:
    return PromptTemplate.GROUNDED if analysis_succeeded(analysis) else PromptTemplate.GENERIC


def build_prompt(analysis: str, pose: str) -> str:
    """Render the generation prompt for one pose."""
    template = select_template(analysis)
    if template is PromptTemplate.GROUNDED:
        return template.value.format(analysis=analysis, pose=pose)
    return template.value.format(pose=pose)
