import pytest

from fashion_variations.api.variations.prompts import (
    ANALYSIS_EMPTY,
    ANALYSIS_FAILED,
    GENERIC_TEMPLATE,
    POSES,
    PromptTemplate,
    build_prompt,
    select_template,
)


def test_exactly_five_poses_in_fixed_order():
    assert len(POSES) == 5
    assert POSES[0] == "standing straight with arms at sides, front-facing view"
    assert POSES[4] == "side profile pose with arms gracefully positioned"


@pytest.mark.parametrize("analysis", [ANALYSIS_FAILED, ""])
def test_failed_or_empty_analysis_selects_generic(analysis):
    assert select_template(analysis) is PromptTemplate.GENERIC


@pytest.mark.parametrize("analysis", ["A long blue gown on a petite model", ANALYSIS_EMPTY])
def test_any_other_analysis_selects_grounded(analysis):
    assert select_template(analysis) is PromptTemplate.GROUNDED


def test_generic_prompt_only_carries_pose():
    prompt = build_prompt(ANALYSIS_FAILED, POSES[2])

    assert prompt == GENERIC_TEMPLATE.format(pose=POSES[2])
    assert ANALYSIS_FAILED not in prompt
    assert "PERSON & DRESS ANALYSIS" not in prompt


def test_grounded_prompt_embeds_analysis_verbatim():
    analysis = "Dress: emerald {satin} wrap dress.\nPerson: curly auburn hair, medium build."
    prompt = build_prompt(analysis, POSES[1])

    assert analysis in prompt
    assert f"POSE REQUIREMENT: {POSES[1]}" in prompt
    assert "Use the EXACT person described above wearing the EXACT dress described above" in prompt
    assert "Only change the pose/positioning as specified" in prompt


def test_grounded_prompts_differ_only_in_pose():
    analysis = "Dress: black velvet slip dress. Person: short grey hair."
    normalized = {build_prompt(analysis, pose).replace(pose, "<pose>") for pose in POSES}
    assert len(normalized) == 1
