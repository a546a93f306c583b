"""
Prompt assembly for every generation task.

All functions are pure: they only format their inputs into the templates in
config/prompts/content_prompts.py. Brand-supplied text is inserted verbatim.
"""

from typing import Optional

from config.constants import (
    CAMPAIGN_GOAL_DESCRIPTIONS,
    DIALECT_LANGUAGES,
    PLATFORM_GUIDELINES,
    REFINEMENT_INSTRUCTIONS,
    TONE_LABELS,
)
from config.prompts.content_prompts import (
    AUDIENCE_PERSONA_LINE,
    BRAND_IDENTITY_HEADER,
    CAMPAIGN_PROMPT,
    CONTENT_PILLARS_LINE,
    HASHTAGS_PROMPT,
    KEYWORDS_TO_AVOID_LINE,
    KEYWORDS_TO_USE_LINE,
    REFINE_POST_PROMPT,
    SOCIAL_POSTS_PROMPT,
    SUCCESS_EXAMPLE_ITEM,
    SUCCESS_EXAMPLES_LINE,
    TAGLINE_PROMPT,
    TOPIC_IDEAS_PROMPT,
)
from models.domain import (
    Brand,
    CampaignGoal,
    ContentType,
    Dialect,
    Platform,
    RefinementAction,
    ToneOfVoice,
)


def language_and_dialect(dialect: Dialect) -> str:
    return DIALECT_LANGUAGES[Dialect(dialect)]


def build_brand_identity_prompt(brand: Brand) -> str:
    """Render the identity block, including only the fields that are populated.

    Returns an empty string when the brand has no identity data at all.
    """
    identity = brand.identity
    lines = []

    if identity.audience_persona and identity.audience_persona.strip():
        lines.append(AUDIENCE_PERSONA_LINE.format(persona=identity.audience_persona))
    if identity.content_pillars:
        lines.append(CONTENT_PILLARS_LINE.format(pillars=", ".join(identity.content_pillars)))

    lexicon = identity.brand_lexicon
    if lexicon is not None:
        if lexicon.keywords_to_use:
            lines.append(KEYWORDS_TO_USE_LINE.format(keywords=", ".join(lexicon.keywords_to_use)))
        if lexicon.keywords_to_avoid:
            lines.append(KEYWORDS_TO_AVOID_LINE.format(keywords=", ".join(lexicon.keywords_to_avoid)))

    if identity.success_examples:
        examples = "\n".join(SUCCESS_EXAMPLE_ITEM.format(example=ex) for ex in identity.success_examples)
        lines.append(SUCCESS_EXAMPLES_LINE.format(examples=examples))

    if not lines:
        return ""
    return BRAND_IDENTITY_HEADER + "".join(lines)


def build_posts_prompt(brand: Brand, platform: Platform, tone: ToneOfVoice, count: int,
                       content_type: ContentType, topic: str) -> str:
    # count is passed through unchecked; callers bound it
    platform = Platform(platform)
    return SOCIAL_POSTS_PROMPT.format(
        count=count,
        description=brand.description,
        identity=build_brand_identity_prompt(brand),
        platform=platform.value,
        tone=TONE_LABELS[ToneOfVoice(tone)],
        content_type=ContentType(content_type).value,
        topic=topic,
        language=language_and_dialect(brand.dialect),
        platform_guidelines=PLATFORM_GUIDELINES[platform],
    )


def build_campaign_prompt(brand: Brand, goal: CampaignGoal, duration_days: int, topic: str,
                          platform: Platform, tone: ToneOfVoice) -> str:
    goal = CampaignGoal(goal)
    return CAMPAIGN_PROMPT.format(
        description=brand.description,
        identity=build_brand_identity_prompt(brand),
        goal=goal.value,
        goal_description=CAMPAIGN_GOAL_DESCRIPTIONS[goal],
        duration=duration_days,
        topic=topic,
        platform=Platform(platform).value,
        tone=TONE_LABELS[ToneOfVoice(tone)],
        language=language_and_dialect(brand.dialect),
    )


def build_topic_ideas_prompt(brand_description: str, dialect: Dialect) -> str:
    return TOPIC_IDEAS_PROMPT.format(
        description=brand_description,
        language=language_and_dialect(dialect),
    )


def build_refine_prompt(text: str, action: RefinementAction, dialect: Dialect,
                        target_tone: Optional[ToneOfVoice] = None) -> str:
    action = RefinementAction(action)
    instruction = REFINEMENT_INSTRUCTIONS[action]
    if action is RefinementAction.CHANGE_TONE:
        if target_tone is None:
            raise ValueError("changeTone refinement requires a target tone")
        instruction = instruction.format(tone=TONE_LABELS[ToneOfVoice(target_tone)])

    return REFINE_POST_PROMPT.format(
        instruction=instruction,
        text=text,
        language=language_and_dialect(dialect),
    )


def build_hashtags_prompt(text: str, dialect: Dialect) -> str:
    return HASHTAGS_PROMPT.format(text=text, language=language_and_dialect(dialect))


def build_tagline_prompt(text: str, brand_description: str, dialect: Dialect) -> str:
    return TAGLINE_PROMPT.format(
        description=brand_description,
        text=text,
        language=language_and_dialect(dialect),
    )
