"""
Enum-keyed lookup tables used when building prompts.

Every table must cover every member of its enum; `_require_complete` runs at
import time so a new enum member without an entry fails immediately.
"""

from enum import Enum
from typing import Dict, Type

from models.domain import CampaignGoal, Dialect, Platform, RefinementAction, ToneOfVoice


PLATFORM_GUIDELINES: Dict[Platform, str] = {
    Platform.FACEBOOK: (
        "Focus on community engagement, asking questions and storytelling. "
        "Use a friendly, welcoming tone."
    ),
    Platform.INSTAGRAM: (
        "Write captions that complement strong visuals. Use relevant hashtags and a "
        "conversational tone. Emoji are encouraged."
    ),
    Platform.TIKTOK: (
        "Short, punchy, trend-driven captions. Draw on trending sounds and hashtags. "
        "Keep it fun and energetic."
    ),
    Platform.X: (
        "Concise, high-impact messages. Ideal for news, quick updates and joining "
        "conversations. Use hashtags to increase reach."
    ),
    Platform.LINKEDIN: (
        "Professional, industry-relevant content. Share insights, company news and "
        "thought leadership. Keep a formal, credible tone."
    ),
}

TONE_LABELS: Dict[ToneOfVoice, str] = {
    ToneOfVoice.PROFESSIONAL: "professional",
    ToneOfVoice.FRIENDLY: "friendly",
    ToneOfVoice.FUNNY: "funny",
    ToneOfVoice.BOLD: "bold",
    ToneOfVoice.INSPIRATIONAL: "inspirational",
}

DIALECT_LANGUAGES: Dict[Dialect, str] = {
    Dialect.EGYPTIAN: "Arabic (Egyptian dialect)",
    Dialect.GULF: "Arabic (Gulf dialect)",
    Dialect.ENGLISH: "English",
}

CAMPAIGN_GOAL_DESCRIPTIONS: Dict[CampaignGoal, str] = {
    CampaignGoal.PRODUCT_LAUNCH: (
        "A teaser, announcement and follow-up campaign for launching a new product or service."
    ),
    CampaignGoal.BRAND_AWARENESS: (
        "Content centred on the brand's story and values to reach a new audience."
    ),
    CampaignGoal.SPECIAL_OFFER: (
        "A series of posts promoting a discount, offer or limited-time event."
    ),
    CampaignGoal.COMMUNITY_ENGAGEMENT: (
        "Content designed to get followers participating, commenting and sharing."
    ),
}

REFINEMENT_INSTRUCTIONS: Dict[RefinementAction, str] = {
    RefinementAction.REPHRASE: (
        "Rephrase this post in a different style while keeping its core message."
    ),
    RefinementAction.SHORTEN: (
        "Make this post shorter and more concise, suitable for a platform like X/Twitter."
    ),
    RefinementAction.LENGTHEN: (
        "Lengthen this post, adding more detail or wider context."
    ),
    RefinementAction.CHANGE_TONE: "Change the tone of this post to {tone}.",
}


def _require_complete(table: Dict[Enum, str], enum_cls: Type[Enum], name: str) -> None:
    missing = [member.name for member in enum_cls if member not in table]
    if missing:
        raise RuntimeError(f"{name} is missing entries for: {', '.join(missing)}")


_require_complete(PLATFORM_GUIDELINES, Platform, "PLATFORM_GUIDELINES")
_require_complete(TONE_LABELS, ToneOfVoice, "TONE_LABELS")
_require_complete(DIALECT_LANGUAGES, Dialect, "DIALECT_LANGUAGES")
_require_complete(CAMPAIGN_GOAL_DESCRIPTIONS, CampaignGoal, "CAMPAIGN_GOAL_DESCRIPTIONS")
_require_complete(REFINEMENT_INSTRUCTIONS, RefinementAction, "REFINEMENT_INSTRUCTIONS")
