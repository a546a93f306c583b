"""
Domain records for brands and their generated posts.

Field names are snake_case in Python and camelCase on the wire, so the
persisted document keeps the same shape the brand store has always written.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Platform(str, Enum):
    FACEBOOK = "Facebook"
    INSTAGRAM = "Instagram"
    TIKTOK = "TikTok"
    X = "X (formerly Twitter)"
    LINKEDIN = "LinkedIn"


class ToneOfVoice(str, Enum):
    PROFESSIONAL = "Professional"
    FRIENDLY = "Friendly"
    FUNNY = "Funny"
    BOLD = "Bold"
    INSPIRATIONAL = "Inspirational"


class ContentType(str, Enum):
    SOCIAL_POST = "Social Post"
    VIDEO_SCRIPT = "Video Script"
    ARTICLE = "Article"


class Dialect(str, Enum):
    EGYPTIAN = "Egyptian Arabic"
    GULF = "Gulf Arabic"
    ENGLISH = "English"


class RefinementAction(str, Enum):
    REPHRASE = "rephrase"
    SHORTEN = "shorten"
    LENGTHEN = "lengthen"
    CHANGE_TONE = "changeTone"


class CampaignGoal(str, Enum):
    PRODUCT_LAUNCH = "Product Launch"
    BRAND_AWARENESS = "Brand Awareness"
    SPECIAL_OFFER = "Special Offer / Promotion"
    COMMUNITY_ENGAGEMENT = "Community Engagement"


DEFAULT_DIALECT = Dialect.EGYPTIAN


class DomainModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_record(self) -> dict:
        """Serialize to the persisted (camelCase, JSON-safe) form."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BrandLexicon(DomainModel):
    keywords_to_use: List[str] = Field(default_factory=list)
    keywords_to_avoid: List[str] = Field(default_factory=list)


class BrandIdentity(DomainModel):
    """Strategic profile for a brand. Every field may be left undefined."""

    audience_persona: Optional[str] = None
    content_pillars: List[str] = Field(default_factory=list)
    brand_lexicon: Optional[BrandLexicon] = None
    success_examples: List[str] = Field(default_factory=list)


class VisualInspiration(DomainModel):
    description: str
    color_palette: List[str] = Field(default_factory=list)
    image_prompt: str


class Post(DomainModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    text: str
    tov_phrase: str = ""
    date_generated: str = Field(default_factory=lambda: utc_now_iso())
    platform: Platform
    content_type: ContentType
    topic: str
    hashtags: List[str] = Field(default_factory=list)
    visual_inspiration: Optional[VisualInspiration] = None
    campaign_theme: Optional[str] = None
    day_in_campaign: Optional[int] = None


class Brand(DomainModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    description: str
    dialect: Dialect = DEFAULT_DIALECT
    identity: BrandIdentity = Field(default_factory=BrandIdentity)
    posts: List[Post] = Field(default_factory=list)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
