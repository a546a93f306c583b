"""Shared fixtures: in-memory storage, a mocked model router and sample brands."""

import json
import os
import tempfile
from typing import Dict, Optional
from unittest.mock import MagicMock

import pytest

# Keep log files out of the working tree
os.environ.setdefault("SOCIALPOST_LOG_DIR", tempfile.mkdtemp(prefix="socialpost-logs-"))

from agents.brand_store import BrandStore
from agents.content_agent import ContentAgent
from models.domain import (
    Brand,
    BrandIdentity,
    BrandLexicon,
    ContentType,
    Dialect,
    Platform,
    Post,
)
from utils.api_client import ModelRouter


class InMemoryStorage:
    """Storage port fake holding string values in a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.writes += 1
        self.items[key] = value


class FailingStorage:
    """Storage port whose reads and writes always raise."""

    def get_item(self, key):
        raise OSError("storage unavailable")

    def set_item(self, key, value):
        raise OSError("quota exceeded")


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    brand_store = BrandStore(storage)
    brand_store.load()
    return brand_store


@pytest.fixture
def mock_router():
    router = MagicMock(spec=ModelRouter)
    router.generate_content.return_value = ""
    return router


@pytest.fixture
def agent(mock_router):
    return ContentAgent(mock_router, {"generation": {"tagline_max_tokens": 20}})


@pytest.fixture
def brand():
    return Brand(
        id="brand-1",
        name="Bean There",
        description="Specialty cafe focused on ethically sourced beans and a cosy atmosphere.",
        dialect=Dialect.EGYPTIAN,
    )


@pytest.fixture
def brand_with_identity(brand):
    return brand.model_copy(update={"identity": BrandIdentity(
        audience_persona="Young professionals who work from cafes",
        content_pillars=["Coffee origins", "Brewing tips"],
        brand_lexicon=BrandLexicon(keywords_to_use=["craft"], keywords_to_avoid=["cheap"]),
        success_examples=["Your morning, slow-roasted."],
    )})


def make_post(post_id: str, text: str = "Post text", **overrides) -> Post:
    fields = dict(
        id=post_id,
        text=text,
        tov_phrase="Quality in every cup",
        date_generated="2026-10-01T09:00:00+00:00",
        platform=Platform.INSTAGRAM,
        content_type=ContentType.SOCIAL_POST,
        topic="Autumn menu",
    )
    fields.update(overrides)
    return Post(**fields)


def generated_posts_json(count: int, fenced: bool = False) -> str:
    payload = json.dumps({
        "posts": [
            {
                "text": f"Generated post {i}",
                "tov_phrase": f"Phrase {i}",
                "visual_inspiration": {
                    "description": "Close-up of a coffee bean",
                    "color_palette": ["#6F4E37", "#D2B48C", "#F5F5DC"],
                    "image_prompt": "macro shot of a roasted coffee bean, warm light",
                },
            }
            for i in range(1, count + 1)
        ]
    })
    return f"```json\n{payload}\n```" if fenced else payload
