"""
Shapes the generation service is asked to return.

These models double as the JSON schemas sent with structured-output requests
and as the validators for whatever text comes back.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResponseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def json_schema(cls) -> dict:
        return cls.model_json_schema(by_alias=True)


class GeneratedVisualInspiration(ResponseModel):
    description: str = Field(description="Suggested image or video description.")
    color_palette: List[str] = Field(description="HEX color codes.")
    image_prompt: str = Field(description="Image-generation prompt in English.")


class GeneratedPost(ResponseModel):
    text: str = Field(description="Full text of the content piece.")
    tov_phrase: str = Field(description="Short design phrase.")
    visual_inspiration: Optional[GeneratedVisualInspiration] = None


class GeneratedCampaignPost(GeneratedPost):
    day: int
    theme: str


class PostsResponse(ResponseModel):
    posts: List[GeneratedPost]


class CampaignResponse(ResponseModel):
    campaign_posts: List[GeneratedCampaignPost] = Field(alias="campaignPosts")


class TopicIdeasResponse(ResponseModel):
    ideas: List[str]


class HashtagsResponse(ResponseModel):
    hashtags: List[str] = Field(description="Hashtags starting with #")
