from typing import Any, Callable, Dict, List, Optional, TypeVar

from agents import prompt_builder
from models.domain import (
    Brand,
    CampaignGoal,
    ContentType,
    Dialect,
    Platform,
    Post,
    RefinementAction,
    ToneOfVoice,
    VisualInspiration,
)
from models.responses import (
    CampaignResponse,
    GeneratedPost,
    HashtagsResponse,
    PostsResponse,
    TopicIdeasResponse,
)
from utils.api_client import ContentGenerationError, ModelRouter
from utils.logger import AgentLogger
from utils.response_parser import MalformedResponseError, parse_model_response

T = TypeVar("T")

MALFORMED_RESPONSE_MESSAGE = "The AI returned an unexpected response. Please try generating again."

TASK_FAILURE_MESSAGES: Dict[str, str] = {
    "posts": "Failed to generate content. The model may have returned an error or the network request failed.",
    "campaign": "Failed to generate the campaign.",
    "topic_ideas": "Failed to generate topic ideas.",
    "refine": "Failed to refine the text.",
    "hashtags": "Failed to generate hashtags.",
    "tagline": "Failed to generate the design tagline.",
}


class GenerationError(Exception):
    """User-facing failure of a single generation task.

    `kind` is "malformed" when the model answered with something unusable and
    "failure" for everything else (network, API, configuration).
    """

    def __init__(self, task: str, kind: str, message: str):
        super().__init__(message)
        self.task = task
        self.kind = kind
        self.user_message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"task": self.task, "kind": self.kind, "message": self.user_message}


class ContentAgent:
    """
    Generation façade: one method per task. Each builds the prompt, calls the
    routed model, validates the reply and maps it to domain objects. Any
    failure surfaces as a GenerationError; nothing is retried.
    """

    def __init__(self, model_router: ModelRouter, config: Optional[Dict[str, Any]] = None):
        self.model_router = model_router
        self.logger = AgentLogger("content_agent")

        settings = (config or {}).get("generation", {})
        self.tagline_max_tokens = settings.get("tagline_max_tokens", 20)

    def _run(self, task: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except MalformedResponseError as e:
            self.logger.log_error("malformed_response", str(e),
                                  {"task": task, "response": (e.raw_response or "")[:500]})
            raise GenerationError(task, "malformed", MALFORMED_RESPONSE_MESSAGE) from e
        except (ContentGenerationError, ValueError) as e:
            self.logger.log_error("generation_failed", str(e), {"task": task})
            raise GenerationError(task, "failure", TASK_FAILURE_MESSAGES[task]) from e

    def _fit_count(self, task: str, items: List[T], requested: int) -> List[T]:
        """Apply the count policy: truncate surplus, accept shortfall, reject empty."""
        if not items:
            raise MalformedResponseError(f"Generation service returned no items for {task}")
        if requested > 0 and len(items) > requested:
            self._log_count_mismatch(task, requested, len(items), "truncated")
            return items[:requested]
        if len(items) < requested:
            self._log_count_mismatch(task, requested, len(items), "accepted_shortfall")
        return items

    def _log_count_mismatch(self, task: str, requested: int, received: int, outcome: str):
        self.logger.log_decision("count_mismatch", {"task": task, "requested": requested,
                                                    "received": received}, outcome)
        if outcome == "accepted_shortfall":
            self.logger.log_warning("Fewer items than requested",
                                    {"task": task, "requested": requested, "received": received})

    @staticmethod
    def _to_post(generated: GeneratedPost, platform: Platform, content_type: ContentType,
                 topic: str, **extra: Any) -> Post:
        visual = None
        if generated.visual_inspiration is not None:
            visual = VisualInspiration(
                description=generated.visual_inspiration.description,
                color_palette=list(generated.visual_inspiration.color_palette),
                image_prompt=generated.visual_inspiration.image_prompt,
            )
        return Post(
            text=generated.text,
            tov_phrase=generated.tov_phrase,
            platform=platform,
            content_type=content_type,
            topic=topic,
            hashtags=[],
            visual_inspiration=visual,
            **extra,
        )

    def generate_posts(self, brand: Brand, platform: Platform, tone: ToneOfVoice, count: int,
                       content_type: ContentType, topic: str) -> List[Post]:
        """Generate `count` post drafts for a brand, each tagged with platform and topic"""
        def call() -> List[Post]:
            prompt = prompt_builder.build_posts_prompt(brand, platform, tone, count, content_type, topic)
            raw = self.model_router.generate_content(
                "posts", prompt, response_schema=PostsResponse.json_schema()
            )
            parsed = parse_model_response(raw, PostsResponse)
            generated = self._fit_count("posts", parsed.posts, count)
            return [self._to_post(p, Platform(platform), ContentType(content_type), topic)
                    for p in generated]

        posts = self._run("posts", call)
        self.logger.log_info("Posts generated", {"brand_id": brand.id, "requested": count,
                                                 "generated": len(posts)})
        return posts

    def generate_campaign(self, brand: Brand, goal: CampaignGoal, duration_days: int, topic: str,
                          platform: Platform, tone: ToneOfVoice) -> List[Post]:
        """Generate a day-by-day campaign; each post carries its day number and theme"""
        def call() -> List[Post]:
            prompt = prompt_builder.build_campaign_prompt(brand, goal, duration_days, topic, platform, tone)
            raw = self.model_router.generate_content(
                "campaign", prompt, response_schema=CampaignResponse.json_schema()
            )
            parsed = parse_model_response(raw, CampaignResponse)
            generated = self._fit_count("campaign", parsed.campaign_posts, duration_days)
            return [
                self._to_post(p, Platform(platform), ContentType.SOCIAL_POST, topic,
                              day_in_campaign=p.day, campaign_theme=p.theme)
                for p in generated
            ]

        posts = self._run("campaign", call)
        self.logger.log_info("Campaign generated", {"brand_id": brand.id, "goal": CampaignGoal(goal).value,
                                                    "duration_days": duration_days, "generated": len(posts)})
        return posts

    def generate_topic_ideas(self, brand_description: str, dialect: Dialect) -> List[str]:
        def call() -> List[str]:
            prompt = prompt_builder.build_topic_ideas_prompt(brand_description, dialect)
            raw = self.model_router.generate_content(
                "topic_ideas", prompt, response_schema=TopicIdeasResponse.json_schema()
            )
            ideas = parse_model_response(raw, TopicIdeasResponse).ideas
            if not ideas:
                raise MalformedResponseError("Generation service returned no topic ideas", raw)
            return ideas

        return self._run("topic_ideas", call)

    def refine_post(self, text: str, action: RefinementAction, dialect: Dialect,
                    target_tone: Optional[ToneOfVoice] = None) -> str:
        """Rewrite `text`; the reply is used as-is, without JSON parsing"""
        def call() -> str:
            prompt = prompt_builder.build_refine_prompt(text, action, dialect, target_tone)
            raw = self.model_router.generate_content("refine", prompt)
            if not raw.strip():
                raise MalformedResponseError("Generation service returned empty refinement", raw)
            return raw.strip()

        return self._run("refine", call)

    def generate_hashtags(self, text: str, dialect: Dialect) -> List[str]:
        def call() -> List[str]:
            prompt = prompt_builder.build_hashtags_prompt(text, dialect)
            raw = self.model_router.generate_content(
                "hashtags", prompt, response_schema=HashtagsResponse.json_schema()
            )
            hashtags = parse_model_response(raw, HashtagsResponse).hashtags
            if not hashtags:
                raise MalformedResponseError("Generation service returned no hashtags", raw)
            return hashtags

        return self._run("hashtags", call)

    def generate_tagline(self, text: str, brand_description: str, dialect: Dialect) -> str:
        """Short design phrase for a post, generated under a small token cap"""
        def call() -> str:
            prompt = prompt_builder.build_tagline_prompt(text, brand_description, dialect)
            raw = self.model_router.generate_content(
                "tagline", prompt, max_tokens=self.tagline_max_tokens
            )
            tagline = raw.replace('"', '').strip()
            if not tagline:
                raise MalformedResponseError("Generation service returned an empty tagline", raw)
            return tagline

        return self._run("tagline", call)
