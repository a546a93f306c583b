#!/usr/bin/env python3
"""
Command-line front end for the SocialPost AI content assistant.
Manages brands and generates brand-voiced social posts and campaigns.
"""

import argparse
import copy
import json
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from dotenv import load_dotenv

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from agents.brand_store import STORAGE_KEY, BrandStore
from agents.content_agent import ContentAgent, GenerationError
from models.domain import (
    DEFAULT_DIALECT,
    Brand,
    BrandIdentity,
    BrandLexicon,
    CampaignGoal,
    ContentType,
    Dialect,
    Platform,
    Post,
    RefinementAction,
    ToneOfVoice,
)
from utils.api_client import GenerationClient, ModelRouter
from utils.csv_export import export_brand_csv, group_posts_by_date
from utils.file_manager import FileManager
from utils.logger import AgentLogger


DEFAULT_SETTINGS: Dict[str, Any] = {
    "generation": {
        "base_url": "https://openrouter.ai/api/v1",
        "model": "google/gemini-2.5-flash",
        "task_models": {},
        "task_reasoning": {"tagline": {"max_tokens": 0}},
        "max_tokens": 4000,
        "tagline_max_tokens": 20,
        "temperature": 0.7,
        "request_timeout": 120,
    },
    "storage": {
        "path": "data/local_storage.json",
        "key": STORAGE_KEY,
        "export_dir": "data/exports",
    },
    "defaults": {
        "dialect": DEFAULT_DIALECT.value,
    },
}

POST_COUNT_RANGE = (1, 20)
CAMPAIGN_DAYS_RANGE = (1, 14)


def load_config(settings_path: str = "config/settings.json",
                env_path: str = "config/api_keys.env") -> Dict[str, Any]:
    """Load settings and API keys; missing settings fall back to defaults"""
    load_dotenv(env_path)

    config = copy.deepcopy(DEFAULT_SETTINGS)
    path = Path(settings_path)
    if path.exists():
        with open(path, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
        for section, values in overrides.items():
            if isinstance(values, dict) and isinstance(config.get(section), dict):
                config[section].update(values)
            else:
                config[section] = values

    config["openrouter_api_key"] = os.getenv("OPENROUTER_API_KEY")
    return config


def create_store(config: Dict[str, Any]) -> BrandStore:
    storage = config["storage"]
    store = BrandStore(
        FileManager(storage["path"], storage.get("export_dir", "data/exports")),
        storage_key=storage.get("key", STORAGE_KEY),
        default_dialect=Dialect(config["defaults"]["dialect"]),
    )
    store.load()
    return store


def create_content_agent(config: Dict[str, Any]) -> ContentAgent:
    """Build the generation façade; raises ValueError when no API key is configured"""
    client = GenerationClient(config.get("openrouter_api_key"), config)
    return ContentAgent(ModelRouter(client, config), config)


def clamp(value: int, bounds: tuple) -> int:
    low, high = bounds
    return max(low, min(high, value))


def enum_arg(enum_cls: Type[Enum]):
    """argparse type accepting an enum value or member name, case-insensitively"""
    def parse(raw: str):
        for member in enum_cls:
            if raw.lower() in (member.value.lower(), member.name.lower()):
                return member
        choices = ", ".join(m.value for m in enum_cls)
        raise argparse.ArgumentTypeError(f"invalid choice '{raw}' (choose from: {choices})")
    parse.__name__ = enum_cls.__name__
    return parse


def require_brand(store: BrandStore, brand_id: str) -> Brand:
    brand = store.get_brand(brand_id)
    if brand is None:
        raise LookupError(f"Brand not found: {brand_id}")
    return brand


def require_post(store: BrandStore, brand_id: str, post_id: str) -> Post:
    post = store.get_post(brand_id, post_id)
    if post is None:
        raise LookupError(f"Post not found: {post_id}")
    return post


def print_post(post: Post, indent: str = "   "):
    header = f"[{post.id}] {post.platform.value} | {post.content_type.value}"
    if post.day_in_campaign is not None:
        header += f" | Day {post.day_in_campaign}: {post.campaign_theme or ''}"
    print(f"{indent}{header}")
    print(f"{indent}Topic: {post.topic}")
    for line in post.text.splitlines() or [""]:
        print(f"{indent}  {line}")
    if post.tov_phrase:
        print(f"{indent}🎨 Tagline: {post.tov_phrase}")
    if post.hashtags:
        print(f"{indent}#️⃣  {' '.join(post.hashtags)}")
    if post.visual_inspiration:
        visual = post.visual_inspiration
        print(f"{indent}🖼️  {visual.description}")
        if visual.color_palette:
            print(f"{indent}   Palette: {', '.join(visual.color_palette)}")
        print(f"{indent}   Image prompt: {visual.image_prompt}")
    print()


def cmd_brands(args, store: BrandStore, config: Dict[str, Any]) -> int:
    if not store.brands:
        print("No brands yet. Add one with: python main.py add-brand --name ... --description ...")
        return 0
    print(f"📇 {len(store.brands)} brand(s)")
    print("=" * 60)
    for brand in store.brands:
        print(f"• {brand.name} [{brand.id}]")
        print(f"   {brand.description}")
        print(f"   Dialect: {brand.dialect.value} | Posts: {len(brand.posts)}")
    return 0


def cmd_add_brand(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = store.add_brand(args.name, args.description, args.dialect)
    if brand is None:
        print("❌ Brand name and description are required")
        return 1
    print(f"✅ Brand added: {brand.name} [{brand.id}]")
    return 0


def cmd_delete_brand(args, store: BrandStore, config: Dict[str, Any]) -> int:
    if not store.delete_brand(args.brand_id):
        print(f"❌ Brand not found: {args.brand_id}")
        return 1
    print(f"🗑️  Brand deleted: {args.brand_id}")
    return 0


def cmd_identity(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = require_brand(store, args.brand_id)
    if args.show:
        print(json.dumps(brand.identity.to_record(), indent=2, ensure_ascii=False))
        return 0

    identity = BrandIdentity(
        audience_persona=args.persona,
        content_pillars=args.pillar or [],
        brand_lexicon=BrandLexicon(
            keywords_to_use=args.use or [],
            keywords_to_avoid=args.avoid or [],
        ),
        success_examples=args.example or [],
    )
    store.save_identity(brand.id, identity)
    print(f"✅ Identity saved for {brand.name}")
    return 0


def cmd_ideas(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = require_brand(store, args.brand_id)
    agent = create_content_agent(config)
    print(f"💡 Topic ideas for {brand.name}:")
    for idea in agent.generate_topic_ideas(brand.description, brand.dialect):
        print(f"   • {idea}")
    return 0


def cmd_generate(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = require_brand(store, args.brand_id)
    agent = create_content_agent(config)
    count = clamp(args.count, POST_COUNT_RANGE)

    print(f"✍️  Generating {count} post(s) for {brand.name}...")
    posts = agent.generate_posts(brand, args.platform, args.tone, count, args.content_type, args.topic)
    store.append_posts(brand.id, posts)

    print(f"✅ {len(posts)} post(s) generated and saved")
    print("=" * 60)
    for post in posts:
        print_post(post)
    return 0


def cmd_campaign(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = require_brand(store, args.brand_id)
    agent = create_content_agent(config)
    days = clamp(args.days, CAMPAIGN_DAYS_RANGE)

    print(f"📅 Planning a {days}-day '{args.goal.value}' campaign for {brand.name}...")
    posts = agent.generate_campaign(brand, args.goal, days, args.topic, args.platform, args.tone)

    if args.dry_run:
        print("ℹ️  Dry run: campaign not saved")
    else:
        store.append_posts(brand.id, posts)
        print(f"✅ Campaign saved ({len(posts)} post(s))")
    print("=" * 60)
    for post in sorted(posts, key=lambda p: p.day_in_campaign or 0):
        print_post(post)
    return 0


def cmd_refine(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = require_brand(store, args.brand_id)
    post = require_post(store, brand.id, args.post_id)
    if args.action is RefinementAction.CHANGE_TONE and args.tone is None:
        print("❌ --tone is required for changeTone")
        return 1

    agent = create_content_agent(config)
    new_text = agent.refine_post(post.text, args.action, brand.dialect, args.tone)
    updated = store.update_post(brand.id, post.id, {"text": new_text})
    print("✅ Post refined")
    print_post(updated)
    return 0


def cmd_hashtags(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = require_brand(store, args.brand_id)
    post = require_post(store, brand.id, args.post_id)
    agent = create_content_agent(config)
    hashtags = agent.generate_hashtags(post.text, brand.dialect)
    store.update_post(brand.id, post.id, {"hashtags": hashtags})
    print(f"✅ Hashtags: {' '.join(hashtags)}")
    return 0


def cmd_tagline(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = require_brand(store, args.brand_id)
    post = require_post(store, brand.id, args.post_id)
    agent = create_content_agent(config)
    tagline = agent.generate_tagline(post.text, brand.description, brand.dialect)
    store.update_post(brand.id, post.id, {"tovPhrase": tagline})
    print(f"✅ Design tagline: {tagline}")
    return 0


def cmd_set_tagline(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = require_brand(store, args.brand_id)
    post = require_post(store, brand.id, args.post_id)
    if args.text != post.tov_phrase:
        store.update_post(brand.id, post.id, {"tovPhrase": args.text})
    print("✅ Design tagline updated")
    return 0


def cmd_history(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = require_brand(store, args.brand_id)
    if not brand.posts:
        print(f"No posts yet for {brand.name}")
        return 0

    print(f"🗂️  Content history for {brand.name} ({len(brand.posts)} post(s))")
    print("=" * 60)
    for date_key, posts in group_posts_by_date(brand.posts).items():
        print(f"📆 {date_key} ({len(posts)} post(s))")
        for post in posts:
            print_post(post)
    return 0


def cmd_export(args, store: BrandStore, config: Dict[str, Any]) -> int:
    brand = require_brand(store, args.brand_id)
    if not brand.posts:
        print(f"Nothing to export: {brand.name} has no posts")
        return 0
    path = args.output or FileManager(
        config["storage"]["path"], config["storage"].get("export_dir", "data/exports")
    ).export_path(brand.name)
    written = export_brand_csv(brand, path)
    print(f"📁 Exported {len(brand.posts)} post(s) to {written}")
    return 0


def cmd_status(args, store: BrandStore, config: Dict[str, Any]) -> int:
    """Display configuration and storage health"""
    print("🔍 System Status Check")
    print("=" * 40)
    generation = config["generation"]
    print(f"✅ Model: {generation['model']} via {generation['base_url']}")
    if generation.get("task_models"):
        for task, model in generation["task_models"].items():
            print(f"   • {task}: {model}")

    if config.get("openrouter_api_key"):
        print("✅ OpenRouter API key configured")
    else:
        print("❌ OpenRouter API key missing (generation commands will fail)")

    storage_path = Path(config["storage"]["path"])
    if storage_path.exists():
        print(f"✅ Storage file: {storage_path}")
    else:
        print(f"⚠️  Storage file not created yet: {storage_path}")
    post_total = sum(len(b.posts) for b in store.brands)
    print(f"✅ {len(store.brands)} brand(s), {post_total} post(s) loaded")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="main.py",
        description="SocialPost AI: brand-voiced social media content generation",
    )
    parser.add_argument("--settings", default="config/settings.json", help="settings JSON file")
    parser.add_argument("--env", default="config/api_keys.env", help="API keys env file")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("brands", help="list brands").set_defaults(handler=cmd_brands)
    sub.add_parser("status", help="check configuration and storage").set_defaults(handler=cmd_status)

    p = sub.add_parser("add-brand", help="create a brand")
    p.add_argument("--name", required=True)
    p.add_argument("--description", required=True)
    p.add_argument("--dialect", type=enum_arg(Dialect), default=None)
    p.set_defaults(handler=cmd_add_brand)

    p = sub.add_parser("delete-brand", help="delete a brand and all its posts")
    p.add_argument("brand_id")
    p.set_defaults(handler=cmd_delete_brand)

    p = sub.add_parser("identity", help="replace (or show) a brand's identity profile")
    p.add_argument("brand_id")
    p.add_argument("--show", action="store_true")
    p.add_argument("--persona")
    p.add_argument("--pillar", action="append")
    p.add_argument("--use", action="append", help="keyword to use")
    p.add_argument("--avoid", action="append", help="keyword to avoid")
    p.add_argument("--example", action="append", help="successful example post")
    p.set_defaults(handler=cmd_identity)

    p = sub.add_parser("ideas", help="suggest topic ideas for a brand")
    p.add_argument("brand_id")
    p.set_defaults(handler=cmd_ideas)

    p = sub.add_parser("generate", help="generate posts for a brand")
    p.add_argument("brand_id")
    p.add_argument("--topic", required=True)
    p.add_argument("--platform", type=enum_arg(Platform), default=Platform.FACEBOOK)
    p.add_argument("--tone", type=enum_arg(ToneOfVoice), default=ToneOfVoice.FRIENDLY)
    p.add_argument("--count", type=int, default=5)
    p.add_argument("--content-type", type=enum_arg(ContentType), default=ContentType.SOCIAL_POST)
    p.set_defaults(handler=cmd_generate)

    p = sub.add_parser("campaign", help="generate a multi-day campaign")
    p.add_argument("brand_id")
    p.add_argument("--topic", required=True)
    p.add_argument("--goal", type=enum_arg(CampaignGoal), default=CampaignGoal.PRODUCT_LAUNCH)
    p.add_argument("--days", type=int, default=5)
    p.add_argument("--platform", type=enum_arg(Platform), default=Platform.INSTAGRAM)
    p.add_argument("--tone", type=enum_arg(ToneOfVoice), default=ToneOfVoice.FRIENDLY)
    p.add_argument("--dry-run", action="store_true", help="show the plan without saving it")
    p.set_defaults(handler=cmd_campaign)

    p = sub.add_parser("refine", help="rephrase, shorten, lengthen or re-tone a post")
    p.add_argument("brand_id")
    p.add_argument("post_id")
    p.add_argument("--action", type=enum_arg(RefinementAction), required=True)
    p.add_argument("--tone", type=enum_arg(ToneOfVoice), default=None)
    p.set_defaults(handler=cmd_refine)

    for name, handler, help_text in (
        ("hashtags", cmd_hashtags, "suggest hashtags for a post"),
        ("tagline", cmd_tagline, "generate a design tagline for a post"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("brand_id")
        p.add_argument("post_id")
        p.set_defaults(handler=handler)

    p = sub.add_parser("set-tagline", help="edit a post's design tagline by hand")
    p.add_argument("brand_id")
    p.add_argument("post_id")
    p.add_argument("text")
    p.set_defaults(handler=cmd_set_tagline)

    p = sub.add_parser("history", help="show a brand's posts grouped by date")
    p.add_argument("brand_id")
    p.set_defaults(handler=cmd_history)

    p = sub.add_parser("export", help="export a brand's posts to CSV")
    p.add_argument("brand_id")
    p.add_argument("--output", help="CSV path (default: data/exports/<brand>_content_history.csv)")
    p.set_defaults(handler=cmd_export)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    logger = AgentLogger("main_app")

    try:
        config = load_config(args.settings, args.env)
        store = create_store(config)
        return args.handler(args, store, config)
    except GenerationError as e:
        print(f"❌ {e.user_message}")
        return 1
    except LookupError as e:
        print(f"❌ {e.args[0]}")
        return 1
    except (ValueError, OSError) as e:
        print(f"❌ Error: {e}")
        logger.log_error("command_failed", str(e), {"command": args.command})
        return 1


if __name__ == "__main__":
    sys.exit(main())
