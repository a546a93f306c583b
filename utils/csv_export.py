import csv
import io
from collections import OrderedDict
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Union

from models.domain import Brand, Post


CSV_HEADERS = ['Date', 'Platform', 'Topic', 'Text', 'TOV Phrase', 'Hashtags']


def format_post_date(date_generated: str) -> str:
    """Render an ISO timestamp as 'YYYY-MM-DD HH:MM', leaving unparsable values as-is"""
    try:
        return datetime.fromisoformat(date_generated).strftime("%Y-%m-%d %H:%M")
    except (TypeError, ValueError):
        return date_generated or ""


def post_to_row(post: Post) -> List[str]:
    return [
        format_post_date(post.date_generated),
        post.platform.value,
        post.topic,
        post.text,
        post.tov_phrase,
        ' '.join(post.hashtags),
    ]


def posts_to_csv(posts: Iterable[Post]) -> str:
    """Serialize posts to CSV text.

    A field is quoted only when it contains a comma, a quote or a line break,
    and embedded quotes are doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')
    writer.writerow(CSV_HEADERS)
    for post in posts:
        writer.writerow(post_to_row(post))
    return buffer.getvalue()


def export_brand_csv(brand: Brand, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(posts_to_csv(brand.posts))
    return path


def group_posts_by_date(posts: Iterable[Post]) -> Dict[str, List[Post]]:
    """Group posts by generation day, newest day first and newest post first within a day"""
    grouped: Dict[str, List[Post]] = {}
    for post in posts:
        date_key = post.date_generated.split('T')[0] if post.date_generated else 'unknown'
        grouped.setdefault(date_key, []).append(post)

    ordered = OrderedDict()
    for date_key in sorted(grouped, reverse=True):
        ordered[date_key] = sorted(grouped[date_key], key=lambda p: p.date_generated, reverse=True)
    return ordered
