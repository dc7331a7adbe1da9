"""
Display formatters shared by the view-model mappers.

Three relative-time formatters exist on purpose, each bound to its screens:

- format_time_ago: home feed, notifications, post detail, jobs page
  ("Just now" / "N hours ago" / "1 day ago" / "N days ago", no weeks)
- format_relative_date: YouTube page (weeks/months, then an absolute date)
- format_posted_ago: public jobs/internships list (weeks/months/years)

They disagree on wording ("1 hours ago" vs "Yesterday") and must stay
separate.
"""

import math
import re
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR

YOUTUBE_ID_PATTERNS = [
    re.compile(r'(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)'),
    re.compile(r'^([a-zA-Z0-9_-]{11})$'),
]
HTML_TAG = re.compile(r'<[^>]*>')


def parse_timestamp(value: Any) -> Optional[datetime]:
    """datetime or ISO-8601 string -> aware UTC datetime, None when unparseable"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _now(now: Optional[datetime]) -> datetime:
    return parse_timestamp(now) if now is not None else datetime.now(timezone.utc)


def _elapsed_seconds(value: Any, now: Optional[datetime]) -> Optional[float]:
    moment = parse_timestamp(value)
    if moment is None:
        return None
    return (_now(now) - moment).total_seconds()


def format_time_ago(value: Any, now: Optional[datetime] = None) -> str:
    elapsed = _elapsed_seconds(value, now)
    if elapsed is None:
        return str(value or "")

    hours = math.floor(elapsed / SECONDS_PER_HOUR)
    days = math.floor(elapsed / SECONDS_PER_DAY)

    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours} hours ago"
    if days == 1:
        return "1 day ago"
    return f"{days} days ago"


def format_relative_date(value: Any, now: Optional[datetime] = None) -> str:
    elapsed = _elapsed_seconds(value, now)
    if elapsed is None:
        return str(value or "")

    days = math.floor(elapsed / SECONDS_PER_DAY)
    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    if days < 365:
        return f"{days // 30} months ago"
    moment = parse_timestamp(value)
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_posted_ago(value: Any, now: Optional[datetime] = None) -> str:
    elapsed = _elapsed_seconds(value, now)
    if elapsed is None:
        return str(value or "")

    days = math.floor(elapsed / SECONDS_PER_DAY)
    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    if days < 365:
        return f"{days // 30} months ago"
    return f"{days // 365} years ago"


def _one_decimal(value: float) -> str:
    """One decimal place, ties rounded up (2304 B is 2.25 KB, shown as 2.3)"""
    return f"{math.floor(value * 10 + 0.5) / 10:.1f}"


def format_file_size(size: Optional[int]) -> str:
    size = size or 0
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{_one_decimal(size / 1024)} KB"
    return f"{_one_decimal(size / (1024 * 1024))} MB"


def format_date(value: Any) -> str:
    """'Jan 5, 2025' style date"""
    moment = parse_timestamp(value)
    if moment is None:
        return str(value or "")
    return f"{moment.strftime('%b')} {moment.day}, {moment.year}"


def exam_label(exam_type: Optional[str], semester: Optional[str]) -> str:
    return f"{exam_type} {semester}"


def parse_exam_filter(label: Optional[str]) -> Optional[Tuple[str, str]]:
    """'B.Tech 1-1' -> ('B.Tech', '1-1'); None when the label does not constrain"""
    if not label or label.lower() == "all":
        return None
    parts = label.split(' ', 1)
    if len(parts) < 2:
        return None
    return parts[0], parts[1]


def youtube_video_id(url: str) -> str:
    for pattern in YOUTUBE_ID_PATTERNS:
        match = pattern.search(url or "")
        if match and match.group(1):
            return match.group(1)
    return url


def youtube_thumbnail_url(video_url: str, custom_thumbnail: Optional[str] = None) -> str:
    if custom_thumbnail:
        return custom_thumbnail
    return f"https://img.youtube.com/vi/{youtube_video_id(video_url)}/maxresdefault.jpg"


def youtube_embed_url(video_url: str, custom_embed: Optional[str] = None) -> str:
    if custom_embed:
        return custom_embed
    return f"https://www.youtube.com/embed/{youtube_video_id(video_url)}"


def strip_html_excerpt(content: Optional[str], length: int = 200) -> str:
    return HTML_TAG.sub('', content or '')[:length]
