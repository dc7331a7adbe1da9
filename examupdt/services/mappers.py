"""
View-model mappers: stored record -> display shape.
Pure functions; `now` is injectable so relative labels are testable.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from examupdt.models.schemas import (
    ExamResult, Internship, Job, Note, Post, Question, YouTubeVideo,
)
from examupdt.services.formatters import (
    exam_label, format_date, format_file_size, format_posted_ago,
    format_relative_date, format_time_ago, strip_html_excerpt,
    youtube_embed_url, youtube_thumbnail_url, youtube_video_id,
)


def _dump(record) -> Dict[str, Any]:
    return record.model_dump(mode='json')


def map_post(post: Post, now: Optional[datetime] = None) -> Dict[str, Any]:
    view = _dump(post)
    view['time_ago'] = format_time_ago(post.date, now)
    view['excerpt'] = strip_html_excerpt(post.content)
    return view


def map_result(result: ExamResult, now: Optional[datetime] = None) -> Dict[str, Any]:
    view = _dump(result)
    view['exam'] = exam_label(result.exam_type, result.semester)
    view['pdf_link'] = result.link
    return view


def map_note(note: Note, now: Optional[datetime] = None) -> Dict[str, Any]:
    view = _dump(note)
    view['units'] = note.topic
    view['semester'] = note.subject
    view['file_size_label'] = format_file_size(note.file_size)
    view['upload_date_label'] = format_date(note.upload_date)
    return view


def map_question(question: Question, now: Optional[datetime] = None) -> Dict[str, Any]:
    view = _dump(question)
    view['created_label'] = format_date(question.created_at)
    return view


def _map_opening(record, kind: str, now: Optional[datetime]) -> Dict[str, Any]:
    view = _dump(record)
    view['type'] = kind
    view['position'] = record.title
    view['posted_time'] = format_posted_ago(record.posted_date, now)
    view['time_ago'] = format_time_ago(record.posted_date, now)
    view['trending'] = False
    return view


def map_job(job: Job, now: Optional[datetime] = None) -> Dict[str, Any]:
    return _map_opening(job, 'job', now)


def map_internship(internship: Internship, now: Optional[datetime] = None) -> Dict[str, Any]:
    return _map_opening(internship, 'internship', now)


def map_video(video: YouTubeVideo, now: Optional[datetime] = None) -> Dict[str, Any]:
    view = _dump(video)
    view['video_id'] = youtube_video_id(video.video_link)
    view['thumbnail'] = youtube_thumbnail_url(video.video_link, video.thumbnail_url)
    view['embed'] = youtube_embed_url(video.video_link, video.embed_link)
    view['uploaded_label'] = format_relative_date(video.uploaded_date, now)
    return view
