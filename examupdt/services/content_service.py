#!/usr/bin/env python3
"""
Content service for the public portal pages.
Reads fail soft: a store fault is logged and the page gets an empty list.
Writes fail loud and propagate.
"""

import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Optional

from examupdt.errors import ExamupdtError
from examupdt.models.schemas import ContactPayload
from examupdt.repositories.content import (
    InternshipRepository, JobRepository, MessageRepository, NoteRepository,
    PostRepository, QuestionRepository, ResultRepository, VideoRepository,
)
from examupdt.services.formatters import parse_exam_filter
from examupdt.services.mappers import (
    map_internship, map_job, map_note, map_post, map_question, map_result, map_video,
)

logger = logging.getLogger(__name__)


def _constrains(value: Optional[str]) -> bool:
    return bool(value) and value.lower() != 'all'


class ContentService:
    def __init__(self, store):
        self.posts = PostRepository(store)
        self.results = ResultRepository(store)
        self.notes = NoteRepository(store)
        self.questions = QuestionRepository(store)
        self.jobs = JobRepository(store)
        self.internships = InternshipRepository(store)
        self.videos = VideoRepository(store)
        self.messages = MessageRepository(store)

    async def _fail_soft(self, label: str, fetch: Awaitable[List[Any]]) -> List[Any]:
        try:
            return await fetch
        except ExamupdtError as e:
            logger.error(f"❌ Failed to fetch {label}: {e.message}")
            return []

    async def get_posts(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        posts = await self._fail_soft("posts", self.posts.get_published(category))
        return [map_post(post) for post in posts]

    async def get_post(self, post_id: str) -> Dict[str, Any]:
        """Published post by id; each read counts one view"""
        post = await self.posts.get_published_by_id(post_id)
        post = await self.posts.increment_views(post)
        return map_post(post)

    async def get_results(self, exam: Optional[str] = None) -> List[Dict[str, Any]]:
        filters, contains = None, None
        parsed = parse_exam_filter(exam)
        if parsed:
            exam_type, semester = parsed
            filters = {'exam_type': exam_type}
            if semester:
                contains = {'semester': semester}
        results = await self._fail_soft("results", self.results.get_all(filters=filters, contains=contains))
        return [map_result(result) for result in results]

    async def get_notes(self, semester: Optional[str] = None) -> List[Dict[str, Any]]:
        contains = {'subject': semester} if _constrains(semester) else None
        notes = await self._fail_soft("notes", self.notes.get_all(contains=contains))
        return [map_note(note) for note in notes]

    async def get_questions(self, subject: Optional[str] = None, difficulty: Optional[str] = None) -> List[Dict[str, Any]]:
        filters = {}
        if _constrains(subject):
            filters['subject'] = subject
        if _constrains(difficulty):
            filters['difficulty'] = difficulty
        questions = await self._fail_soft("questions", self.questions.get_all(filters=filters or None))
        return [map_question(question) for question in questions]

    async def get_question(self, question_id: str) -> Dict[str, Any]:
        question = await self.questions.get_by_id(question_id)
        question = await self.questions.increment_views(question)
        return map_question(question)

    async def get_jobs(self) -> List[Dict[str, Any]]:
        jobs = await self._fail_soft("jobs", self.jobs.get_active())
        return [map_job(job) for job in jobs]

    async def get_internships(self) -> List[Dict[str, Any]]:
        internships = await self._fail_soft("internships", self.internships.get_active())
        return [map_internship(internship) for internship in internships]

    async def get_openings(self) -> Dict[str, List[Dict[str, Any]]]:
        """Jobs and internships fetched concurrently; returns once both are in"""
        jobs, internships = await asyncio.gather(self.get_jobs(), self.get_internships())
        return {'jobs': jobs, 'internships': internships}

    async def get_videos(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        filters = {'category': category} if _constrains(category) else None
        videos = await self._fail_soft("videos", self.videos.get_all(filters=filters))
        return [map_video(video) for video in videos]

    async def send_contact(self, payload: ContactPayload) -> None:
        await self.messages.create(payload, extra={'status': 'unread'})
        logger.info(f"📨 Contact message received from: {payload.email}")
