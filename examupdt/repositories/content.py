"""
One repository per content type.
"""

from typing import Dict, List, Optional, Type

from examupdt.errors import NotFoundError
from examupdt.models.schemas import (
    ContactMessage, ContactPayload, ExamResult, Internship, InternshipPayload,
    Job, JobPayload, Note, NotePayload, Post, PostPayload, Question,
    QuestionPayload, ResultPayload, VideoPayload, YouTubeVideo,
)
from examupdt.repositories.base import ContentRepository
from examupdt.services.list_engine import NUMBER, STRING


class ViewCounterMixin:
    """Public detail reads bump a views counter"""

    async def increment_views(self, record):
        views = (record.views or 0) + 1
        row = await self._call("update", self.client.update, record.id, {'views': views})
        if not row:
            raise NotFoundError(f"{self.entity_name.capitalize()} not found")
        return self.to_model(row)


class PostRepository(ViewCounterMixin, ContentRepository[Post]):
    table = "posts"
    entity_name = "post"
    model = Post
    payload_model = PostPayload
    date_field = "date"
    search_fields = ("title", "content", "category")
    filter_fields = ("category", "status")
    sort_fields = {"title": STRING, "views": NUMBER}
    create_defaults = {'status': 'draft', 'views': 0, 'tags': [], 'attachments': [], 'youtube_links': []}

    async def get_published(self, category: Optional[str] = None) -> List[Post]:
        filters = {'status': 'published'}
        if category and category.lower() != 'all':
            filters['category'] = category
        return await self.get_all(filters=filters)

    async def get_published_by_id(self, record_id: str) -> Post:
        post = await self.get_by_id(record_id)
        if post.status != 'published':
            raise NotFoundError("Post not found")
        return post


class ResultRepository(ContentRepository[ExamResult]):
    table = "results"
    entity_name = "result"
    model = ExamResult
    payload_model = ResultPayload
    date_field = "date"
    search_fields = ("title",)
    filter_fields = ("exam_type", "status")
    sort_fields = {"title": STRING, "views": NUMBER, "year": NUMBER}
    create_defaults = {'exam_type': 'B.Tech', 'status': 'Released', 'views': 0}


class NoteRepository(ContentRepository[Note]):
    table = "notes"
    entity_name = "note"
    model = Note
    payload_model = NotePayload
    date_field = "upload_date"
    search_fields = ("title", "subject", "topic")
    filter_fields = ("subject", "file_type")
    sort_fields = {"title": STRING, "downloads": NUMBER, "file_size": NUMBER}
    create_defaults = {'downloads': 0, 'file_size': 0, 'file_type': 'PDF'}


class QuestionRepository(ViewCounterMixin, ContentRepository[Question]):
    table = "questions"
    entity_name = "question"
    model = Question
    payload_model = QuestionPayload
    date_field = "created_at"
    search_fields = ("title", "subject", "topic")
    filter_fields = ("subject", "difficulty")
    sort_fields = {"title": STRING, "views": NUMBER}
    create_defaults = {'difficulty': 'Medium', 'views': 0}


class JobRepository(ContentRepository[Job]):
    table = "jobs"
    entity_name = "job"
    model = Job
    payload_model = JobPayload
    date_field = "posted_date"
    search_fields = ("title", "company", "location")
    filter_fields = ("job_mode", "status")
    sort_fields = {"title": STRING, "company": STRING, "applicants": NUMBER}
    create_defaults = {'status': 'Active', 'job_mode': 'Onsite', 'applicants': 0}

    async def get_active(self) -> List[Job]:
        return await self.get_all(filters={'status': 'Active'})


class InternshipRepository(ContentRepository[Internship]):
    table = "internships"
    entity_name = "internship"
    model = Internship
    payload_model = InternshipPayload
    date_field = "posted_date"
    search_fields = ("title", "company", "location")
    filter_fields = ("mode", "status")
    sort_fields = {"title": STRING, "company": STRING, "applicants": NUMBER}
    create_defaults = {'status': 'Active', 'mode': 'Onsite', 'applicants': 0}

    async def get_active(self) -> List[Internship]:
        return await self.get_all(filters={'status': 'Active'})


class VideoRepository(ContentRepository[YouTubeVideo]):
    table = "youtube_videos"
    entity_name = "video"
    model = YouTubeVideo
    payload_model = VideoPayload
    date_field = "uploaded_date"
    search_fields = ("title", "description")
    filter_fields = ("category",)
    sort_fields = {"title": STRING, "views": NUMBER}
    create_defaults = {'category': 'General', 'views': 0}


class MessageRepository(ContentRepository[ContactMessage]):
    table = "contact_messages"
    entity_name = "message"
    model = ContactMessage
    payload_model = ContactPayload
    date_field = "date"
    search_fields = ("name", "email", "message")
    filter_fields = ("status",)
    sort_fields = {"name": STRING}
    create_defaults = {'status': 'unread'}

    async def mark_as_read(self, record_id: str) -> ContactMessage:
        return await self.update(record_id, {'status': 'read'})


COLLECTIONS: Dict[str, Type[ContentRepository]] = {
    "posts": PostRepository,
    "results": ResultRepository,
    "notes": NoteRepository,
    "questions": QuestionRepository,
    "jobs": JobRepository,
    "internships": InternshipRepository,
    "videos": VideoRepository,
    "messages": MessageRepository,
}


def repository_for(collection: str, store) -> ContentRepository:
    """Look up the repository behind an admin collection name"""
    repository_class = COLLECTIONS.get(collection)
    if repository_class is None:
        raise NotFoundError(f"Unknown collection: {collection}")
    return repository_class(store)
