#!/usr/bin/env python3
"""
Pydantic models for request/response validation.
One canonical schema per entity; legacy camelCase spellings found in
stored rows and older clients are accepted through validation aliases.
"""

from datetime import datetime
from typing import Any, ClassVar, Dict, List, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

from examupdt.errors import ValidationError


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


# =============================================================================
# CONTENT RECORDS (stored shape)
# =============================================================================

class ContentRecord(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        extra='ignore',
        coerce_numbers_to_str=True,
    )

    id: str
    updated_at: Optional[datetime] = Field(None, validation_alias=_alias('updated_at', 'updatedAt'))


class Attachment(BaseModel):
    name: str
    size: str = ""
    url: Optional[str] = None


class Post(ContentRecord):
    title: str
    content: str = ""
    category: str = "General"
    tags: List[str] = []
    status: Literal['draft', 'published'] = 'draft'
    attachments: List[Attachment] = []
    youtube_links: List[str] = Field([], validation_alias=_alias('youtube_links', 'youtubeLinks'))
    date: Optional[datetime] = None
    views: int = 0
    author: Optional[str] = None
    trending: bool = False


class ExamResult(ContentRecord):
    title: str
    exam_type: str = "B.Tech"
    semester: str = ""
    year: Optional[int] = None
    link: str = ""
    pdf_file: Optional[str] = None
    status: str = "Released"
    date: Optional[datetime] = None
    views: int = 0


class Note(ContentRecord):
    title: str
    subject: str = ""
    topic: str = ""
    file_url: str = ""
    file_size: int = 0
    file_type: str = "PDF"
    thumbnail: Optional[str] = None
    upload_date: Optional[datetime] = Field(None, validation_alias=_alias('upload_date', 'uploadDate'))
    downloads: int = 0


class Question(ContentRecord):
    title: str
    subject: str = ""
    topic: str = ""
    content: str = ""
    image_url: Optional[str] = None
    difficulty: str = "Medium"
    created_at: Optional[datetime] = Field(None, validation_alias=_alias('created_at', 'createdDate'))
    views: int = 0


class Job(ContentRecord):
    title: str
    company: str = ""
    company_logo: Optional[str] = Field(None, validation_alias=_alias('company_logo', 'companyLogo'))
    salary: Optional[str] = None
    job_mode: str = Field("Onsite", validation_alias=_alias('job_mode', 'jobMode'))
    location: str = ""
    description: str = ""
    apply_link: str = Field("", validation_alias=_alias('apply_link', 'applyLink'))
    status: str = "Active"
    posted_date: Optional[datetime] = Field(None, validation_alias=_alias('posted_date', 'postedDate'))
    applicants: int = 0


class Internship(ContentRecord):
    title: str
    company: str = ""
    stipend: Optional[str] = None
    duration: str = ""
    mode: str = "Onsite"
    location: str = ""
    description: str = ""
    apply_link: str = Field("", validation_alias=_alias('apply_link', 'applyLink'))
    status: str = "Active"
    posted_date: Optional[datetime] = Field(None, validation_alias=_alias('posted_date', 'postedDate'))
    applicants: int = 0


class YouTubeVideo(ContentRecord):
    title: str
    video_link: str = ""
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    embed_link: Optional[str] = None
    category: str = "General"
    uploaded_date: Optional[datetime] = Field(None, validation_alias=_alias('uploaded_date', 'uploadedDate'))
    views: int = 0


class ContactMessage(ContentRecord):
    name: str
    email: str
    message: str
    date: Optional[datetime] = None
    status: Literal['unread', 'read'] = 'unread'
    reply: Optional[str] = None
    replied_at: Optional[datetime] = None


# =============================================================================
# WRITE PAYLOADS (create = full check, update = partial)
# =============================================================================

class ContentPayload(BaseModel):
    """Admin form payload. Every field optional; create checks REQUIRED_FIELDS."""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ()

    def ensure_required(self) -> None:
        missing = []
        for name in self.REQUIRED_FIELDS:
            value = getattr(self, name, None)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        if missing:
            raise ValidationError(missing=missing)

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually sent, canonical names, JSON-ready"""
        return self.model_dump(mode='json', exclude_unset=True)


class PostPayload(ContentPayload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('title', 'content')

    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    status: Optional[Literal['draft', 'published']] = None
    attachments: Optional[List[Attachment]] = None
    youtube_links: Optional[List[str]] = Field(None, validation_alias=_alias('youtube_links', 'youtubeLinks'))
    trending: Optional[bool] = None


class ResultPayload(ContentPayload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('title', 'semester')

    title: Optional[str] = None
    exam_type: Optional[Literal['B.Tech', 'M.Tech', 'PharmD']] = None
    semester: Optional[str] = None
    year: Optional[int] = None
    link: Optional[str] = None
    pdf_file: Optional[str] = None
    status: Optional[Literal['Released', 'Pending', 'Updated']] = None
    date: Optional[datetime] = None


class NotePayload(ContentPayload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('title', 'subject', 'file_url')

    title: Optional[str] = None
    subject: Optional[str] = None
    topic: Optional[str] = None
    file_url: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[Literal['PDF', 'DOC', 'PPT', 'ZIP']] = None
    thumbnail: Optional[str] = None
    upload_date: Optional[datetime] = Field(None, validation_alias=_alias('upload_date', 'uploadDate'))


class QuestionPayload(ContentPayload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('title', 'subject', 'topic', 'content')

    title: Optional[str] = None
    subject: Optional[str] = None
    topic: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    difficulty: Optional[Literal['Easy', 'Medium', 'Hard']] = None


class JobPayload(ContentPayload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('title', 'company', 'location')

    title: Optional[str] = None
    company: Optional[str] = None
    company_logo: Optional[str] = Field(None, validation_alias=_alias('company_logo', 'companyLogo'))
    salary: Optional[str] = None
    job_mode: Optional[Literal['Remote', 'Hybrid', 'Onsite']] = Field(None, validation_alias=_alias('job_mode', 'jobMode'))
    location: Optional[str] = None
    description: Optional[str] = None
    apply_link: Optional[str] = Field(None, validation_alias=_alias('apply_link', 'applyLink'))
    status: Optional[Literal['Active', 'Closed']] = None
    posted_date: Optional[datetime] = Field(None, validation_alias=_alias('posted_date', 'postedDate'))


class InternshipPayload(ContentPayload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('title', 'company', 'duration')

    title: Optional[str] = None
    company: Optional[str] = None
    stipend: Optional[str] = None
    duration: Optional[str] = None
    mode: Optional[Literal['Remote', 'Hybrid', 'Onsite']] = None
    location: Optional[str] = None
    description: Optional[str] = None
    apply_link: Optional[str] = Field(None, validation_alias=_alias('apply_link', 'applyLink'))
    status: Optional[Literal['Active', 'Closed']] = None
    posted_date: Optional[datetime] = Field(None, validation_alias=_alias('posted_date', 'postedDate'))


class VideoPayload(ContentPayload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('title', 'video_link')

    title: Optional[str] = None
    video_link: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    embed_link: Optional[str] = None
    category: Optional[str] = None
    uploaded_date: Optional[datetime] = Field(None, validation_alias=_alias('uploaded_date', 'uploadedDate'))


class ContactPayload(ContentPayload):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ('name', 'email', 'message')

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    message: Optional[str] = None


class BulkDeleteRequest(BaseModel):
    ids: List[str]


# =============================================================================
# AUTHENTICATION MODELS
# =============================================================================

class AuthUser(BaseModel):
    id: str
    email: str
    name: Optional[str] = None


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    user: AuthUser


# =============================================================================
# HEALTH AND DASHBOARD MODELS
# =============================================================================

class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: datetime


class DashboardStats(BaseModel):
    total_posts: int = 0
    published_posts: int = 0
    total_views: int = 0
    unread_messages: int = 0
    categories: Dict[str, int] = {}
    total_results: int = 0
    total_notes: int = 0
    total_downloads: int = 0
