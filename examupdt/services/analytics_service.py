"""
Dashboard statistics for the admin home screen.
"""

import asyncio
import logging
from collections import Counter

from examupdt.models.schemas import DashboardStats
from examupdt.repositories.content import MessageRepository, NoteRepository, PostRepository, ResultRepository

logger = logging.getLogger(__name__)


class AnalyticsService:
    def __init__(self, store):
        self.posts = PostRepository(store)
        self.results = ResultRepository(store)
        self.notes = NoteRepository(store)
        self.messages = MessageRepository(store)

    async def get_stats(self) -> DashboardStats:
        posts, results, notes, unread = await asyncio.gather(
            self.posts.get_all(),
            self.results.get_all(),
            self.notes.get_all(),
            self.messages.count({'status': 'unread'}),
        )

        stats = DashboardStats(
            total_posts=len(posts),
            published_posts=len([p for p in posts if p.status == 'published']),
            total_views=sum(p.views or 0 for p in posts) + sum(r.views or 0 for r in results),
            unread_messages=unread,
            categories=dict(Counter(p.category for p in posts)),
            total_results=len(results),
            total_notes=len(notes),
            total_downloads=sum(n.downloads or 0 for n in notes),
        )
        logger.info(f"📊 Dashboard stats: {stats.total_posts} posts, {stats.unread_messages} unread messages")
        return stats
