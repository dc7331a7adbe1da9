"""
Tests for display formatters and view-model mappers
"""
from datetime import datetime, timedelta, timezone

import pytest

from examupdt.models.schemas import ExamResult, Job, Note, YouTubeVideo
from examupdt.services.formatters import (
    exam_label, format_date, format_file_size, format_posted_ago,
    format_relative_date, format_time_ago, parse_exam_filter,
    strip_html_excerpt, youtube_embed_url, youtube_thumbnail_url, youtube_video_id,
)
from examupdt.services.mappers import map_job, map_note, map_result, map_video

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def ago(**delta):
    return (NOW - timedelta(**delta)).isoformat()


class TestTimeAgo:
    @pytest.mark.parametrize('delta,expected', [
        (timedelta(minutes=0), 'Just now'),
        (timedelta(minutes=59), 'Just now'),
        (timedelta(minutes=60), '1 hours ago'),
        (timedelta(hours=23, minutes=59), '23 hours ago'),
        (timedelta(hours=24), '1 day ago'),
        (timedelta(hours=47), '1 day ago'),
        (timedelta(hours=48), '2 days ago'),
        (timedelta(days=40), '40 days ago'),
    ])
    def test_boundaries(self, delta, expected):
        assert format_time_ago((NOW - delta).isoformat(), now=NOW) == expected

    def test_accepts_trailing_z(self):
        assert format_time_ago('2025-03-10T09:00:00Z', now=NOW) == '3 hours ago'

    def test_unparseable_value_is_returned_as_is(self):
        assert format_time_ago('last week', now=NOW) == 'last week'


class TestRelativeDates:
    @pytest.mark.parametrize('days,expected', [
        (0, 'Today'), (1, 'Yesterday'), (3, '3 days ago'),
        (14, '2 weeks ago'), (65, '2 months ago'),
    ])
    def test_relative_date(self, days, expected):
        assert format_relative_date(ago(days=days), now=NOW) == expected

    def test_relative_date_falls_back_to_absolute(self):
        assert format_relative_date('2023-07-04T00:00:00+00:00', now=NOW) == '7/4/2023'

    def test_posted_ago_counts_years(self):
        assert format_posted_ago(ago(days=800), now=NOW) == '2 years ago'
        assert format_posted_ago(ago(days=1), now=NOW) == 'Yesterday'

    def test_formatters_disagree_on_the_same_instant(self):
        moment = ago(hours=30)
        assert format_time_ago(moment, now=NOW) == '1 day ago'
        assert format_relative_date(moment, now=NOW) == 'Yesterday'


class TestFileSize:
    @pytest.mark.parametrize('size,expected', [
        (0, '0 B'),
        (1023, '1023 B'),
        (1024, '1.0 KB'),
        (1536, '1.5 KB'),
        (1280, '1.3 KB'),
        (2304, '2.3 KB'),
        (1048575, '1024.0 KB'),
        (1048576, '1.0 MB'),
        (1310720, '1.3 MB'),
        (None, '0 B'),
    ])
    def test_units(self, size, expected):
        assert format_file_size(size) == expected


class TestExamLabels:
    def test_label_and_filter_round_trip(self):
        label = exam_label('B.Tech', '1-1')
        assert label == 'B.Tech 1-1'
        assert parse_exam_filter(label) == ('B.Tech', '1-1')

    def test_filter_splits_on_first_space_only(self):
        assert parse_exam_filter('M.Tech 2-1 Supply') == ('M.Tech', '2-1 Supply')

    @pytest.mark.parametrize('label', [None, '', 'all', 'All', 'PharmD'])
    def test_unconstrained_labels(self, label):
        assert parse_exam_filter(label) is None


class TestYouTube:
    @pytest.mark.parametrize('url', [
        'https://www.youtube.com/watch?v=dQw4w9WgXcQ',
        'https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42',
        'https://youtu.be/dQw4w9WgXcQ',
        'https://www.youtube.com/embed/dQw4w9WgXcQ',
        'dQw4w9WgXcQ',
    ])
    def test_video_id(self, url):
        assert youtube_video_id(url) == 'dQw4w9WgXcQ'

    def test_unrecognised_link_is_returned_unchanged(self):
        assert youtube_video_id('https://vimeo.com/1234') == 'https://vimeo.com/1234'

    def test_custom_thumbnail_and_embed_win(self):
        assert youtube_thumbnail_url('https://youtu.be/dQw4w9WgXcQ', 'https://cdn/x.jpg') == 'https://cdn/x.jpg'
        assert youtube_embed_url('https://youtu.be/dQw4w9WgXcQ') == 'https://www.youtube.com/embed/dQw4w9WgXcQ'


def test_excerpt_strips_tags():
    assert strip_html_excerpt('<p>Hello <b>world</b></p>', length=8) == 'Hello wo'


def test_format_date():
    assert format_date('2025-01-05T08:00:00Z') == 'Jan 5, 2025'


class TestMappers:
    def test_result_view(self):
        view = map_result(ExamResult(id='r1', title='R20 Regular', exam_type='B.Tech', semester='2-2',
                                     link='https://results/r1.pdf'))
        assert view['exam'] == 'B.Tech 2-2'
        assert view['pdf_link'] == 'https://results/r1.pdf'

    def test_note_view_accepts_legacy_upload_date(self):
        note = Note.model_validate({'id': 'n1', 'title': 'DBMS', 'subject': 'B.Tech 2-1', 'topic': 'Unit 1-5',
                                    'file_size': 2048, 'uploadDate': '2025-01-05T08:00:00Z'})
        view = map_note(note)
        assert view['semester'] == 'B.Tech 2-1'
        assert view['units'] == 'Unit 1-5'
        assert view['file_size_label'] == '2.0 KB'
        assert view['upload_date_label'] == 'Jan 5, 2025'

    def test_job_view(self):
        job = Job(id='j1', title='Backend Intern', company='Acme', posted_date=ago(days=2))
        view = map_job(job, now=NOW)
        assert view['type'] == 'job'
        assert view['position'] == 'Backend Intern'
        assert view['posted_time'] == '2 days ago'
        assert view['time_ago'] == '2 days ago'
        assert view['trending'] is False

    def test_video_view(self):
        video = YouTubeVideo(id='v1', title='Unit 1', video_link='https://youtu.be/dQw4w9WgXcQ',
                             uploaded_date=ago(days=14))
        view = map_video(video, now=NOW)
        assert view['video_id'] == 'dQw4w9WgXcQ'
        assert view['thumbnail'] == 'https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg'
        assert view['uploaded_label'] == '2 weeks ago'
