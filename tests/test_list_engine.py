"""
Tests for the search -> filter -> sort -> paginate pipeline
"""
import copy

import pytest

from examupdt.models.pagination import ListQuery, SortDirection
from examupdt.services.list_engine import (
    DATE, NUMBER, STRING, FieldAccessors, list_engine, process_list, resolve_sort,
)

ACCESSORS = FieldAccessors(
    searchable=('title', 'category'),
    filterable=('category', 'status'),
    sortable={'title': STRING, 'date': DATE, 'views': NUMBER},
)


def make_posts(count):
    categories = ['Exams', 'Results', 'Events']
    return [
        {
            'id': f'p{i}',
            'title': f'Post {i:02d}',
            'category': categories[i % 3],
            'status': 'published' if i % 2 == 0 else 'draft',
            'date': f'2025-01-{(i % 28) + 1:02d}T10:00:00+00:00',
            'views': i * 3,
        }
        for i in range(count)
    ]


class TestSearch:
    def test_search_is_case_insensitive_across_fields(self):
        posts = [
            {'id': '1', 'title': 'Mid Exam Timetable', 'category': 'Exams'},
            {'id': '2', 'title': 'Fest dates', 'category': 'Events'},
            {'id': '3', 'title': 'Holiday', 'category': 'EXAMS'},
        ]
        found = list_engine.search(posts, 'exam', ACCESSORS)
        assert [p['id'] for p in found] == ['1', '3']

    def test_empty_search_keeps_everything(self):
        posts = make_posts(5)
        assert list_engine.search(posts, '', ACCESSORS) == posts

    def test_missing_fields_never_match(self):
        posts = [{'id': '1', 'title': None}, {'id': '2'}]
        assert list_engine.search(posts, 'none', ACCESSORS) == []


class TestFilter:
    def test_all_and_empty_filter_values_do_not_constrain(self):
        posts = make_posts(6)
        query = ListQuery(filters={'category': 'All', 'status': ''})
        result = process_list(posts, query, ACCESSORS)
        assert result.total_count == 6

    def test_unknown_filter_fields_are_ignored(self):
        posts = make_posts(4)
        assert list_engine.filter(posts, {'colour': 'red'}, ACCESSORS) == posts

    def test_filters_are_conjunctive(self):
        posts = make_posts(12)
        kept = list_engine.filter(posts, {'category': 'Exams', 'status': 'published'}, ACCESSORS)
        assert kept
        assert all(p['category'] == 'Exams' and p['status'] == 'published' for p in kept)


class TestSort:
    def test_sort_is_stable_for_equal_keys(self):
        posts = [
            {'id': 'a', 'views': 5},
            {'id': 'b', 'views': 1},
            {'id': 'c', 'views': 5},
            {'id': 'd', 'views': 5},
        ]
        asc = list_engine.sort(posts, 'views', SortDirection.ASC, ACCESSORS)
        assert [p['id'] for p in asc] == ['b', 'a', 'c', 'd']

        desc = list_engine.sort(posts, 'views', SortDirection.DESC, ACCESSORS)
        assert [p['id'] for p in desc] == ['a', 'c', 'd', 'b']

    def test_newest_first_by_date(self):
        posts = [
            {'id': 'old', 'date': '2024-12-01T00:00:00Z'},
            {'id': 'new', 'date': '2025-02-01T00:00:00Z'},
            {'id': 'mid', 'date': '2025-01-01T00:00:00Z'},
        ]
        key, direction = resolve_sort('newest', None, 'date')
        ordered = list_engine.sort(posts, key, direction, ACCESSORS)
        assert [p['id'] for p in ordered] == ['new', 'mid', 'old']

    def test_unknown_sort_key_keeps_input_order(self):
        posts = make_posts(5)
        assert list_engine.sort(posts, 'colour', SortDirection.ASC, ACCESSORS) == posts


class TestPagination:
    def test_idempotent_and_input_untouched(self):
        posts = make_posts(23)
        snapshot = copy.deepcopy(posts)
        query = ListQuery(search_text='post', filters={'status': 'published'}, sort_key='views',
                          sort_direction=SortDirection.DESC, page=2, page_size=3)

        first = process_list(posts, query, ACCESSORS)
        second = process_list(posts, query, ACCESSORS)

        assert first == second
        assert posts == snapshot

    @pytest.mark.parametrize('count,page_size', [(0, 10), (1, 10), (10, 10), (23, 10), (23, 7)])
    def test_pages_cover_the_filtered_collection_exactly_once(self, count, page_size):
        posts = make_posts(count)
        query = ListQuery(sort_key='title', page_size=page_size)
        first = process_list(posts, query, ACCESSORS)

        seen = []
        for page in range(1, first.total_pages + 1):
            result = process_list(posts, query.model_copy(update={'page': page}), ACCESSORS)
            seen.extend(result.items)

        full = list_engine.filter_and_sort(posts, query, ACCESSORS)
        assert seen == full
        assert first.total_count == count

    def test_page_beyond_last_is_empty_not_an_error(self):
        posts = make_posts(5)
        result = process_list(posts, ListQuery(page=4, page_size=2), ACCESSORS)
        assert result.items == []
        assert result.total_count == 5
        assert result.total_pages == 3
        assert result.has_next is False
        assert result.has_prev is True

    def test_page_and_size_are_clamped(self):
        query = ListQuery(page=0, page_size=-5)
        assert query.page == 1
        assert query.page_size == 1

    def test_metadata_for_empty_collection(self):
        result = process_list([], ListQuery(), ACCESSORS)
        assert result.total_count == 0
        assert result.total_pages == 0
        assert result.has_next is False
        assert result.has_prev is False


class TestComposition:
    def test_search_and_filter_compose_as_intersection(self):
        posts = make_posts(30)
        searched = list_engine.search(posts, '1', ACCESSORS)
        filtered = list_engine.filter(posts, {'category': 'Results'}, ACCESSORS)
        expected = [p for p in searched if p in filtered]

        query = ListQuery(search_text='1', filters={'category': 'Results'}, page_size=100)
        result = process_list(posts, query, ACCESSORS)
        assert result.items == expected

    def test_works_on_model_instances(self):
        from examupdt.models.schemas import Post

        posts = [Post(id='1', title='Zeta'), Post(id='2', title='Alpha')]
        result = process_list(posts, ListQuery(sort_key='title'), ACCESSORS)
        assert [p.id for p in result.items] == ['2', '1']


class TestResolveSort:
    @pytest.mark.parametrize('sort_by,expected', [
        ('newest', ('upload_date', SortDirection.DESC)),
        ('oldest', ('upload_date', SortDirection.ASC)),
        ('views', ('views', SortDirection.DESC)),
        ('title', ('title', SortDirection.ASC)),
    ])
    def test_menu_options(self, sort_by, expected):
        assert resolve_sort(sort_by, None, 'upload_date') == expected

    def test_raw_field_uses_sort_order(self):
        assert resolve_sort('downloads', 'desc', 'upload_date') == ('downloads', SortDirection.DESC)
        assert resolve_sort('downloads', None, 'upload_date') == ('downloads', SortDirection.ASC)
