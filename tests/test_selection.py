"""
Tests for bulk selection and best-effort bulk delete
"""
import pytest

from examupdt.errors import BulkPartialFailure
from examupdt.repositories.content import PostRepository
from examupdt.services.selection import SelectionState, bulk_delete


class TestSelectionState:
    def test_toggle_adds_and_removes(self):
        selection = SelectionState(['a', 'b', 'c'])
        selection.toggle('a')
        selection.toggle('b')
        selection.toggle('a')
        assert selection.selected == ['b']

    def test_toggle_all_selects_visible_then_clears(self):
        selection = SelectionState(['a', 'b'])
        selection.toggle_all()
        assert selection.selected == ['a', 'b']
        assert selection.all_selected is True

        selection.toggle_all()
        assert selection.selected == []

    def test_all_selected_is_recomputed_from_visible(self):
        selection = SelectionState(['a', 'b'])
        selection.toggle_all()
        selection.set_visible(['a', 'b', 'c'])
        assert selection.all_selected is False

    def test_all_selected_compares_counts_only(self):
        # Narrowing the filter can leave a selection of the same size but different ids
        selection = SelectionState(['a', 'b'])
        selection.toggle_all()
        selection.set_visible(['c', 'd'])
        assert selection.all_selected is True

    def test_empty_visible_set_reads_as_all_selected(self):
        assert SelectionState().all_selected is True


class TestBulkDelete:
    async def test_deletes_every_id(self, store):
        rows = store.seed('posts', {'title': 'a'}, {'title': 'b'}, {'title': 'c'})
        ids = [row['id'] for row in rows]

        outcome = await bulk_delete(PostRepository(store), ids)

        assert sorted(outcome.succeeded) == sorted(ids)
        assert outcome.failed == []
        assert store.table('posts').rows == []

    async def test_partial_failure_reports_and_keeps_going(self, store):
        rows = store.seed('posts', {'title': 'a'}, {'title': 'b'}, {'title': 'c'})
        ids = [row['id'] for row in rows]
        store.failing_deletes.add(ids[1])

        with pytest.raises(BulkPartialFailure) as exc_info:
            await bulk_delete(PostRepository(store), ids)

        outcome = exc_info.value.outcome
        assert outcome.attempted == 3
        assert outcome.failed == [ids[1]]
        assert sorted(outcome.succeeded) == sorted([ids[0], ids[2]])
        assert exc_info.value.message == 'Deleted 2 of 3 items, 1 failed'
        assert [row['id'] for row in store.table('posts').rows] == [ids[1]]

    async def test_duplicate_ids_are_attempted_once(self, store):
        rows = store.seed('posts', {'title': 'a'})
        outcome = await bulk_delete(PostRepository(store), [rows[0]['id'], rows[0]['id']])
        assert outcome.succeeded == [rows[0]['id']]
