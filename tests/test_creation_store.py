"""
Tests for the JSON creation store and the commit strategies built on it.
"""
import json
import pytest

from services.creation_store import CreationStore, save_as_new_strategy, overwrite_strategy
from services.editor_session import EditorSession


class TestCreationStore:

    def test_missing_file_is_empty(self, store):
        assert store.list() == []

    def test_save_new_persists(self, store, sample_records):
        creation = store.save_new('Logo', sample_records)
        reopened = CreationStore(path=store.path)
        assert reopened.get(creation['id'])['shapes'] == sample_records
        assert reopened.get(creation['id'])['name'] == 'Logo'

    def test_file_layout(self, store, sample_records):
        store.save_new('Logo', sample_records)
        with open(store.path, encoding='utf-8') as f:
            data = json.load(f)
        assert data['version'] == 1
        assert data['creations'][0]['shapes'] == sample_records

    def test_default_name(self, store, sample_records):
        assert store.save_new('', sample_records)['name'] == 'Custom Creation'

    def test_overwrite(self, store, sample_records):
        creation = store.save_new('Logo', sample_records)
        store.overwrite(creation['id'], sample_records[:1])
        assert store.get(creation['id'])['shapes'] == sample_records[:1]
        assert len(store.list()) == 1

    def test_rename_and_delete(self, store, sample_records):
        creation = store.save_new('Logo', sample_records)
        store.rename(creation['id'], 'Badge')
        assert store.get(creation['id'])['name'] == 'Badge'
        store.delete(creation['id'])
        assert store.list() == []

    def test_unknown_id(self, store):
        with pytest.raises(KeyError):
            store.get('missing')
        with pytest.raises(KeyError):
            store.overwrite('missing', [])

    def test_returned_data_is_detached(self, store, sample_records):
        creation = store.save_new('Logo', sample_records)
        creation['shapes'].clear()
        store.list()[0]['name'] = 'changed'
        assert store.get(creation['id'])['shapes'] == sample_records
        assert store.get(creation['id'])['name'] == 'Logo'


class TestCommitStrategies:

    def test_save_as_new(self, store, sample_records, notifications):
        notify = lambda message, kind: notifications.append((message, kind))
        session = EditorSession(initial_shapes=sample_records,
                                commit_action=save_as_new_strategy(store, 'Logo', notify),
                                notify=notify)
        creation = session.commit()
        assert store.get(creation['id'])['shapes'] == sample_records
        assert notifications == [('"Logo" saved as new item', 'success')]

    def test_overwrite_existing(self, store, sample_records, notifications):
        notify = lambda message, kind: notifications.append((message, kind))
        creation = store.save_new('Logo', sample_records)
        session = EditorSession(initial_shapes=creation['shapes'],
                                commit_action=overwrite_strategy(store, creation['id'], notify),
                                notify=notify)
        session.select('star-1')
        session.delete_selected()
        session.commit()

        saved = store.get(creation['id'])['shapes']
        assert [record['id'] for record in saved] == ['rect-1', 'text-1']
        assert len(store.list()) == 1
        assert notifications == [('"Logo" updated', 'success')]

    def test_empty_session_not_saved(self, store, notifications):
        notify = lambda message, kind: notifications.append((message, kind))
        session = EditorSession(commit_action=save_as_new_strategy(store, 'Logo', notify), notify=notify)
        assert session.commit() is None
        assert store.list() == []
        assert notifications == [('Add at least one shape', 'error')]
