"""Unit tests for VideoRepository."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory, WatchHistoryEntryFactory
from vidshare.models.watch_history import WatchHistoryEntry
from vidshare.repositories.base import Pagination
from vidshare.repositories.video import VideoRepository


class TestVideoRepository:
    @pytest.fixture()
    def repo(self):
        return VideoRepository()

    def test_visibility_hides_others_unpublished(self, repo):
        me, other = UserFactory(), UserFactory()
        mine_hidden = VideoFactory(owner=me, is_published=False)
        public = VideoFactory(owner=other)
        VideoFactory(owner=other, is_published=False)

        page = repo.paginate(repo.visible_to(me.id), Pagination(page=1, limit=10, sort=[]))

        assert {v.id for v in page.items} == {mine_hidden.id, public.id}
        assert page.total == 2

    def test_query_and_owner_filters(self, repo):
        owner = UserFactory()
        match = VideoFactory(owner=owner, title="Cooking pasta", description="dinner")
        VideoFactory(owner=owner, title="Gardening", description="plants")
        VideoFactory(title="Pasta review", description="food")

        stmt = repo.visible_to(None, query="PASTA", owner_id=owner.id)
        page = repo.paginate(stmt, Pagination(page=1, limit=10, sort=[]))

        assert [v.id for v in page.items] == [match.id]

    def test_sorting_and_paging(self, repo):
        owner = UserFactory()
        low = VideoFactory(owner=owner, views=1)
        high = VideoFactory(owner=owner, views=50)
        mid = VideoFactory(owner=owner, views=10)
        stmt = repo.visible_to(None, owner_id=owner.id)

        first = repo.paginate(stmt, Pagination(page=1, limit=2, sort=["-views"]))
        second = repo.paginate(stmt, Pagination(page=2, limit=2, sort=["-views"]))

        assert [v.id for v in first.items] == [high.id, mid.id]
        assert [v.id for v in second.items] == [low.id]
        assert first.total == 3

    def test_increment_views(self, repo):
        video = VideoFactory(views=3)
        repo.increment_views(video)
        assert video.views == 4

    def test_delete_with_history(self, repo, session):
        entry = WatchHistoryEntryFactory()
        video_id = entry.video_id

        repo.delete_with_history(entry.video)

        assert repo.get(video_id) is None
        rows = session.execute(
            select(WatchHistoryEntry).where(WatchHistoryEntry.video_id == video_id)
        ).all()
        assert rows == []
