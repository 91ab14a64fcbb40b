"""
Name: Postgres Repositories Unit Tests

Responsibilities:
  - Verify generated SQL (allowlisted ORDER BY, filters, pagination params)
  - Verify row mapping and StoreUnavailableError wrapping
  - No real database: a fake pool records every execute()
"""

from contextlib import contextmanager

import pytest

from accounts_api.crosscutting.exceptions import StoreUnavailableError
from accounts_api.crosscutting.pagination import ListQuery, SortKey
from accounts_api.domain.entities import Privacy, RateType
from accounts_api.domain.filters import (
    AccountFilters,
    FollowerRestriction,
    PlaylistFilters,
    RatingFilters,
    VideoFilters,
)
from accounts_api.domain.value_objects import ResourceType
from accounts_api.infrastructure.repositories.postgres import (
    PostgresAccountRepository,
    PostgresQueryExecutor,
)
from factories import NOW

pytestmark = pytest.mark.unit


class _Cursor:
    def __init__(self, rows):
        self._rows = rows

    def fetchall(self):
        return list(self._rows)

    def fetchone(self):
        return self._rows[0] if self._rows else None


class _FakeConnection:
    def __init__(self, results, error=None):
        self._results = list(results)
        self._error = error
        self.calls = []
        self.session_statements = []
        self.transactions = 0

    @contextmanager
    def transaction(self):
        self.transactions += 1
        yield

    def execute(self, query, params=()):
        if self._error is not None:
            raise self._error
        if query.startswith("SET "):
            self.session_statements.append(query)
            return _Cursor([])
        self.calls.append((" ".join(query.split()), params))
        return _Cursor(self._results.pop(0) if self._results else [])


class _FakePool:
    def __init__(self, *results, error=None):
        self.conn = _FakeConnection(results, error)

    @contextmanager
    def connection(self):
        yield self.conn


def _video_row(video_id=1, privacy=1, tags=("music",)):
    return (
        video_id, "clip", 7, 3, privacy, False, True, 10, 1, "en", list(tags),
        120, 42, 4, NOW, NOW, NOW,
    )


def _account_row(account_id=7, host="remote.example"):
    return (
        account_id, "bob", "Bob", None, None, NOW, NOW,
        70, "https://remote.example/accounts/bob", "bob", host, NOW, NOW,
    )


def _query(sort="-createdAt", start=0, count=15):
    return ListQuery(start=start, count=count, sort=SortKey.parse(sort))


class TestPostgresQueryExecutor:
    def test_video_listing_sql_and_mapping(self):
        pool = _FakePool([_video_row()], [(31,)])
        filters = VideoFilters(
            follower_restriction=FollowerRestriction.RESTRICTED,
            tags_one_of=frozenset({"music", "live"}),
            tags_all_of=frozenset({"jazz"}),
            nsfw=False,
        )

        items, total = PostgresQueryExecutor(pool=pool).execute_list(
            ResourceType.VIDEOS, 7, _query("-views", start=30, count=15), filters
        )

        assert total == 31
        assert items[0].id == 1
        assert items[0].privacy is Privacy.PUBLIC
        assert items[0].tags == ("music",)

        (page_sql, page_params), (count_sql, count_params) = pool.conn.calls
        assert "ORDER BY v.views DESC NULLS LAST, v.id ASC" in page_sql
        assert "LIMIT %s OFFSET %s" in page_sql
        assert "v.tags && %s::text[]" in page_sql
        assert "v.tags @> %s::text[]" in page_sql
        assert "server_followed_channels" in page_sql
        assert page_params == (7, [1], ["live", "music"], ["jazz"], False, 15, 30)
        assert count_sql.startswith("SELECT COUNT(*)")
        assert count_params == page_params[:-2]

    def test_page_and_count_share_a_snapshot(self):
        pool = _FakePool([_video_row()], [(1,)])

        PostgresQueryExecutor(pool=pool).execute_list(
            ResourceType.VIDEOS, 7, _query(), VideoFilters()
        )

        assert pool.conn.transactions == 1
        assert pool.conn.session_statements == [
            "SET TRANSACTION ISOLATION LEVEL REPEATABLE READ"
        ]
        assert len(pool.conn.calls) == 2

    def test_default_video_filters_keep_local_videos(self):
        pool = _FakePool([], [(0,)])

        PostgresQueryExecutor(pool=pool).execute_list(
            ResourceType.VIDEOS, 7, _query(), VideoFilters()
        )

        page_sql, _ = pool.conn.calls[0]
        assert "NOT v.is_local" not in page_sql

    def test_unrestricted_videos_skip_follow_graph(self):
        pool = _FakePool([], [(0,)])
        filters = VideoFilters(follower_restriction=FollowerRestriction.UNRESTRICTED)

        PostgresQueryExecutor(pool=pool).execute_list(
            ResourceType.VIDEOS, 7, _query(), filters
        )

        page_sql, _ = pool.conn.calls[0]
        assert "server_followed" not in page_sql

    def test_playlists_apply_type_and_follow_graph(self):
        pool = _FakePool([], [(0,)])

        PostgresQueryExecutor(pool=pool).execute_list(
            ResourceType.VIDEO_PLAYLISTS, 7, _query("displayName"), PlaylistFilters()
        )

        page_sql, page_params = pool.conn.calls[0]
        assert "ORDER BY p.display_name ASC NULLS LAST, p.id ASC" in page_sql
        assert "server_followed_accounts" in page_sql
        assert page_params == (7, [1], 15, 0)

    def test_ratings_join_videos(self):
        pool = _FakePool([(5, 7, "like", NOW) + _video_row()], [(1,)])

        items, total = PostgresQueryExecutor(pool=pool).execute_list(
            ResourceType.RATINGS, 7, _query(), RatingFilters(rating_type=RateType.LIKE)
        )

        assert total == 1
        assert items[0].type is RateType.LIKE
        assert items[0].video.id == 1
        page_sql, page_params = pool.conn.calls[0]
        assert "JOIN video v ON v.id = r.video_id" in page_sql
        assert page_params == (7, "like", 15, 0)

    def test_accounts_listing_is_not_scoped(self):
        pool = _FakePool([_account_row()], [(1,)])

        items, _ = PostgresQueryExecutor(pool=pool).execute_list(
            ResourceType.ACCOUNTS, None, _query(), AccountFilters()
        )

        page_sql, page_params = pool.conn.calls[0]
        assert "WHERE" not in page_sql
        assert page_params == (15, 0)
        assert items[0].host == "remote.example"

    def test_driver_error_becomes_store_unavailable(self):
        pool = _FakePool(error=RuntimeError("connection refused"))

        with pytest.raises(StoreUnavailableError) as exc_info:
            PostgresQueryExecutor(pool=pool).execute_list(
                ResourceType.VIDEOS, 7, _query(), VideoFilters()
            )

        assert isinstance(exc_info.value.original_error, RuntimeError)


class TestPostgresAccountRepository:
    def test_local_lookup_uses_null_host(self):
        pool = _FakePool([_account_row(host=None)])

        account = PostgresAccountRepository(pool=pool).get_account_by_name("bob")

        sql, params = pool.conn.calls[0]
        assert "ac.host IS NULL" in sql
        assert params == ("bob",)
        assert account.is_local is True

    def test_remote_lookup_matches_host_case_insensitively(self):
        pool = _FakePool([_account_row()])

        account = PostgresAccountRepository(pool=pool).get_account_by_name(
            "bob", "remote.example"
        )

        sql, params = pool.conn.calls[0]
        assert "lower(ac.host) = lower(%s)" in sql
        assert params == ("bob", "remote.example")
        assert account.actor.url == "https://remote.example/accounts/bob"

    def test_missing_account_returns_none(self):
        pool = _FakePool([])

        assert PostgresAccountRepository(pool=pool).get_account_by_name("x") is None

    def test_ping(self):
        assert PostgresAccountRepository(pool=_FakePool([(1,)])).ping() is True
