"""
Name: Accounts Endpoints Tests

Responsibilities:
  - Exercise /api/v1/accounts/* through the FastAPI app (in-memory adapters)
  - Validate envelopes, camelCase DTOs and RFC7807 error mapping
  - Validate the best-effort actor refresh scheduled on account reads
"""

from datetime import timedelta
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from accounts_api.api.main import create_app
from accounts_api.application.freshness import FreshnessMonitor
from accounts_api.application.usecases.listing.list_account_resources import (
    ListAccountResourcesUseCase,
)
from accounts_api.application.usecases.listing.list_resources import (
    ListResourcesUseCase,
)
from accounts_api.container import (
    get_account_repository,
    get_freshness_monitor,
    get_list_account_resources_use_case,
)
from accounts_api.crosscutting.exceptions import (
    FilterDescriptorMismatchError,
    StoreUnavailableError,
)
from accounts_api.crosscutting.pagination import PaginationDefaults
from accounts_api.domain.entities import Privacy, RateType
from accounts_api.domain.services import JobKind
from accounts_api.identity.principal import Principal, get_optional_principal
from accounts_api.identity.users import UserRole
from accounts_api.infrastructure.queue import QueueEnqueueError
from factories import (
    LOCAL_HOST,
    REMOTE_HOST,
    make_account,
    make_channel,
    make_playlist,
    make_rate,
    make_video,
)

pytestmark = pytest.mark.unit

API = "/api/v1/accounts"


@pytest.fixture
def seeded(catalog):
    catalog.add_accounts(
        make_account(1, "alice"),
        make_account(2, "bob", host=REMOTE_HOST, age=timedelta(days=10)),
        make_account(3, "carol", host=REMOTE_HOST),
    )
    catalog.add_videos(
        make_video(10, 1, tags=("music", "live"), views=10),
        make_video(11, 1, tags=("music",), views=20),
        make_video(12, 1, tags=("news",), views=30),
        make_video(13, 1, privacy=Privacy.PRIVATE),
        make_video(14, 1, nsfw=True),
    )
    catalog.add_channels(make_channel(20, 1), make_channel(21, 1))
    catalog.add_playlists(
        make_playlist(30, 1),
        make_playlist(31, 1, privacy=Privacy.PRIVATE),
    )
    catalog.add_rates(
        make_rate(40, 1, make_video(12, 1)),
        make_rate(41, 1, make_video(11, 1), RateType.DISLIKE),
    )
    return catalog


@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def _as(app: FastAPI, principal: Principal | None) -> None:
    app.dependency_overrides[get_optional_principal] = lambda: principal


# =============================================================================
# Accounts
# =============================================================================


class TestGetAccount:
    def test_local_account(self, client, seeded):
        response = client.get(f"{API}/alice")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "alice"
        assert body["displayName"] == "Alice"
        assert body["nameWithHost"] == f"alice@{LOCAL_HOST}"
        assert body["isLocal"] is True

    def test_remote_account_by_handle(self, client, seeded):
        response = client.get(f"{API}/carol@{REMOTE_HOST}")

        assert response.status_code == 200
        assert response.json()["host"] == REMOTE_HOST

    def test_unknown_account_is_404_problem_json(self, client, seeded):
        response = client.get(f"{API}/ghost")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("application/problem+json")
        assert response.json()["code"] == "NOT_FOUND"

    def test_stale_remote_account_schedules_refresh(self, client, seeded, job_queue):
        response = client.get(f"{API}/bob@{REMOTE_HOST}")

        assert response.status_code == 200
        assert len(job_queue.submitted) == 1
        job = job_queue.submitted[0]
        assert job.kind is JobKind.ACTOR_REFRESH
        assert job.payload["url"] == f"https://{REMOTE_HOST}/accounts/bob"

    def test_fresh_account_schedules_nothing(self, client, seeded, job_queue):
        client.get(f"{API}/carol@{REMOTE_HOST}")
        client.get(f"{API}/alice")

        assert job_queue.submitted == []

    def test_queue_failure_does_not_change_the_response(self, app, seeded):
        handle = f"bob@{REMOTE_HOST}"
        healthy = TestClient(app).get(f"{API}/{handle}")

        broken_queue = Mock()
        broken_queue.submit.side_effect = QueueEnqueueError("redis down")
        app.dependency_overrides[get_freshness_monitor] = lambda: FreshnessMonitor(
            queue=broken_queue, refresh_interval=timedelta(days=2)
        )
        degraded = TestClient(app).get(f"{API}/{handle}")

        broken_queue.submit.assert_called_once()
        assert degraded.status_code == healthy.status_code == 200
        assert degraded.json() == healthy.json()


class TestListAccounts:
    def test_lists_all_accounts(self, client, seeded):
        response = client.get(API, params={"sort": "createdAt"})

        assert response.status_code == 200
        assert response.json()["total"] == 3

    def test_invalid_sort_is_400(self, client, seeded):
        response = client.get(API, params={"sort": "-name"})

        assert response.status_code == 400
        assert response.json()["code"] == "BAD_REQUEST"


# =============================================================================
# Videos
# =============================================================================


class TestAccountVideos:
    def test_public_envelope(self, client, seeded):
        response = client.get(f"{API}/alice/videos", params={"nsfw": "both"})

        body = response.json()
        assert response.status_code == 200
        assert body["total"] == 4
        assert {v["id"] for v in body["data"]} == {10, 11, 12, 14}
        assert "createdAt" in body["data"][0]

    def test_nsfw_hidden_by_instance_default(self, client, seeded):
        body = client.get(f"{API}/alice/videos").json()

        assert 14 not in {v["id"] for v in body["data"]}

    def test_count_and_sort(self, client, seeded):
        response = client.get(
            f"{API}/alice/videos", params={"count": 2, "sort": "-views"}
        )

        body = response.json()
        assert [v["id"] for v in body["data"]] == [12, 11]
        assert body["total"] == 3

    def test_tags_one_of_repeated_param(self, client, seeded):
        response = client.get(
            f"{API}/alice/videos", params=[("tagsOneOf", "LIVE"), ("tagsOneOf", "news")]
        )

        assert {v["id"] for v in response.json()["data"]} == {10, 12}

    def test_tags_all_of(self, client, seeded):
        response = client.get(
            f"{API}/alice/videos", params=[("tagsAllOf", "music"), ("tagsAllOf", "live")]
        )

        assert [v["id"] for v in response.json()["data"]] == [10]

    def test_owner_sees_private_videos(self, app, client, seeded):
        _as(app, Principal(account_id=1, user_id=1))

        body = client.get(f"{API}/alice/videos", params={"nsfw": "both"}).json()

        assert 13 in {v["id"] for v in body["data"]}

    @pytest.mark.parametrize(
        "params",
        [
            {"start": -1},
            {"count": -3},
            {"sort": "-password"},
            {"nsfw": "maybe"},
            {"start": "abc"},
            {"categoryOneOf": "music"},
        ],
    )
    def test_invalid_input_is_400(self, client, seeded, params):
        response = client.get(f"{API}/alice/videos", params=params)

        assert response.status_code == 400
        assert response.json()["code"] == "BAD_REQUEST"

    def test_count_is_clamped(self, client, seeded):
        response = client.get(f"{API}/alice/videos", params={"count": 10_000})

        assert response.status_code == 200

    def test_all_local_requires_right(self, app, client, seeded):
        params = {"filter": "all-local"}
        assert client.get(f"{API}/alice/videos", params=params).status_code == 401

        _as(app, Principal(account_id=9, user_id=9))
        assert client.get(f"{API}/alice/videos", params=params).status_code == 403

        _as(app, Principal(account_id=9, user_id=9, role=UserRole.MODERATOR))
        body = client.get(
            f"{API}/alice/videos", params={"filter": "all-local", "nsfw": "both"}
        ).json()
        assert body["total"] == 5

    def test_unknown_account_is_404(self, client, seeded):
        assert client.get(f"{API}/ghost/videos").status_code == 404


# =============================================================================
# Channels / playlists / ratings
# =============================================================================


class TestOtherResources:
    def test_channels(self, client, seeded):
        body = client.get(f"{API}/alice/video-channels", params={"sort": "id"}).json()

        assert [c["id"] for c in body["data"]] == [20, 21]
        assert body["total"] == 2

    def test_playlists_hide_private_for_others(self, client, seeded):
        body = client.get(f"{API}/alice/video-playlists").json()

        assert [p["id"] for p in body["data"]] == [30]

    def test_playlists_owner(self, app, client, seeded):
        _as(app, Principal(account_id=1, user_id=1))

        body = client.get(f"{API}/alice/video-playlists").json()

        assert body["total"] == 2

    def test_ratings_anonymous_is_401(self, client, seeded):
        assert client.get(f"{API}/alice/ratings").status_code == 401
        assert client.get(f"{API}/ghost/ratings").status_code == 401

    def test_ratings_other_account_is_403(self, app, client, seeded):
        _as(app, Principal(account_id=2, user_id=2))

        assert client.get(f"{API}/alice/ratings").status_code == 403

    def test_ratings_owner(self, app, client, seeded):
        _as(app, Principal(account_id=1, user_id=1))

        body = client.get(f"{API}/alice/ratings", params={"rating": "like"}).json()

        assert body["total"] == 1
        assert body["data"][0]["rating"] == "like"
        assert body["data"][0]["video"]["id"] == 12


# =============================================================================
# Infrastructure failures
# =============================================================================


def _use_case_with(executor) -> ListAccountResourcesUseCase:
    return ListAccountResourcesUseCase(
        list_resources=ListResourcesUseCase(executor=executor),
        account_repository=get_account_repository(),
        defaults=PaginationDefaults(),
        local_host=LOCAL_HOST,
    )


def test_store_unavailable_is_503(app, client, seeded):
    executor = Mock()
    executor.execute_list.side_effect = StoreUnavailableError("connection refused")
    app.dependency_overrides[get_list_account_resources_use_case] = (
        lambda: _use_case_with(executor)
    )

    response = client.get(f"{API}/alice/videos")

    assert response.status_code == 503
    assert response.json()["code"] == "STORE_UNAVAILABLE"
    assert "connection refused" not in response.json()["detail"]


def test_internal_invariant_is_500(app, client, seeded):
    executor = Mock()
    executor.execute_list.side_effect = FilterDescriptorMismatchError("bug")
    app.dependency_overrides[get_list_account_resources_use_case] = (
        lambda: _use_case_with(executor)
    )

    response = client.get(f"{API}/alice/videos")

    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_ERROR"


def test_healthz_and_metrics(client):
    health = client.get("/healthz")
    assert health.status_code == 200
    assert health.json()["ok"] is True

    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert b"accounts_requests_total" in metrics.content
