"""Unit tests for the filter composer and NSFW resolution."""

import pytest

from accounts_api.crosscutting.exceptions import (
    ForbiddenError,
    InvalidFilterError,
    UnauthorizedError,
)
from accounts_api.domain.entities import NSFWPolicy, PlaylistType, RateType, VideoFilter
from accounts_api.domain.filters import (
    AccountFilters,
    CallerCapabilities,
    ChannelFilters,
    FollowerRestriction,
    PlaylistFilters,
    RatingFilters,
    RawListFilters,
    VideoFilters,
    build_nsfw_filter,
    compose_filters,
)
from accounts_api.domain.value_objects import ResourceType
from accounts_api.domain.visibility_policy import VisibilityScope
from accounts_api.identity.users import UserRight

pytestmark = pytest.mark.unit

_ANONYMOUS = CallerCapabilities()
_SIGNED_IN = CallerCapabilities(authenticated=True)
_MODERATOR = CallerCapabilities(
    authenticated=True,
    can_search_remote_uri=True,
    rights=frozenset({UserRight.SEE_ALL_VIDEOS}),
)


class TestBuildNsfwFilter:
    @pytest.mark.parametrize(
        "raw, expected", [("true", True), ("false", False), ("both", None)]
    )
    def test_explicit_value_wins(self, raw, expected):
        assert (
            build_nsfw_filter(raw, user_policy=NSFWPolicy.DISPLAY) is expected
        )

    def test_explicit_value_is_case_insensitive(self):
        assert build_nsfw_filter(" TRUE ") is True

    def test_unknown_value_raises(self):
        with pytest.raises(InvalidFilterError):
            build_nsfw_filter("maybe")

    def test_user_policy_do_not_list_excludes_nsfw(self):
        assert (
            build_nsfw_filter(
                None,
                user_policy=NSFWPolicy.DO_NOT_LIST,
                instance_policy=NSFWPolicy.DISPLAY,
            )
            is False
        )

    def test_user_policy_display_lists_both(self):
        assert (
            build_nsfw_filter(
                None,
                user_policy=NSFWPolicy.BLUR,
                instance_policy=NSFWPolicy.DO_NOT_LIST,
            )
            is None
        )

    def test_instance_policy_used_without_user(self):
        assert build_nsfw_filter(None, instance_policy=NSFWPolicy.DO_NOT_LIST) is False
        assert build_nsfw_filter(None, instance_policy=NSFWPolicy.DISPLAY) is None


class TestComposeVideos:
    def test_anonymous_is_restricted_to_follow_graph(self):
        filters = compose_filters(
            ResourceType.VIDEOS, RawListFilters(), VisibilityScope.PUBLIC_ONLY, _ANONYMOUS
        )

        assert isinstance(filters, VideoFilters)
        assert filters.follower_restriction is FollowerRestriction.RESTRICTED
        assert filters.visibility is VisibilityScope.PUBLIC_ONLY

    def test_remote_search_capability_lifts_restriction(self):
        filters = compose_filters(
            ResourceType.VIDEOS, RawListFilters(), VisibilityScope.PUBLIC_ONLY, _MODERATOR
        )

        assert filters.follower_restriction is FollowerRestriction.UNRESTRICTED

    def test_tags_are_lowercased_and_blank_entries_dropped(self):
        raw = RawListFilters(tags_one_of=("Music", " ", "LIVE"), tags_all_of=("Jazz",))
        filters = compose_filters(
            ResourceType.VIDEOS, raw, VisibilityScope.PUBLIC_ONLY, _ANONYMOUS
        )

        assert filters.tags_one_of == frozenset({"music", "live"})
        assert filters.tags_all_of == frozenset({"jazz"})

    def test_one_of_filters_become_sets(self):
        raw = RawListFilters(
            category_one_of=(1, 2, 2), licence_one_of=(4,), language_one_of=("en",)
        )
        filters = compose_filters(
            ResourceType.VIDEOS, raw, VisibilityScope.PUBLIC_ONLY, _ANONYMOUS
        )

        assert filters.category_one_of == frozenset({1, 2})
        assert filters.licence_one_of == frozenset({4})
        assert filters.language_one_of == frozenset({"en"})

    def test_nsfw_defaults_to_instance_policy(self):
        caps = CallerCapabilities(instance_nsfw_policy=NSFWPolicy.DO_NOT_LIST)
        filters = compose_filters(
            ResourceType.VIDEOS, RawListFilters(), VisibilityScope.PUBLIC_ONLY, caps
        )

        assert filters.nsfw is False

    def test_local_filter_is_allowed_for_everyone(self):
        filters = compose_filters(
            ResourceType.VIDEOS,
            RawListFilters(filter="local"),
            VisibilityScope.PUBLIC_ONLY,
            _ANONYMOUS,
        )

        assert filters.filter is VideoFilter.LOCAL
        assert filters.visibility is VisibilityScope.PUBLIC_ONLY

    def test_all_local_requires_authentication(self):
        with pytest.raises(UnauthorizedError):
            compose_filters(
                ResourceType.VIDEOS,
                RawListFilters(filter="all-local"),
                VisibilityScope.PUBLIC_ONLY,
                _ANONYMOUS,
            )

    def test_all_local_requires_see_all_videos(self):
        with pytest.raises(ForbiddenError):
            compose_filters(
                ResourceType.VIDEOS,
                RawListFilters(filter="all-local"),
                VisibilityScope.PUBLIC_ONLY,
                _SIGNED_IN,
            )

    def test_all_local_widens_visibility(self):
        filters = compose_filters(
            ResourceType.VIDEOS,
            RawListFilters(filter="all-local"),
            VisibilityScope.PUBLIC_ONLY,
            _MODERATOR,
        )

        assert filters.filter is VideoFilter.ALL_LOCAL
        assert filters.visibility is VisibilityScope.ALL

    def test_unknown_filter_mode_raises(self):
        with pytest.raises(InvalidFilterError):
            compose_filters(
                ResourceType.VIDEOS,
                RawListFilters(filter="federated"),
                VisibilityScope.PUBLIC_ONLY,
                _MODERATOR,
            )


class TestComposeOtherResources:
    def test_playlists_are_always_restricted(self):
        filters = compose_filters(
            ResourceType.VIDEO_PLAYLISTS,
            RawListFilters(playlist_type=2),
            VisibilityScope.ALL,
            _MODERATOR,
        )

        assert isinstance(filters, PlaylistFilters)
        assert filters.follower_restriction is FollowerRestriction.RESTRICTED
        assert filters.playlist_type is PlaylistType.WATCH_LATER
        assert filters.include_private_and_unlisted is True

    def test_unknown_playlist_type_raises(self):
        with pytest.raises(InvalidFilterError):
            compose_filters(
                ResourceType.VIDEO_PLAYLISTS,
                RawListFilters(playlist_type=9),
                VisibilityScope.PUBLIC_ONLY,
                _ANONYMOUS,
            )

    def test_rating_filter(self):
        filters = compose_filters(
            ResourceType.RATINGS,
            RawListFilters(rating="dislike"),
            VisibilityScope.ALL,
            _ANONYMOUS,
        )

        assert isinstance(filters, RatingFilters)
        assert filters.rating_type is RateType.DISLIKE

    def test_unknown_rating_raises(self):
        with pytest.raises(InvalidFilterError):
            compose_filters(
                ResourceType.RATINGS,
                RawListFilters(rating="love"),
                VisibilityScope.ALL,
                _ANONYMOUS,
            )

    def test_channels_and_accounts_carry_only_visibility(self):
        channels = compose_filters(
            ResourceType.VIDEO_CHANNELS, RawListFilters(), VisibilityScope.ALL, _ANONYMOUS
        )
        accounts = compose_filters(
            ResourceType.ACCOUNTS,
            RawListFilters(),
            VisibilityScope.PUBLIC_ONLY,
            _ANONYMOUS,
        )

        assert type(channels) is ChannelFilters
        assert type(accounts) is AccountFilters

    def test_unspecified_restriction_behaves_as_restricted(self):
        assert FollowerRestriction.UNSPECIFIED.is_restricted is True
        assert FollowerRestriction.UNRESTRICTED.is_restricted is False
