"""Tests for the remote image allow-list."""

import pytest

from workly.images import avatar_src, image_remote_patterns, is_allowed_image_url

SUPABASE_URL = "https://abcdefgh.supabase.co"


def test_patterns_include_configured_and_production_hosts():
    hosts = [p.hostname for p in image_remote_patterns(SUPABASE_URL)]

    assert hosts == ["abcdefgh.supabase.co", "jcclzdqjpttktshqrcvr.supabase.co"]


@pytest.mark.parametrize("url", [None, "", "not a url"])
def test_unparseable_supabase_url_keeps_production_host(url):
    hosts = [p.hostname for p in image_remote_patterns(url)]

    assert hosts == ["jcclzdqjpttktshqrcvr.supabase.co"]


@pytest.mark.parametrize(
    "url,allowed",
    [
        ("https://abcdefgh.supabase.co/storage/v1/object/public/avatars/u/avatar.png?v=1", True),
        ("https://abcdefgh.supabase.co/storage/v1/object/sign/uploads/a.jpg?token=x", True),
        ("http://abcdefgh.supabase.co/storage/v1/object/public/avatars/u/avatar.png", False),
        ("https://abcdefgh.supabase.co/rest/v1/profiles", False),
        ("https://evil.example.com/storage/v1/object/public/a.png", False),
    ],
)
def test_is_allowed_image_url(url, allowed):
    assert is_allowed_image_url(url, image_remote_patterns(SUPABASE_URL)) is allowed


def test_avatar_src(sample_user):
    patterns = image_remote_patterns(SUPABASE_URL)

    assert avatar_src(sample_user, patterns) == sample_user.avatar_url
    sample_user.avatar_url = "https://tracker.example.com/pixel.gif"
    assert avatar_src(sample_user, patterns) is None
    sample_user.avatar_url = None
    assert avatar_src(sample_user, patterns) is None
