"""Revalidation Rules — which routes and tags each write makes stale.

Tests cover:
    - create/update/delete plans
    - Route → data tag mapping, including malformed and foreign paths
    - Path normalization (query strings, trailing slashes)
"""

import pytest

from pressroom.core.domain_types import WriteKind, list_page_key, post_cache_key, post_path
from pressroom.core.revalidation import (
    data_tags_for_path, normalize_path, plan_for_write,
)


def test_create_revalidates_list_only():
    plan = plan_for_write(WriteKind.CREATE, "hello-world")
    assert plan.paths == ("/blog",)
    assert plan.tags == ()


def test_update_revalidates_list_and_post_route():
    plan = plan_for_write(WriteKind.UPDATE, "hello-world")
    assert plan.paths == ("/blog", "/blog/hello-world")
    assert plan.tags == ()


def test_delete_revalidates_list_route_and_drops_post_tag():
    plan = plan_for_write(WriteKind.DELETE, "hello-world")
    assert plan.paths == ("/blog",)
    assert plan.tags == ("post-hello-world",)


def test_list_route_maps_to_published_posts_tag():
    assert data_tags_for_path("/blog") == ["published-posts"]


def test_post_route_maps_to_post_tag():
    assert data_tags_for_path("/blog/hello-world") == ["post-hello-world"]


@pytest.mark.parametrize("path", ["/", "/about", "/blog/a/b", "/blogger"])
def test_unrelated_paths_have_no_data_tags(path):
    assert data_tags_for_path(path) == []


def test_normalize_strips_query_and_trailing_slash():
    assert normalize_path("/blog/?page=3") == "/blog"
    assert normalize_path("/blog/x/") == "/blog/x"
    assert normalize_path("/") == "/"


def test_key_helpers():
    assert post_cache_key("x") == "post-x"
    assert post_path("x") == "/blog/x"
    assert list_page_key(1) == "/blog"
    assert list_page_key(3) == "/blog?page=3"
