"""HTTP-level tests — the blog pages and write routes through the FastAPI app."""

from uuid import uuid4

from pressroom.models.post import Post


async def _bearer(client, login, email="sarah@example.com") -> dict:
    response = await login(email)
    assert response.status_code == 200
    token = response.json()["token"]
    # Requests below authenticate explicitly via Bearer
    client.cookies.clear()
    return {"Authorization": f"Bearer {token}"}


def _new_post(slug="hello-world", title="Hello World") -> dict:
    return {
        "title": title,
        "slug": slug,
        "content": "# Hello\n\nFirst post.",
        "excerpt": "A greeting",
    }


async def test_hello_world_lifecycle(client, login, author):
    headers = await _bearer(client, login)

    created = await client.post("/api/v1/posts", json=_new_post(), headers=headers)
    assert created.status_code == 201
    assert created.json() == {"success": True, "slug": "hello-world"}

    listing = await client.get("/blog")
    assert [p["slug"] for p in listing.json()["posts"]] == ["hello-world"]

    page = await client.get("/blog/hello-world")
    assert page.status_code == 200
    post = page.json()["post"]
    assert post["title"] == "Hello World"
    assert "<h1>Hello</h1>" in post["content_html"]

    body = _new_post(title="Hello Again")
    del body["slug"]
    updated = await client.put(
        f"/api/v1/posts/{post['id']}", json=body, headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["slug"] == "hello-world"

    page = await client.get("/blog/hello-world")
    assert page.json()["post"]["title"] == "Hello Again"
    listing = await client.get("/blog")
    assert listing.json()["posts"][0]["title"] == "Hello Again"

    deleted = await client.delete(f"/api/v1/posts/{post['id']}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "slug": "hello-world"}

    gone = await client.get("/blog/hello-world")
    assert gone.status_code == 404
    assert gone.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
    listing = await client.get("/blog")
    assert listing.json()["posts"] == []


async def test_anonymous_pages_are_publicly_cacheable(client, author, auth_headers):
    await client.post(
        "/api/v1/posts", json=_new_post(), headers=auth_headers(author),
    )

    listing = await client.get("/blog")
    page = await client.get("/blog/hello-world")

    expected = "public, s-maxage=3600, stale-while-revalidate"
    assert listing.headers["cache-control"] == expected
    assert page.headers["cache-control"] == expected
    assert page.json()["revalidate"] == 3600
    assert page.json()["viewer"] == {
        "authenticated": False, "can_edit": False, "can_delete": False,
    }


async def test_owner_sees_delete_affordance(client, author, other_user, auth_headers):
    await client.post(
        "/api/v1/posts", json=_new_post(), headers=auth_headers(author),
    )

    own = await client.get("/blog/hello-world", headers=auth_headers(author))
    assert own.headers["cache-control"] == "private, no-store"
    assert own.json()["viewer"]["can_delete"] is True

    theirs = await client.get("/blog/hello-world", headers=auth_headers(other_user))
    assert theirs.json()["viewer"] == {
        "authenticated": True, "can_edit": False, "can_delete": False,
    }


async def test_unpublished_and_unknown_slugs_both_404(client, author, test_db):
    test_db.add(Post(
        slug="draft", title="Draft", content="x",
        published=False, author_id=author.id,
    ))
    await test_db.commit()

    draft = await client.get("/blog/draft")
    missing = await client.get("/blog/nope")

    assert draft.status_code == missing.status_code == 404
    assert draft.json()["error"]["code"] == missing.json()["error"]["code"]
    assert draft.headers["cache-control"] == "no-store"


async def test_list_pagination_query(client, author, auth_headers):
    for i in range(3):
        await client.post(
            "/api/v1/posts",
            json=_new_post(slug=f"post-{i}", title=f"Post {i}"),
            headers=auth_headers(author),
        )

    second = await client.get("/blog", params={"page": 2})
    assert second.status_code == 200
    assert second.json()["page"] == 2
    assert len(second.json()["posts"]) == 1
    assert second.json()["has_previous"] is True

    past_end = await client.get("/blog", params={"page": 5})
    assert past_end.status_code == 404

    invalid = await client.get("/blog", params={"page": 0})
    assert invalid.status_code == 400


async def test_create_without_session_is_401(client):
    response = await client.post("/api/v1/posts", json=_new_post())

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"
    assert response.headers["cache-control"] == "no-store"


async def test_anonymous_invalid_create_is_401_not_400(client):
    response = await client.post(
        "/api/v1/posts", json={"title": "", "slug": "Bad Slug", "content": ""},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_anonymous_update_and_delete_with_bad_id_are_401(client):
    body = {"title": "T", "content": "C"}

    update = await client.put("/api/v1/posts/not-a-uuid", json=body)
    delete = await client.delete("/api/v1/posts/not-a-uuid")
    anonymous_valid = await client.delete(f"/api/v1/posts/{uuid4()}")

    assert update.status_code == delete.status_code == 401
    assert anonymous_valid.status_code == 401
    assert update.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_authenticated_bad_id_is_still_400(client, author, auth_headers):
    response = await client.delete(
        "/api/v1/posts/not-a-uuid", headers=auth_headers(author),
    )

    assert response.status_code == 400


async def test_unknown_slugs_leave_no_cache_bookkeeping(client, container):
    for i in range(20):
        assert (await client.get(f"/blog/no-such-{i}")).status_code == 404

    assert container.page_cache.snapshot()["locks"] == 0
    assert container.data_cache.snapshot()["locks"] == 0


async def test_duplicate_slug_is_409(client, author, auth_headers):
    headers = auth_headers(author)
    await client.post("/api/v1/posts", json=_new_post(), headers=headers)

    response = await client.post(
        "/api/v1/posts", json=_new_post(title="Another"), headers=headers,
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


async def test_blank_title_is_400(client, author, auth_headers):
    response = await client.post(
        "/api/v1/posts",
        json=_new_post(title="   "),
        headers=auth_headers(author),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert any(d["field"].endswith("title") for d in response.json()["error"]["details"])


async def test_bad_slug_is_400(client, author, auth_headers):
    response = await client.post(
        "/api/v1/posts",
        json=_new_post(slug="Hello World"),
        headers=auth_headers(author),
    )

    assert response.status_code == 400


async def test_non_owner_update_and_delete_are_403(
    client, author, other_user, auth_headers,
):
    await client.post(
        "/api/v1/posts", json=_new_post(), headers=auth_headers(author),
    )
    post_id = (await client.get("/blog/hello-world")).json()["post"]["id"]
    body = _new_post(title="Hijacked")
    del body["slug"]

    update = await client.put(
        f"/api/v1/posts/{post_id}", json=body, headers=auth_headers(other_user),
    )
    delete = await client.delete(
        f"/api/v1/posts/{post_id}", headers=auth_headers(other_user),
    )

    assert update.status_code == 403
    assert delete.status_code == 403
    page = await client.get("/blog/hello-world")
    assert page.json()["post"]["title"] == "Hello World"


async def test_update_unknown_post_is_404(client, author, auth_headers):
    body = _new_post()
    del body["slug"]

    response = await client.put(
        f"/api/v1/posts/{uuid4()}", json=body, headers=auth_headers(author),
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_stale_expected_version_is_409(client, author, auth_headers):
    headers = auth_headers(author)
    await client.post("/api/v1/posts", json=_new_post(), headers=headers)
    post = (await client.get("/blog/hello-world")).json()["post"]
    body = _new_post(title="Edited")
    del body["slug"]

    first = await client.put(
        f"/api/v1/posts/{post['id']}",
        json={**body, "expected_version": post["version"]},
        headers=headers,
    )
    second = await client.put(
        f"/api/v1/posts/{post['id']}",
        json={**body, "title": "Stale", "expected_version": post["version"]},
        headers=headers,
    )

    assert first.status_code == 200
    assert second.status_code == 409


async def test_login_rejects_wrong_password(login, author):
    response = await login("sarah@example.com", "nope")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_login_sets_cookie_and_logout_clears_it(client, login, author):
    response = await login("Sarah@Example.com")
    assert response.status_code == 200
    assert "pressroom_session" in response.cookies

    session = await client.get("/api/v1/auth/session")
    assert session.json() == {"authenticated": True, "user_id": str(author.id)}

    await client.post("/api/v1/auth/logout")
    session = await client.get("/api/v1/auth/session")
    assert session.json()["authenticated"] is False
