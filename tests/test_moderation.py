from gallery.services import thumbnails as thumbnails_module
from tests.conftest import create_album, create_user, list_images, upload


def test_non_owner_cannot_delete_image(client, admin_headers, settings):
    _, owner = create_user(client, admin_headers, "owner@example.com")
    _, intruder = create_user(client, admin_headers, "intruder@example.com")
    body = upload(client, headers=owner).json()

    response = client.delete(f"/api/images/{body['id']}", headers=intruder)

    assert response.status_code == 403
    assert response.json() == {"error": "You do not have permission to delete this image"}
    assert len(list_images(client)) == 1
    assert (settings.uploads_dir / body["filename"]).is_file()
    assert (settings.thumbs_dir / body["filename"]).is_file()


def test_owner_deletes_image_with_files_likes_and_comments(client, admin_headers, settings):
    _, owner = create_user(client, admin_headers, "owner@example.com")
    body = upload(client, headers=owner).json()
    client.post(f"/api/images/{body['id']}/like", headers=owner)
    client.post(f"/api/images/{body['id']}/comments", json={"text": "first"})

    response = client.delete(f"/api/images/{body['id']}", headers=owner)

    assert response.status_code == 200
    assert list_images(client) == []
    assert not (settings.uploads_dir / body["filename"]).exists()
    assert not (settings.thumbs_dir / body["filename"]).exists()
    assert client.get("/api/admin/stats", headers=admin_headers).json()["stats"]["likes"] == 0
    assert client.get("/api/comments/all", headers=admin_headers).json() == {"comments": []}


def test_anonymous_uploads_are_admin_only(client, admin_headers):
    _, user = create_user(client, admin_headers, "user@example.com")
    image_id = upload(client).json()["id"]

    assert client.put(f"/api/images/{image_id}", json={"title": "x"}, headers=user).status_code == 403
    assert client.delete(f"/api/images/{image_id}", headers=user).status_code == 403
    assert client.delete(f"/api/images/{image_id}").status_code == 401
    assert client.delete(f"/api/images/{image_id}", headers=admin_headers).status_code == 200


def test_edit_image(client, admin_headers):
    _, owner = create_user(client, admin_headers, "owner@example.com")
    image_id = upload(client, headers=owner, title="old", description="keep").json()["id"]

    response = client.put(f"/api/images/{image_id}", json={"title": "new"}, headers=owner)

    assert response.status_code == 200
    [image] = list_images(client)
    assert image["title"] == "new"
    assert image["description"] == "keep"

    empty = client.put(f"/api/images/{image_id}", json={}, headers=owner)
    assert empty.status_code == 400
    assert empty.json() == {"error": "No fields to update"}
    assert client.put("/api/images/999", json={"title": "x"}, headers=owner).status_code == 404


def test_comments_anonymous_and_authenticated(client, admin_headers):
    user_id, user = create_user(client, admin_headers, "talker@example.com")
    image_id = upload(client).json()["id"]

    anon = client.post(f"/api/images/{image_id}/comments", json={"text": "  hello  "})
    named = client.post(
        f"/api/images/{image_id}/comments", json={"text": "hi", "author_name": "Sam"}
    )
    mine = client.post(
        f"/api/images/{image_id}/comments",
        json={"text": "from me", "author_name": "ignored"},
        headers=user,
    )

    assert anon.json()["author_name"] == "Anonymous"
    assert anon.json()["text"] == "hello"
    assert named.json()["author_name"] == "Sam"
    assert mine.json()["author_name"] is None
    assert mine.json()["user_id"] == user_id

    listed = client.get(f"/api/images/{image_id}/comments").json()
    assert [c["text"] for c in listed] == ["hello", "hi", "from me"]
    assert listed[2]["email"] == "talker@example.com"


def test_comment_validation(client):
    image_id = upload(client).json()["id"]

    blank = client.post(f"/api/images/{image_id}/comments", json={"text": "   "})
    missing = client.post("/api/images/999/comments", json={"text": "hello"})

    assert blank.status_code == 400
    assert blank.json() == {"error": "Comment text is required"}
    assert missing.status_code == 404


def test_comment_deletion_rules(client, admin_headers):
    _, author = create_user(client, admin_headers, "author@example.com")
    _, other = create_user(client, admin_headers, "other@example.com")
    image_id = upload(client).json()["id"]
    own = client.post(f"/api/images/{image_id}/comments", json={"text": "a"}, headers=author).json()
    anon = client.post(f"/api/images/{image_id}/comments", json={"text": "b"}).json()

    assert client.delete(f"/api/comments/{own['id']}").status_code == 401
    assert client.delete(f"/api/comments/{own['id']}", headers=other).status_code == 403
    assert client.delete(f"/api/comments/{anon['id']}", headers=author).status_code == 403
    assert client.delete(f"/api/comments/{own['id']}", headers=author).status_code == 200
    assert client.delete(f"/api/comments/{anon['id']}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/comments/{anon['id']}", headers=admin_headers).status_code == 404


def test_all_comments_is_admin_only(client, admin_headers):
    _, user = create_user(client, admin_headers, "user@example.com")
    image_id = upload(client, title="pic").json()["id"]
    client.post(f"/api/images/{image_id}/comments", json={"text": "one"})
    client.post(f"/api/images/{image_id}/comments", json={"text": "two"})

    assert client.get("/api/comments/all", headers=user).status_code == 403
    comments = client.get("/api/comments/all", headers=admin_headers).json()["comments"]
    assert [c["text"] for c in comments] == ["two", "one"]
    assert comments[0]["image_title"] == "pic"


def test_album_lifecycle(client, admin_headers):
    _, user = create_user(client, admin_headers, "user@example.com")

    assert client.post("/api/albums", json={"name": "x"}).status_code == 401
    assert client.post("/api/albums", json={"name": "  "}, headers=user).status_code == 400

    created = client.post("/api/albums", json={"name": "Summer"}, headers=user)
    assert created.status_code == 201
    assert created.json()["is_public"] is True
    album_id = created.json()["id"]
    upload(client, album_id=album_id)

    [album] = client.get("/api/albums").json()
    assert album["name"] == "Summer"
    assert album["image_count"] == 1

    renamed = client.put(f"/api/albums/{album_id}", json={"name": "Winter"}, headers=user)
    assert renamed.status_code == 403
    renamed = client.put(f"/api/albums/{album_id}", json={"name": "Winter"}, headers=admin_headers)
    assert renamed.status_code == 200
    assert client.get("/api/albums").json()[0]["name"] == "Winter"
    assert client.get("/api/albums").json()[0]["is_public"] is True


def test_deleting_album_orphans_its_images(client, admin_headers):
    album_id = create_album(client, admin_headers, "Hidden", is_public=False)
    filename = upload(client, album_id=album_id).json()["filename"]
    assert client.get(f"/uploads/{filename}").status_code == 403

    response = client.delete(f"/api/albums/{album_id}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get("/api/albums").json() == []
    [image] = list_images(client)
    assert image["album_id"] is None
    # Orphans are public
    assert client.get(f"/uploads/{filename}").status_code == 200
    assert client.delete(f"/api/albums/{album_id}", headers=admin_headers).status_code == 404


def test_thumbnail_backfill(client, admin_headers, settings, monkeypatch):
    original = thumbnails_module.render_thumbnail

    def broken(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(thumbnails_module, "render_thumbnail", broken)
    filename = upload(client).json()["filename"]
    assert not (settings.thumbs_dir / filename).exists()
    monkeypatch.setattr(thumbnails_module, "render_thumbnail", original)

    _, user = create_user(client, admin_headers, "user@example.com")
    assert client.post("/api/admin/thumbnails/regenerate", headers=user).status_code == 403

    first = client.post("/api/admin/thumbnails/regenerate", headers=admin_headers)
    second = client.post("/api/admin/thumbnails/regenerate", headers=admin_headers)

    assert first.json() == {"success": True, "generated": 1}
    assert second.json() == {"success": True, "generated": 0}
    assert (settings.thumbs_dir / filename).is_file()


def test_health(client):
    for path in ("/health", "/api/health"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
