import pytest

from gallery.services.gallery_query import GalleryQuery, SortKey
from tests.conftest import create_album, create_user, list_images, upload


def _titles(images):
    return [img["title"] for img in images]


def test_query_params_are_normalized():
    assert GalleryQuery.from_params() == GalleryQuery(None, SortKey.CREATED_AT, True)
    assert GalleryQuery.from_params(sort="bogus", order="ASC") == GalleryQuery(
        None, SortKey.CREATED_AT, False
    )
    assert GalleryQuery.from_params(album_id=3, sort="title", order="sideways") == GalleryQuery(
        3, SortKey.TITLE, True
    )


@pytest.fixture
def dated_images(client):
    upload(client, title="undated")
    upload(client, title="2020", date_taken="2020-01-01")
    upload(client, title="2021", date_taken="2021-01-01")


def test_date_taken_nulls_last_ascending(client, dated_images):
    images = list_images(client, sort="date_taken", order="asc")

    assert [img["date_taken"] for img in images] == ["2020-01-01", "2021-01-01", None]


def test_date_taken_nulls_last_descending(client, dated_images):
    images = list_images(client, sort="date_taken", order="desc")

    assert [img["date_taken"] for img in images] == ["2021-01-01", "2020-01-01", None]


def test_title_sort_puts_untitled_last(client):
    upload(client, title="banana")
    upload(client)
    upload(client, title="apple")

    assert _titles(list_images(client, sort="title", order="asc")) == ["apple", "banana", None]
    assert _titles(list_images(client, sort="title", order="desc")) == ["banana", "apple", None]


def test_equal_dates_break_ties_by_creation_in_same_direction(client):
    upload(client, title="first", date_taken="2020-05-05")
    upload(client, title="second", date_taken="2020-05-05")

    assert _titles(list_images(client, sort="date_taken", order="asc")) == ["first", "second"]
    assert _titles(list_images(client, sort="date_taken", order="desc")) == ["second", "first"]


def test_default_sort_is_newest_first(client):
    for title in ("one", "two", "three"):
        upload(client, title=title)

    assert _titles(list_images(client)) == ["three", "two", "one"]
    assert _titles(list_images(client, sort="nonsense")) == ["three", "two", "one"]
    assert _titles(list_images(client, order="asc")) == ["one", "two", "three"]


def test_like_count_sort_and_aggregates(client, admin_headers):
    _, alice = create_user(client, admin_headers, "alice@example.com")
    _, bob = create_user(client, admin_headers, "bob@example.com")
    ids = {title: upload(client, title=title).json()["id"] for title in ("none", "one", "two")}

    client.post(f"/api/images/{ids['two']}/like", headers=alice)
    client.post(f"/api/images/{ids['two']}/like", headers=bob)
    client.post(f"/api/images/{ids['one']}/like", headers=alice)
    client.post(f"/api/images/{ids['one']}/comments", json={"text": "nice"})

    desc = list_images(client, sort="like_count", order="desc")
    assert [(img["title"], img["like_count"]) for img in desc] == [
        ("two", 2),
        ("one", 1),
        ("none", 0),
    ]
    assert {img["title"]: img["comment_count"] for img in desc} == {"two": 0, "one": 1, "none": 0}

    asc = list_images(client, sort="like_count", order="asc")
    assert _titles(asc) == ["none", "one", "two"]


def test_like_is_idempotent(client, admin_headers):
    _, alice = create_user(client, admin_headers, "alice@example.com")
    image_id = upload(client).json()["id"]

    first = client.post(f"/api/images/{image_id}/like", headers=alice)
    second = client.post(f"/api/images/{image_id}/like", headers=alice)

    assert first.status_code == 200
    assert second.status_code == 200
    assert list_images(client)[0]["like_count"] == 1


def test_unlike_removes_like(client, admin_headers):
    _, alice = create_user(client, admin_headers, "alice@example.com")
    image_id = upload(client).json()["id"]
    client.post(f"/api/images/{image_id}/like", headers=alice)

    response = client.delete(f"/api/images/{image_id}/like", headers=alice)

    assert response.status_code == 200
    assert list_images(client)[0]["like_count"] == 0


def test_like_requires_an_account(client, admin_headers):
    image_id = upload(client).json()["id"]

    assert client.post(f"/api/images/{image_id}/like").status_code == 401
    # The admin fallback identity has no users row to attach a like to
    assert client.post(f"/api/images/{image_id}/like", headers=admin_headers).status_code == 401


def test_like_missing_image_is_not_found(client, admin_headers):
    _, alice = create_user(client, admin_headers, "alice@example.com")

    assert client.post("/api/images/999/like", headers=alice).status_code == 404


def test_user_liked_only_present_for_account_holders(client, admin_headers):
    _, alice = create_user(client, admin_headers, "alice@example.com")
    liked = upload(client, title="liked").json()["id"]
    upload(client, title="other")
    client.post(f"/api/images/{liked}/like", headers=alice)

    mine = {img["title"]: img["user_liked"] for img in list_images(client, headers=alice)}
    assert mine == {"liked": True, "other": False}

    anonymous = list_images(client)
    assert all("user_liked" not in img for img in anonymous)


def test_album_filter_and_album_flag(client, admin_headers):
    private_id = create_album(client, admin_headers, "Private", is_public=False)
    public_id = create_album(client, admin_headers, "Public", is_public=True)
    upload(client, title="p", album_id=private_id)
    upload(client, title="q", album_id=public_id)
    upload(client, title="orphan")

    filtered = list_images(client, album_id=private_id)
    assert _titles(filtered) == ["p"]
    assert filtered[0]["album_public"] is False

    flags = {img["title"]: img["album_public"] for img in list_images(client)}
    assert flags == {"p": False, "q": True, "orphan": None}


def test_album_filter_is_lenient(client):
    upload(client, title="only")

    for raw in ("", "abc", "0"):
        assert _titles(list_images(client, album_id=raw, sort="", order="")) == ["only"]
    assert GalleryQuery.from_params(album_id="") == GalleryQuery()
    assert GalleryQuery.from_params(album_id="junk").album_id is None
    assert GalleryQuery.from_params(album_id=" 7 ").album_id == 7


def test_title_sort_ignores_case(client):
    for title in ("banana", "Apple", "cherry", "Zebra"):
        upload(client, title=title)

    asc = _titles(list_images(client, sort="title", order="asc"))
    desc = _titles(list_images(client, sort="title", order="desc"))

    assert asc == ["Apple", "banana", "cherry", "Zebra"]
    assert desc == ["Zebra", "cherry", "banana", "Apple"]


def test_equal_titles_break_ties_by_creation_in_same_direction(client):
    first = upload(client, title="same").json()["id"]
    second = upload(client, title="same").json()["id"]

    asc = list_images(client, sort="title", order="asc")
    desc = list_images(client, sort="title", order="desc")

    assert [img["id"] for img in asc] == [first, second]
    assert [img["id"] for img in desc] == [second, first]


def test_equal_like_counts_break_ties_by_creation_in_same_direction(client, admin_headers):
    _, alice = create_user(client, admin_headers, "alice@example.com")
    ids = {title: upload(client, title=title).json()["id"] for title in ("a", "b", "c")}
    client.post(f"/api/images/{ids['a']}/like", headers=alice)
    client.post(f"/api/images/{ids['b']}/like", headers=alice)

    assert _titles(list_images(client, sort="like_count", order="desc")) == ["b", "a", "c"]
    assert _titles(list_images(client, sort="like_count", order="asc")) == ["c", "a", "b"]
