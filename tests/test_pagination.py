import asyncio

import pytest

from star_tally.client import GithubApiError, GithubNotFoundError, HeaderProfile
from star_tally.pagination import paginate


def identity(entry):
    return entry


def numbered(count, start=0):
    return [{"n": start + i} for i in range(count)]


def test_short_page_is_the_last_one(fake_client):
    client = fake_client({"items": [numbered(42)]})

    items = asyncio.run(paginate(client, "items", parse=identity))

    assert len(items) == 42
    assert client.pages_requested("items") == [1]


def test_full_page_then_empty_page_costs_one_extra_request(fake_client):
    client = fake_client({"items": [numbered(100), []]})

    items = asyncio.run(paginate(client, "items", parse=identity))

    assert len(items) == 100
    assert client.pages_requested("items") == [1, 2]


def test_pages_are_requested_in_order_with_page_size(fake_client):
    client = fake_client({"items": [numbered(3), numbered(3, 3), numbered(1, 6)]})

    items = asyncio.run(paginate(client, "items", parse=identity, page_size=3, params={"type": "owner"}))

    assert [item["n"] for item in items] == list(range(7))
    params = [call[1] for call in client.calls]
    assert params == [
        {"type": "owner", "per_page": 3, "page": 1},
        {"type": "owner", "per_page": 3, "page": 2},
        {"type": "owner", "per_page": 3, "page": 3},
    ]


def test_empty_first_page_returns_nothing(fake_client):
    client = fake_client({"items": []})

    assert asyncio.run(paginate(client, "items", parse=identity)) == []
    assert client.pages_requested("items") == [1]


def test_keep_filters_items_before_stop_check(fake_client):
    client = fake_client({"items": [numbered(100), numbered(100, 100), numbered(100, 200)]})
    seen_pages = []

    def stop_after(page):
        seen_pages.append(len(page))
        return page[-1]["n"] >= 150

    items = asyncio.run(
        paginate(
            client,
            "items",
            parse=identity,
            keep=lambda item: item["n"] % 2 == 0,
            stop_after=stop_after,
        )
    )

    # the stopping page still contributes its kept items
    assert len(items) == 100
    assert items[-1]["n"] == 198
    assert client.pages_requested("items") == [1, 2]
    # the predicate sees the whole parsed page, not only kept items
    assert seen_pages == [100, 100]


def test_profile_is_forwarded(fake_client):
    client = fake_client({"stars": [numbered(1)]})

    asyncio.run(paginate(client, "stars", parse=identity, profile=HeaderProfile.STAR))

    assert client.calls[0][2] is HeaderProfile.STAR


def test_not_found_raises_dedicated_error(fake_client):
    client = fake_client({"items": 404})

    with pytest.raises(GithubNotFoundError) as excinfo:
        asyncio.run(paginate(client, "items", parse=identity))

    assert excinfo.value.status == 404


def test_error_status_names_endpoint_and_reason(fake_client):
    client = fake_client({"users/octo/repos": 500})

    with pytest.raises(GithubApiError) as excinfo:
        asyncio.run(paginate(client, "users/octo/repos", parse=identity))

    assert not isinstance(excinfo.value, GithubNotFoundError)
    assert "users/octo/repos" in str(excinfo.value)
    assert "Internal Server Error" in str(excinfo.value)
    assert client.pages_requested("users/octo/repos") == [1]


def test_non_list_payload_is_rejected(fake_client):
    # page 1 is served as an object instead of an array
    client = fake_client({"items": [{"message": "oops"}]})

    with pytest.raises(GithubApiError, match="expected a JSON array"):
        asyncio.run(paginate(client, "items", parse=identity))


@pytest.mark.parametrize("page_size", [0, 101])
def test_page_size_bounds(fake_client, page_size):
    with pytest.raises(ValueError):
        asyncio.run(paginate(fake_client(), "items", parse=identity, page_size=page_size))
