"""
Integration tests for the favorites GraphQL API over HTTP
"""
import pytest
from graphql import build_schema, print_schema

from tourhub.client import operations
from tourhub.gql import schema
from tourhub.gql.type_defs import type_defs


async def _gql(client, document, variables=None, headers=None):
    response = await client.post(
        "/graphql", json={"query": document, "variables": variables or {}}, headers=headers or {}
    )
    return response.json()


def test_schema_exposes_favorites_contract():
    query_fields = schema.query_type.fields
    mutation_fields = schema.mutation_type.fields

    assert set(query_fields) >= {"getFavorites", "isFavorite", "getTourFavorites"}
    assert set(mutation_fields) == {
        "addToFavorites", "removeFromFavorites", "toggleFavorite", "reorderFavorites"
    }
    assert str(query_fields["isFavorite"].type) == "Boolean!"
    assert str(mutation_fields["reorderFavorites"].args["favoriteIds"].type) == "[ID!]!"
    assert set(schema.type_map["Favorite"].fields) == {
        "id", "user", "tour", "isDeleted", "order", "createdAt", "updatedAt"
    }
    assert print_schema(schema) == print_schema(build_schema("\n".join(type_defs)))


@pytest.mark.asyncio
async def test_mutations_require_authentication(async_client, tours):
    body = await _gql(async_client, operations.TOGGLE_FAVORITE, {"tourId": str(tours[0].id)})

    assert body["data"] is None
    assert body["errors"][0]["extensions"]["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_get_favorites_requires_authentication(async_client):
    body = await _gql(async_client, operations.GET_FAVORITES)

    assert body["errors"][0]["extensions"]["code"] == "UNAUTHENTICATED"
    assert body["errors"][0]["message"] == "You must be logged in to view your favorites"


@pytest.mark.asyncio
async def test_is_favorite_is_false_for_anonymous(async_client, tours):
    body = await _gql(async_client, operations.IS_FAVORITE, {"tourId": str(tours[0].id)})

    assert "errors" not in body
    assert body["data"]["isFavorite"] is False


@pytest.mark.asyncio
async def test_toggle_round_trip(async_client, authenticated_headers, test_user, tours):
    tour_id = str(tours[0].id)

    body = await _gql(async_client, operations.TOGGLE_FAVORITE, {"tourId": tour_id}, authenticated_headers)
    result = body["data"]["toggleFavorite"]
    assert result["success"] is True
    assert result["message"] == "Tour added to your favorites"
    assert result["favorite"]["isDeleted"] is False
    assert result["favorite"]["tour"]["id"] == tour_id
    assert result["favorite"]["user"]["id"] == str(test_user.id)

    body = await _gql(async_client, operations.IS_FAVORITE, {"tourId": tour_id}, authenticated_headers)
    assert body["data"]["isFavorite"] is True

    body = await _gql(async_client, operations.TOGGLE_FAVORITE, {"tourId": tour_id}, authenticated_headers)
    result = body["data"]["toggleFavorite"]
    assert result["success"] is True
    assert result["message"] == "Tour removed from your favorites"
    assert result["favorite"]["isDeleted"] is True

    body = await _gql(async_client, operations.IS_FAVORITE, {"tourId": tour_id}, authenticated_headers)
    assert body["data"]["isFavorite"] is False


@pytest.mark.asyncio
async def test_toggle_unknown_tour_is_result_failure(async_client, authenticated_headers, tours):
    body = await _gql(async_client, operations.TOGGLE_FAVORITE, {"tourId": "987654"}, authenticated_headers)

    assert "errors" not in body
    result = body["data"]["toggleFavorite"]
    assert result == {"success": False, "message": "Tour not found", "favorite": None}


@pytest.mark.asyncio
async def test_add_twice_and_remove_missing(async_client, authenticated_headers, tours):
    tour_id = str(tours[1].id)

    body = await _gql(async_client, operations.ADD_TO_FAVORITES, {"tourId": tour_id}, authenticated_headers)
    assert body["data"]["addToFavorites"]["success"] is True

    body = await _gql(async_client, operations.ADD_TO_FAVORITES, {"tourId": tour_id}, authenticated_headers)
    assert body["data"]["addToFavorites"]["success"] is False
    assert body["data"]["addToFavorites"]["message"] == "Tour is already in your favorites"

    body = await _gql(async_client, operations.REMOVE_FROM_FAVORITES, {"tourId": str(tours[2].id)}, authenticated_headers)
    assert body["data"]["removeFromFavorites"]["success"] is False


@pytest.mark.asyncio
async def test_reorder_then_list(async_client, authenticated_headers, tours):
    ids = []
    for tour in tours[:3]:
        body = await _gql(async_client, operations.ADD_TO_FAVORITES, {"tourId": str(tour.id)}, authenticated_headers)
        ids.append(body["data"]["addToFavorites"]["favorite"]["id"])
    a, b, c = ids

    body = await _gql(async_client, operations.REORDER_FAVORITES, {"favoriteIds": [c, a, b]}, authenticated_headers)
    result = body["data"]["reorderFavorites"]
    assert result["success"] is True
    assert [f["id"] for f in result["favorites"]] == [c, a, b]
    assert [f["order"] for f in result["favorites"]] == [1, 2, 3]

    body = await _gql(async_client, operations.GET_FAVORITES, {"limit": 2, "offset": 0}, authenticated_headers)
    listing = body["data"]["getFavorites"]
    assert listing["success"] is True
    assert listing["total"] == 3
    assert [f["id"] for f in listing["favorites"]] == [c, a]


@pytest.mark.asyncio
async def test_reorder_with_foreign_id_changes_nothing(
    async_client, authenticated_headers, headers_for, other_user, tours
):
    body = await _gql(async_client, operations.ADD_TO_FAVORITES, {"tourId": str(tours[0].id)}, authenticated_headers)
    mine = body["data"]["addToFavorites"]["favorite"]["id"]
    body = await _gql(async_client, operations.ADD_TO_FAVORITES, {"tourId": str(tours[1].id)}, headers_for(other_user))
    theirs = body["data"]["addToFavorites"]["favorite"]["id"]

    body = await _gql(async_client, operations.REORDER_FAVORITES, {"favoriteIds": [theirs, mine]}, authenticated_headers)
    result = body["data"]["reorderFavorites"]
    assert result["success"] is False
    assert result["message"] == "Some favorites do not exist or do not belong to you"
    assert result["favorites"] == []

    body = await _gql(async_client, operations.GET_FAVORITES, None, headers_for(other_user))
    listing = body["data"]["getFavorites"]
    assert [(f["id"], f["order"]) for f in listing["favorites"]] == [(theirs, 1)]


@pytest.mark.asyncio
async def test_invalid_pagination_is_result_failure(async_client, authenticated_headers):
    body = await _gql(async_client, operations.GET_FAVORITES, {"limit": 0, "offset": 0}, authenticated_headers)

    listing = body["data"]["getFavorites"]
    assert listing["success"] is False
    assert listing["favorites"] == []
    assert listing["total"] == 0


@pytest.mark.asyncio
async def test_tour_favorites_lists_all_users(async_client, authenticated_headers, headers_for, other_user, tours):
    tour_id = str(tours[0].id)
    await _gql(async_client, operations.ADD_TO_FAVORITES, {"tourId": tour_id}, authenticated_headers)
    await _gql(async_client, operations.ADD_TO_FAVORITES, {"tourId": tour_id}, headers_for(other_user))

    body = await _gql(async_client, operations.GET_TOUR_FAVORITES, {"tourId": tour_id}, authenticated_headers)
    listing = body["data"]["getTourFavorites"]
    assert listing["success"] is True
    assert listing["total"] == 2
    assert {f["user"]["email"] for f in listing["favorites"]} == {
        "traveler@example.com", "someone-else@example.com"
    }


@pytest.mark.asyncio
async def test_me_query(async_client, authenticated_headers, test_user):
    body = await _gql(async_client, "{ me { id email role } }", None, authenticated_headers)
    assert body["data"]["me"] == {"id": str(test_user.id), "email": test_user.email, "role": "customer"}

    body = await _gql(async_client, "{ me { id } }")
    assert body["data"]["me"] is None
