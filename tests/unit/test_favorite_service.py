"""
Unit tests for FavoriteService: toggle, add/remove, listing and reordering
"""
import pytest
from sqlalchemy import select

from tourhub.core.exceptions import (
    FavoriteAlreadyExistsError,
    FavoriteNotFoundError,
    FavoriteOrderMismatchError,
    InvalidPaginationError,
    TourNotFoundError,
)
from tourhub.models.favorite import Favorite
from tourhub.models.tour import Tour
from tourhub.services.favorite_service import FavoriteService


@pytest.mark.asyncio
async def test_toggle_adds_then_soft_deletes(db_session, test_user, tours):
    service = FavoriteService(db_session)

    favorite, added = await service.toggle_favorite(test_user.id, str(tours[0].id))
    assert added is True
    assert favorite.is_deleted is False
    assert favorite.order == 1
    assert favorite.tour.title == "Ha Long Bay Cruise"

    removed, added = await service.toggle_favorite(test_user.id, str(tours[0].id))
    assert added is False
    assert removed.id == favorite.id
    assert removed.is_deleted is True

    rows = (await db_session.execute(select(Favorite))).scalars().all()
    assert len(rows) == 1


@pytest.mark.asyncio
async def test_toggle_reactivates_same_row_at_tail(db_session, test_user, tours):
    service = FavoriteService(db_session)
    first, _ = await service.toggle_favorite(test_user.id, tours[0].id)
    await service.toggle_favorite(test_user.id, tours[1].id)
    await service.toggle_favorite(test_user.id, tours[0].id)

    again, added = await service.toggle_favorite(test_user.id, tours[0].id)
    assert added is True
    assert again.id == first.id
    assert again.order == 3

    favorites, total = await service.list_favorites(test_user.id)
    assert total == 2
    assert [f.tour_id for f in favorites] == [tours[1].id, tours[0].id]


@pytest.mark.asyncio
async def test_toggle_unknown_tour(db_session, test_user, tours):
    service = FavoriteService(db_session)
    with pytest.raises(TourNotFoundError):
        await service.toggle_favorite(test_user.id, "999")
    with pytest.raises(TourNotFoundError):
        await service.toggle_favorite(test_user.id, "not-a-number")


@pytest.mark.asyncio
async def test_toggle_deleted_tour_is_not_found(db_session, test_user, tours):
    tours[2].is_deleted = True
    await db_session.commit()

    with pytest.raises(TourNotFoundError):
        await FavoriteService(db_session).toggle_favorite(test_user.id, tours[2].id)


@pytest.mark.asyncio
async def test_add_and_remove_are_set_operations(db_session, test_user, tours):
    service = FavoriteService(db_session)

    favorite = await service.add_favorite(test_user.id, tours[0].id)
    assert favorite.is_deleted is False
    with pytest.raises(FavoriteAlreadyExistsError):
        await service.add_favorite(test_user.id, tours[0].id)

    removed = await service.remove_favorite(test_user.id, tours[0].id)
    assert removed.is_deleted is True
    with pytest.raises(FavoriteNotFoundError):
        await service.remove_favorite(test_user.id, tours[0].id)
    with pytest.raises(FavoriteNotFoundError):
        await service.remove_favorite(test_user.id, tours[1].id)


@pytest.mark.asyncio
async def test_is_favorite_is_user_scoped(db_session, test_user, other_user, tours):
    service = FavoriteService(db_session)
    await service.add_favorite(test_user.id, tours[0].id)

    assert await service.is_favorite(test_user.id, tours[0].id) is True
    assert await service.is_favorite(other_user.id, tours[0].id) is False
    assert await service.is_favorite(test_user.id, tours[1].id) is False
    assert await service.is_favorite(test_user.id, "abc") is False


@pytest.mark.asyncio
async def test_is_favorite_false_once_tour_is_deleted(db_session, test_user, tours):
    service = FavoriteService(db_session)
    await service.add_favorite(test_user.id, tours[0].id)

    tours[0].is_deleted = True
    await db_session.commit()

    assert await service.is_favorite(test_user.id, tours[0].id) is False
    favorites, total = await service.list_favorites(test_user.id)
    assert favorites == []
    assert total == 0


@pytest.mark.asyncio
async def test_list_orders_by_order_then_newest(db_session, test_user, tours):
    service = FavoriteService(db_session)
    for tour in tours[:3]:
        await service.add_favorite(test_user.id, tour.id)

    # Force a tie on order: the newer favorite comes first
    rows = (await db_session.execute(select(Favorite).order_by(Favorite.id))).scalars().all()
    for row in rows:
        row.order = 1
    await db_session.commit()

    favorites, total = await service.list_favorites(test_user.id)
    assert total == 3
    assert [f.tour_id for f in favorites] == [tours[2].id, tours[1].id, tours[0].id]


@pytest.mark.asyncio
async def test_list_pagination_and_total(db_session, test_user, tours):
    service = FavoriteService(db_session)
    for tour in tours:
        await service.add_favorite(test_user.id, tour.id)

    page, total = await service.list_favorites(test_user.id, limit=2, offset=0)
    assert total == 4
    assert [f.tour_id for f in page] == [tours[0].id, tours[1].id]

    page, total = await service.list_favorites(test_user.id, limit=2, offset=2)
    assert total == 4
    assert [f.tour_id for f in page] == [tours[2].id, tours[3].id]

    page, total = await service.list_favorites(test_user.id, limit=2, offset=10)
    assert page == []
    assert total == 4


@pytest.mark.asyncio
async def test_list_hides_deleted_tours(db_session, test_user, tours):
    service = FavoriteService(db_session)
    await service.add_favorite(test_user.id, tours[0].id)
    await service.add_favorite(test_user.id, tours[1].id)

    tours[0].is_deleted = True
    await db_session.commit()

    favorites, total = await service.list_favorites(test_user.id)
    assert total == 1
    assert [f.tour_id for f in favorites] == [tours[1].id]


@pytest.mark.asyncio
@pytest.mark.parametrize("limit, offset", [(0, 0), (101, 0), (5, -1)])
async def test_list_rejects_bad_pagination(db_session, test_user, limit, offset):
    with pytest.raises(InvalidPaginationError):
        await FavoriteService(db_session).list_favorites(test_user.id, limit=limit, offset=offset)


@pytest.mark.asyncio
async def test_reorder_rewrites_order(db_session, test_user, tours):
    service = FavoriteService(db_session)
    a = await service.add_favorite(test_user.id, tours[0].id)
    b = await service.add_favorite(test_user.id, tours[1].id)
    c = await service.add_favorite(test_user.id, tours[2].id)

    result = await service.reorder_favorites(test_user.id, [str(c.id), str(a.id), str(b.id)])
    assert [f.id for f in result] == [c.id, a.id, b.id]
    assert [f.order for f in result] == [1, 2, 3]

    favorites, _ = await service.list_favorites(test_user.id)
    assert [f.id for f in favorites] == [c.id, a.id, b.id]


@pytest.mark.asyncio
async def test_reorder_rejects_foreign_ids_without_writing(db_session, test_user, other_user, tours):
    service = FavoriteService(db_session)
    a = await service.add_favorite(test_user.id, tours[0].id)
    b = await service.add_favorite(test_user.id, tours[1].id)
    foreign = await service.add_favorite(other_user.id, tours[2].id)

    with pytest.raises(FavoriteOrderMismatchError) as exc_info:
        await service.reorder_favorites(test_user.id, [str(b.id), str(foreign.id), str(a.id)])
    assert str(foreign.id) in exc_info.value.details["unknown_ids"]

    favorites, _ = await service.list_favorites(test_user.id)
    assert [(f.id, f.order) for f in favorites] == [(a.id, 1), (b.id, 2)]


@pytest.mark.asyncio
async def test_reorder_rejects_partial_and_duplicate_lists(db_session, test_user, tours):
    service = FavoriteService(db_session)
    a = await service.add_favorite(test_user.id, tours[0].id)
    b = await service.add_favorite(test_user.id, tours[1].id)

    with pytest.raises(FavoriteOrderMismatchError):
        await service.reorder_favorites(test_user.id, [str(b.id)])
    with pytest.raises(FavoriteOrderMismatchError):
        await service.reorder_favorites(test_user.id, [str(b.id), str(b.id), str(a.id)])


@pytest.mark.asyncio
async def test_reorder_empty_list_is_noop(db_session, test_user, tours):
    service = FavoriteService(db_session)
    a = await service.add_favorite(test_user.id, tours[0].id)

    result = await service.reorder_favorites(test_user.id, [])
    assert [(f.id, f.order) for f in result] == [(a.id, 1)]


@pytest.mark.asyncio
async def test_tour_favorites_across_users(db_session, test_user, other_user, tours):
    service = FavoriteService(db_session)
    await service.add_favorite(test_user.id, tours[0].id)
    await service.add_favorite(other_user.id, tours[0].id)
    await service.add_favorite(other_user.id, tours[1].id)
    await service.remove_favorite(test_user.id, tours[0].id)

    favorites = await service.list_tour_favorites(tours[0].id)
    assert [f.user_id for f in favorites] == [other_user.id]


@pytest.mark.asyncio
async def test_reorder_replay_changes_nothing(db_session, test_user, tours):
    service = FavoriteService(db_session)
    a = await service.add_favorite(test_user.id, tours[0].id)
    b = await service.add_favorite(test_user.id, tours[1].id)
    c = await service.add_favorite(test_user.id, tours[2].id)
    ids = [str(b.id), str(c.id), str(a.id)]

    first = [(f.id, f.order, f.updated_at) for f in await service.reorder_favorites(test_user.id, ids)]
    second = [(f.id, f.order, f.updated_at) for f in await service.reorder_favorites(test_user.id, ids)]

    assert second == first
    assert [fid for fid, _, _ in second] == [b.id, c.id, a.id]


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [1, 2, 3, 4, 7, 11])
async def test_pages_concatenate_to_full_list(db_session, test_user, tours, limit):
    extra = [Tour(title=f"Extra tour {n}", price=10.0 + n) for n in range(3)]
    db_session.add_all(extra)
    await db_session.commit()

    service = FavoriteService(db_session)
    for tour in tours + extra:
        await service.add_favorite(test_user.id, tour.id)
    # a removal leaves a gap in order values
    await service.remove_favorite(test_user.id, tours[1].id)

    expected = [f.id for f in await service.list_all_favorites(test_user.id)]
    assert len(expected) == 6

    walked = []
    offset = 0
    while True:
        page, total = await service.list_favorites(test_user.id, limit=limit, offset=offset)
        assert total == len(expected)
        if not page:
            break
        assert len(page) <= limit
        walked.extend(f.id for f in page)
        offset += limit

    assert walked == expected
    assert len(set(walked)) == len(walked)
