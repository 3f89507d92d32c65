"""Drag-and-drop reordering of a full favorites list."""
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def move_item(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """
    Return a copy of ``items`` with the element at ``from_index`` removed and
    re-inserted at ``to_index``.
    """
    size = len(items)
    if not 0 <= from_index < size or not 0 <= to_index < size:
        raise IndexError(f"move {from_index} -> {to_index} out of range for {size} items")
    result = list(items)
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return result


def reorder_by_drop(ids: Sequence[str], dragged_id: str, target_id: str) -> Optional[List[str]]:
    """
    New ID order after dropping ``dragged_id`` onto ``target_id``.

    Returns None when nothing changes: dropped on itself, or either id is
    not in the list.
    """
    if dragged_id == target_id:
        return None
    try:
        from_index = ids.index(dragged_id)
        to_index = ids.index(target_id)
    except ValueError:
        return None
    return move_item(ids, from_index, to_index)
