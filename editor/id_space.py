"""
Thing ID allocation and removal.

IDs form four contiguous ranges (items, outfits, effects, distances)
derived from the category counters. Inserting into a category shifts every
later thing up by one; removing the last thing of a category shifts every
later thing down by one. Dirty IDs follow the things they belong to.
"""

from typing import Set

from data import DEBUG, ValidationError, CATEGORY_ORDER
from asset_files import ObjectData, category_of, category_range
from .context import EditContext


def _shift_up(object_data: ObjectData, shift_from: int, old_total: int) -> None:
    # Highest first so no slot is overwritten before it is moved
    for thing_id in range(old_total, shift_from - 1, -1):
        thing = object_data.things.pop(thing_id, None)
        if thing is not None:
            thing.id = thing_id + 1
            object_data.things[thing_id + 1] = thing


def _shift_down(object_data: ObjectData, removed_id: int, old_total: int) -> None:
    # Lowest first so no slot is overwritten before it is moved
    for thing_id in range(removed_id + 1, old_total + 1):
        thing = object_data.things.pop(thing_id, None)
        if thing is not None:
            thing.id = thing_id - 1
            object_data.things[thing_id - 1] = thing


def allocate(context: EditContext, category: str) -> int:
    """
    Grow a category by one and return the new, still empty, thing ID.

    The ID is marked dirty; the caller stores the thing under it.
    """
    if category not in CATEGORY_ORDER:
        raise ValidationError(f"Unknown category: {category}")

    object_data = context.object_data
    old_total = object_data.total_count

    object_data.set_counter(category, object_data.get_counter(category) + 1)
    _, insert_id = category_range(object_data, category)

    if insert_id <= old_total:
        _shift_up(object_data, insert_id, old_total)
        shifted: Set[int] = set()
        for dirty_id in context.dirty_ids:
            shifted.add(dirty_id + 1 if dirty_id >= insert_id else dirty_id)
        context.dirty_ids = shifted

    context.dirty_ids.add(insert_id)

    if DEBUG:
        print(f"[DEBUG] Allocated {category} ID {insert_id} (shifted {old_total - insert_id + 1})")

    return insert_id


def remove(context: EditContext, thing_id: int) -> str:
    """
    Remove the last thing of its category and close the gap.

    Returns:
        The category the thing belonged to

    Raises:
        ValidationError: if thing_id is not the last ID of its category.
    """
    object_data = context.object_data
    category = category_of(object_data, thing_id)
    _, last_id = category_range(object_data, category)
    if thing_id != last_id:
        raise ValidationError(
            f"Only the last {category} ({last_id}) can be removed, not {thing_id}"
        )

    old_total = object_data.total_count
    object_data.things.pop(thing_id, None)
    object_data.set_counter(category, object_data.get_counter(category) - 1)
    _shift_down(object_data, thing_id, old_total)

    shifted: Set[int] = set()
    for dirty_id in context.dirty_ids:
        if dirty_id == thing_id:
            continue
        shifted.add(dirty_id - 1 if dirty_id > thing_id else dirty_id)
    context.dirty_ids = shifted

    if DEBUG:
        print(f"[DEBUG] Removed {category} ID {thing_id}")

    return category
