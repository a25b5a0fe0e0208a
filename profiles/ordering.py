"""
Position-based ordering shared by links, projects and experiences.

Every read and write is filtered on the owner, so ids that belong to
someone else simply match no rows. Positions are an ordering key with
gaps allowed, never an array index.
"""
import logging
import uuid
from django.db import transaction

logger = logging.getLogger(__name__)

UP = 'up'
DOWN = 'down'


def owned(model, owner):
    return model.objects.filter(user=owner)


def next_position(model, owner):
    """Current maximum position for the owner (0 when empty) plus one."""
    positions = list(owned(model, owner).select_for_update().values_list('position', flat=True))
    return (max(positions) if positions else 0) + 1


def append(model, owner, **fields):
    """Create an item after the owner's last item."""
    with transaction.atomic():
        position = next_position(model, owner)
        return model.objects.create(user=owner, position=position, **fields)


def parse_ids(ids):
    """Return the ids as UUIDs, or None when the list is empty or malformed."""
    if not isinstance(ids, (list, tuple)) or not ids:
        return None
    parsed = []
    for raw in ids:
        try:
            parsed.append(uuid.UUID(str(raw)))
        except ValueError:
            return None
    return parsed


def reorder(model, owner, ids):
    """
    Set each owned item's position to its index in ``ids``.

    All updates happen in one transaction. Returns the number of rows
    updated; an empty or malformed list updates nothing.
    """
    parsed = parse_ids(ids)
    if parsed is None:
        return 0

    updated = 0
    with transaction.atomic():
        for index, pk in enumerate(parsed):
            updated += owned(model, owner).filter(pk=pk).update(position=index)
    logger.info(f"Reordered {updated} {model._meta.verbose_name_plural} for user {owner.pk}")
    return updated


def move(model, owner, item_id, direction):
    """
    Move one item a single step up or down, swapping with the occupant.

    The target position is floored at 0. When the item already sits at the
    target (first item moved up) nothing changes. Returns True if anything
    was written.
    """
    if direction not in (UP, DOWN):
        return False

    with transaction.atomic():
        item = owned(model, owner).select_for_update().filter(pk=item_id).first()
        if item is None:
            return False

        step = -1 if direction == UP else 1
        target = max(item.position + step, 0)
        if target == item.position:
            return False

        other = owned(model, owner).select_for_update().filter(position=target).exclude(pk=item.pk).first()
        if other is not None:
            owned(model, owner).filter(pk=other.pk).update(position=item.position)
        owned(model, owner).filter(pk=item.pk).update(position=target)
    return True
