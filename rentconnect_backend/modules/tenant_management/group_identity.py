"""Household (tenant group) id allocation."""

import uuid

# Ids stay within 53 bits so JavaScript clients can hold them exactly.
GROUP_ID_BITS = 53
_GROUP_ID_MASK = (1 << GROUP_ID_BITS) - 1


def new_group_id() -> int:
    """Return a fresh, positive household id.

    Nothing is reserved here: the id is claimed when the household's
    ``tenant_groups`` row is written, and the primary key there rejects a
    duplicate.
    """
    while True:
        group_id = uuid.uuid4().int & _GROUP_ID_MASK
        if group_id:
            return group_id
