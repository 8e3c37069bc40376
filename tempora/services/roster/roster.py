from __future__ import annotations

import logging
from typing import Iterable, get_args

from tempora.domain.errors import OwnerInvariantViolation
from tempora.domain.schemas.event import CollaboratorEntry, DraftUser, Participant, Role

logger = logging.getLogger(__name__)

OWNER: Role = "owner"
DEFAULT_ROLE: Role = "member"
ROLES: tuple[str, ...] = get_args(Role)


def _check_role(role: str) -> Role:
    if role not in ROLES:
        raise ValueError(f"Unknown collaborator role: {role!r}")
    return role  # type: ignore[return-value]


class CollaboratorRoster:
    """Collaborators of an event being composed.

    The acting user is held in a dedicated owner slot; everybody else lives in
    an insertion-ordered mapping of user id to role. The owner can never be
    placed in that mapping, so there is always exactly one owner entry.

    Mutations that target the acting user raise ``OwnerInvariantViolation``
    unless the roster was built with ``strict=False``, in which case they are
    logged and ignored.
    """

    def __init__(self, owner_id: int, strict: bool = True) -> None:
        self.owner_id = owner_id
        self.strict = strict
        self._others: dict[int, Role] = {}
        # whether the owner was listed when the roster was last seeded
        self._owner_listed = True

    @classmethod
    def from_entries(
        cls,
        owner_id: int,
        entries: Iterable[DraftUser | CollaboratorEntry],
        strict: bool = True,
    ) -> "CollaboratorRoster":
        """Seed a roster from a stored list of selected users."""
        roster = cls(owner_id, strict=strict)
        roster._owner_listed = False
        for entry in entries:
            user_id = entry.user_id if isinstance(entry, CollaboratorEntry) else entry.id
            role = _check_role(entry.role)
            if user_id == owner_id:
                roster._owner_listed = True
                continue
            if user_id in roster._others:
                continue
            if role == OWNER:
                logger.warning("Demoting stored owner user_id=%s to %s", user_id, DEFAULT_ROLE)
                role = DEFAULT_ROLE
            roster._others[user_id] = role
        return roster

    def reconcile_owner(self) -> bool:
        """Make sure the acting user is listed as owner.

        Returns True when the acting user had to be inserted. Running it again
        is a no-op.
        """
        if self._owner_listed:
            return False
        self._owner_listed = True
        logger.debug("Inserted acting user_id=%s as owner", self.owner_id)
        return True

    def add(self, user_id: int, role: str = DEFAULT_ROLE) -> bool:
        role = _check_role(role)
        if user_id == self.owner_id or user_id in self._others:
            return False
        if role == OWNER:
            return self._reject(user_id, "add a second owner alongside")
        self._others[user_id] = role
        return True

    def remove(self, user_id: int) -> bool:
        if user_id == self.owner_id:
            return self._reject(user_id, "remove")
        return self._others.pop(user_id, None) is not None

    def set_role(self, user_id: int, role: str) -> bool:
        role = _check_role(role)
        if user_id == self.owner_id:
            if role == OWNER:
                return False
            return self._reject(user_id, f"change to {role}")
        if user_id not in self._others:
            return False
        if role == OWNER:
            return self._reject(user_id, "transfer ownership away from")
        self._others[user_id] = role
        return True

    def _reject(self, user_id: int, action: str) -> bool:
        violation = OwnerInvariantViolation(user_id, action)
        if self.strict:
            raise violation
        logger.warning("Ignored roster mutation: %s", violation)
        return False

    def role_of(self, user_id: int) -> Role | None:
        if user_id == self.owner_id:
            return OWNER
        return self._others.get(user_id)

    def __contains__(self, user_id: object) -> bool:
        return user_id == self.owner_id or user_id in self._others

    def __len__(self) -> int:
        return 1 + len(self._others)

    def entries(self) -> list[CollaboratorEntry]:
        owner = CollaboratorEntry(user_id=self.owner_id, role=OWNER)
        return [owner] + [CollaboratorEntry(user_id=uid, role=role) for uid, role in self._others.items()]

    def participants(self) -> tuple[Participant, ...]:
        return tuple(Participant(user_id=entry.user_id) for entry in self.entries())

    def to_draft_users(self) -> list[DraftUser]:
        return [DraftUser(id=entry.user_id, role=entry.role) for entry in self.entries()]
