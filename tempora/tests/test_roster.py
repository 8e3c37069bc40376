import logging

import pytest
from pydantic import ValidationError

from tempora.domain.errors import OwnerInvariantViolation
from tempora.domain.schemas.event import CollaboratorEntry, DraftUser
from tempora.services.roster.roster import CollaboratorRoster

OWNER_ID = 1


def _owners(roster: CollaboratorRoster) -> list[CollaboratorEntry]:
    return [entry for entry in roster.entries() if entry.role == "owner"]


def test_new_roster_has_acting_user_as_owner() -> None:
    roster = CollaboratorRoster(OWNER_ID)
    assert roster.entries() == [CollaboratorEntry(user_id=OWNER_ID, role="owner")]


def test_remove_owner_is_rejected_and_roster_unchanged() -> None:
    roster = CollaboratorRoster(OWNER_ID)
    roster.add(2)
    before = roster.entries()

    with pytest.raises(OwnerInvariantViolation):
        roster.remove(OWNER_ID)

    assert roster.entries() == before
    assert _owners(roster) == [CollaboratorEntry(user_id=OWNER_ID, role="owner")]


def test_demote_owner_is_rejected() -> None:
    roster = CollaboratorRoster(OWNER_ID)
    with pytest.raises(OwnerInvariantViolation):
        roster.set_role(OWNER_ID, "member")
    assert roster.role_of(OWNER_ID) == "owner"
    assert len(_owners(roster)) == 1


def test_non_strict_roster_ignores_owner_mutations(caplog) -> None:
    caplog.set_level(logging.WARNING)
    roster = CollaboratorRoster(OWNER_ID, strict=False)

    assert roster.remove(OWNER_ID) is False
    assert roster.set_role(OWNER_ID, "viewer") is False

    assert _owners(roster) == [CollaboratorEntry(user_id=OWNER_ID, role="owner")]
    assert any("Ignored roster mutation" in rec.message for rec in caplog.records)


def test_promoting_someone_else_to_owner_is_rejected() -> None:
    roster = CollaboratorRoster(OWNER_ID)
    roster.add(2)
    with pytest.raises(OwnerInvariantViolation):
        roster.set_role(2, "owner")
    with pytest.raises(OwnerInvariantViolation):
        roster.add(3, "owner")
    assert roster.role_of(2) == "member"
    assert 3 not in roster


def test_add_is_deduplicated() -> None:
    roster = CollaboratorRoster(OWNER_ID)
    assert roster.add(2, "viewer") is True
    assert roster.add(2, "member") is False
    assert roster.add(OWNER_ID) is False
    assert roster.role_of(2) == "viewer"
    assert len(roster) == 2


def test_set_role_and_remove_other_participants() -> None:
    roster = CollaboratorRoster(OWNER_ID)
    roster.add(2)
    roster.add(3)
    assert roster.set_role(2, "viewer") is True
    assert roster.set_role(99, "viewer") is False
    assert roster.remove(3) is True
    assert roster.remove(3) is False
    assert [(e.user_id, e.role) for e in roster.entries()] == [(OWNER_ID, "owner"), (2, "viewer")]


def test_unknown_role_is_rejected() -> None:
    roster = CollaboratorRoster(OWNER_ID)
    with pytest.raises(ValueError):
        roster.add(2, "admin")


def test_reconcile_owner_is_idempotent() -> None:
    roster = CollaboratorRoster.from_entries(OWNER_ID, [DraftUser(id=7, role="member")])

    assert roster.reconcile_owner() is True
    assert roster.reconcile_owner() is False

    ids = [entry.user_id for entry in roster.entries()]
    assert ids.count(OWNER_ID) == 1
    assert ids == [OWNER_ID, 7]


def test_reconcile_owner_when_already_listed() -> None:
    roster = CollaboratorRoster.from_entries(
        OWNER_ID,
        [DraftUser(id=OWNER_ID, role="owner"), DraftUser(id=7, role="viewer")],
    )
    assert roster.reconcile_owner() is False
    assert len(roster) == 2


def test_from_entries_demotes_foreign_owner_and_drops_duplicates() -> None:
    roster = CollaboratorRoster.from_entries(
        OWNER_ID,
        [
            DraftUser(id=5, role="owner"),
            DraftUser(id=6, role="viewer"),
            DraftUser(id=6, role="member"),
            # the acting user's stored role is irrelevant
            DraftUser(id=OWNER_ID, role="viewer"),
        ],
    )
    assert roster.role_of(5) == "member"
    assert roster.role_of(6) == "viewer"
    assert roster.role_of(OWNER_ID) == "owner"
    assert len(_owners(roster)) == 1


def test_participants_carry_only_user_ids() -> None:
    roster = CollaboratorRoster(OWNER_ID)
    roster.add(2, "viewer")
    assert [p.model_dump() for p in roster.participants()] == [{"user_id": OWNER_ID}, {"user_id": 2}]


def test_draft_user_rejects_unknown_role() -> None:
    with pytest.raises(ValidationError):
        DraftUser(id=2, role="admin")
