from __future__ import annotations

import pytest

from actorlet import ActorRef


def test_ref_renders_as_actor_id() -> None:
    assert str(ActorRef(7)) == "ACTOR-7"
    assert ActorRef(7).id == "ACTOR-7"


def test_parse_roundtrips_id() -> None:
    assert ActorRef.parse("ACTOR-999") == ActorRef(999)


@pytest.mark.parametrize("raw", ["actor-1", "ACTOR-", "ACTOR-x", "7", ""])
def test_parse_rejects_malformed_ids(raw: str) -> None:
    with pytest.raises(ValueError, match="Invalid actor id"):
        ActorRef.parse(raw)


def test_refs_are_hashable_and_ordered_by_creation() -> None:
    refs = {ActorRef(2): "b", ActorRef(1): "a"}
    assert refs[ActorRef(1)] == "a"
    assert sorted(refs) == [ActorRef(1), ActorRef(2)]


def test_ref_is_frozen() -> None:
    ref = ActorRef(1)
    with pytest.raises(AttributeError):
        ref.serial = 2  # type: ignore[misc]
