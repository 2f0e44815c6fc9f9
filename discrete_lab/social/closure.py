"""Reachability over friendships: transitive closure and recommendations."""

from collections.abc import Iterable

import structlog

from discrete_lab.social.friendships import Person

logger = structlog.get_logger(__name__)


def id_order(person_id: str) -> tuple[int, str]:
    """Sort key placing numeric ids in numeric order ("9" before "10")."""
    return len(person_id), person_id


def transitive_closure(people: Iterable[Person]) -> dict[str, frozenset[str]]:
    """Compute who can reach whom through any chain of friendships.

    Warshall's triple loop over (k, i, j): if i reaches k and k reaches j,
    then i reaches j. Passes repeat until one adds nothing, so the result
    does not depend on iteration order. Friend ids that do not name a person
    are dropped. A person is in their own row only through a cycle (for
    example a mutual friendship).

    Returns:
        Mapping of person id to the ids reachable from them
    """
    people = list(people)
    ids = [p.id for p in people]
    known = set(ids)
    reach: dict[str, set[str]] = {p.id: set(p.friends) & known for p in people}

    passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        for k in ids:
            for i in ids:
                if k not in reach[i]:
                    continue
                for j in ids:
                    if j in reach[k] and j not in reach[i]:
                        reach[i].add(j)
                        changed = True

    logger.debug("transitive_closure_computed", person_count=len(ids), passes=passes)
    return {pid: frozenset(targets) for pid, targets in reach.items()}


def reachable_from(people: Iterable[Person], person_id: str) -> frozenset[str]:
    """Ids reachable from one person (empty for an unknown id)."""
    return transitive_closure(people).get(person_id, frozenset())


def friend_recommendations(people: Iterable[Person], person_id: str) -> list[str]:
    """Suggest friends of friends.

    Excludes the person, unknown ids and anyone who is already a direct
    friend. Friends are visited in id order and ids are returned once each,
    in the order they are first met.

    Returns:
        Recommended ids; empty for an unknown person
    """
    by_id = {p.id: p for p in people}
    person = by_id.get(person_id)
    if person is None:
        logger.warning("recommendations_for_unknown_person", person_id=person_id)
        return []

    recommendations: dict[str, None] = {}
    for friend_id in sorted(person.friends, key=id_order):
        friend = by_id.get(friend_id)
        if friend is None:
            continue
        for candidate in sorted(friend.friends, key=id_order):
            if candidate in by_id and candidate != person_id and candidate not in person.friends:
                recommendations[candidate] = None

    logger.info(
        "friend_recommendations_computed",
        person_id=person_id,
        count=len(recommendations),
    )
    return list(recommendations)
