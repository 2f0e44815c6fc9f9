"""Friendship graphs for the social recommendation demo."""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Person:
    id: str
    name: str
    friends: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "friends", frozenset(self.friends))


class SocialGraph:
    """People and their friend lists.

    Friendships created through ``add_friendship`` are symmetric; friend
    lists passed to the constructor are taken as given.
    """

    def __init__(self, people: Iterable[Person] = ()):
        self._people: dict[str, Person] = {p.id: p for p in people}

    @classmethod
    def default(cls) -> "SocialGraph":
        """Build the eight-person sample graph (two separate circles)."""
        return cls(
            [
                Person("1", "Alice", frozenset({"2", "3"})),
                Person("2", "Bob", frozenset({"1", "4"})),
                Person("3", "Charlie", frozenset({"1", "5"})),
                Person("4", "Diana", frozenset({"2", "6"})),
                Person("5", "Evan", frozenset({"3"})),
                Person("6", "Fiona", frozenset({"4"})),
                Person("7", "George", frozenset({"8"})),
                Person("8", "Hannah", frozenset({"7"})),
            ],
        )

    @property
    def people(self) -> list[Person]:
        return list(self._people.values())

    def get(self, person_id: str) -> Person | None:
        return self._people.get(person_id)

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._people

    def __iter__(self):
        return iter(self._people.values())

    def __len__(self) -> int:
        return len(self._people)

    def add_person(self, name: str) -> Person:
        """Add a person without friends under the next free numeric id.

        Raises:
            ValueError: If the name is empty
        """
        if not name.strip():
            msg = "Name must not be empty"
            raise ValueError(msg)

        candidate = len(self._people) + 1
        while str(candidate) in self._people:
            candidate += 1
        person = Person(str(candidate), name)
        self._people[person.id] = person

        logger.debug("person_added", person_id=person.id, name=name)
        return person

    def add_friendship(self, a: str, b: str) -> bool:
        """Make two people friends of each other.

        Returns:
            False (and changes nothing) for self-friendship or unknown ids
        """
        if a == b or a not in self._people or b not in self._people:
            logger.warning("friendship_rejected", person_a=a, person_b=b)
            return False

        for one, other in ((a, b), (b, a)):
            person = self._people[one]
            self._people[one] = replace(person, friends=person.friends | {other})

        logger.debug("friendship_added", person_a=a, person_b=b)
        return True
