"""Foreign-key lookups that tolerate dangling references"""

from typing import Iterable, Optional, Protocol, TypeVar

UNKNOWN = "Unknown"


class HasId(Protocol):
    id: str


EntityT = TypeVar("EntityT", bound=HasId)


def index_by_id(entities: Iterable[EntityT]) -> dict[str, EntityT]:
    return {entity.id: entity for entity in entities}


def find_by_id(entities: Iterable[EntityT], entity_id: Optional[str]) -> Optional[EntityT]:
    """Return the entity with `entity_id`, or None when it was deleted or never existed"""
    if not entity_id:
        return None
    for entity in entities:
        if entity.id == entity_id:
            return entity
    return None


def name_or_placeholder(entity, placeholder: str = UNKNOWN) -> str:
    return entity.name if entity is not None else placeholder
