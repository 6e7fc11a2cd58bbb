"""In-memory implementation of EntityDatabase."""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Dict, List, Optional, TypeVar

from pydantic import BaseModel

from pms.core.models.person import Person
from pms.core.models.provider import Provider, ProviderAttributeType
from pms.core.models.relationship import Relationship
from pms.core.models.role import ProviderRole, RelationshipType

from .entity_database import EntityDatabase

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _copy(record: Optional[ModelT]) -> Optional[ModelT]:
    if record is None:
        return None
    return record.model_copy(deep=True)


class InMemoryDatabase(EntityDatabase):
    """Dictionary-backed store.

    Records are copied on the way in and on the way out so callers never
    share state with the store. ``atomic()`` serialises units of work with an
    ``asyncio.Lock``; it is not re-entrant.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self._persons: Dict[str, Person] = {}
        self._providers: Dict[str, Provider] = {}
        self._attribute_types: Dict[str, ProviderAttributeType] = {}
        self._roles: Dict[str, ProviderRole] = {}
        self._relationship_types: Dict[str, RelationshipType] = {}
        self._relationships: Dict[str, Relationship] = {}

    @asynccontextmanager
    async def atomic(self):
        async with self._lock:
            yield self

    async def put_person(self, person: Person) -> Person:
        self._persons[person.id] = _copy(person)
        return person

    async def get_person(self, person_id: str) -> Optional[Person]:
        return _copy(self._persons.get(person_id))

    async def put_provider(self, provider: Provider) -> Provider:
        self._providers[provider.id] = _copy(provider)
        return provider

    async def get_provider(self, provider_id: str) -> Optional[Provider]:
        return _copy(self._providers.get(provider_id))

    async def get_providers_by_person(
        self, person_id: str, include_retired: bool = True
    ) -> List[Provider]:
        return [
            _copy(p)
            for p in self._providers.values()
            if p.person_id == person_id and (include_retired or not p.retired)
        ]

    async def get_providers_by_attribute(
        self, attribute_type_id: str, value: str, include_retired: bool = False
    ) -> List[Provider]:
        return [
            _copy(p)
            for p in self._providers.values()
            if (include_retired or not p.retired)
            and any(a.value == value for a in p.active_attributes(attribute_type_id))
        ]

    async def retire_provider(self, provider: Provider, reason: str) -> Provider:
        retired = provider.model_copy(update={"retired": True, "retire_reason": reason})
        self._providers[retired.id] = _copy(retired)
        logger.debug("Retired provider %s: %s", retired.id, reason)
        return retired

    async def put_provider_attribute_type(
        self, attribute_type: ProviderAttributeType
    ) -> ProviderAttributeType:
        self._attribute_types[attribute_type.uuid] = _copy(attribute_type)
        return attribute_type

    async def get_provider_attribute_type_by_uuid(
        self, uuid: str
    ) -> Optional[ProviderAttributeType]:
        return _copy(self._attribute_types.get(uuid))

    async def put_provider_role(self, role: ProviderRole) -> ProviderRole:
        self._roles[role.id] = _copy(role)
        return role

    async def get_provider_role(self, role_id: str) -> Optional[ProviderRole]:
        return _copy(self._roles.get(role_id))

    async def get_provider_role_by_uuid(self, uuid: str) -> Optional[ProviderRole]:
        for role in self._roles.values():
            if role.uuid == uuid:
                return _copy(role)
        return None

    async def delete_provider_role(self, role_id: str) -> bool:
        return self._roles.pop(role_id, None) is not None

    async def list_provider_roles(
        self, include_retired: bool = False
    ) -> List[ProviderRole]:
        return [
            _copy(r) for r in self._roles.values() if include_retired or not r.retired
        ]

    async def put_relationship_type(
        self, relationship_type: RelationshipType
    ) -> RelationshipType:
        self._relationship_types[relationship_type.id] = _copy(relationship_type)
        return relationship_type

    async def get_relationship_type(
        self, relationship_type_id: str
    ) -> Optional[RelationshipType]:
        return _copy(self._relationship_types.get(relationship_type_id))

    async def list_relationship_types(
        self, include_retired: bool = False
    ) -> List[RelationshipType]:
        return [
            _copy(t)
            for t in self._relationship_types.values()
            if include_retired or not t.retired
        ]

    async def put_relationship(self, relationship: Relationship) -> Relationship:
        self._relationships[relationship.id] = _copy(relationship)
        return relationship

    async def get_relationship(self, relationship_id: str) -> Optional[Relationship]:
        return _copy(self._relationships.get(relationship_id))

    async def find_relationships(
        self,
        person_a_id: Optional[str] = None,
        person_b_id: Optional[str] = None,
        type_id: Optional[str] = None,
        as_of: Optional[date] = None,
    ) -> List[Relationship]:
        results = []
        for relationship in self._relationships.values():
            if relationship.voided:
                continue
            if person_a_id is not None and relationship.person_a_id != person_a_id:
                continue
            if person_b_id is not None and relationship.person_b_id != person_b_id:
                continue
            if type_id is not None and relationship.type_id != type_id:
                continue
            if as_of is not None and not relationship.is_active_on(as_of):
                continue
            results.append(_copy(relationship))
        return results
