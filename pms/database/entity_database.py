"""Abstract EntityDatabase class for the stores the engine consumes."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import date
from typing import List, Optional

from pms.core.models.person import Person
from pms.core.models.provider import Provider, ProviderAttributeType
from pms.core.models.relationship import Relationship
from pms.core.models.role import ProviderRole, RelationshipType


class EntityDatabase(ABC):
    """Abstract base class for person, provider, role and relationship storage.

    Implementations own durability and consistency. Records returned by the
    getters are detached copies; changes are persisted only through the
    ``put_*`` methods.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager:
        """Return an async context manager wrapping one storage-level unit of work."""

    @abstractmethod
    async def put_person(self, person: Person) -> Person:
        pass

    @abstractmethod
    async def get_person(self, person_id: str) -> Optional[Person]:
        pass

    @abstractmethod
    async def put_provider(self, provider: Provider) -> Provider:
        pass

    @abstractmethod
    async def get_provider(self, provider_id: str) -> Optional[Provider]:
        pass

    @abstractmethod
    async def get_providers_by_person(
        self, person_id: str, include_retired: bool = True
    ) -> List[Provider]:
        pass

    @abstractmethod
    async def get_providers_by_attribute(
        self, attribute_type_id: str, value: str, include_retired: bool = False
    ) -> List[Provider]:
        pass

    @abstractmethod
    async def retire_provider(self, provider: Provider, reason: str) -> Provider:
        pass

    @abstractmethod
    async def put_provider_attribute_type(
        self, attribute_type: ProviderAttributeType
    ) -> ProviderAttributeType:
        pass

    @abstractmethod
    async def get_provider_attribute_type_by_uuid(
        self, uuid: str
    ) -> Optional[ProviderAttributeType]:
        pass

    @abstractmethod
    async def put_provider_role(self, role: ProviderRole) -> ProviderRole:
        pass

    @abstractmethod
    async def get_provider_role(self, role_id: str) -> Optional[ProviderRole]:
        pass

    @abstractmethod
    async def get_provider_role_by_uuid(self, uuid: str) -> Optional[ProviderRole]:
        pass

    @abstractmethod
    async def delete_provider_role(self, role_id: str) -> bool:
        pass

    @abstractmethod
    async def list_provider_roles(
        self, include_retired: bool = False
    ) -> List[ProviderRole]:
        pass

    @abstractmethod
    async def put_relationship_type(
        self, relationship_type: RelationshipType
    ) -> RelationshipType:
        pass

    @abstractmethod
    async def get_relationship_type(
        self, relationship_type_id: str
    ) -> Optional[RelationshipType]:
        pass

    @abstractmethod
    async def list_relationship_types(
        self, include_retired: bool = False
    ) -> List[RelationshipType]:
        pass

    @abstractmethod
    async def put_relationship(self, relationship: Relationship) -> Relationship:
        pass

    @abstractmethod
    async def get_relationship(self, relationship_id: str) -> Optional[Relationship]:
        pass

    @abstractmethod
    async def find_relationships(
        self,
        person_a_id: Optional[str] = None,
        person_b_id: Optional[str] = None,
        type_id: Optional[str] = None,
        as_of: Optional[date] = None,
    ) -> List[Relationship]:
        """Return non-voided relationships matching every given filter.

        With ``as_of`` set only relationships open on that date are returned
        (see :meth:`Relationship.is_active_on`).
        """
