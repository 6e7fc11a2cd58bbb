"""Binding between provider records and their provider role attribute."""

import logging
from typing import List, Optional

from pms.config import config
from pms.core.exceptions import ConfigurationError, InternalConsistencyError
from pms.core.models.person import Person
from pms.core.models.provider import Provider, ProviderAttributeType
from pms.core.models.role import ProviderRole
from pms.database import EntityDatabase

logger = logging.getLogger(__name__)

# Process-wide; the descriptor is configuration and never changes at runtime.
_provider_role_attribute_type: Optional[ProviderAttributeType] = None


async def get_provider_role_attribute_type(
    database: EntityDatabase,
) -> ProviderAttributeType:
    """Return the provider role attribute type, looking it up on first use."""
    global _provider_role_attribute_type

    if _provider_role_attribute_type is None:
        uuid = config.get_provider_role_attribute_type_uuid()
        attribute_type = await database.get_provider_attribute_type_by_uuid(uuid)
        if attribute_type is None:
            raise ConfigurationError(
                f"Provider role attribute type {uuid} is not configured"
            )
        logger.debug("Cached provider role attribute type %s", attribute_type.id)
        _provider_role_attribute_type = attribute_type

    return _provider_role_attribute_type


def clear_provider_role_attribute_type_cache() -> None:
    global _provider_role_attribute_type
    _provider_role_attribute_type = None


class ProviderRoleBinding:
    """Resolves which provider role a person holds."""

    def __init__(self, database: EntityDatabase):
        self.database = database

    async def attribute_type(self) -> ProviderAttributeType:
        return await get_provider_role_attribute_type(self.database)

    async def provider_role(self, provider: Provider) -> Optional[ProviderRole]:
        """Role held by a single provider record, if it carries one."""
        attribute_type = await self.attribute_type()
        attributes = provider.active_attributes(attribute_type.id)
        if not attributes:
            return None
        # the most recently attached attribute wins
        return await self.database.get_provider_role(attributes[-1].value)

    async def role_of(self, person: Person) -> Optional[ProviderRole]:
        roles = {}
        for provider in await self._active_providers(person):
            role = await self.provider_role(provider)
            if role is not None:
                roles[role.id] = role

        if not roles:
            return None
        if len(roles) > 1:
            raise InternalConsistencyError(
                f"{person} holds more than one provider role: {sorted(roles)}"
            )
        return next(iter(roles.values()))

    async def has_role(self, person: Person, role: ProviderRole) -> bool:
        current = await self.role_of(person)
        return current is not None and current.id == role.id

    async def is_provider(self, person: Person) -> bool:
        if person.voided:
            return False
        for provider in await self._active_providers(person):
            if await self.provider_role(provider) is not None:
                return True
        return False

    async def providers_with_role(
        self, person: Person, role: ProviderRole
    ) -> List[Provider]:
        matching = []
        for provider in await self._active_providers(person):
            provider_role = await self.provider_role(provider)
            if provider_role is not None and provider_role.id == role.id:
                matching.append(provider)
        return matching

    async def _active_providers(self, person: Person) -> List[Provider]:
        return await self.database.get_providers_by_person(
            person.id, include_retired=False
        )
