"""Role graph: an index over provider roles and the relationship types they support."""

import logging
from typing import Dict, Iterable, List, Optional, Set

from pms.core.models.role import ProviderRole, RelationshipType

logger = logging.getLogger(__name__)


class RoleGraph:
    """Immutable bidirectional index built from the role catalog.

    Holds ``role -> relationship types``, ``relationship type -> roles`` and
    ``supervisee role -> supervising roles`` so the engine never rescans the
    catalog. Build a new graph when the catalog changes.
    """

    def __init__(
        self,
        roles: Iterable[ProviderRole],
        relationship_types: Iterable[RelationshipType],
    ):
        self._roles: Dict[str, ProviderRole] = {r.id: r for r in roles}
        self._types: Dict[str, RelationshipType] = {
            t.id: t for t in relationship_types
        }
        self._types_by_role: Dict[str, List[str]] = {}
        self._roles_by_type: Dict[str, List[str]] = {}
        self._supervisors_by_role: Dict[str, List[str]] = {}

        for role in self._roles.values():
            known = []
            for type_id in role.relationship_type_ids:
                if type_id not in self._types:
                    logger.debug(
                        "Role %s references unknown relationship type %s",
                        role.id,
                        type_id,
                    )
                    continue
                known.append(type_id)
                self._roles_by_type.setdefault(type_id, []).append(role.id)
            self._types_by_role[role.id] = known

            for supervisee_id in role.superviseable_role_ids:
                self._supervisors_by_role.setdefault(supervisee_id, []).append(role.id)

        logger.debug(
            "Built role graph with %d roles and %d relationship types",
            len(self._roles),
            len(self._types),
        )

    @property
    def roles(self) -> List[ProviderRole]:
        return list(self._roles.values())

    def get_role(self, role_id: str) -> Optional[ProviderRole]:
        return self._roles.get(role_id)

    def get_relationship_type(self, type_id: str) -> Optional[RelationshipType]:
        return self._types.get(type_id)

    def relationship_types_for_role(
        self, role: ProviderRole, include_retired: bool = False
    ) -> List[RelationshipType]:
        types = [self._types[t] for t in self._types_by_role.get(role.id, [])]
        if include_retired:
            return types
        return [t for t in types if not t.retired]

    def supports(self, role: ProviderRole, relationship_type: RelationshipType) -> bool:
        return any(
            t.id == relationship_type.id
            for t in self.relationship_types_for_role(role)
        )

    def roles_supporting(
        self, relationship_type: RelationshipType, include_retired: bool = False
    ) -> List[ProviderRole]:
        return self._select_roles(
            self._roles_by_type.get(relationship_type.id, []), include_retired
        )

    def roles_supervising(
        self, role: ProviderRole, include_retired: bool = False
    ) -> List[ProviderRole]:
        return self._select_roles(
            self._supervisors_by_role.get(role.id, []), include_retired
        )

    def all_provider_relationship_types(
        self, include_retired: bool = False
    ) -> List[RelationshipType]:
        """Union of the relationship types supported by any role.

        Retired roles contribute too; ``include_retired`` filters on the
        retired flag of the relationship type itself.
        """
        seen: Set[str] = set()
        result = []
        for type_ids in self._types_by_role.values():
            for type_id in type_ids:
                if type_id in seen:
                    continue
                seen.add(type_id)
                relationship_type = self._types[type_id]
                if include_retired or not relationship_type.retired:
                    result.append(relationship_type)
        return result

    def is_provider_relationship_type(
        self, relationship_type: RelationshipType, include_retired: bool = False
    ) -> bool:
        return any(
            t.id == relationship_type.id
            for t in self.all_provider_relationship_types(include_retired)
        )

    def _select_roles(self, role_ids: List[str], include_retired: bool):
        roles = [self._roles[r] for r in role_ids if r in self._roles]
        if include_retired:
            return roles
        return [r for r in roles if not r.retired]
