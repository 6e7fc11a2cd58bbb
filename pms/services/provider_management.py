"""Provider Management Service - assigns patients to providers by role.

The service validates provider/patient assignments against the role graph,
opens and closes date-bounded relationship intervals, and composes those
single-relationship steps into bulk operations (unassign all, transfer all).

Rules enforced here:
- a provider may only be assigned a patient through a relationship type its
  role supports;
- at most one open interval exists per (provider, patient, type);
- unassignment only accepts provider/patient relationship types.
"""

import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Tuple

from pms.core.dates import DateLike, resolve_date
from pms.core.exceptions import (InternalConsistencyError,
                                 InvalidArgumentError,
                                 InvalidRelationshipTypeError,
                                 PatientAlreadyAssignedToProviderError,
                                 PatientNotAssignedToProviderError,
                                 PersonIsNotProviderError,
                                 ProviderDoesNotSupportRelationshipTypeError,
                                 SourceProviderSameAsDestinationProviderError)
from pms.core.models.assignment import (AssignmentOutcome, TransferResult,
                                        UnassignmentOutcome)
from pms.core.models.person import Person
from pms.core.models.provider import (Provider, ProviderAttribute,
                                      ProviderAttributeType)
from pms.core.models.relationship import Relationship
from pms.core.models.role import ProviderRole, RelationshipType
from pms.database import EntityDatabase

from .attribute_binding import ProviderRoleBinding
from .role_graph import RoleGraph

logger = logging.getLogger(__name__)


def _require(value, message: str) -> None:
    if value is None:
        raise InvalidArgumentError(message)


class ProviderManagementService:
    """Assignment engine for provider roles and provider/patient relationships.

    All durable state lives in the database; the service only caches the
    role graph, which is rebuilt after any role catalog write made through
    this service.
    """

    def __init__(self, database: EntityDatabase):
        self.database = database
        self.binding = ProviderRoleBinding(database)
        self._role_graph: Optional[RoleGraph] = None

    # Role graph and role catalog

    async def get_role_graph(self) -> RoleGraph:
        if self._role_graph is None:
            roles = await self.database.list_provider_roles(include_retired=True)
            relationship_types = await self.database.list_relationship_types(
                include_retired=True
            )
            self._role_graph = RoleGraph(roles, relationship_types)
        return self._role_graph

    async def refresh_role_graph(self) -> RoleGraph:
        """Rebuild the role graph, e.g. after the catalog changed in the database."""
        self._role_graph = None
        return await self.get_role_graph()

    async def get_provider_role_attribute_type(self) -> ProviderAttributeType:
        return await self.binding.attribute_type()

    async def get_all_provider_roles(
        self, include_retired: bool = False
    ) -> List[ProviderRole]:
        return await self.database.list_provider_roles(include_retired=include_retired)

    async def get_provider_role(self, role_id: str) -> Optional[ProviderRole]:
        return await self.database.get_provider_role(role_id)

    async def get_provider_role_by_uuid(self, uuid: str) -> Optional[ProviderRole]:
        _require(uuid, "uuid cannot be None")
        return await self.database.get_provider_role_by_uuid(uuid)

    async def get_provider_roles_by_relationship_type(
        self, relationship_type: RelationshipType
    ) -> List[ProviderRole]:
        _require(relationship_type, "relationship_type cannot be None")
        graph = await self.get_role_graph()
        return graph.roles_supporting(relationship_type)

    async def get_provider_roles_by_supervisee_provider_role(
        self, role: ProviderRole
    ) -> List[ProviderRole]:
        _require(role, "role cannot be None")
        graph = await self.get_role_graph()
        return graph.roles_supervising(role)

    async def save_provider_role(self, role: ProviderRole) -> ProviderRole:
        _require(role, "role cannot be None")
        saved = await self.database.put_provider_role(role)
        self._role_graph = None
        return saved

    async def retire_provider_role(self, role: ProviderRole, reason: str) -> ProviderRole:
        _require(role, "role cannot be None")
        _require(reason, "reason cannot be None")
        retired = role.model_copy(update={"retired": True, "retire_reason": reason})
        return await self.save_provider_role(retired)

    async def unretire_provider_role(self, role: ProviderRole) -> ProviderRole:
        _require(role, "role cannot be None")
        unretired = role.model_copy(update={"retired": False, "retire_reason": None})
        return await self.save_provider_role(unretired)

    async def purge_provider_role(self, role: ProviderRole) -> bool:
        _require(role, "role cannot be None")
        deleted = await self.database.delete_provider_role(role.id)
        self._role_graph = None
        return deleted

    async def get_all_provider_role_relationship_types(
        self, include_retired: bool = False
    ) -> List[RelationshipType]:
        graph = await self.get_role_graph()
        return graph.all_provider_relationship_types(include_retired=include_retired)

    # Provider roles on persons

    async def assign_provider_role_to_provider(
        self, person: Person, role: ProviderRole, identifier: str
    ) -> Optional[Provider]:
        """Make ``person`` a provider holding ``role``.

        Does nothing and returns None if the person already holds the role.
        A person holding a different role has the provider records for that
        role retired first, so a person never resolves to two roles.
        """
        _require(person, "Cannot set provider role: provider is None")
        _require(role, "Cannot set provider role: role is None")
        _require(identifier, "Cannot set provider role: identifier is None")

        async with self.database.atomic():
            current_role = await self.binding.role_of(person)
            if current_role is not None and current_role.id == role.id:
                return None

            if person.voided:
                raise InvalidArgumentError(
                    "Cannot set provider role: underlying person has been voided"
                )

            if current_role is not None:
                for provider in await self.binding.providers_with_role(
                    person, current_role
                ):
                    await self.database.retire_provider(
                        provider,
                        f"replacing provider role {current_role} with {role} for {person}",
                    )

            attribute_type = await self.binding.attribute_type()
            provider = Provider(
                person_id=person.id,
                identifier=identifier,
                attributes=[
                    ProviderAttribute(
                        attribute_type_id=attribute_type.id, value=role.id
                    )
                ],
            )
            await self.database.put_provider(provider)

        logger.info("Assigned provider role %s to %s", role.id, person.id)
        return provider

    async def unassign_provider_role_from_provider(
        self, person: Person, role: ProviderRole
    ) -> List[Provider]:
        """Retire every provider record of ``person`` resolving to ``role``."""
        _require(person, "Cannot unset provider role: provider is None")
        _require(role, "Cannot unset provider role: role is None")

        retired = []
        async with self.database.atomic():
            if not await self.binding.has_role(person, role):
                return retired

            for provider in await self.binding.providers_with_role(person, role):
                retired.append(
                    await self.database.retire_provider(
                        provider, f"removing provider role {role} from {person}"
                    )
                )

        logger.info("Removed provider role %s from %s", role.id, person.id)
        return retired

    # Provider lookups

    async def get_providers_by_roles(
        self, roles: Sequence[ProviderRole]
    ) -> List[Person]:
        if not roles:
            raise InvalidArgumentError("Roles cannot be None or empty")

        attribute_type = await self.binding.attribute_type()

        # a provider holds one role, so only persons can repeat across roles
        persons: Dict[str, Person] = {}
        for role in roles:
            providers = await self.database.get_providers_by_attribute(
                attribute_type.id, role.id
            )
            for provider in providers:
                if provider.person_id in persons:
                    continue
                person = await self.database.get_person(provider.person_id)
                if person is None:
                    raise InternalConsistencyError(
                        f"Provider {provider.id} refers to missing person {provider.person_id}"
                    )
                if not person.voided:
                    persons[person.id] = person

        return list(persons.values())

    async def get_providers_by_role(self, role: ProviderRole) -> List[Person]:
        _require(role, "Role cannot be None")
        return await self.get_providers_by_roles([role])

    async def get_providers_by_relationship_type(
        self, relationship_type: RelationshipType
    ) -> List[Person]:
        _require(relationship_type, "Relationship type cannot be None")

        roles = await self.get_provider_roles_by_relationship_type(relationship_type)
        if not roles:
            return []
        return await self.get_providers_by_roles(roles)

    async def get_providers_by_supervisee_provider_role(
        self, role: ProviderRole
    ) -> List[Person]:
        _require(role, "Provider role cannot be None")

        roles = await self.get_provider_roles_by_supervisee_provider_role(role)
        if not roles:
            return []
        return await self.get_providers_by_roles(roles)

    # Single provider/patient relationships

    async def assign_patient_to_provider(
        self,
        patient: Person,
        provider: Person,
        relationship_type: RelationshipType,
        date: Optional[DateLike] = None,
    ) -> Relationship:
        """Open a ``relationship_type`` interval from ``provider`` to ``patient``.

        The interval starts on ``date`` (today if omitted) with the time of
        day stripped.

        Raises:
            InvalidArgumentError: A required argument is missing or the
                patient is voided.
            PersonIsNotProviderError: ``provider`` is voided or holds no
                provider role.
            ProviderDoesNotSupportRelationshipTypeError: The provider's role
                does not support ``relationship_type``.
            PatientAlreadyAssignedToProviderError: An interval for this
                provider, patient and type is already open.
        """
        _require(patient, "Patient cannot be None")
        if patient.voided:
            raise InvalidArgumentError("Patient cannot be voided")
        if not patient.is_patient:
            raise InvalidArgumentError(f"{patient} is not a patient")
        _require(provider, "Provider cannot be None")
        _require(relationship_type, "Relationship type cannot be None")

        if not await self.binding.is_provider(provider):
            raise PersonIsNotProviderError(f"{provider} is not a provider")

        graph = await self.get_role_graph()
        role = await self.binding.role_of(provider)
        if not graph.supports(role, relationship_type):
            raise ProviderDoesNotSupportRelationshipTypeError(
                f"{provider} cannot support {relationship_type.id}"
            )

        outcome, relationship = await self._assign_patient(
            patient, provider, relationship_type, resolve_date(date)
        )
        if outcome is not AssignmentOutcome.ASSIGNED:
            raise PatientAlreadyAssignedToProviderError(
                f"Provider {provider} is already assigned to {patient} "
                f"with a {relationship_type.id} relationship"
            )
        return relationship

    async def unassign_patient_from_provider(
        self,
        patient: Person,
        provider: Person,
        relationship_type: RelationshipType,
        date: Optional[DateLike] = None,
    ) -> Relationship:
        """Close the open interval for this provider, patient and type on ``date``."""
        _require(patient, "Patient cannot be None")
        _require(provider, "Provider cannot be None")
        _require(relationship_type, "Relationship type cannot be None")
        if patient.voided:
            raise InvalidArgumentError("Patient cannot be voided")

        if not await self.binding.is_provider(provider):
            raise PersonIsNotProviderError(f"{provider} is not a provider")

        # role support is not checked here, only membership in the provider/patient domain
        graph = await self.get_role_graph()
        self._check_provider_relationship_type(graph, relationship_type)

        outcome, relationship = await self._unassign_patient(
            patient, provider, relationship_type, resolve_date(date)
        )
        if outcome is UnassignmentOutcome.NOT_ASSIGNED:
            raise PatientNotAssignedToProviderError(
                f"Provider {provider} is not assigned to {patient} "
                f"with a {relationship_type.id} relationship"
            )
        return relationship

    # Bulk operations

    async def unassign_all_patients_from_provider(
        self,
        provider: Person,
        relationship_type: Optional[RelationshipType] = None,
    ) -> int:
        """End every open interval of ``provider`` today.

        Limited to ``relationship_type`` when given, otherwise every
        provider/patient relationship type. Returns the number of intervals
        closed; having none to close is not an error.
        """
        _require(provider, "Provider cannot be None")

        if not await self.binding.is_provider(provider):
            raise PersonIsNotProviderError(f"{provider} is not a provider")

        graph = await self.get_role_graph()
        relationship_types = self._select_relationship_types(graph, relationship_type)

        today = resolve_date()
        closed = 0
        for each_type in relationship_types:
            closed += await self._close_all(provider, each_type, today)
        return closed

    async def get_patients(
        self,
        provider: Person,
        relationship_type: Optional[RelationshipType] = None,
        date: Optional[DateLike] = None,
    ) -> List[Person]:
        """Non-voided patients with an interval from ``provider`` open on ``date``.

        Without ``relationship_type`` the union over all provider/patient
        relationship types is returned, each patient once.
        """
        _require(provider, "Provider cannot be None")

        if not await self.binding.is_provider(provider):
            raise PersonIsNotProviderError(f"{provider} is not a provider")

        graph = await self.get_role_graph()
        relationship_types = self._select_relationship_types(graph, relationship_type)

        on = resolve_date(date)
        patients: Dict[str, Person] = {}
        for each_type in relationship_types:
            for patient in await self._patients_for_type(provider, each_type, on):
                patients.setdefault(patient.id, patient)
        return list(patients.values())

    async def transfer_all_patients(
        self,
        source_provider: Person,
        destination_provider: Person,
        relationship_type: Optional[RelationshipType] = None,
    ) -> TransferResult:
        """Move every current patient of ``source_provider`` to ``destination_provider``.

        Each patient is unassigned from the source and assigned to the
        destination inside one database unit of work, one patient at a time.
        There is no transaction across patients: an interrupted transfer
        leaves the remaining patients with the source and can simply be run
        again. Patients the destination already serves are only unassigned
        from the source. A destination interval that only starts later is
        moved forward to today instead of opening a second one.

        Raises:
            SourceProviderSameAsDestinationProviderError: Both providers are
                the same person.
            ProviderDoesNotSupportRelationshipTypeError: The destination's
                role does not support a type the source has patients for.
            InternalConsistencyError: A patient from the snapshot could not
                be unassigned from the source.
        """
        _require(source_provider, "Source provider cannot be None")
        _require(destination_provider, "Destination provider cannot be None")

        if not await self.binding.is_provider(source_provider):
            raise PersonIsNotProviderError(f"{source_provider} is not a provider")
        if not await self.binding.is_provider(destination_provider):
            raise PersonIsNotProviderError(f"{destination_provider} is not a provider")

        if source_provider.id == destination_provider.id:
            raise SourceProviderSameAsDestinationProviderError(
                f"Provider {source_provider} is the same as provider {destination_provider}"
            )

        graph = await self.get_role_graph()
        relationship_types = self._select_relationship_types(graph, relationship_type)
        destination_role = await self.binding.role_of(destination_provider)

        result = TransferResult(
            source_provider_id=source_provider.id,
            destination_provider_id=destination_provider.id,
        )
        for each_type in relationship_types:
            await self._transfer_patients(
                graph,
                source_provider,
                destination_provider,
                destination_role,
                each_type,
                result,
            )

        logger.info(
            "Transferred %d patients from %s to %s (%d already assigned, %d moved forward)",
            result.moved_count,
            source_provider.id,
            destination_provider.id,
            len(result.already_assigned_patient_ids),
            len(result.advanced_patient_ids),
        )
        return result

    # Internal steps

    def _check_provider_relationship_type(
        self, graph: RoleGraph, relationship_type: RelationshipType
    ) -> None:
        if not graph.is_provider_relationship_type(relationship_type):
            raise InvalidRelationshipTypeError(
                f"Invalid relationship type: {relationship_type.id} "
                "is not a provider/patient relationship type"
            )

    def _select_relationship_types(
        self, graph: RoleGraph, relationship_type: Optional[RelationshipType]
    ) -> List[RelationshipType]:
        # the full set comes from the same graph, so it needs no membership check
        if relationship_type is None:
            return graph.all_provider_relationship_types()
        self._check_provider_relationship_type(graph, relationship_type)
        return [relationship_type]

    async def _assign_patient(
        self,
        patient: Person,
        provider: Person,
        relationship_type: RelationshipType,
        on: date,
    ) -> Tuple[AssignmentOutcome, Relationship]:
        async with self.database.atomic():
            return await self._open_interval(patient, provider, relationship_type, on)

    async def _unassign_patient(
        self,
        patient: Person,
        provider: Person,
        relationship_type: RelationshipType,
        on: date,
    ) -> Tuple[UnassignmentOutcome, Optional[Relationship]]:
        async with self.database.atomic():
            return await self._close_interval(patient, provider, relationship_type, on)

    # The helpers below expect the caller to hold ``database.atomic()``,
    # which is not re-entrant.

    async def _open_interval(
        self,
        patient: Person,
        provider: Person,
        relationship_type: RelationshipType,
        on: date,
    ) -> Tuple[AssignmentOutcome, Relationship]:
        existing = await self.database.find_relationships(
            person_a_id=provider.id,
            person_b_id=patient.id,
            type_id=relationship_type.id,
        )
        # an interval open on or after ``on`` would overlap the new one
        upcoming = []
        for relationship in existing:
            if relationship.is_active_on(on):
                return AssignmentOutcome.ALREADY_ASSIGNED, relationship
            if relationship.end_date is None or relationship.end_date > on:
                upcoming.append(relationship)
        if upcoming:
            return AssignmentOutcome.SCHEDULED, min(
                upcoming, key=lambda relationship: relationship.start_date
            )

        relationship = Relationship(
            person_a_id=provider.id,
            person_b_id=patient.id,
            type_id=relationship_type.id,
            start_date=on,
            created_at=datetime.now(),
        )
        await self.database.put_relationship(relationship)

        logger.info(
            "Assigned %s to %s as %s from %s",
            patient.id,
            provider.id,
            relationship_type.id,
            on.isoformat(),
        )
        return AssignmentOutcome.ASSIGNED, relationship

    async def _advance_interval(self, relationship: Relationship, on: date) -> Relationship:
        advanced = relationship.model_copy(update={"start_date": on})
        await self.database.put_relationship(advanced)
        logger.info(
            "Moved start of %s from %s to %s",
            relationship.id,
            relationship.start_date.isoformat(),
            on.isoformat(),
        )
        return advanced

    async def _close_interval(
        self,
        patient: Person,
        provider: Person,
        relationship_type: RelationshipType,
        on: date,
    ) -> Tuple[UnassignmentOutcome, Optional[Relationship]]:
        relationships = await self.database.find_relationships(
            person_a_id=provider.id,
            person_b_id=patient.id,
            type_id=relationship_type.id,
            as_of=on,
        )
        if not relationships:
            return UnassignmentOutcome.NOT_ASSIGNED, None
        if len(relationships) > 1:
            raise InternalConsistencyError(
                f"Duplicate {relationship_type.id} between {provider} and {patient}"
            )

        relationship = relationships[0].model_copy(update={"end_date": on})
        await self.database.put_relationship(relationship)

        logger.info(
            "Unassigned %s from %s as %s on %s",
            patient.id,
            provider.id,
            relationship_type.id,
            on.isoformat(),
        )
        return UnassignmentOutcome.UNASSIGNED, relationship

    async def _close_all(
        self, provider: Person, relationship_type: RelationshipType, on: date
    ) -> int:
        async with self.database.atomic():
            relationships = await self.database.find_relationships(
                person_a_id=provider.id, type_id=relationship_type.id, as_of=on
            )
            for relationship in relationships:
                await self.database.put_relationship(
                    relationship.model_copy(update={"end_date": on})
                )

        if relationships:
            logger.info(
                "Closed %d %s relationships of %s",
                len(relationships),
                relationship_type.id,
                provider.id,
            )
        return len(relationships)

    async def _patients_for_type(
        self, provider: Person, relationship_type: RelationshipType, on: date
    ) -> List[Person]:
        relationships = await self.database.find_relationships(
            person_a_id=provider.id, type_id=relationship_type.id, as_of=on
        )

        patients = []
        for relationship in relationships:
            person = await self.database.get_person(relationship.person_b_id)
            if person is None or not person.is_patient:
                raise InternalConsistencyError(
                    f"Invalid relationship {relationship.id}: person b must be a patient"
                )
            if not person.voided:
                patients.append(person)
        return patients

    async def _transfer_patients(
        self,
        graph: RoleGraph,
        source_provider: Person,
        destination_provider: Person,
        destination_role: Optional[ProviderRole],
        relationship_type: RelationshipType,
        result: TransferResult,
    ) -> None:
        today = resolve_date()
        result.relationship_type_ids.append(relationship_type.id)

        patients = await self._patients_for_type(
            source_provider, relationship_type, today
        )
        if not patients:
            return

        if destination_role is None or not graph.supports(
            destination_role, relationship_type
        ):
            raise ProviderDoesNotSupportRelationshipTypeError(
                f"{destination_provider} cannot support {relationship_type.id}"
            )

        for patient in patients:
            async with self.database.atomic():
                await self._transfer_patient(
                    patient,
                    source_provider,
                    destination_provider,
                    relationship_type,
                    today,
                    result,
                )

    async def _transfer_patient(
        self,
        patient: Person,
        source_provider: Person,
        destination_provider: Person,
        relationship_type: RelationshipType,
        on: date,
        result: TransferResult,
    ) -> None:
        # the source is closed first so that a patient already moved by a
        # concurrent transfer leaves nothing written here
        outcome, _ = await self._close_interval(
            patient, source_provider, relationship_type, on
        )
        if outcome is UnassignmentOutcome.NOT_ASSIGNED:
            raise InternalConsistencyError(
                f"{patient} should be assigned to {source_provider} "
                f"as {relationship_type.id}"
            )

        outcome, relationship = await self._open_interval(
            patient, destination_provider, relationship_type, on
        )
        if outcome is AssignmentOutcome.ALREADY_ASSIGNED:
            logger.warning(
                "%s already assigned to %s as %s; only unassigning from %s",
                patient.id,
                destination_provider.id,
                relationship_type.id,
                source_provider.id,
            )
            result.already_assigned_patient_ids.append(patient.id)
        elif outcome is AssignmentOutcome.SCHEDULED:
            await self._advance_interval(relationship, on)
            result.advanced_patient_ids.append(patient.id)
        else:
            result.transferred_patient_ids.append(patient.id)
