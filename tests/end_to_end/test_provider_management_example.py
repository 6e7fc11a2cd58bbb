"""End-to-end test for the provider/patient management lifecycle."""

from datetime import date

import pytest

from pms.config import config
from pms.core.exceptions import PatientAlreadyAssignedToProviderError
from pms.core.models import (ProviderAttributeType, ProviderRole,
                             RelationshipType)
from pms.database import InMemoryDatabase
from pms.services import ProviderManagementService
from tests.factories import make_patient, make_person


@pytest.mark.asyncio
async def test_provider_management_lifecycle():
    """Test roles, assignment, supervision lookup, transfer and discharge."""

    db = InMemoryDatabase()

    # 1. Configure the role attribute type and the catalog.
    await db.put_provider_attribute_type(
        ProviderAttributeType(
            uuid=config.get_provider_role_attribute_type_uuid(),
            name="Provider Role",
            datatype="provider-role",
        )
    )
    accompagnateur = RelationshipType(
        slug="accompagnateur", a_is_to_b="Accompagnateur", b_is_to_a="Patient"
    )
    await db.put_relationship_type(accompagnateur)

    service = ProviderManagementService(database=db)
    chw = await service.save_provider_role(
        ProviderRole(
            slug="community-health-worker",
            name="Community Health Worker",
            relationship_type_ids=[accompagnateur.id],
        )
    )
    supervisor = await service.save_provider_role(
        ProviderRole(
            slug="chw-supervisor",
            name="CHW Supervisor",
            superviseable_role_ids=[chw.id],
        )
    )

    # 2. Register providers and patients.
    sita = make_person("sita-tamang")
    hari = make_person("hari-gurung")
    maya = make_person("maya-lama")
    patients = [make_patient(f"patient-{i}") for i in range(3)]
    for person in [sita, hari, maya, *patients]:
        await db.put_person(person)

    await service.assign_provider_role_to_provider(sita, chw, "CHW-1")
    await service.assign_provider_role_to_provider(hari, chw, "CHW-2")
    await service.assign_provider_role_to_provider(maya, supervisor, "SUP-1")

    supervisors = await service.get_providers_by_supervisee_provider_role(chw)
    assert [p.id for p in supervisors] == [maya.id]

    # 3. Assign patients to Sita.
    start = date(2024, 1, 15)
    for patient in patients:
        await service.assign_patient_to_provider(patient, sita, accompagnateur, start)

    with pytest.raises(PatientAlreadyAssignedToProviderError):
        await service.assign_patient_to_provider(patients[0], sita, accompagnateur, start)

    assert len(await service.get_patients(sita)) == 3

    # 4. Sita leaves; her patients go to Hari.
    result = await service.transfer_all_patients(sita, hari)

    assert len(result.transferred_patient_ids) == 3
    assert await service.get_patients(sita) == []
    assert sorted(p.id for p in await service.get_patients(hari)) == sorted(
        p.id for p in patients
    )
    # history is kept as of the original assignment date
    assert len(await service.get_patients(sita, accompagnateur, start)) == 3

    await service.unassign_provider_role_from_provider(sita, chw)
    assert [p.id for p in await service.get_providers_by_role(chw)] == [hari.id]

    # 5. Discharge everyone from Hari.
    closed = await service.unassign_all_patients_from_provider(hari)

    assert closed == 3
    assert await service.get_patients(hari) == []
