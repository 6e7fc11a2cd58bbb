"""Shared fixtures: an in-memory store seeded with a small role catalog."""

import pytest
import pytest_asyncio

from pms.config import config
from pms.core.models import ProviderAttributeType, ProviderRole, RelationshipType
from pms.database import InMemoryDatabase
from pms.services import (ProviderManagementService,
                          clear_provider_role_attribute_type_cache)
from tests.factories import make_patient, make_person


@pytest.fixture(autouse=True)
def _reset_attribute_type_cache(monkeypatch):
    """Keep the process-wide descriptor cache and env overrides out of other tests."""
    monkeypatch.delenv("PMS_PROVIDER_ROLE_ATTRIBUTE_TYPE_UUID", raising=False)
    clear_provider_role_attribute_type_cache()
    yield
    clear_provider_role_attribute_type_cache()


@pytest.fixture
def db():
    return InMemoryDatabase()


@pytest.fixture
def role_attribute_type():
    return ProviderAttributeType(
        uuid=config.get_provider_role_attribute_type_uuid(),
        name="Provider Role",
        datatype="provider-role",
    )


@pytest.fixture
def treats():
    return RelationshipType(slug="treats", a_is_to_b="Nurse", b_is_to_a="Patient")


@pytest.fixture
def consults():
    return RelationshipType(
        slug="consults", a_is_to_b="Consultant", b_is_to_a="Consultee"
    )


@pytest.fixture
def supervises():
    """A type no provider role supports."""
    return RelationshipType(
        slug="supervises", a_is_to_b="Supervisor", b_is_to_a="Supervisee"
    )


@pytest.fixture
def nurse_role(treats):
    return ProviderRole(slug="nurse", name="Nurse", relationship_type_ids=[treats.id])


@pytest.fixture
def doctor_role(treats, consults, nurse_role):
    return ProviderRole(
        slug="doctor",
        name="Doctor",
        relationship_type_ids=[treats.id, consults.id],
        superviseable_role_ids=[nurse_role.id],
    )


@pytest.fixture
def clerk_role():
    """A role without any provider/patient relationship types."""
    return ProviderRole(slug="clerk", name="Clerk")


@pytest_asyncio.fixture
async def catalog(
    db,
    role_attribute_type,
    treats,
    consults,
    supervises,
    nurse_role,
    doctor_role,
    clerk_role,
):
    await db.put_provider_attribute_type(role_attribute_type)
    for relationship_type in (treats, consults, supervises):
        await db.put_relationship_type(relationship_type)
    for role in (nurse_role, doctor_role, clerk_role):
        await db.put_provider_role(role)
    return db


@pytest_asyncio.fixture
async def service(catalog):
    return ProviderManagementService(database=catalog)


async def _provider(service, slug, role, identifier):
    person = make_person(slug)
    await service.database.put_person(person)
    await service.assign_provider_role_to_provider(person, role, identifier)
    return person


@pytest_asyncio.fixture
async def nurse(service, nurse_role):
    return await _provider(service, "nurse-anita", nurse_role, "N-001")


@pytest_asyncio.fixture
async def other_nurse(service, nurse_role):
    return await _provider(service, "nurse-bikash", nurse_role, "N-002")


@pytest_asyncio.fixture
async def doctor(service, doctor_role):
    return await _provider(service, "doctor-chandra", doctor_role, "D-001")


@pytest_asyncio.fixture
async def patient(service):
    person = make_patient("patient-deepa")
    await service.database.put_person(person)
    return person


@pytest_asyncio.fixture
async def other_patient(service):
    person = make_patient("patient-eknath")
    await service.database.put_person(person)
    return person
