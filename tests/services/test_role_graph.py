"""Tests for the role graph index."""

import pytest

from pms.core.models import ProviderRole, RelationshipType
from pms.services import RoleGraph


@pytest.fixture
def retired_type():
    return RelationshipType(
        slug="home-visit", a_is_to_b="Visitor", b_is_to_a="Visited", retired=True
    )


@pytest.fixture
def midwife_type():
    return RelationshipType(slug="delivers", a_is_to_b="Midwife", b_is_to_a="Mother")


@pytest.fixture
def retired_role(retired_type, midwife_type):
    return ProviderRole(
        slug="midwife",
        name="Midwife",
        relationship_type_ids=[retired_type.id, midwife_type.id],
        retired=True,
    )


@pytest.fixture
def graph(
    treats,
    consults,
    supervises,
    retired_type,
    midwife_type,
    nurse_role,
    doctor_role,
    clerk_role,
    retired_role,
):
    return RoleGraph(
        [nurse_role, doctor_role, clerk_role, retired_role],
        [treats, consults, supervises, retired_type, midwife_type],
    )


def _ids(records):
    return sorted(r.id for r in records)


def test_relationship_types_for_role(graph, nurse_role, doctor_role, clerk_role, treats, consults):
    assert _ids(graph.relationship_types_for_role(nurse_role)) == [treats.id]
    assert _ids(graph.relationship_types_for_role(doctor_role)) == sorted(
        [treats.id, consults.id]
    )
    assert graph.relationship_types_for_role(clerk_role) == []


def test_relationship_types_for_role_hides_retired_types(
    graph, retired_role, retired_type, midwife_type
):
    assert _ids(graph.relationship_types_for_role(retired_role)) == [midwife_type.id]
    assert _ids(
        graph.relationship_types_for_role(retired_role, include_retired=True)
    ) == sorted([retired_type.id, midwife_type.id])


def test_supports(graph, nurse_role, treats, consults, retired_role, retired_type):
    assert graph.supports(nurse_role, treats)
    assert not graph.supports(nurse_role, consults)
    assert not graph.supports(retired_role, retired_type)


def test_roles_supporting(graph, treats, nurse_role, doctor_role, supervises, midwife_type, retired_role):
    assert _ids(graph.roles_supporting(treats)) == sorted([nurse_role.id, doctor_role.id])
    assert graph.roles_supporting(supervises) == []
    assert graph.roles_supporting(midwife_type) == []
    assert _ids(graph.roles_supporting(midwife_type, include_retired=True)) == [
        retired_role.id
    ]


def test_roles_supervising(graph, nurse_role, doctor_role):
    assert _ids(graph.roles_supervising(nurse_role)) == [doctor_role.id]
    assert graph.roles_supervising(doctor_role) == []


def test_all_provider_relationship_types_filters_on_type_retirement(
    graph, treats, consults, midwife_type, retired_type, supervises
):
    """A retired role still contributes its non-retired types."""
    active = _ids(graph.all_provider_relationship_types())
    assert active == sorted([treats.id, consults.id, midwife_type.id])
    assert retired_type.id not in active
    assert supervises.id not in active

    everything = _ids(graph.all_provider_relationship_types(include_retired=True))
    assert everything == sorted(
        [treats.id, consults.id, midwife_type.id, retired_type.id]
    )


def test_all_provider_relationship_types_are_deduplicated(graph, treats):
    types = graph.all_provider_relationship_types()
    assert [t.id for t in types].count(treats.id) == 1


def test_every_provider_type_is_supported_by_some_role(graph):
    for relationship_type in graph.all_provider_relationship_types(include_retired=True):
        assert any(
            relationship_type.id
            in _ids(graph.relationship_types_for_role(role, include_retired=True))
            for role in graph.roles
        )


def test_is_provider_relationship_type(graph, treats, supervises, retired_type):
    assert graph.is_provider_relationship_type(treats)
    assert not graph.is_provider_relationship_type(supervises)
    assert not graph.is_provider_relationship_type(retired_type)
    assert graph.is_provider_relationship_type(retired_type, include_retired=True)


def test_unknown_type_ids_are_ignored(treats):
    role = ProviderRole(
        slug="nurse",
        name="Nurse",
        relationship_type_ids=[treats.id, "relationship-type:unknown"],
    )
    graph = RoleGraph([role], [treats])

    assert _ids(graph.relationship_types_for_role(role)) == [treats.id]
    assert graph.get_relationship_type("relationship-type:unknown") is None
    assert graph.get_role(role.id) == role
