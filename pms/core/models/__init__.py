"""Models for Provider Management Service."""

from .assignment import AssignmentOutcome, TransferResult, UnassignmentOutcome
from .base import Name, NameKind
from .person import Patient, Person
from .provider import Provider, ProviderAttribute, ProviderAttributeType
from .relationship import Relationship
from .role import ProviderRole, RelationshipType

__all__ = [
    "AssignmentOutcome",
    "Name",
    "NameKind",
    "Patient",
    "Person",
    "Provider",
    "ProviderAttribute",
    "ProviderAttributeType",
    "ProviderRole",
    "Relationship",
    "RelationshipType",
    "TransferResult",
    "UnassignmentOutcome",
]
