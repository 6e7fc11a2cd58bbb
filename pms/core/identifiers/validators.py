"""Validators for Provider Management Service identifiers."""

from .builders import (break_attribute_type_id, break_person_id,
                       break_provider_id, break_relationship_id,
                       break_relationship_type_id, break_role_id)


def _is_valid(breaker, value: str) -> bool:
    try:
        breaker(value)
        return True
    except (ValueError, AttributeError):
        return False


def is_valid_person_id(person_id: str) -> bool:
    return _is_valid(break_person_id, person_id)


def is_valid_provider_id(provider_id: str) -> bool:
    return _is_valid(break_provider_id, provider_id)


def is_valid_role_id(role_id: str) -> bool:
    return _is_valid(break_role_id, role_id)


def is_valid_relationship_type_id(relationship_type_id: str) -> bool:
    return _is_valid(break_relationship_type_id, relationship_type_id)


def is_valid_relationship_id(relationship_id: str) -> bool:
    return _is_valid(break_relationship_id, relationship_id)


def is_valid_attribute_type_id(attribute_type_id: str) -> bool:
    return _is_valid(break_attribute_type_id, attribute_type_id)


def validate_person_id(person_id: str) -> str:
    break_person_id(person_id)
    return person_id


def validate_role_id(role_id: str) -> str:
    break_role_id(role_id)
    return role_id


def validate_relationship_type_id(relationship_type_id: str) -> str:
    break_relationship_type_id(relationship_type_id)
    return relationship_type_id


def validate_attribute_type_id(attribute_type_id: str) -> str:
    break_attribute_type_id(attribute_type_id)
    return attribute_type_id
