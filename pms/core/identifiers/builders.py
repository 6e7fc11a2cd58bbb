"""Builders and breakers for Provider Management Service identifiers.

Every stored record is addressed by a prefixed identifier:

- ``person:<slug>``
- ``provider:<uuid>``
- ``role:<slug>``
- ``relationship-type:<slug>``
- ``relationship:<uuid>``
- ``attribute-type:<uuid>``
"""

from typing import NamedTuple

PERSON_PREFIX = "person"
PROVIDER_PREFIX = "provider"
ROLE_PREFIX = "role"
RELATIONSHIP_TYPE_PREFIX = "relationship-type"
RELATIONSHIP_PREFIX = "relationship"
ATTRIBUTE_TYPE_PREFIX = "attribute-type"


class IdComponents(NamedTuple):
    prefix: str
    key: str


def _build_id(prefix: str, key: str) -> str:
    if not key:
        raise ValueError(f"Cannot build {prefix} ID from an empty key")
    return f"{prefix}:{key}"


def _break_id(prefix: str, value: str) -> IdComponents:
    head, sep, key = value.partition(":")
    if head != prefix or not sep or not key or ":" in key:
        raise ValueError(f"Invalid {prefix} ID format: {value}")
    return IdComponents(prefix=head, key=key)


def build_person_id(slug: str) -> str:
    return _build_id(PERSON_PREFIX, slug)


def build_provider_id(uuid: str) -> str:
    return _build_id(PROVIDER_PREFIX, uuid)


def build_role_id(slug: str) -> str:
    return _build_id(ROLE_PREFIX, slug)


def build_relationship_type_id(slug: str) -> str:
    return _build_id(RELATIONSHIP_TYPE_PREFIX, slug)


def build_relationship_id(uuid: str) -> str:
    return _build_id(RELATIONSHIP_PREFIX, uuid)


def build_attribute_type_id(uuid: str) -> str:
    return _build_id(ATTRIBUTE_TYPE_PREFIX, uuid)


def break_person_id(person_id: str) -> IdComponents:
    return _break_id(PERSON_PREFIX, person_id)


def break_provider_id(provider_id: str) -> IdComponents:
    return _break_id(PROVIDER_PREFIX, provider_id)


def break_role_id(role_id: str) -> IdComponents:
    return _break_id(ROLE_PREFIX, role_id)


def break_relationship_type_id(relationship_type_id: str) -> IdComponents:
    return _break_id(RELATIONSHIP_TYPE_PREFIX, relationship_type_id)


def break_relationship_id(relationship_id: str) -> IdComponents:
    return _break_id(RELATIONSHIP_PREFIX, relationship_id)


def break_attribute_type_id(attribute_type_id: str) -> IdComponents:
    return _break_id(ATTRIBUTE_TYPE_PREFIX, attribute_type_id)
