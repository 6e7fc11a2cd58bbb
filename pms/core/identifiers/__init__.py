"""Identifier utilities for Provider Management Service."""

from .builders import (IdComponents, break_attribute_type_id,
                       break_person_id, break_provider_id,
                       break_relationship_id, break_relationship_type_id,
                       break_role_id, build_attribute_type_id,
                       build_person_id, build_provider_id,
                       build_relationship_id, build_relationship_type_id,
                       build_role_id)
from .validators import (is_valid_attribute_type_id, is_valid_person_id,
                         is_valid_provider_id, is_valid_relationship_id,
                         is_valid_relationship_type_id, is_valid_role_id,
                         validate_attribute_type_id, validate_person_id,
                         validate_relationship_type_id, validate_role_id)

__all__ = [
    "IdComponents",
    "break_attribute_type_id",
    "break_person_id",
    "break_provider_id",
    "break_relationship_id",
    "break_relationship_type_id",
    "break_role_id",
    "build_attribute_type_id",
    "build_person_id",
    "build_provider_id",
    "build_relationship_id",
    "build_relationship_type_id",
    "build_role_id",
    "is_valid_attribute_type_id",
    "is_valid_person_id",
    "is_valid_provider_id",
    "is_valid_relationship_id",
    "is_valid_relationship_type_id",
    "is_valid_role_id",
    "validate_attribute_type_id",
    "validate_person_id",
    "validate_relationship_type_id",
    "validate_role_id",
]
