"""Provider role and relationship type models using Pydantic."""

from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, computed_field, field_validator

from pms.core.identifiers import (build_relationship_type_id, build_role_id,
                                  validate_relationship_type_id,
                                  validate_role_id)

from ..constraints import (MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH,
                           MAX_REASON_LENGTH, MAX_SLUG_LENGTH,
                           MIN_SLUG_LENGTH, SLUG_PATTERN)


class RelationshipType(BaseModel):
    """A directed relationship label, read as ``A is <a_is_to_b> of B``."""

    model_config = {"extra": "forbid"}

    slug: str = Field(
        ...,
        min_length=MIN_SLUG_LENGTH,
        max_length=MAX_SLUG_LENGTH,
        pattern=SLUG_PATTERN,
    )
    a_is_to_b: str = Field(..., max_length=MAX_NAME_LENGTH)
    b_is_to_a: str = Field(..., max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    retired: bool = False
    retire_reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)

    @computed_field
    @property
    def id(self) -> str:
        return build_relationship_type_id(self.slug)

    def __str__(self) -> str:
        return f"{self.a_is_to_b}/{self.b_is_to_a}"


class ProviderRole(BaseModel):
    """A provider role and the capabilities it grants.

    ``relationship_type_ids`` lists the provider/patient relationship types
    providers with this role may hold; ``superviseable_role_ids`` lists the
    roles whose providers they may supervise.
    """

    model_config = {"extra": "forbid"}

    slug: str = Field(
        ...,
        min_length=MIN_SLUG_LENGTH,
        max_length=MAX_SLUG_LENGTH,
        pattern=SLUG_PATTERN,
        description="URL-friendly identifier for the role",
    )
    uuid: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(..., max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    relationship_type_ids: List[str] = Field(default_factory=list)
    superviseable_role_ids: List[str] = Field(default_factory=list)
    retired: bool = False
    retire_reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)

    @computed_field
    @property
    def id(self) -> str:
        return build_role_id(self.slug)

    @field_validator("relationship_type_ids")
    @classmethod
    def validate_relationship_types(cls, v):
        return list(dict.fromkeys(validate_relationship_type_id(i) for i in v))

    @field_validator("superviseable_role_ids")
    @classmethod
    def validate_superviseable_roles(cls, v):
        return list(dict.fromkeys(validate_role_id(i) for i in v))

    def __str__(self) -> str:
        return self.name
