"""Provider and provider attribute models using Pydantic."""

from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, computed_field, field_validator

from pms.core.identifiers import (build_attribute_type_id, build_provider_id,
                                  validate_attribute_type_id,
                                  validate_person_id)

from ..constraints import MAX_IDENTIFIER_LENGTH, MAX_NAME_LENGTH, MAX_REASON_LENGTH


class ProviderAttributeType(BaseModel):
    """Descriptor for a kind of attribute that can be attached to providers."""

    model_config = {"extra": "forbid"}

    uuid: str = Field(..., min_length=1, description="Stable configuration UUID")
    name: str = Field(..., max_length=MAX_NAME_LENGTH)
    datatype: str = Field("text", description="Datatype of the attribute value")
    retired: bool = False

    @computed_field
    @property
    def id(self) -> str:
        return build_attribute_type_id(self.uuid)


class ProviderAttribute(BaseModel):
    model_config = {"extra": "forbid"}

    attribute_type_id: str
    value: str = Field(..., description="Serialized attribute value")
    voided: bool = False

    @field_validator("attribute_type_id")
    @classmethod
    def validate_attribute_type(cls, v):
        return validate_attribute_type_id(v)


class Provider(BaseModel):
    """A provider record linking a person to provider attributes.

    A person becomes a provider once a provider record carrying a role
    attribute exists for them. Retired records are kept but ignored by
    active queries.
    """

    model_config = {"extra": "forbid"}

    uuid: str = Field(default_factory=lambda: str(uuid4()))
    person_id: str = Field(..., description="ID of the person this record augments")
    identifier: str = Field(
        ..., max_length=MAX_IDENTIFIER_LENGTH, description="Free-text provider identifier"
    )
    attributes: List[ProviderAttribute] = Field(default_factory=list)
    retired: bool = False
    retire_reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)

    @computed_field
    @property
    def id(self) -> str:
        return build_provider_id(self.uuid)

    @field_validator("person_id")
    @classmethod
    def validate_person(cls, v):
        return validate_person_id(v)

    def active_attributes(self, attribute_type_id: str) -> List[ProviderAttribute]:
        return [
            attribute
            for attribute in self.attributes
            if attribute.attribute_type_id == attribute_type_id and not attribute.voided
        ]
