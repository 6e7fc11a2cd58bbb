"""Person and patient models using Pydantic."""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from pms.core.identifiers import build_person_id

from ..constraints import (MAX_IDENTIFIER_LENGTH, MAX_REASON_LENGTH,
                           MAX_SLUG_LENGTH, MIN_SLUG_LENGTH, SLUG_PATTERN)
from .base import Name, NameKind


class Person(BaseModel):
    """A person record. At least one name with kind=PRIMARY is required."""

    model_config = {"extra": "forbid"}

    slug: str = Field(
        ...,
        min_length=MIN_SLUG_LENGTH,
        max_length=MAX_SLUG_LENGTH,
        pattern=SLUG_PATTERN,
        description="URL-friendly identifier for the person",
    )
    names: List[Name] = Field(..., description="Names of the person")
    birthdate: Optional[date] = Field(None, description="Date of birth")
    is_patient: bool = Field(False, description="Whether the person is a patient")
    voided: bool = Field(False, description="Voided persons are excluded from queries")
    void_reason: Optional[str] = Field(None, max_length=MAX_REASON_LENGTH)
    created_at: Optional[datetime] = Field(
        None, description="Timestamp when the person was created"
    )

    @computed_field
    @property
    def id(self) -> str:
        return build_person_id(self.slug)

    @field_validator("names")
    @classmethod
    def validate_names(cls, v):
        if not any(name.kind == NameKind.PRIMARY for name in v):
            raise ValueError('At least one name with kind="PRIMARY" is required')

        return v

    def __str__(self) -> str:
        return self.id


class Patient(Person):
    is_patient: Literal[True] = Field(
        default=True, description="Always true for patients"
    )
    patient_identifier: Optional[str] = Field(
        None, max_length=MAX_IDENTIFIER_LENGTH, description="Medical record number"
    )
