"""Relationship interval model using Pydantic."""

from datetime import date, datetime
from typing import Optional
from uuid import uuid4

from pydantic import (BaseModel, Field, computed_field, field_validator,
                      model_validator)

from pms.core.identifiers import (build_relationship_id, validate_person_id,
                                  validate_relationship_type_id)


class Relationship(BaseModel):
    """A directed, typed and date-bounded relationship between two persons.

    For provider/patient relationships ``person_a_id`` is the provider and
    ``person_b_id`` the patient. The interval is open on every date ``d``
    with ``start_date <= d < end_date``; a missing bound is unbounded.
    """

    model_config = {"extra": "forbid"}

    uuid: str = Field(default_factory=lambda: str(uuid4()))
    person_a_id: str
    person_b_id: str
    type_id: str

    start_date: Optional[date] = None
    end_date: Optional[date] = None

    voided: bool = False
    created_at: Optional[datetime] = None

    @field_validator("person_a_id", "person_b_id")
    @classmethod
    def validate_person_ids(cls, v):
        return validate_person_id(v)

    @field_validator("type_id")
    @classmethod
    def validate_type_id(cls, v):
        return validate_relationship_type_id(v)

    @model_validator(mode="after")
    def validate_interval(self):
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.end_date < self.start_date
        ):
            raise ValueError("end_date cannot be before start_date")
        return self

    @computed_field
    @property
    def id(self) -> str:
        return build_relationship_id(self.uuid)

    def is_active_on(self, on: date) -> bool:
        if self.voided:
            return False
        if self.start_date is not None and self.start_date > on:
            return False
        return self.end_date is None or self.end_date > on
