"""Outcome values for assignment operations."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class AssignmentOutcome(str, Enum):
    ASSIGNED = "assigned"
    ALREADY_ASSIGNED = "already_assigned"
    # an interval exists but only starts after the requested date
    SCHEDULED = "scheduled"


class UnassignmentOutcome(str, Enum):
    UNASSIGNED = "unassigned"
    NOT_ASSIGNED = "not_assigned"


class TransferResult(BaseModel):
    """Summary of a bulk patient transfer between two providers."""

    source_provider_id: str
    destination_provider_id: str
    relationship_type_ids: List[str] = Field(
        default_factory=list, description="Relationship types that were processed"
    )
    transferred_patient_ids: List[str] = Field(
        default_factory=list, description="Patients newly assigned to the destination"
    )
    already_assigned_patient_ids: List[str] = Field(
        default_factory=list,
        description="Patients the destination already served; only unassigned from the source",
    )
    advanced_patient_ids: List[str] = Field(
        default_factory=list,
        description="Patients whose upcoming destination interval now starts on the transfer date",
    )

    @property
    def moved_count(self) -> int:
        return (
            len(self.transferred_patient_ids)
            + len(self.already_assigned_patient_ids)
            + len(self.advanced_patient_ids)
        )
