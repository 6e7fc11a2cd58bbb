"""Base models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..constraints import MAX_NAME_LENGTH


class NameKind(str, Enum):
    PRIMARY = "PRIMARY"
    ALIAS = "ALIAS"


class Name(BaseModel):
    """Represents a person name with kind classification."""

    model_config = {"extra": "forbid"}

    kind: NameKind = Field(NameKind.PRIMARY, description="Type of name")

    full: str = Field(
        ..., min_length=1, max_length=MAX_NAME_LENGTH, description="The full name"
    )

    given: Optional[str] = Field(None, description="Given name")

    family: Optional[str] = Field(None, description="Family name")
