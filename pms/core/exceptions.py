"""Errors raised by the provider management engine.

Every error carries an :class:`ErrorKind` so callers can branch either on the
concrete class or on the broad category.
"""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    BUSINESS_RULE = "business_rule"
    STATE_CONFLICT = "state_conflict"
    INTERNAL = "internal"


class ProviderManagementError(Exception):
    """Base class for all provider management errors."""

    kind: ErrorKind = ErrorKind.INTERNAL


class InvalidArgumentError(ProviderManagementError, ValueError):
    """A required argument is missing, or a voided record was passed."""

    kind = ErrorKind.INVALID_ARGUMENT


class BusinessRuleViolationError(ProviderManagementError):
    kind = ErrorKind.BUSINESS_RULE


class PersonIsNotProviderError(BusinessRuleViolationError):
    pass


class ProviderDoesNotSupportRelationshipTypeError(BusinessRuleViolationError):
    pass


class InvalidRelationshipTypeError(BusinessRuleViolationError):
    """The relationship type is not a provider/patient relationship type."""


class SourceProviderSameAsDestinationProviderError(BusinessRuleViolationError):
    pass


class StateConflictError(ProviderManagementError):
    kind = ErrorKind.STATE_CONFLICT


class PatientAlreadyAssignedToProviderError(StateConflictError):
    pass


class PatientNotAssignedToProviderError(StateConflictError):
    pass


class InternalConsistencyError(ProviderManagementError):
    """Stored data breaks an invariant the engine relies on. Not recoverable."""

    kind = ErrorKind.INTERNAL


class ConfigurationError(ProviderManagementError):
    kind = ErrorKind.INTERNAL


__all__ = [
    "BusinessRuleViolationError",
    "ConfigurationError",
    "ErrorKind",
    "InternalConsistencyError",
    "InvalidArgumentError",
    "InvalidRelationshipTypeError",
    "PatientAlreadyAssignedToProviderError",
    "PatientNotAssignedToProviderError",
    "PersonIsNotProviderError",
    "ProviderDoesNotSupportRelationshipTypeError",
    "ProviderManagementError",
    "SourceProviderSameAsDestinationProviderError",
    "StateConflictError",
]
