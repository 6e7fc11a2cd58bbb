"""Field constraints shared by the core models."""

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
MIN_SLUG_LENGTH = 2
MAX_SLUG_LENGTH = 100

MAX_NAME_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000
MAX_IDENTIFIER_LENGTH = 255
MAX_REASON_LENGTH = 255
