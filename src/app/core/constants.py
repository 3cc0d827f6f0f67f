"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_USERNAME_LENGTH = 64
MAX_NAME_LENGTH = 255
MAX_URL_LENGTH = 2048
MAX_NOTES_LENGTH = 2000
MAX_ROLE_NAME_LENGTH = 16
MAX_VISIBILITY_LENGTH = 16

# Password requirements
MIN_PASSWORD_LENGTH = 1
MAX_PASSWORD_LENGTH = 72  # bcrypt only reads the first 72 bytes
BCRYPT_ROUNDS = 12

# Pagination defaults
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Exercise search
SEARCH_RESULT_LIMIT = 10

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"
