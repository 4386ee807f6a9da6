"""Library-wide constants.

Defaults used when neither the model nor the settings file says otherwise.
"""

# Slug Generation
DEFAULT_SLUG_LENGTH = 50  # Fallback when no length is declared anywhere
MAX_SUFFIX_DIGITS = 5  # Widest numeric suffix reserved for collisions
FIRST_COLLISION_SUFFIX = 2  # Bare slug counts as "1" and is never written as -1
SLUG_SEPARATOR = "-"

# Field Names
SLUG_FIELD = "slug"
IDENTITY_FIELD = "id"

# Concurrency
DEFAULT_MAX_RETRIES = 3  # Attempts before giving up on a contended slug
DEFAULT_RETRY_WAIT_SECONDS = 0.05
DEFAULT_RETRY_MAX_WAIT_SECONDS = 1.0

# Configuration
DEFAULT_SETTINGS_PATH = "config/slugs.yaml"
