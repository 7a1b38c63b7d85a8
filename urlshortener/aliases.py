import secrets
import string

ALPHABET = string.ascii_letters + string.digits
DEFAULT_ALIAS_LENGTH = 6


def generate_alias(length: int = DEFAULT_ALIAS_LENGTH) -> str:
    """Return a random alias of exactly ``length`` letters and digits.

    The store is not consulted; a collision shows up as AliasConflictError on save.
    """
    return "".join(secrets.choice(ALPHABET) for _ in range(length))
