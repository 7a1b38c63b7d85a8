from urlshortener.aliases import generate_alias
from urlshortener.storage import AliasStore

__all__ = ["AliasStore", "generate_alias"]
