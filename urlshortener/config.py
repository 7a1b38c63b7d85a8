import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from urlshortener.aliases import DEFAULT_ALIAS_LENGTH
from urlshortener.exceptions import ConfigurationError

ENVIRONMENTS = ("local", "dev", "prod")


@dataclass(frozen=True)
class Settings:
    storage_path: str
    environment: str = "local"
    http_address: str = "localhost:8080"
    http_timeout: float = 4.0
    http_idle_timeout: int = 10
    alias_length: int = DEFAULT_ALIAS_LENGTH

    @property
    def host(self) -> str:
        # "[::1]:8080" binds to "::1"
        return self.http_address.rpartition(":")[0].strip("[]") or "localhost"

    @property
    def port(self) -> int:
        return int(self.http_address.rpartition(":")[2])


def _number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings(env_file: str | os.PathLike | None = None) -> Settings:
    """Read settings from the environment, after loading a ``.env`` file.

    The file defaults to ``$CONFIG_PATH`` or ``./.env``; variables already set
    in the environment win over the file.
    """
    env_file = env_file or os.getenv("CONFIG_PATH")
    if env_file and not Path(env_file).is_file():
        raise ConfigurationError(f"config file does not exist: {env_file}")
    load_dotenv(env_file or Path.cwd() / ".env")

    environment = os.getenv("ENVIRONMENT", "local").strip().lower()
    if environment not in ENVIRONMENTS:
        raise ConfigurationError(f"ENVIRONMENT must be one of {', '.join(ENVIRONMENTS)}, got {environment!r}")

    storage_path = os.getenv("STORAGE_PATH", "").strip()
    if not storage_path:
        raise ConfigurationError("STORAGE_PATH must be set")

    http_address = os.getenv("HTTP_ADDRESS", "localhost:8080").strip()
    port = http_address.rpartition(":")[2]
    if not port.isdigit():
        raise ConfigurationError(f"HTTP_ADDRESS must look like host:port, got {http_address!r}")

    return Settings(
        storage_path=storage_path,
        environment=environment,
        http_address=http_address,
        http_timeout=_number("HTTP_TIMEOUT", 4.0, float),
        http_idle_timeout=_number("HTTP_IDLE_TIMEOUT", 10, int),
        alias_length=_number("ALIAS_LENGTH", DEFAULT_ALIAS_LENGTH, int),
    )
