# app/config.py

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

_TRUE_VALUES = {"true", "yes", "1", "on"}

# Keys accepted in a key/value connection string, normalised to lower case
# with spaces removed.
_KEY_ALIASES = {
    "host": "host",
    "server": "host",
    "port": "port",
    "username": "username",
    "userid": "username",
    "user": "username",
    "password": "password",
    "database": "database",
    "db": "database",
    "sslmode": "sslmode",
    "trustservercertificate": "trust_server_certificate",
}

# "SSL Mode" values (either spelling) to libpq sslmode names.
_SSL_MODES = {
    "disable": "disable",
    "allow": "allow",
    "prefer": "prefer",
    "require": "require",
    "verifyca": "verify-ca",
    "verifyfull": "verify-full",
}


class Settings(BaseSettings):
    """
    Runtime configuration, read from environment variables or a .env file.
    """

    connection_string: str = Field(
        default="Host=localhost;Username=postgres;Password=postgres;Database=MyDb",
        validation_alias=AliasChoices(
            "CONNECTION_STRING",
            "ConnectionStrings__DefaultConnection",
        ),
        description="Key/value connection string or a SQLAlchemy URL",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    sql_echo: bool = Field(default=False, validation_alias="SQL_ECHO")

    api_host: str = Field(default="0.0.0.0", validation_alias="API_HOST")
    api_port: int = Field(default=8000, ge=1, le=65535, validation_alias="API_PORT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    @property
    def database_url(self) -> URL:
        return parse_connection_string(self.connection_string)


def parse_connection_string(value: str) -> URL:
    """
    Turn a connection string into a SQLAlchemy URL.

    Values containing "://" are treated as URLs already. Anything else is read
    as "Key=Value;Key=Value" pairs, e.g.

        Host=db;Username=postgres;Password=secret;Database=MyDb;TrustServerCertificate=true

    and mapped onto a postgresql+psycopg2 URL.

    TrustServerCertificate decides whether the server certificate is checked:
    when false, SSL Mode=Require becomes libpq "verify-full"; when true,
    VerifyCA/VerifyFull are relaxed to "require" (encrypted, not verified).
    """
    value = value.strip()
    if "://" in value:
        return make_url(value)

    parts = {}
    for chunk in value.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        if "=" not in chunk:
            raise ValueError(f"Malformed connection string segment: {chunk!r}")
        key, _, raw = chunk.partition("=")
        norm = key.strip().lower().replace(" ", "")
        if norm not in _KEY_ALIASES:
            raise ValueError(f"Unsupported connection string key: {key.strip()!r}")
        parts[_KEY_ALIASES[norm]] = raw.strip()

    if "host" not in parts:
        raise ValueError("Connection string must include Host")
    if "database" not in parts:
        raise ValueError("Connection string must include Database")

    port = None
    if parts.get("port"):
        try:
            port = int(parts["port"])
        except ValueError:
            raise ValueError(f"Port must be an integer, got {parts['port']!r}")

    trust = parts.get("trust_server_certificate", "").lower() in _TRUE_VALUES
    sslmode = None
    if parts.get("sslmode"):
        mode = parts["sslmode"].lower().replace("-", "")
        if mode not in _SSL_MODES:
            raise ValueError(f"Unsupported SSL Mode: {parts['sslmode']!r}")
        sslmode = _SSL_MODES[mode]

    # A trusted certificate is never verified; an untrusted one under
    # "require" must be checked against the host name.
    if not trust and sslmode == "require":
        sslmode = "verify-full"
    elif trust and sslmode in ("verify-ca", "verify-full"):
        sslmode = "require"

    query = {"sslmode": sslmode} if sslmode else {}

    return URL.create(
        "postgresql+psycopg2",
        username=parts.get("username") or None,
        password=parts.get("password") or None,
        host=parts["host"],
        port=port,
        database=parts["database"],
        query=query,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
