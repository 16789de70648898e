import math
from functools import lru_cache
from typing import Any, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DEFAULT_MSSQL_PORT = 1433


def parse_port(value: Any) -> int:
    """Parse a port value, falling back to the SQL Server default on anything malformed."""
    if value is None:
        return DEFAULT_MSSQL_PORT
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    normalized = str(value).strip().lower()
    if normalized in ("", "null", "undefined"):
        return DEFAULT_MSSQL_PORT
    try:
        parsed = float(normalized)
    except ValueError:
        return DEFAULT_MSSQL_PORT
    if not math.isfinite(parsed) or not parsed.is_integer():
        return DEFAULT_MSSQL_PORT
    return int(parsed)


def parse_server(value: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Split a server value into host and named instance.

    `sqlhost\\SQLEXPRESS` -> ("sqlhost", "SQLEXPRESS"); `sqlhost` -> ("sqlhost", None).
    """
    raw = (value or "").strip()
    if "\\" not in raw:
        return raw, None
    host, instance_name = raw.split("\\", 1)
    return host, instance_name or None


def parse_toggle(value: Any) -> bool:
    """Only the literal string `true` (any case) switches a toggle on."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


class MssqlSettings(BaseSettings):
    """SQL Server connection settings, read from `MSSQL_*` variables."""

    model_config = SettingsConfigDict(
        env_prefix="MSSQL_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    server: str = Field(default="")
    port: int = Field(default=DEFAULT_MSSQL_PORT)
    database: str = Field(default="")
    user: str = Field(default="")
    password: str = Field(default="")
    encrypt: bool = Field(default=False)
    trust_server_cert: bool = Field(default=True)
    driver: str = Field(default="ODBC Driver 18 for SQL Server")

    @field_validator("port", mode="before")
    @classmethod
    def _parse_port(cls, v):
        return parse_port(v)

    @field_validator("encrypt", "trust_server_cert", mode="before")
    @classmethod
    def _parse_toggle(cls, v):
        return parse_toggle(v)

    @property
    def host(self) -> str:
        return parse_server(self.server)[0]

    @property
    def instance_name(self) -> Optional[str]:
        return parse_server(self.server)[1]

    def build_url(self) -> URL:
        """Build the `mssql+pyodbc` URL. Named instances are resolved by SQL Browser, so no port."""
        host = self.host
        port: Optional[int] = self.port
        if self.instance_name:
            host = f"{host}\\{self.instance_name}"
            port = None

        return URL.create(
            "mssql+pyodbc",
            username=self.user or None,
            password=self.password or None,
            host=host or None,
            port=port,
            database=self.database or None,
            query={
                "driver": self.driver,
                "Encrypt": "yes" if self.encrypt else "no",
                "TrustServerCertificate": "yes" if self.trust_server_cert else "no",
            },
        )


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LOG_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    level: str = Field(default="INFO")
    json_format: bool = Field(default=False)
    format: str = Field(default="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    file_path: Optional[str] = Field(default=None)
    max_bytes: int = Field(default=10 * 1024 * 1024)
    backup_count: int = Field(default=5)


class UploadSettings(BaseSettings):
    """Upload limits."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    max_upload_size: int = Field(default=10 * 1024 * 1024)  # bytes


class Settings(BaseSettings):
    project_name: str = Field(default="IAR Monitoring CSV Uploader")
    version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Full SQLAlchemy URL; when set it wins over the MSSQL_* settings.
    database_url: Optional[str] = Field(default=None)
    database_echo: bool = Field(default=False)
    database_pool_size: int = Field(default=5)
    database_pool_timeout: int = Field(default=30)
    database_pool_recycle: int = Field(default=1800)

    iar_table_name: str = Field(default="iar_2025_monitoring")

    mssql: MssqlSettings = Field(default_factory=MssqlSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_file_encoding="utf-8")

    def get_database_url(self) -> "str | URL":
        if self.database_url:
            return self.database_url
        return self.mssql.build_url()


@lru_cache
def get_settings() -> Settings:
    return Settings()
