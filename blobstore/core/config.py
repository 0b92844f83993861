"""Configuration management for blobstore.

This module provides environment-driven configuration using pydantic-settings.
Settings are loaded from ``STORAGE_*`` environment variables or a .env file
and validated before any store is built.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3Config(BaseModel):
    """Connection settings for an S3-compatible service.

    Attributes:
        endpoint: Service endpoint URL; None uses the AWS default for the region
        region: Region name
        access_key_id: Static access key ID
        secret_access_key: Static secret access key
        bucket: Bucket holding the objects
        path_prefix: Prefix scoping list()
        disable_ssl: Talk plain HTTP instead of HTTPS
    """

    model_config = ConfigDict(frozen=True)

    endpoint: Optional[str] = Field(default=None, description="S3 endpoint URL")
    region: str = Field(default="us-east-1", description="S3 region name")
    access_key_id: str = Field(..., description="S3 access key ID")
    secret_access_key: str = Field(..., description="S3 secret access key")
    bucket: str = Field(..., description="Bucket name")
    path_prefix: str = Field(default="", description="Prefix scoping list operations")
    disable_ssl: bool = Field(default=False, description="Disable TLS")

    def endpoint_url(self) -> Optional[str]:
        """Return the endpoint with a scheme matching disable_ssl.

        An endpoint given as host:port gets http:// or https:// prepended;
        one that already carries a scheme is returned unchanged.
        """
        if not self.endpoint:
            return None
        if "://" in self.endpoint:
            return self.endpoint
        return f"{'http' if self.disable_ssl else 'https'}://{self.endpoint}"


class StorageSettings(BaseSettings):
    """Storage settings loaded from environment variables.

    Only the fields of the selected backend are required; the cross-field
    check runs after all values are parsed.

    Attributes:
        backend: Which driver to build ("local" or "s3")

        # Local filesystem (2 fields)
        local_path: Root directory of the local store
        local_permissions: Mode for created files (octal string accepted)

        # S3 (7 fields)
        s3_endpoint: S3 endpoint URL or host:port
        s3_region: S3 region name
        s3_access_key: S3 access key ID
        s3_secret_key: S3 secret access key
        s3_bucket: Bucket name
        s3_path_prefix: Prefix scoping list operations
        s3_disable_ssl: Whether to use plain HTTP
    """

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    backend: Literal["local", "s3"] = Field(
        default="local",
        description="Storage backend (local, s3)",
    )

    # Local filesystem (2 fields)
    local_path: Optional[str] = Field(
        default=None,
        description="Root directory of the local store",
    )
    local_permissions: Optional[int] = Field(
        default=None,
        description="File mode for created files, e.g. 0644",
        ge=0,
        le=0o7777,
    )

    # S3 (7 fields)
    s3_endpoint: Optional[str] = Field(
        default=None,
        description="S3 endpoint URL or host:port",
    )
    s3_region: str = Field(
        default="us-east-1",
        description="S3 region name",
    )
    s3_access_key: Optional[str] = Field(
        default=None,
        description="S3 access key ID",
    )
    s3_secret_key: Optional[str] = Field(
        default=None,
        description="S3 secret access key",
    )
    s3_bucket: Optional[str] = Field(
        default=None,
        description="Bucket name",
    )
    s3_path_prefix: str = Field(
        default="",
        description="Prefix scoping list operations",
    )
    s3_disable_ssl: bool = Field(
        default=False,
        description="Use plain HTTP instead of HTTPS",
    )

    @field_validator("local_permissions", mode="before")
    @classmethod
    def parse_octal_permissions(cls, v: object) -> object:
        """Parse string permissions as octal.

        Environment variables arrive as strings, and "0644" must mean
        0o644 rather than decimal 644.

        Args:
            v: Raw value

        Returns:
            Integer mode, or v unchanged if it is not a string

        Raises:
            ValueError: If the string is not a valid octal number
        """
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            try:
                return int(v, 8)
            except ValueError:
                raise ValueError(f"local_permissions must be an octal mode, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_backend_fields(self) -> "StorageSettings":
        """Check that the selected backend has everything it needs.

        Raises:
            ValueError: If a required field for the backend is missing
        """
        if self.backend == "local":
            if not self.local_path:
                raise ValueError("local_path is required for the local backend")
        elif self.backend == "s3":
            missing = [
                name
                for name in ("s3_bucket", "s3_access_key", "s3_secret_key")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(f"{', '.join(missing)} required for the s3 backend")
        return self

    def to_s3_config(self) -> S3Config:
        """Build the S3 connection settings for this configuration.

        Returns:
            S3Config for S3Storage.from_config
        """
        return S3Config(
            endpoint=self.s3_endpoint,
            region=self.s3_region,
            access_key_id=self.s3_access_key or "",
            secret_access_key=self.s3_secret_key or "",
            bucket=self.s3_bucket or "",
            path_prefix=self.s3_path_prefix,
            disable_ssl=self.s3_disable_ssl,
        )
