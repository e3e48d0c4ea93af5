import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_page_size() -> Optional[int]:
    value = os.getenv("TABLE_STORE_PAGE_SIZE")
    return int(value) if value else None


class TableStoreConfig(BaseModel):
    """Configuration for the table store connection and table resolution."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("TABLE_STORE_ENDPOINT_URL"),
        description="Store endpoint URL (for local development)"
    )

    # Table resolution
    table_prefix: str = Field(
        default_factory=lambda: os.getenv("TABLE_STORE_TABLE_PREFIX", ""),
        description="Prefix to add to all table names"
    )

    auto_create_tables: bool = Field(
        default_factory=lambda: _env_flag("TABLE_STORE_AUTO_CREATE", "true"),
        description="Create missing tables on first access"
    )

    billing_mode: str = Field(
        default="PAY_PER_REQUEST",
        description="Billing mode used when a table is created"
    )

    # Query settings
    page_size: Optional[int] = Field(
        default_factory=_env_page_size,
        description="Upper bound on records per segment (store default when unset)"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=50,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of retry attempts botocore makes for failed requests"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        description="Current environment (dev, test, staging, prod)"
    )

    enable_debug_logging: bool = Field(
        default_factory=lambda: _env_flag("TABLE_STORE_DEBUG_LOGGING"),
        description="Enable debug logging for store operations"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_environments = ['dev', 'test', 'staging', 'prod']
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @field_validator('billing_mode')
    @classmethod
    def validate_billing_mode(cls, v):
        if v not in ('PAY_PER_REQUEST', 'PROVISIONED'):
            raise ValueError("Billing mode must be PAY_PER_REQUEST or PROVISIONED")
        return v

    @field_validator('page_size')
    @classmethod
    def validate_page_size(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Page size must be a positive integer")
        return v

    def get_table_name(self, base_name: str) -> str:
        """Get the physical table name for a logical table name.

        Args:
            base_name: Table name supplied by the caller

        Returns:
            Name with prefix and environment segment (omitted in prod)
        """
        parts = []

        if self.table_prefix:
            parts.append(self.table_prefix)

        if self.environment != "prod":
            parts.append(self.environment)

        parts.append(base_name)

        return "_".join(parts)

    @classmethod
    def from_env(cls) -> 'TableStoreConfig':
        """Create configuration from environment variables."""
        return cls()

    @classmethod
    def for_local_development(cls) -> 'TableStoreConfig':
        """Create configuration for a local DynamoDB endpoint.

        Returns:
            TableStoreConfig pointing at http://localhost:8000
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url="http://localhost:8000",
            environment="dev",
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
