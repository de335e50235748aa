import os
from typing import Any, Callable, Dict, Optional

from botocore.config import Config
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()


class DynamoDBConfig(BaseModel):
    """Configuration for the DynamoDB connection used by the document client."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    aws_session_token: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SESSION_TOKEN"),
        description="AWS session token for temporary credentials"
    )

    profile_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_PROFILE"),
        description="Named profile from the shared AWS config files"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION", "us-east-1"),
        description="AWS region name"
    )

    # DynamoDB specific settings
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=50,
        ge=1,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        ge=0,
        description="Number of retry attempts botocore makes for failed requests"
    )

    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Connect and read timeout in seconds"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("DYNAMODB_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for DynamoDB operations"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    def session_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for boto3.Session, skipping unset values.

        Unset values are left to boto3's own resolution chain (environment,
        shared config files, instance metadata).
        """
        candidates = {
            'aws_access_key_id': self.aws_access_key_id,
            'aws_secret_access_key': self.aws_secret_access_key,
            'aws_session_token': self.aws_session_token,
            'profile_name': self.profile_name,
            'region_name': self.region_name,
        }
        return {k: v for k, v in candidates.items() if v is not None}

    def boto_config(self) -> Config:
        """Build the botocore Config carrying retry, pool and timeout settings."""
        return Config(
            retries={'max_attempts': self.retries},
            max_pool_connections=self.max_pool_connections,
            read_timeout=self.timeout_seconds,
            connect_timeout=self.timeout_seconds
        )

    @classmethod
    def from_env(cls) -> 'DynamoDBConfig':
        """Create configuration from environment variables.

        Returns:
            DynamoDBConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls) -> 'DynamoDBConfig':
        """Create configuration for local DynamoDB development.

        Returns:
            DynamoDBConfig instance configured for DynamoDB Local on port 8000
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url="http://localhost:8000",
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )


ConfigHook = Callable[[DynamoDBConfig], None]
ClientHook = Callable[[Dict[str, Any]], None]


class ClientOptions(BaseModel):
    """Hooks applied while the DynamoDB client is being built.

    Attributes:
        config_hook: Receives the DynamoDBConfig loaded from the environment
            and may change it in place (region, credentials, endpoint, profile).
        client_hook: Receives the keyword arguments for
            ``session.client("dynamodb", ...)`` and may change them in place.
    """

    config_hook: Optional[ConfigHook] = None
    client_hook: Optional[ClientHook] = None

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True
    )
