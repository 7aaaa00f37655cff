"""
Configuration management for the Roomchat backend
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Key-value store
    store_backend: str = "memory"  # 'memory', 'dynamodb'
    aws_region: str = "us-east-1"
    aws_endpoint_url: str | None = None  # e.g. http://localhost:8000 for DynamoDB Local
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    rooms_table: str = "roomchat-rooms"
    messages_table: str = "roomchat-messages"
    messages_by_room_index: str = "messages-by-room-id"
    list_rooms_default_limit: int = 1000

    # Auth
    auth_provider: str = "none"  # 'none', 'jwt', 'cognito'
    auth_config: dict = {}
    jwt_secret: str | None = None
    cognito_user_pool_id: str | None = None
    cognito_client_id: str | None = None

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8088
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]
    graphiql: bool = True

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "ROOMCHAT_"
        case_sensitive = False
        extra = "allow"


# Global settings instance
settings = Settings()
