"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


class ServerConfig(BaseModel):
    """RPC host configuration."""
    host: str = "127.0.0.1"
    port: int = 3000
    prefix: str = "/api/trpc"  # Route prefix; procedures live at <prefix>/{trpc}
    cors_origins: list[str] = Field(default_factory=list)  # Empty disables CORS middleware


class ClientConfig(BaseModel):
    """Remote caller defaults used by the CLI."""
    base_url: str = "http://localhost:3000/api/trpc"
    timeout: float = 20.0
    headers: dict[str, str] = Field(default_factory=dict)


class LoggingConfig(BaseModel):
    """Loguru sink configuration."""
    level: str = "INFO"
    file_name: str = ""  # Rotating file under ~/.wirecall/logs when set


class Config(BaseSettings):
    """Root configuration for wirecall."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(
        env_prefix="WIRECALL_",
        env_nested_delimiter="__",
    )
