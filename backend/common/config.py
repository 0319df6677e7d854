"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    In Lambda, TODO_TABLE is injected by the backend unit.
    Locally, values may come from a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Todos API"
    debug: bool = False
    environment: str = "development"

    # DynamoDB
    todo_table: str = ""  # Required at request time: e.g., todos-stack-table-dev

    # AWS Configuration
    aws_region: str = ""  # Set by the Lambda runtime

    @property
    def resolved_todo_table(self) -> str:
        """Get the todos table name.

        Raises:
            ValueError: If not configured.
        """
        if not self.todo_table:
            raise ValueError("TODO_TABLE must be set")
        return self.todo_table


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
