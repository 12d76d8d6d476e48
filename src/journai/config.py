"""Configuration management using Pydantic Settings."""

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NEO4J_URI_SCHEMES = ("bolt", "bolt+s", "bolt+ssc", "neo4j", "neo4j+s", "neo4j+ssc")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "journai"

    # LLM Configuration (OpenAI-compatible endpoint)
    llm_base_url: str = "https://api.openai.com/v1"
    llm_model: str = "gpt-4"
    llm_api_key: str = ""
    llm_timeout: float = 60.0
    llm_temperature: float = 0.7
    llm_max_concurrent: int = 8
    llm_max_retries: int = Field(
        default=0,
        ge=0,
        description="Transport-level retries for the completion call (0 disables)"
    )

    strip_thinking: bool = Field(
        default=True,
        description="Strip <think> blocks from completions before parsing"
    )

    # Accepted range for the model-generated day rating
    rate_min: float = 0.0
    rate_max: float = 1.0

    # Neo4j Configuration
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "journai_password"
    neo4j_database: str = "neo4j"

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    api_debug: bool = False
    log_level: str = "INFO"

    @field_validator("neo4j_uri")
    @classmethod
    def validate_neo4j_uri(cls, value: str) -> str:
        scheme, sep, rest = value.partition("://")
        if not sep or not rest or scheme.lower() not in NEO4J_URI_SCHEMES:
            raise ValueError(
                f"Invalid Neo4j connection string {value!r}, "
                f"expected one of {', '.join(NEO4J_URI_SCHEMES)}://host[:port]"
            )
        return value

    @field_validator("rate_max")
    @classmethod
    def validate_rate_bounds(cls, value: float, info: ValidationInfo) -> float:
        rate_min = info.data.get("rate_min")
        if rate_min is not None and value < rate_min:
            raise ValueError("rate_max must be greater than or equal to rate_min")
        return value


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        llm_api_key="test-key",
        neo4j_database="neo4j_test",
        strip_thinking=True,
    )


# Global settings instance
settings = Settings()
