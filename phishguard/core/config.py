"""
Configuration settings using Pydantic
Loads environment variables from .env file
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings"""

    # Server configuration
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # Optional remote model (Ollama). Disabled means the local engine is authoritative.
    REMOTE_MODEL_ENABLED: bool = Field(default=False, description="Use the Ollama model when it is reachable")
    OLLAMA_HOST: str = Field(default="http://localhost:11434", description="Ollama server URL")
    OLLAMA_MODEL: str = Field(default="llama3.2:3b", description="LLM model name")
    REMOTE_MODEL_TIMEOUT: float = Field(default=30.0, description="Remote model timeout in seconds")

    # Data configuration
    HISTORY_FILE: str = Field(default="data/history.json", description="Analysis history file path")
    RULES_CONFIG_FILE: str = Field(default="config/rules.json", description="Optional rule table overrides")

    # Input limits
    MAX_TEXT_LENGTH: int = Field(default=50000, description="Maximum accepted text length for the API")

    @property
    def SERVER_URL(self) -> str:
        """Get the server URL"""
        return f"http://{self.HOST if self.HOST != '0.0.0.0' else 'localhost'}:{self.PORT}"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env file
    )


# Global settings instance
settings = Settings()
