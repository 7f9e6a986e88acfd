from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path

# Get the project root directory (parent of backend folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = "sqlite:///./study_planner.db"

    # AI Provider Configuration
    ai_provider: str = "ollama"  # "ollama" or "claude"

    # Ollama settings (for local development)
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2:latest"

    # Claude API settings (for production)
    claude_api_key: str = ""
    claude_model: str = "claude-3-5-sonnet-20241022"

    llm_temperature: float = 0.0
    llm_max_tokens: int = 4000

    # Sessions
    session_cookie_name: str = "study_session"
    session_ttl_days: int = 7

    # HTTP API
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    # Frontend -> API
    api_base_url: str = "http://localhost:8000"

    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        extra = "ignore"

settings = Settings()
