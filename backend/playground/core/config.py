from pathlib import Path
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    APP_NAME: str = "Code Playground Gateway"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # Sandbox
    SCRATCH_ROOT: Path = Path.cwd() / "temp"
    INTERPRET_TIME_LIMIT_S: float = 5
    COMPILE_TIME_LIMIT_S: float = 10
    RUN_TIME_LIMIT_S: float = 5
    MAX_OUTPUT_CHARS: int = 64 * 1024
    DEFAULT_ENTRY_POINT: str = "Main"

    # Toolchains
    PYTHON_BIN: str = "python3"
    NODE_BIN: str = "node"
    JAVAC_BIN: str = "javac"
    JAVA_BIN: str = "java"
    JAVA_RELEASE: int | None = None

    # Version control
    GITHUB_API_BASE: str = "https://api.github.com"
    GITHUB_DEFAULT_BRANCH: str = "main"
    GITHUB_TIMEOUT_S: float = 15

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
