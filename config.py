"""
Classi - Classification Result Scoring
"""
from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application Info
    APP_NAME: str = "Classi"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"  # Overridden to INFO when DEBUG is set

    # Reference answer file (encrypted at rest, see services/codec.py)
    REFERENCE_FILE: Path = Path("./fix_e")

    # Workbook layout
    # |class1|class2|...|classN|数据库名称|表|字段|
    SHEET_NAME: str = "Sheet 1"
    FIELD_MARKER: str = "数据库名称"  # Header of the first non-classification column

    # HTTP scoring service
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB
    # Comma-separated list of allowed origins, or "*" for all
    CORS_ORIGINS: str = "*"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def log_level(self) -> str:
        return "INFO" if self.DEBUG else self.LOG_LEVEL.upper()


settings = Settings()
