from pathlib import Path
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from progress_report.curriculum.levels import LEVEL_FILE_MAP

_PACKAGE_ROOT = Path(__file__).resolve().parents[1]


class CurriculumConfig(BaseSettings):
    """Curriculum knowledge base configuration"""

    data_dir: Path = Field(
        default=_PACKAGE_ROOT / "resources" / "curriculum",
        description="Directory holding the per-level curriculum JSON files.",
    )
    level_files: dict[str, str] = Field(
        default_factory=lambda: dict(LEVEL_FILE_MAP),
        description="Canonical level label to data file name.",
    )

    model_config = SettingsConfigDict(
        env_prefix="CURRICULUM_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class AwsConfig(BaseSettings):
    """AWS credentials shared by the boto3 clients"""

    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    session_token: Optional[str] = None
    region: str = "us-east-1"
    endpoint_url: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="AWS_",
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class TranscribeConfig(BaseSettings):
    """Amazon Transcribe batch jobs for lesson recordings"""

    bucket_name: Optional[str] = Field(
        default=None,
        description="S3 bucket for staged media and transcript output.",
    )
    key_prefix: str = "progress-report"
    region: Optional[str] = None
    language_code: str = "en-US"
    max_speakers: int = Field(default=2, ge=2, le=10)
    poll_interval_seconds: float = Field(default=5.0, ge=0.0)
    timeout_seconds: float = Field(default=300.0, gt=0.0)
    download_timeout_seconds: float = Field(default=60.0, gt=0.0)
    max_media_bytes: int = Field(default=500 * 1024 * 1024, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="TRANSCRIBE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class BedrockConfig(BaseSettings):
    """Amazon Bedrock configuration."""

    region: str = Field(
        default="us-east-1",
        validation_alias="BEDROCK_REGION",
    )
    model_id: str = Field(
        default="amazon.nova-lite-v1:0",
        validation_alias="BEDROCK_MODEL_ID",
    )
    max_tokens: int = Field(
        default=2048,
        validation_alias="BEDROCK_MAX_TOKENS",
        ge=1,
        le=8192,
    )
    temperature: float = Field(
        default=0.3,
        validation_alias="BEDROCK_TEMPERATURE",
        ge=0.0,
        le=1.0,
    )
    top_p: float = Field(
        default=0.9,
        validation_alias="BEDROCK_TOP_P",
        ge=0.0,
        le=1.0,
    )
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias="BEDROCK_API_KEY",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "Progress Report Backend"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_file: str = "logs/app.log"
    curriculum_log_file: str = "logs/curriculum.log"

    # Curriculum
    curriculum: CurriculumConfig = Field(default_factory=CurriculumConfig)

    # AWS
    aws: AwsConfig = Field(default_factory=AwsConfig)

    # Transcribe
    transcribe: TranscribeConfig = Field(default_factory=TranscribeConfig)

    # Bedrock
    bedrock: BedrockConfig = Field(default_factory=BedrockConfig)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
