from typing import Annotated, List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    # Application Information
    app_name: str = Field(default="Decosa Social")
    app_description: str = Field(default="Social content-sharing API")
    app_version: str = Field(default="1.0.0")
    app_url: str = Field(default="http://localhost:8000")
    frontend_url: str = Field(default="http://localhost:3001")
    debug: bool = Field(default=True)
    production: bool = Field(default=False)
    api_prefix: str = Field(default="/api")

    # Database Configuration
    # database_url wins over the discrete db_* parts when set
    database_url: Optional[str] = Field(default=None)
    db_connection: str = Field(default="postgresql")
    db_host: str = Field(default="127.0.0.1")
    db_port: int = Field(default=5432)
    db_database: str = Field(default="decosa")
    db_username: str = Field(default="postgres")
    db_password: str = Field(default="postgres")
    db_timezone: str = Field(default="UTC")

    # Security Settings
    cors_allowed_origins: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:3001"]
    )
    password_hash_rounds: int = Field(default=12)

    # Session (JWT stored in an HttpOnly cookie)
    jwt_secret: str = Field(default="your-secret-key-change-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_issuer: str = Field(default="Decosa Social")
    session_expiration_days: int = Field(default=7)
    session_cookie_name: str = Field(default="session_token")
    session_cookie_secure: bool = Field(default=False)

    # Object storage (S3)
    aws_region: str = Field(default="us-east-1")
    aws_access_key_id: str = Field(default="")
    aws_secret_access_key: str = Field(default="")
    aws_s3_bucket_name: str = Field(default="")
    aws_endpoint_url: Optional[str] = Field(default=None)
    presigned_read_expiration: int = Field(default=3600 * 24 * 7)
    presigned_upload_expiration: int = Field(default=3600)

    # File Uploads
    max_upload_size_mb: int = Field(default=10)
    allowed_image_types: Annotated[List[str], NoDecode] = Field(
        default=["jpg", "jpeg", "png", "gif", "webp"]
    )

    # Logging
    log_level: str = Field(default="info")
    log_file: str = Field(default="logs/app.log")

    # Pagination
    default_page_size: int = Field(default=10)
    max_page_size: int = Field(default=50)

    # Rate limiting
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_storage_uri: str = Field(default="memory://")
    rate_limit_default: str = Field(default="100/minute")
    rate_limit_auth: str = Field(default="10/minute")

    # Reviewer seed account
    reviewer_default_name: str = Field(default="Moderator")
    reviewer_default_email: str = Field(default="")
    reviewer_default_password: str = Field(default="")

    # ============================
    # Generic comma-separated parser
    # ============================
    @staticmethod
    def _parse_csv(value, default):
        if isinstance(value, str):
            items = [x.strip() for x in value.split(",") if x.strip()]
            return items if items else default
        if isinstance(value, list):
            return value
        return default

    @field_validator("allowed_image_types", mode="before")
    def validate_image_types(cls, v):
        return cls._parse_csv(v, ["jpg", "jpeg", "png", "gif", "webp"])

    @field_validator("cors_allowed_origins", mode="before")
    def validate_cors(cls, v):
        return cls._parse_csv(v, ["http://localhost:3001"])

    @property
    def sqlalchemy_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return "postgresql+psycopg2://{user}:{password}@{host}:{port}/{database}".format(
            user=self.db_username,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_database,
        )

    @property
    def s3_public_base_url(self) -> str:
        return f"https://{self.aws_s3_bucket_name}.s3.{self.aws_region}.amazonaws.com"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "frozen": True,
    }


def load_settings():
    try:
        return Settings()
    except ValidationError as e:
        print("❌ Validation Error:", e)
        raise


settings = load_settings()
