from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./hirehub.db"

    # JWT Authentication
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # AWS S3 (resumes and recruiter logos)
    AWS_REGION: str = ""
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_S3_BUCKET_NAME: str = ""

    # Identity provider webhooks (Clerk, signed with Svix)
    CLERK_WEBHOOK_SECRET: str = ""

    # Uploads
    MAX_UPLOAD_SIZE_BYTES: int = 5 * 1024 * 1024

    # Application
    APP_NAME: str = "HireHub"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    FRONTEND_BUILD_DIR: str = "../client/build"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:5173,"
        "http://localhost:3000,"
        "http://127.0.0.1:5173,"
        "http://127.0.0.1:3000"
    )


settings = Settings()
