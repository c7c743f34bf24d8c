from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = "dev"
    SERVICE_PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Full URL wins over the PG_* parts (tests point this at aiosqlite)
    DATABASE_URL: str | None = None
    PG_HOST: str = "localhost"
    PG_PORT: int = 5432
    PG_DB: str = "linkup"
    PG_USER: str = "linkup"
    PG_PASSWORD: str = ""

    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_TIMEOUT_SECONDS: float = 2.0

    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_MINUTES: int = 60
    REFRESH_TOKEN_DAYS: int = 3
    RESET_TOKEN_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 10

    SMTP_HOST: str = "smtp.example.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_TLS: bool = True
    MAIL_FROM: str = "no-reply@linkup.local"

    EMAIL_ENABLED: bool = True
    SMTP_TIMEOUT_SECONDS: int = 10

    FRONTEND_BASE_URL: str = "http://localhost:3000"

    LOGIN_THROTTLE_ENABLED: bool = True
    LOGIN_ATTEMPT_WINDOW_SECONDS: int = 600
    LOGIN_MAX_ATTEMPTS: int = 5
    LOGIN_BLOCK_SECONDS: int = 900

    STORAGE_BACKEND: str = "local"                  # local | cloudinary
    UPLOAD_DIR: str = "uploads"                     # staging area for incoming files
    MEDIA_DIR: str = "media"
    MEDIA_BASE_URL: str = "http://localhost:8080/media"
    CLOUDINARY_CLOUD_NAME: str | None = None
    CLOUDINARY_API_KEY: str | None = None
    CLOUDINARY_API_SECRET: str | None = None

    CELERY_BROKER_URL: str = "redis://localhost:6379/1"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/2"
    CELERY_TIMEZONE: str = "UTC"
    TOKEN_PURGE_INTERVAL_SECONDS: int = 3600

    SENTRY_DSN: str | None = None
    GIT_SHA: str | None = None

    CORS_ORIGINS: list[str] = ["*"]

settings = Settings()
