import os
from dotenv import load_dotenv
from urllib.parse import quote_plus

load_dotenv()

class Settings:
    # Environment setting
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
    API_URL = os.getenv("API_URL", "http://localhost:8000")
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # JWT
    JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production")
    JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET", "change-me-in-production-refresh")
    JWT_ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15"))
    REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

    # Session cookie used only during the OAuth redirect dance
    SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me-in-production-session-secret")

    # OAuth providers
    GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", "")
    GITHUB_CLIENT_ID = os.getenv("GITHUB_CLIENT_ID", "")
    GITHUB_CLIENT_SECRET = os.getenv("GITHUB_CLIENT_SECRET", "")

    # AI providers
    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    anthropic_api_key: str = os.getenv("ANTHROPIC_API_KEY", "")

    # Stripe
    STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY", "")
    STRIPE_WEBHOOK_SECRET = os.getenv("STRIPE_WEBHOOK_SECRET", "")
    STRIPE_API_BASE = os.getenv("STRIPE_API_BASE", "https://api.stripe.com/v1")

    # Pro status cache
    PRO_CACHE_TTL_SECONDS = int(os.getenv("PRO_CACHE_TTL_SECONDS", "300"))

    # db creds
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_USER = os.getenv("DB_USER", "momentum_user")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "momentum_password")
    DB_NAME = os.getenv("DB_NAME", "momentum_db")
    DB_PORT = os.getenv("DB_PORT", "5432")

    # File storage: "local" or "s3"
    STORAGE_TYPE = os.getenv("STORAGE_TYPE", "local")
    UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
    MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(10 * 1024 * 1024)))

    # AWS S3 Configuration
    AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY")
    AWS_REGION = os.getenv("AWS_S3_REGION", "us-east-1")
    AWS_S3_BUCKET_NAME = os.getenv("AWS_S3_BUCKET", "")

    # Build URL with SSL requirement based on environment
    def _build_database_url(self):
        override = os.getenv("DATABASE_URL")
        if override:
            if override.startswith("postgresql://"):
                return override.replace("postgresql://", "postgresql+asyncpg://", 1)
            return override
        return f"postgresql+asyncpg://{self.DB_USER}:{quote_plus(self.DB_PASSWORD)}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def DATABASE_URL(self):
        return self._build_database_url()

    @property
    def IS_DEVELOPMENT(self):
        return self.ENVIRONMENT == "development"

settings = Settings()
