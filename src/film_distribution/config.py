"""
Central configuration module for the film distribution backend
Reads and validates environment variables with strict checks for production
"""
import os
import sys
from typing import Optional, List

# Load environment variables from .env file if it exists (dev only)
try:
    from dotenv import load_dotenv
    if os.getenv("ENV", "dev").lower() == "dev":
        load_dotenv()
except ImportError:
    pass


class Config:
    """Central configuration class with environment variable validation"""

    # Environment
    ENV: str = os.getenv("ENV", "dev").lower()

    # Required for all environments
    SECRET_KEY: str = os.getenv("SECRET_KEY", "")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    PORT: int = int(os.getenv("PORT", "3000"))
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:3000")

    # CORS
    CORS_ORIGINS: List[str] = []

    # Database pool
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    DB_POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "900"))
    DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "30"))

    # Payment provider - Stripe
    STRIPE_SECRET_KEY: Optional[str] = os.getenv("STRIPE_SECRET_KEY")
    STRIPE_PUBLIC_KEY: Optional[str] = os.getenv("STRIPE_PUBLIC_KEY")
    STRIPE_WEBHOOK_SECRET: Optional[str] = os.getenv("STRIPE_WEBHOOK_SECRET")
    PAYMENT_CURRENCY: str = os.getenv("PAYMENT_CURRENCY", "usd")

    # Email (SMTP)
    SMTP_HOST: Optional[str] = os.getenv("SMTP_HOST")
    SMTP_PORT: str = os.getenv("SMTP_PORT", "587")
    SMTP_USER: Optional[str] = os.getenv("SMTP_USER")
    SMTP_PASSWORD: Optional[str] = os.getenv("SMTP_PASSWORD")
    SMTP_FROM_ADDRESS: str = os.getenv("SMTP_FROM_ADDRESS", "noreply@hollywoodweekly.tv")

    # Outreach and billing knobs
    ADMIN_SENDER_ID: int = int(os.getenv("ADMIN_SENDER_ID", "1"))
    CONTACT_IMPORT_BATCH_SIZE: int = int(os.getenv("CONTACT_IMPORT_BATCH_SIZE", "50"))
    PLATFORM_FEE_PERCENT: int = int(os.getenv("PLATFORM_FEE_PERCENT", "15"))
    SIGNUP_URL: str = os.getenv("SIGNUP_URL", "https://hollywoodweekly.tv/register")

    # Comma separated; overrides the built-in screening keyword lists
    MODERATION_FLAGGED_KEYWORDS: Optional[str] = os.getenv("MODERATION_FLAGGED_KEYWORDS")

    # Build version (set during build/deploy)
    BUILD_VERSION: str = os.getenv("BUILD_VERSION", "dev")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def __init__(self):
        """Initialize configuration and validate required variables"""
        self._load_cors_origins()
        self._validate()

    def _load_cors_origins(self):
        """Load CORS origins from environment variable"""
        default_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

        cors_env = os.getenv("CORS_ORIGINS", "")
        if cors_env:
            env_origins = [origin.strip() for origin in cors_env.split(",") if origin.strip()]
            self.CORS_ORIGINS = default_origins + env_origins
        else:
            self.CORS_ORIGINS = default_origins

    def _validate(self):
        """Validate required configuration based on environment"""
        errors = []

        if self.ENV not in ["dev", "staging", "prod", "test"]:
            errors.append(f"Invalid ENV value: {self.ENV}. Must be 'dev', 'staging', 'prod' or 'test'")

        if not self.SECRET_KEY:
            errors.append("SECRET_KEY is required but not set")
        elif len(self.SECRET_KEY) < 32:
            errors.append(f"SECRET_KEY must be at least 32 characters (current: {len(self.SECRET_KEY)})")

        if not self.DATABASE_URL:
            errors.append("DATABASE_URL is required but not set")
        elif self.ENV in ["staging", "prod"] and not self.DATABASE_URL.startswith("postgresql"):
            errors.append(f"DATABASE_URL must be a PostgreSQL connection string in {self.ENV} (got: {self.DATABASE_URL[:30]}...)")

        if not 0 <= self.PLATFORM_FEE_PERCENT <= 100:
            errors.append(f"PLATFORM_FEE_PERCENT must be between 0 and 100 (got: {self.PLATFORM_FEE_PERCENT})")

        if self.CONTACT_IMPORT_BATCH_SIZE < 1:
            errors.append("CONTACT_IMPORT_BATCH_SIZE must be a positive integer")

        if self.ENV in ["staging", "prod"]:
            if not self.STRIPE_SECRET_KEY:
                errors.append(f"STRIPE_SECRET_KEY is required in {self.ENV}")
            if not self.STRIPE_WEBHOOK_SECRET:
                errors.append(f"STRIPE_WEBHOOK_SECRET is required in {self.ENV}")
            if not self.API_BASE_URL.startswith("https://"):
                errors.append("API_BASE_URL must use HTTPS in staging/production")

        # Fail fast in staging/prod
        if errors and self.ENV in ["staging", "prod"]:
            print("=" * 60, file=sys.stderr)
            print("CONFIGURATION VALIDATION FAILED", file=sys.stderr)
            print("=" * 60, file=sys.stderr)
            for error in errors:
                print(f"  - {error}", file=sys.stderr)
            print("=" * 60, file=sys.stderr)
            sys.exit(1)

        if errors and self.ENV == "dev":
            print("=" * 60, file=sys.stderr)
            print("CONFIGURATION WARNINGS (dev mode - continuing)", file=sys.stderr)
            print("=" * 60, file=sys.stderr)
            for error in errors:
                print(f"  - {error}", file=sys.stderr)
            print("=" * 60, file=sys.stderr)

    @property
    def is_dev(self) -> bool:
        """Check if running in development mode"""
        return self.ENV == "dev"

    @property
    def is_prod(self) -> bool:
        """Check if running in production mode"""
        return self.ENV == "prod"

    @property
    def smtp_configured(self) -> bool:
        return bool(self.SMTP_HOST and self.SMTP_USER and self.SMTP_PASSWORD)

    def get_database_url(self) -> str:
        """Get database URL (alias for DATABASE_URL)"""
        return self.DATABASE_URL

    def get_secret_key(self) -> str:
        """Get secret key (alias for SECRET_KEY)"""
        return self.SECRET_KEY


# Create global config instance
config = Config()
