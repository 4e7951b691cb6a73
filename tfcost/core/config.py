"""
Configuration module for loading environment variables.
Pricing assumptions and catalog settings are read once at import time.
"""
import os


class Config:
    """Application configuration loaded from environment variables."""

    # Pricing Catalog Configuration
    # The Price List API is only served from a handful of regions
    AWS_PRICING_REGION: str = os.getenv("AWS_PRICING_REGION", "us-east-1")
    DEFAULT_REGION: str = os.getenv("DEFAULT_REGION", "us-east-1")
    PRICING_TIMEOUT_SECONDS: int = int(os.getenv("PRICING_TIMEOUT_SECONDS", "10"))
    PRICING_QUERY_TIMEOUT_SECONDS: float = float(os.getenv("PRICING_QUERY_TIMEOUT_SECONDS", "15"))

    # Estimation Assumptions
    HOURS_PER_MONTH: int = 730  # Standard assumption: 24/7 operation
    HOURS_PER_YEAR: int = 8760
    ASSUMED_MONTHLY_REQUESTS: int = int(os.getenv("ASSUMED_MONTHLY_REQUESTS", "1000000"))
    S3_ESTIMATED_STORAGE_GB: int = int(os.getenv("S3_ESTIMATED_STORAGE_GB", "100"))

    # API Configuration
    MAX_TERRAFORM_TEXT_BYTES: int = int(os.getenv("MAX_TERRAFORM_TEXT_BYTES", str(1024 * 1024)))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def validate(cls) -> None:
        """
        Validates that configuration values are usable.

        Raises:
            ValueError: If any required configuration is missing or invalid.
        """
        if not cls.AWS_PRICING_REGION:
            raise ValueError("AWS_PRICING_REGION is required")
        if not cls.DEFAULT_REGION:
            raise ValueError("DEFAULT_REGION is required")
        if cls.PRICING_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"PRICING_TIMEOUT_SECONDS must be positive (got: {cls.PRICING_TIMEOUT_SECONDS})"
            )
        if cls.PRICING_QUERY_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"PRICING_QUERY_TIMEOUT_SECONDS must be positive (got: {cls.PRICING_QUERY_TIMEOUT_SECONDS})"
            )
        if cls.ASSUMED_MONTHLY_REQUESTS < 0:
            raise ValueError("ASSUMED_MONTHLY_REQUESTS must not be negative")
        if cls.S3_ESTIMATED_STORAGE_GB < 0:
            raise ValueError("S3_ESTIMATED_STORAGE_GB must not be negative")
        if cls.MAX_TERRAFORM_TEXT_BYTES <= 0:
            raise ValueError("MAX_TERRAFORM_TEXT_BYTES must be positive")
        if cls.LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL is not a valid logging level (got: {cls.LOG_LEVEL})")


config = Config()
