"""Centralized configuration — all env vars in one place."""

import os
from pathlib import Path

DEFAULT_SUPPLIERS_FILE = Path(__file__).resolve().parent / "suppliers.yml"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.port: int = int(os.getenv("PORT", "9000"))

        # Suppliers and caching
        self.suppliers_file: Path = Path(os.getenv("SUPPLIERS_FILE", str(DEFAULT_SUPPLIERS_FILE)))
        self.cache_ttl_minutes: float = float(os.getenv("CACHE_TTL_MINUTES", "5"))
        self.supplier_timeout_seconds: float = float(os.getenv("SUPPLIER_TIMEOUT_SECONDS", "10"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of configuration problems, empty when usable."""
        problems = []
        if not self.suppliers_file.is_file():
            problems.append(f"SUPPLIERS_FILE not found: {self.suppliers_file}")
        if self.cache_ttl_minutes < 0:
            problems.append("CACHE_TTL_MINUTES must not be negative")
        if self.supplier_timeout_seconds <= 0:
            problems.append("SUPPLIER_TIMEOUT_SECONDS must be positive")
        return problems


settings = Settings()
