import os
from decimal import Decimal
from pathlib import Path


class Settings:
    """Application settings with environment variable overrides."""

    APP_NAME: str = "Carreras Admin"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
    DB_PATH: Path = DATA_DIR / "carreras.db"

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        f"sqlite+aiosqlite:///{DB_PATH}",
    )

    # Auth
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "dev-secret-change-in-prod")
    SESSION_COOKIE_NAME: str = "carreras_session"
    SESSION_MAX_AGE: int = 60 * 60 * 24 * 7  # 7 days
    AUTH_OFF: bool = os.getenv("AUTH_OFF", "0") == "1"
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@local")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin")

    # CORS
    ALLOWED_ORIGINS: list[str] = [
        o.strip()
        for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
        if o.strip()
    ]

    # Business constants
    HOME_CURRENCY: str = "ARS"
    CURRENCIES: tuple[str, ...] = ("ARS", "USD")
    DEFAULT_ACCOUNT_NAME: str = "Caja"
    DEFAULT_TIPO_MOVIMIENTO: str = "gasto_operativo"

    # Fee schedule applied when an event is created without explicit values
    DEFAULT_MP_PCT: Decimal = Decimal("2")
    DEFAULT_IB_PCT: Decimal = Decimal("4")
    DEFAULT_IVA_PCT: Decimal = Decimal("10.5")
    DEFAULT_PROV_PCT: Decimal = Decimal("17")
    DEFAULT_DEB_CRED_PCT: Decimal = Decimal("1.2")


settings = Settings()
