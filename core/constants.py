"""
Hard-coded constants - fixed values that rarely change

Important: paths must always use pathlib.Path (cross platform)
"""

from decimal import Decimal
from pathlib import Path


# Project root (two levels above this file: core/constants.py -> silver-ledger/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """Default values"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    BACKEND_BASE_URL: str = "http://localhost:5000/api"
    BACKEND_TIMEOUT_SEC: float = 30.0

    LOG_LEVEL: str = "INFO"

    # GST bills are intra-state when the customer is in this state
    GST_HOME_STATE: str = "Maharashtra"


class Paths:
    """Project path constants (pathlib - OS independent)"""

    # Directories
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # Settings file
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"


class Precision:
    """Display precision (decimal places)

    Weights are shown to the milligram, currency to the paisa.
    """

    WEIGHT_PLACES: int = 3
    AMOUNT_PLACES: int = 2
    TOUCH_PLACES: int = 2

    WEIGHT_QUANTUM: Decimal = Decimal("0.001")
    AMOUNT_QUANTUM: Decimal = Decimal("0.01")
    TOUCH_QUANTUM: Decimal = Decimal("0.01")
    RUPEE_QUANTUM: Decimal = Decimal("1")


class GstRates:
    """GST rates for silver articles (percent)"""

    CGST_PCT: Decimal = Decimal("1.5")
    SGST_PCT: Decimal = Decimal("1.5")
    IGST_PCT: Decimal = Decimal("3")


class ItemDefaults:
    """Defaults for a fresh bill line, per billing type"""

    WHOLESALE_TOUCH: Decimal = Decimal("92.50")
    WHOLESALE_LABOR_RATE_PER_KG: Decimal = Decimal("1000")

    REGULAR_TOUCH: Decimal = Decimal("13.0")
    REGULAR_LABOR_RATE_PER_KG: Decimal = Decimal("500")

    STAMP: str = "-"
