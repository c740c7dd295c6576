import logging
import os

# ==========================================
# 1. API CONFIGURATION
# ==========================================

# Models offered in the dashboard dropdown
AVAILABLE_MODELS = {
    "gemini-2.5-flash-preview-09-2025": "Gemini 2.5 Flash (Preview)",
    "gemini-2.5-flash": "Gemini 2.5 Flash",
    "gemini-2.5-pro": "Gemini 2.5 Pro",
}

MODEL_NAME = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash-preview-09-2025")

# Base URL without the model name; the client appends "/{model}:generateContent"
API_BASE_URL = os.environ.get(
    "GEMINI_API_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/models"
)

# Seconds before a single generateContent request is abandoned
REQUEST_TIMEOUT = int(os.environ.get("GEMINI_REQUEST_TIMEOUT", "120"))

# Additional attempts after the first one; delays double from INITIAL_BACKOFF_MS
MAX_RETRIES = 5
INITIAL_BACKOFF_MS = 1000


# ==========================================
# 2. MARKET / REPORT SETTINGS
# ==========================================

# "Today" for the date picker is evaluated in this zone
MARKET_TIMEZONE = os.environ.get("MARKET_TIMEZONE", "Asia/Seoul")

STOCK_LIST_LIMIT = 20
THEME_LIST_LIMIT = 10


# ==========================================
# 3. CREDENTIALS
# ==========================================

GEMINI_KEY_SECRET_NAME = "GEMINI_API_KEY"


def load_gemini_api_key() -> str | None:
    """
    Resolves the Gemini API key: Infisical first, then the local environment.
    Returns None when neither source has it.
    """
    from rankboard.core.infisical_manager import InfisicalManager

    logger = logging.getLogger(__name__)
    api_key = None
    try:
        api_key = InfisicalManager(logger=logger).get_secret(GEMINI_KEY_SECRET_NAME)
    except Exception as e:
        logger.critical(f"Error loading secrets: {e}")

    if not api_key:
        logger.info("Infisical returned no Gemini key, checking local environment variables...")
        api_key = os.environ.get(GEMINI_KEY_SECRET_NAME, "").strip() or None

    if not api_key:
        logger.critical("CRITICAL: Gemini API key not found (Infisical or environment variables).")
    return api_key
