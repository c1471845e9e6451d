# settings.py
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

# OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
SUGGESTION_TEMPERATURE = float(os.getenv("SUGGESTION_TEMPERATURE", "0.8"))

# Storage
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./pathways.db")
DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
TELEMETRY_DB = os.getenv("TELEMETRY_DB", "telemetry.sqlite3")

# Caches (seconds)
TITLES_CACHE_TTL = 30 * 60
CAMPUSES_CACHE_TTL = 30 * 60
CATALOG_CACHE_TTL = 60 * 60

# Rate limiting for the LLM-backed generation endpoints
GENERATE_RATE_PER_MINUTE = float(os.getenv("GENERATE_RATE_PER_MINUTE", "20"))
GENERATE_BURST = float(os.getenv("GENERATE_BURST", "30"))

# Wizard client
ADVISOR_API_BASE = os.getenv("ADVISOR_API_BASE", "http://localhost:8000")
AUTOCOMPLETE_DEBOUNCE_SECONDS = 0.35
REDIRECT_DELAY_SECONDS = 2.5

# App
APP_TITLE = "Pathway Advisor"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = os.getenv("DEBUG", "0").strip() == "1"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
