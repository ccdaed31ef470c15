"""Configuration: env, data paths, record backend, Supabase credentials."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of milavault package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SUPABASE_URL etc. are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = Path(os.getenv("MILAVAULT_DATA_DIR", str(BASE_DIR / "data")))
DRAFTS_DIR = DATA_DIR / "drafts"
PEOPLE_PATH = DATA_DIR / "people.json"

# API
API_HOST = os.getenv("MILAVAULT_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("MILAVAULT_API_PORT", "8000"))

# Record backend: "local" (JSON file under DATA_DIR) or "supabase"
RECORD_BACKEND = os.getenv("MILAVAULT_RECORD_BACKEND", "local").strip().lower()

# Supabase (PostgREST + auth); only used when RECORD_BACKEND == "supabase"
SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
SUPABASE_ACCESS_TOKEN = os.getenv("SUPABASE_ACCESS_TOKEN", "")
PEOPLE_TABLE = os.getenv("MILAVAULT_PEOPLE_TABLE", "people")
HTTP_TIMEOUT_SEC = float(os.getenv("MILAVAULT_HTTP_TIMEOUT", "10"))

# Owner identity for the local backend (no sign-in flow)
LOCAL_OWNER_ID = os.getenv("MILAVAULT_OWNER_ID", "local-user")

# Draft namespaces (keys in local durable storage)
NOTES_DRAFTS_KEY = "milavault_notes_drafts"
EDIT_DRAFTS_KEY = "milavault_edit_drafts"


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
