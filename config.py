import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from repository root (robust when Streamlit changes CWD)
load_dotenv(dotenv_path=str(Path(__file__).resolve().parent / ".env"))

# Expose Supabase credentials for simple imports
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
# Service role key, only needed by scripts that bypass row level security
SUPABASE_SERVICE_ROLE = os.getenv("SUPABASE_SERVICE_ROLE")

APP_TITLE = os.getenv("APP_TITLE", "Science Club")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
