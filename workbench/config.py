import os
from dotenv import load_dotenv

load_dotenv()

# --- Database ---
# Default to local SQLite, but prefer environment variable
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/workbench.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- Reports ---
# Which hours feed per-project totals: planned / actual / effective
REPORT_HOURS_BASIS = os.getenv("WORKBENCH_REPORT_HOURS_BASIS", "planned").strip().lower()
MAX_REPORT_DAYS = int(os.getenv("WORKBENCH_MAX_REPORT_DAYS", "366"))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- HTTP ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# --- Display defaults ---
DEFAULT_PROJECT_COLOR = "#165DFF"
UNASSIGNED_PROJECT_NAME = "Uncategorized"
UNASSIGNED_PROJECT_COLOR = "#86909c"
