import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./clinicdesk.db")

# Firebase Configuration (identity provider; the token "sub" is the owner id)
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")

# Guest mode routes every CRUD call to the in-memory fixture store
GUEST_MODE_ENABLED = os.getenv("GUEST_MODE_ENABLED", "true").lower() == "true"
GUEST_OWNER_ID = os.getenv("GUEST_OWNER_ID", "guest")

# Calendar grid
CALENDAR_START_HOUR = int(os.getenv("CALENDAR_START_HOUR", "8"))
CALENDAR_END_HOUR = int(os.getenv("CALENDAR_END_HOUR", "20"))
SLOT_HEIGHT_PX = float(os.getenv("SLOT_HEIGHT_PX", "64"))
SNAP_MINUTES = int(os.getenv("SNAP_MINUTES", "15"))
MIN_DURATION_MINUTES = int(os.getenv("MIN_DURATION_MINUTES", "15"))
SKIP_CLICK_WINDOW_MS = int(os.getenv("SKIP_CLICK_WINDOW_MS", "100"))

# Retention analytics
UPCOMING_WINDOW_DAYS = int(os.getenv("UPCOMING_WINDOW_DAYS", "7"))

# Status names containing any of these (case-insensitive) count as cancelled.
# There is no dedicated flag on statuses, see DESIGN.md.
CANCELLED_STATUS_KEYWORDS = [
    keyword.strip().lower()
    for keyword in os.getenv("CANCELLED_STATUS_KEYWORDS", "cancel,anul").split(",")
    if keyword.strip()
]

# Overlapping bookings for the same staff member are only logged unless enabled
REJECT_DOUBLE_BOOKING = os.getenv("REJECT_DOUBLE_BOOKING", "false").lower() == "true"

# CORS
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:5173,http://localhost:3000",
).split(",")
