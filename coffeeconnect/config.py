import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./coffeeconnect.db")

APP_NAME = os.getenv("APP_NAME", "Timbercreek Men's Connect")

# Frontend base URL (CORS origin)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

DEFAULT_PROFILE_PICTURE = os.getenv(
    "DEFAULT_PROFILE_PICTURE", "https://picsum.photos/100/100?grayscale"
)

# Number of extra weekly occurrences created for a repeating timeslot
RECURRENCE_COUNT = int(os.getenv("RECURRENCE_COUNT", "3"))

# Twilio SMS Configuration
# Either TWILIO_FROM_NUMBER or TWILIO_MESSAGING_SERVICE_SID must be set to send
SMS_ENABLED = os.getenv("SMS_ENABLED", "true").lower() == "true"
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_FROM_NUMBER = os.getenv("TWILIO_FROM_NUMBER")
TWILIO_MESSAGING_SERVICE_SID = os.getenv("TWILIO_MESSAGING_SERVICE_SID")
TWILIO_TIMEOUT = float(os.getenv("TWILIO_TIMEOUT", "10.0"))
