import os
from dotenv import load_dotenv

# Load .env from the repository root
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env"))

SECRET_KEY: str = os.getenv("SECRET_KEY", "myra-dev-secret-change-in-prod")
ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # 24h

# Database: stored in backend/data/
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.abspath(os.path.join(BASE_DIR, "..", ".."))

DATABASE_PATH: str = os.getenv(
    "DATABASE_PATH",
    os.path.join(BACKEND_DIR, "data", "myra.db"),
)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Seeded when user_account is empty
DEFAULT_ADMIN_USERNAME: str = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin")
