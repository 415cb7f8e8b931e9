import os
from dotenv import load_dotenv

load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./influmatch.db")

# Connection bootstrap retries (seconds)
DB_CONNECT_RETRIES = int(os.getenv("DB_CONNECT_RETRIES", 8))
DB_RETRY_BASE_DELAY = float(os.getenv("DB_RETRY_BASE_DELAY", 1.0))
DB_RETRY_MAX_DELAY = float(os.getenv("DB_RETRY_MAX_DELAY", 15.0))

# JWT Settings
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "your-secret-key-here")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", 7))

# CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
