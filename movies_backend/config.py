import os
from pathlib import Path
from dotenv import load_dotenv

# load .env file automatically
load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./movies.db")
JWT_SECRET = os.getenv("JWT_SECRET", "supersecretkey")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_HOURS = int(os.getenv("JWT_EXPIRE_HOURS", "48"))

TMDB_KEY = os.getenv("TMDB_KEY")
TMDB_BASE = os.getenv("TMDB_BASE", "https://api.themoviedb.org/3")
TMDB_LANG = os.getenv("TMDB_LANG", "en-US")
TIMEOUT_TMDB = int(os.getenv("TIMEOUT_TMDB", "20"))

MESSAGES_PATH = os.getenv("MESSAGES_PATH", str(PACKAGE_DIR / "resources" / "messages.json"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost,http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]
