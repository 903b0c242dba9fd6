import os

from dotenv import load_dotenv

# Pick up a local .env before reading the environment
load_dotenv()

class Config:
    def __init__(self):
        # Server
        self.PORT = int(os.environ.get("PORT", "3001"))
        self.CORS_ORIGINS = [
            origin.strip()
            for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        # Record store
        self.STORE_BACKEND = os.environ.get("STORE_BACKEND", "memory").lower()
        self.DATA_FILE = os.environ.get("DATA_FILE", "database.json")
        self.MEMORY_FILLER_ROWS = int(os.environ.get("MEMORY_FILLER_ROWS", "40"))

        # Query defaults
        self.DEFAULT_PAGE_SIZE = int(os.environ.get("DEFAULT_PAGE_SIZE", "10"))
        self.MAX_PAGE_SIZE = int(os.environ.get("MAX_PAGE_SIZE", "100"))

        # API client
        self.API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:3001/api")
        self.REQUEST_TIMEOUT = int(os.environ.get("REQUEST_TIMEOUT", "30"))

        # Error tracking
        self.SENTRY_DSN = os.environ.get("SENTRY_DSN", "")
        self.ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

        # Application settings
        self.DEBUG = os.environ.get("DEBUG", "false").lower() == "true"
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    @property
    def has_sentry(self) -> bool:
        return bool(self.SENTRY_DSN)

# Create an instance
config = Config()
