# ENV vars for the gallery layout service
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    DEBUG = os.getenv("GALLERY_DEBUG", "false").lower() == "true"
    LOG_LEVEL = os.getenv("GALLERY_LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
    CACHE_SIZE = int(os.getenv("GALLERY_CACHE_SIZE", "64"))
    CORS_ORIGINS = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
        if o.strip()
    ]
