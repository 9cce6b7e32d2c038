"""Environment configuration for the video library API."""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
PORT = int(os.getenv("PORT", 8000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Background sweep of expired cache entries; 0 disables it
CACHE_CLEANUP_INTERVAL_SECONDS = float(os.getenv("CACHE_CLEANUP_INTERVAL_SECONDS", 60 * 60))

# Cache TTLs in milliseconds
CACHE_TTL_CATEGORIES_MS = int(os.getenv("CACHE_TTL_CATEGORIES_MS", 4 * 60 * 60 * 1000))  # categories change 1-2x per week
CACHE_TTL_USER_PERMISSIONS_MS = int(os.getenv("CACHE_TTL_USER_PERMISSIONS_MS", 30 * 60 * 1000))
CACHE_TTL_SUBCATEGORY_VIDEOS_MS = int(os.getenv("CACHE_TTL_SUBCATEGORY_VIDEOS_MS", 10 * 60 * 1000))
CACHE_TTL_SUBCATEGORY_COUNT_MS = int(os.getenv("CACHE_TTL_SUBCATEGORY_COUNT_MS", 15 * 60 * 1000))
