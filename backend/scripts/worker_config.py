"""
Worker Configuration
Configuration settings for the prediction worker script.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
API_FOOTBALL_KEY = os.getenv("API_FOOTBALL_KEY")

# Competitions to process (comma-separated public ids, empty = all)
_competitions_raw = os.getenv("COMPETITIONS_TO_PROCESS", "")
COMPETITIONS_TO_PROCESS: List[int] = [
    int(c) for c in _competitions_raw.split(",") if c.strip()
]

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
