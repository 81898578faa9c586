import os
from dotenv import load_dotenv

"""Configuration for the metrics widget service."""

# Find the project root (where .env lives)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(PROJECT_ROOT, ".env"))

# Metrics provider
METRICS_FETCH_TIMEOUT = float(os.getenv("METRICS_FETCH_TIMEOUT", "2.0"))

# Widget presentation
WIDGET_BRAND_NAME = os.getenv("WIDGET_BRAND_NAME", "SWEEPLY PRO")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
