"""Global pytest configuration."""

import os

# Keep service logging quiet in tests before any imports configure it
os.environ.setdefault("ITINERATOR_LOG_LEVEL", "WARNING")
