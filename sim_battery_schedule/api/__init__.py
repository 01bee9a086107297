"""FastAPI surface of the daily battery schedule simulator."""
