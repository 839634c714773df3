"""HTTP API for Clinitrack (FastAPI)."""
