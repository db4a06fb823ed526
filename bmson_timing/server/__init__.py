"""HTTP service exposing the normalizer (FastAPI + uvicorn)."""
