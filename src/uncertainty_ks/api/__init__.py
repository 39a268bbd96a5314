"""HTTP surface: FastAPI router and Pydantic schemas."""
