"""Application layer: DTOs, ports and services. No FastAPI or ORM imports."""
