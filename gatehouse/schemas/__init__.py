"""Pydantic request/response schemas for Gatehouse."""
