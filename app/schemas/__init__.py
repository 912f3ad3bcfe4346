"""Pydantic schemas for request/response validation and core value objects."""
