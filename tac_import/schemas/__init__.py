"""Pydantic schemas for import payloads."""
