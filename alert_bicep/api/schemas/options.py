"""Pydantic schemas for form option lists."""

from pydantic import BaseModel, Field


class SelectOption(BaseModel):
    """One entry of a selection list."""

    value: str = Field(..., min_length=1, examples=["Storage"])
    label: str = Field(..., min_length=1, examples=["Storage"])
