"""
Pydantic schemas for API request/response validation.

This package contains schema definitions for alert template requests,
validation results and form option lists.
"""

# Re-export schemas for convenient imports.
from .alert import AlertTemplateRequest as AlertTemplateRequest
from .alert import AlertTemplateResponse as AlertTemplateResponse
from .alert import FormValidationResponse as FormValidationResponse
from .alert import TagRow as TagRow
from .options import SelectOption as SelectOption
