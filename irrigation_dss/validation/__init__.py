"""Validation for salt management inputs.

Soil, crop, field and environmental inputs are validated by the pydantic
models; this module covers the leaching-specific EC checks that must fail
rather than clamp.
"""

from irrigation_dss.validation.errors import LeachingInputError, ValidationError
from irrigation_dss.validation.salt_inputs import LeachingInputValidator

__all__ = ["ValidationError", "LeachingInputError", "LeachingInputValidator"]
