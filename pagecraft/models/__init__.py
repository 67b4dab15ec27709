"""
Pydantic models for Pagecraft.

Wire shapes exchanged with the content service. No imports from the kernel.
"""

from pagecraft.models.landing import LandingEnvelope, SaveRequest, SaveResponse

__all__ = ["LandingEnvelope", "SaveRequest", "SaveResponse"]
