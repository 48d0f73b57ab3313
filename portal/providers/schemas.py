"""
Provider Schemas - Pydantic models for provider profile data.
"""
from typing import Optional

from ..core.schemas import CamelModel

class ProviderProfileResponse(CamelModel):
    """
    Provider sub-profile as embedded in a user payload.
    """
    id: int
    user_id: int
    title: Optional[str] = None
    specialty: Optional[str] = None
    license_number: Optional[str] = None
    department: Optional[str] = None
