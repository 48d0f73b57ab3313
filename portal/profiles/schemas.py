"""
Profile Schemas - request bodies for profile updates.
"""
from typing import Optional

from ..core.schemas import CamelModel

class ProviderProfileUpdate(CamelModel):
    """
    Provider profile update.

    First name, last name and email are required by the service; they are
    optional here so a missing value is reported with a single message.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None
