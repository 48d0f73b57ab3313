"""
Provider Model - Stores clinician-specific information.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class Provider(Base):
    """
    Provider Model - Stores provider-specific information

    Fields:
    - id: Primary key for provider profile
    - user_id: Foreign key to User model
    - title: Name prefix such as "Dr." or "NP" (optional)
    - specialty: Medical specialty
    - license_number: Professional license number
    - department: Department the provider works in
    """
    __tablename__ = "providers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    title = Column(String, nullable=True)
    specialty = Column(String, nullable=True)
    license_number = Column(String, nullable=True)
    department = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="provider")
    appointments = relationship("Appointment", back_populates="provider")
    medical_records = relationship("MedicalRecord", back_populates="provider")

    def __repr__(self):
        """String representation of the Provider model"""
        return f"<Provider(id={self.id}, user_id={self.user_id}, specialty='{self.specialty}')>"
