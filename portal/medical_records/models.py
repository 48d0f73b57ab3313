"""
Medical Record Model - Stores patient medical records and provider notes.

This model maintains a record of patient visits, vitals, diagnoses, and treatments.
"""
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import relationship
from ..database import Base

class MedicalRecord(Base):
    """
    Medical Record Model - Stores patient medical records

    Fields:
    - id: Primary key for medical record
    - patient_id: Foreign key to Patient model
    - provider_id: Provider the record is attributed to
    - appointment_id: Visit the record was written for (optional)
    - chief_complaint, diagnosis, treatment: Clinical summary
    - blood_pressure_systolic/diastolic, heart_rate, temperature, weight, height: Vital signs
    - lab_results, prescriptions, notes: Clinical data
    - readmission_risk: Estimated risk between 0 and 1
    - suggested_codes: Suggested billing codes
    """
    __tablename__ = "medical_records"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False)
    provider_id = Column(Integer, ForeignKey("providers.id", ondelete="SET NULL"), nullable=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id", ondelete="SET NULL"), nullable=True)
    chief_complaint = Column(Text, nullable=True)
    diagnosis = Column(Text, nullable=True)
    treatment = Column(Text, nullable=True)
    blood_pressure_systolic = Column(Integer, nullable=True)
    blood_pressure_diastolic = Column(Integer, nullable=True)
    heart_rate = Column(Integer, nullable=True)
    temperature = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    height = Column(Float, nullable=True)
    lab_results = Column(Text, nullable=True)
    prescriptions = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    readmission_risk = Column(Float, nullable=False, default=0.0)
    suggested_codes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", back_populates="medical_records")
    provider = relationship("Provider", back_populates="medical_records")
    appointment = relationship("Appointment")

    def __repr__(self):
        """String representation of the MedicalRecord model"""
        return f"<MedicalRecord(id={self.id}, patient_id={self.patient_id}, provider_id={self.provider_id})>"
