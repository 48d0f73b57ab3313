"""
Plain-text and HTML renderings of a medical record report.
"""
from datetime import datetime
from html import escape
from typing import List, Optional

from .models import MedicalRecord

REPORT_FOOTER = (
    "This report was generated automatically by the EHR system.\n"
    "For questions, please contact your healthcare provider."
)

def format_provider_name(first_name: Optional[str], last_name: Optional[str], title: Optional[str] = None) -> str:
    """
    Format a provider's name with a title prefix.

    Args:
        first_name: Provider's first name
        last_name: Provider's last name
        title: Explicit title such as "NP"; defaults to "Dr."

    Returns:
        str: e.g. "Dr. Jane Smith", without repeating a title already in the first name
    """
    if not first_name or not last_name:
        return "Unknown Provider"

    full_name = f"{first_name} {last_name}"
    lowered = first_name.lower()

    if title:
        if lowered.startswith(title.lower()):
            return full_name
        return f"{title} {full_name}"

    if "dr." in lowered or lowered.startswith("doctor"):
        return full_name
    return f"Dr. {full_name}"

def _format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return "Unknown"
    return value.strftime("%Y-%m-%d %H:%M")

def _section(title: str, lines: List[str]) -> List[str]:
    return [title, "-" * len(title), *lines, ""]

def _vital_signs(record: MedicalRecord) -> List[str]:
    lines = []
    if record.blood_pressure_systolic and record.blood_pressure_diastolic:
        lines.append(f"Blood Pressure: {record.blood_pressure_systolic}/{record.blood_pressure_diastolic} mmHg")
    if record.heart_rate:
        lines.append(f"Heart Rate: {record.heart_rate} bpm")
    if record.temperature:
        lines.append(f"Temperature: {record.temperature}°F")
    if record.weight:
        lines.append(f"Weight: {record.weight} lbs")
    if record.height:
        lines.append(f"Height: {record.height} inches")
    return lines

def build_report_sections(record: MedicalRecord) -> List[tuple]:
    """
    Collect the report as (heading, lines) pairs shared by both renderings.
    """
    patient_user = record.patient.user
    provider = record.provider
    provider_name = (
        format_provider_name(provider.user.first_name, provider.user.last_name, provider.title)
        if provider is not None else "Unknown Provider"
    )

    visit = [f"Provider: {provider_name}", f"Record Date: {_format_timestamp(record.created_at)}"]
    if record.appointment is not None:
        visit.append(f"Appointment: {record.appointment.title} ({_format_timestamp(record.appointment.start_time)})")

    clinical = []
    if record.chief_complaint:
        clinical.append(f"Chief Complaint: {record.chief_complaint}")
    if record.diagnosis:
        clinical.append(f"Diagnosis: {record.diagnosis}")
    if record.treatment:
        clinical.append(f"Treatment Plan: {record.treatment}")

    data = []
    if record.lab_results:
        data.append(f"Lab Results:\n{record.lab_results}")
    if record.prescriptions:
        data.append(f"Prescriptions:\n{record.prescriptions}")
    if record.notes:
        data.append(f"Clinical Notes:\n{record.notes}")

    insights = [f"Readmission Risk: {round((record.readmission_risk or 0) * 100)}%"]
    if record.suggested_codes:
        insights.append(f"Suggested Codes: {record.suggested_codes}")

    return [
        ("PATIENT INFORMATION", [
            f"Name: {patient_user.first_name} {patient_user.last_name}",
            f"Email: {patient_user.email}",
            f"Phone: {patient_user.phone or 'Not provided'}",
        ]),
        ("PROVIDER INFORMATION", visit),
        ("CLINICAL INFORMATION", clinical),
        ("VITAL SIGNS", _vital_signs(record)),
        ("CLINICAL DATA", data),
        ("AI INSIGHTS", insights),
    ]

def render_text_report(record: MedicalRecord, generated_at: datetime) -> str:
    """
    Render the report as plain text.

    Args:
        record: Medical record with patient, provider and appointment loaded
        generated_at: Timestamp printed in the header

    Returns:
        str: The report body
    """
    lines = [
        "MEDICAL RECORD REPORT",
        "=====================",
        "",
        f"Generated: {_format_timestamp(generated_at)}",
        f"Report ID: {record.id}",
        "",
    ]
    for heading, section_lines in build_report_sections(record):
        lines.extend(_section(heading, section_lines))
    lines.extend(["---", REPORT_FOOTER])
    return "\n".join(lines)

def render_html_report(record: MedicalRecord, generated_at: datetime) -> str:
    """
    Render the report as a standalone HTML document, ready for PDF conversion.
    """
    patient_user = record.patient.user
    title = escape(f"Medical Report - {patient_user.first_name} {patient_user.last_name}")
    body = []
    for heading, section_lines in build_report_sections(record):
        if not section_lines:
            continue
        items = "".join(f"<p>{escape(line).replace(chr(10), '<br>')}</p>" for line in section_lines)
        body.append(f'<div class="section"><h2>{escape(heading.title())}</h2>{items}</div>')

    return (
        "<html><head>"
        f"<title>{title}</title>"
        "<style>body { font-family: Arial, sans-serif; margin: 20px; } "
        ".header { border-bottom: 2px solid #333; padding-bottom: 10px; margin-bottom: 20px; } "
        ".section { margin-bottom: 20px; }</style>"
        "</head><body>"
        '<div class="header"><h1>Medical Record Report</h1>'
        f"<p>Generated: {escape(_format_timestamp(generated_at))}</p>"
        f"<p>Report ID: {record.id}</p></div>"
        f"{''.join(body)}"
        f"<footer><p>{escape(REPORT_FOOTER).replace(chr(10), '<br>')}</p></footer>"
        "</body></html>"
    )
