"""
Shared pydantic building blocks.
"""
from email_validator import validate_email, EmailNotValidError
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """
    Base schema whose JSON field names are camelCase (``firstName``) while
    Python attributes stay snake_case. Reads ORM objects directly.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def check_email_format(value: str) -> str:
    """
    Validator body for email fields.

    Args:
        value: Submitted email address

    Returns:
        str: The address, stripped of surrounding whitespace

    Raises:
        ValueError: If the address is not syntactically valid
    """
    value = (value or "").strip()
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Invalid email format")
    return value
