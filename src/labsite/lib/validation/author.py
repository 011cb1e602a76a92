from typing import Optional

import idutils
from email_validator import EmailNotValidError, validate_email

from labsite.lib.validation.constants import MIN_AUTHOR_NAME_LENGTH, ORCID_PATTERN
from labsite.lib.validation.exceptions import ValidationError


def normalize_optional_text(value: Optional[str]) -> Optional[str]:
    """Trim a free-text value, treating blank strings as absent."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_author_name(name: Optional[str]) -> str:
    """
    Trim and validate an author name.

    Raises
    ------
    ValidationError
        If the name is missing or shorter than the minimum length after trimming.
    """
    normalized = normalize_optional_text(name)
    if normalized is None:
        raise ValidationError("Author name is required.", field="name")
    if len(normalized) < MIN_AUTHOR_NAME_LENGTH:
        raise ValidationError(
            f"Author name must be at least {MIN_AUTHOR_NAME_LENGTH} characters.",
            field="name",
        )
    return " ".join(normalized.split())


def normalize_author_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email syntax and return the address lowercased, or None if no address was given.

    Deliverability is not checked; co-authors are frequently at institutions whose mail servers
    we cannot reach.
    """
    email = normalize_optional_text(email)
    if email is None:
        return None

    try:
        validated = validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError(str(exc), field="email")

    return validated.normalized.lower()


def normalize_orcid(orcid: Optional[str]) -> Optional[str]:
    """
    Validate an ORCID iD of the form ``0000-0002-1825-0097`` including its check digit.
    A lowercase check character ``x`` is accepted and uppercased.
    """
    orcid = normalize_optional_text(orcid)
    if orcid is None:
        return None

    orcid = orcid.upper()
    if not ORCID_PATTERN.match(orcid):
        raise ValidationError(
            f"'{orcid}' is not a valid ORCID iD. Expected the format 0000-0000-0000-0000.",
            field="orcid",
        )
    if not idutils.is_orcid(orcid):
        raise ValidationError(f"'{orcid}' is not a valid ORCID iD; the check digit does not match.", field="orcid")

    return orcid
