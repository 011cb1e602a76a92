from collections import Counter
from typing import Iterable, Optional

import idutils

from labsite.lib.validation.constants import MIN_PUBLICATION_TITLE_LENGTH
from labsite.lib.validation.exceptions import ValidationError


def validate_title(title: str) -> str:
    title = title.strip()
    if len(title) < MIN_PUBLICATION_TITLE_LENGTH:
        raise ValidationError(
            f"Publication title must be at least {MIN_PUBLICATION_TITLE_LENGTH} characters.", field="title"
        )
    return title


def validate_doi(doi: Optional[str]) -> Optional[str]:
    if doi is None:
        return None
    if not idutils.is_doi(doi):
        raise ValidationError(f"'{doi}' is not a valid DOI.", field="doi")
    return idutils.normalize_doi(doi)


def validate_link(link: Optional[str]) -> Optional[str]:
    if link is None:
        return None
    if not idutils.is_url(link):
        raise ValidationError(f"'{link}' is not a valid URL.", field="link")
    return link


def validate_unique_author_orders(orders: Iterable[int]) -> None:
    """
    Raises
    ------
    ValidationError
        If the same order value appears more than once.
    """
    duplicates = sorted(order for order, count in Counter(orders).items() if count > 1)
    if duplicates:
        raise ValidationError(
            f"Author order values must be unique within a publication; duplicated: {duplicates}.",
            field="authors",
        )


def validate_contiguous_author_orders(orders: Iterable[int]) -> None:
    """
    Raises
    ------
    ValidationError
        If the order values are not unique or do not run 0, 1, ..., n-1.
    """
    orders = list(orders)
    validate_unique_author_orders(orders)
    if sorted(orders) != list(range(len(orders))):
        raise ValidationError("Author order values must be contiguous and start at 0.", field="authors")
