from unittest import TestCase

from labsite.lib.validation.exceptions import ValidationError
from labsite.lib.validation.publication import (
    validate_contiguous_author_orders,
    validate_doi,
    validate_link,
    validate_title,
    validate_unique_author_orders,
)


class TestPublicationValidators(TestCase):
    def test_title_is_trimmed(self):
        self.assertEqual(validate_title("  Protein folding "), "Protein folding")

    def test_short_title(self):
        with self.assertRaises(ValidationError):
            validate_title(" ab ")

    def test_doi_is_normalized(self):
        self.assertEqual(validate_doi("https://doi.org/10.1000/182"), "10.1000/182")

    def test_invalid_doi(self):
        with self.assertRaises(ValidationError):
            validate_doi("not-a-doi")

    def test_absent_doi_and_link(self):
        self.assertIsNone(validate_doi(None))
        self.assertIsNone(validate_link(None))

    def test_invalid_link(self):
        with self.assertRaises(ValidationError):
            validate_link("journals example org")


class TestAuthorOrderValidators(TestCase):
    def test_unique_orders(self):
        validate_unique_author_orders([2, 0, 1])

    def test_duplicate_orders(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_unique_author_orders([0, 0, 1])
        self.assertIn("[0]", str(ctx.exception))

    def test_contiguous_orders(self):
        validate_contiguous_author_orders(iter([1, 0, 2]))

    def test_orders_with_gap(self):
        with self.assertRaises(ValidationError):
            validate_contiguous_author_orders([0, 2])

    def test_orders_not_starting_at_zero(self):
        with self.assertRaises(ValidationError):
            validate_contiguous_author_orders([1, 2])
