"""
Catalog code generation and validation.

Format: ``XXnnnnnnYYv``
    XX      category prefix (first 2 letters of the category name, uppercase)
    nnnnnn  sequence number, zero-padded to 6 digits
    YY      year, last 2 digits
    v       check digit over the preceding 10 characters

The check digit is a weighted mod-10 sum over the raw character codes:
even positions weigh 3, odd positions weigh 1.
"""

import logging
import re
from datetime import datetime
from typing import NamedTuple, Optional

from AutoParts.exceptions import CategoryNameTooShortError, MalformedIdentifierError, ValidationError

logger = logging.getLogger(__name__)

CODE_LENGTH = 11
MAX_SEQUENCE = 999999

_CODE_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{6}[0-9]{2}[0-9]$")
_PREFIX_PATTERN = re.compile(r"^[A-Z]{2}$")


class CatalogCode(NamedTuple):
    prefix: str
    sequence: int
    year: int
    check_digit: int


class BarcodeGenerator:
    """Stateless generator/validator for checksummed catalog codes."""

    @staticmethod
    def calculate_check_digit(base_code: str) -> int:
        total = 0
        for position, char in enumerate(base_code):
            if position % 2 == 0:
                total += ord(char) * 3
            else:
                total += ord(char)
        return (10 - (total % 10)) % 10

    @classmethod
    def generate(cls, category_name: str, sequence_number: int, year: Optional[int] = None) -> str:
        """
        Create a catalog code for an item.

        Args:
            category_name: Name of the item's category; its first two letters form the prefix
            sequence_number: Item sequence number, 0..999999
            year: Four digit year to embed, defaults to the current year

        Returns:
            str: The 11 character code

        Raises:
            CategoryNameTooShortError: If the category name has fewer than 2 characters
            ValidationError: If the prefix is not two ASCII letters or the sequence is out of range
        """
        if category_name is None or len(category_name) < 2:
            raise CategoryNameTooShortError(category_name or "")

        prefix = category_name[:2].upper()
        if not _PREFIX_PATTERN.match(prefix):
            raise ValidationError(
                f"Category name '{category_name}' must start with two letters to form a code prefix",
                field_errors={"category_name": "must start with two ASCII letters"},
            )

        if not 0 <= sequence_number <= MAX_SEQUENCE:
            raise ValidationError(
                f"Sequence number {sequence_number} does not fit in 6 digits",
                field_errors={"sequence_number": f"must be between 0 and {MAX_SEQUENCE}"},
            )

        if year is None:
            year = datetime.now().year

        base_code = f"{prefix}{sequence_number:06d}{year % 100:02d}"
        code = f"{base_code}{cls.calculate_check_digit(base_code)}"
        logger.debug(f"Generated catalog code {code} for category '{category_name}'")
        return code

    @classmethod
    def validate(cls, code) -> bool:
        """Check shape and check digit. Never raises; anything malformed is simply invalid."""
        if not isinstance(code, str) or len(code) != CODE_LENGTH:
            return False
        if not _CODE_PATTERN.match(code):
            return False
        return cls.calculate_check_digit(code[:10]) == int(code[10])

    @classmethod
    def parse(cls, code: str) -> CatalogCode:
        """
        Split a valid catalog code into its fields.

        Raises:
            MalformedIdentifierError: If the code fails validation
        """
        if not cls.validate(code):
            raise MalformedIdentifierError(str(code))
        return CatalogCode(
            prefix=code[:2],
            sequence=int(code[2:8]),
            year=int(code[8:10]),
            check_digit=int(code[10]),
        )
