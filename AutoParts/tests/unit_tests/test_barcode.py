"""
Tests for catalog code generation and validation.
"""

import pytest

from AutoParts.exceptions import (
    CategoryNameTooShortError,
    MalformedIdentifierError,
    ValidationError,
    ErrorKind,
)
from AutoParts.utils.barcode import BarcodeGenerator, CatalogCode


class TestBarcodeGenerator:

    def test_generate_known_code(self):
        code = BarcodeGenerator.generate("Brakes", 42, year=2024)

        assert code[:10] == "BR00004224"
        assert code == "BR000042248"
        assert len(code) == 11

    def test_generated_code_validates(self):
        assert BarcodeGenerator.validate(BarcodeGenerator.generate("Brakes", 42, year=2024))

    def test_prefix_is_uppercased(self):
        assert BarcodeGenerator.generate("filters", 1, year=2031).startswith("FI00000131")

    def test_year_is_taken_modulo_100(self):
        assert BarcodeGenerator.generate("Brakes", 7, year=2105)[8:10] == "05"

    def test_default_year_is_current(self):
        from datetime import datetime
        code = BarcodeGenerator.generate("Brakes", 1)
        assert code[8:10] == f"{datetime.now().year % 100:02d}"

    def test_check_digit_formula(self):
        # 66*3 + 82 + 48*3 + 48 + 48*3 + 48 + 52*3 + 50 + 50*3 + 52 = 1072
        assert BarcodeGenerator.calculate_check_digit("BR00004224") == 8

    def test_check_digit_zero_when_sum_is_multiple_of_ten(self):
        # "AA" -> 65*3 + 65 = 260
        assert BarcodeGenerator.calculate_check_digit("AA") == 0

    @pytest.mark.parametrize("name", ["", "B", None])
    def test_short_category_name_rejected(self, name):
        with pytest.raises(CategoryNameTooShortError) as exc_info:
            BarcodeGenerator.generate(name, 1, year=2024)

        assert exc_info.value.kind is ErrorKind.MALFORMED_INPUT

    def test_non_letter_prefix_rejected(self):
        with pytest.raises(ValidationError):
            BarcodeGenerator.generate("4x4 Accessories", 1, year=2024)

    @pytest.mark.parametrize("sequence", [-1, 1000000])
    def test_sequence_out_of_range_rejected(self, sequence):
        with pytest.raises(ValidationError):
            BarcodeGenerator.generate("Brakes", sequence, year=2024)

    def test_max_sequence_fits(self):
        code = BarcodeGenerator.generate("Brakes", 999999, year=2024)
        assert code.startswith("BR99999924")
        assert BarcodeGenerator.validate(code)


class TestBarcodeValidation:

    @pytest.mark.parametrize("code", [
        "",
        "BR00004224",       # missing check digit
        "BR0000422480",     # too long
        "br000042248",      # lowercase prefix
        "B1000042248",      # digit in prefix
        "BR0000A2248",      # letter in number block
        "BR000042249",      # wrong check digit
        None,
        42,
    ])
    def test_invalid_codes_rejected(self, code):
        assert BarcodeGenerator.validate(code) is False

    def test_every_digit_substitution_is_detected(self):
        code = BarcodeGenerator.generate("Brakes", 42, year=2024)

        for position in range(2, len(code)):
            for replacement in "0123456789":
                if replacement == code[position]:
                    continue
                corrupted = code[:position] + replacement + code[position + 1:]
                assert not BarcodeGenerator.validate(corrupted), corrupted

    def test_cross_class_substitution_is_detected(self):
        code = BarcodeGenerator.generate("Brakes", 42, year=2024)

        assert not BarcodeGenerator.validate("7" + code[1:])
        assert not BarcodeGenerator.validate(code[:5] + "X" + code[6:])

    def test_most_prefix_substitutions_are_detected(self):
        code = BarcodeGenerator.generate("Brakes", 42, year=2024)
        letters = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

        undetected = []
        for position in (0, 1):
            for replacement in letters:
                if replacement == code[position]:
                    continue
                corrupted = code[:position] + replacement + code[position + 1:]
                if BarcodeGenerator.validate(corrupted):
                    undetected.append(corrupted)

        # Letters exactly 10 or 20 code points apart leave the weighted sum unchanged mod 10
        assert sorted(undetected) == ["BH000042248", "LR000042248", "VR000042248"]

    def test_parse_valid_code(self):
        parsed = BarcodeGenerator.parse("BR000042248")

        assert parsed == CatalogCode(prefix="BR", sequence=42, year=24, check_digit=8)

    def test_parse_invalid_code_raises(self):
        with pytest.raises(MalformedIdentifierError) as exc_info:
            BarcodeGenerator.parse("BR000042249")

        assert exc_info.value.kind is ErrorKind.MALFORMED_INPUT
