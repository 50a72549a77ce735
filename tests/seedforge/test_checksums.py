"""
Tests for checksum algorithms against published reference values.
"""

import pytest

from src.seedforge.checksums import (
    cnpj_check_digits,
    codice_fiscale_check_char,
    cpf_check_digits,
    iban_check,
    iban_check_digits,
    israel_id_check_digit,
    luhn_calculate,
    luhn_check,
    mrz_check_digit,
    nip_check_digit,
    pesel_check_digit,
    regon_check_digit,
    to_digits,
    weighted_sum,
)


class TestLuhn:
    def test_reference_value(self):
        assert luhn_calculate("7992739871") == 3

    def test_visa_test_number(self):
        assert luhn_calculate("411111111111111") == 1
        assert luhn_check("4111111111111111")

    def test_check_accepts_valid(self):
        assert luhn_check("79927398713")
        assert luhn_check(79927398713)

    def test_check_rejects_wrong_digit(self):
        assert not luhn_check("79927398710")

    @pytest.mark.parametrize("value", ["", "5", "abc", "7992a398713", "١٢٣"])
    def test_check_never_raises(self, value):
        assert luhn_check(value) is False

    @pytest.mark.parametrize("body", ["0", "1", "18", "4012888888881", "378282246310005"[:-1]])
    def test_calculate_then_check(self, body):
        assert luhn_check(body + str(luhn_calculate(body)))

    def test_non_digit_body(self):
        with pytest.raises(ValueError, match="'x' is not a digit"):
            luhn_calculate("12x4")


class TestDigits:
    def test_to_digits(self):
        assert to_digits("0123") == [0, 1, 2, 3]
        assert to_digits(42) == [4, 2]

    def test_to_digits_length(self):
        with pytest.raises(ValueError, match="Expected 3 digits"):
            to_digits("12", 3)

    def test_weighted_sum(self):
        assert weighted_sum([1, 2, 3], [3, 2, 1]) == 10


class TestNationalIdentifiers:
    def test_cpf(self):
        # 529.982.247-25
        assert cpf_check_digits("529982247") == (2, 5)

    def test_cnpj(self):
        # 11.222.333/0001-81
        assert cnpj_check_digits("112223330001") == (8, 1)

    def test_pesel(self):
        assert pesel_check_digit("4405140135") == 9

    def test_nip(self):
        assert nip_check_digit("123456321") == 8

    def test_nip_can_return_ten(self):
        assert nip_check_digit("003000000") == 10

    def test_regon(self):
        assert regon_check_digit("12345678") == 5

    def test_israel_id(self):
        assert israel_id_check_digit("12345678") == 2

    def test_wrong_length(self):
        with pytest.raises(ValueError):
            cpf_check_digits("1234")
        with pytest.raises(ValueError):
            pesel_check_digit("12345678901")


class TestLetterSchemes:
    @pytest.mark.parametrize("text,expected", [
        ("L898902C3", 6),
        ("740812", 2),
        ("120415", 9),
        ("<<<<<<<<<<<<<<", 0),
    ])
    def test_mrz(self, text, expected):
        assert mrz_check_digit(text) == expected

    def test_mrz_invalid_character(self):
        with pytest.raises(ValueError, match="not a valid MRZ character"):
            mrz_check_digit("ab")

    def test_codice_fiscale(self):
        assert codice_fiscale_check_char("RSSMRA85T10A562") == "S"

    def test_codice_fiscale_lower_case_body(self):
        assert codice_fiscale_check_char("rssmra85t10a562") == "S"

    def test_codice_fiscale_wrong_length(self):
        with pytest.raises(ValueError, match="Expected 15 characters"):
            codice_fiscale_check_char("RSSMRA")


class TestIban:
    def test_check_digits(self):
        assert iban_check_digits("GB", "WEST12345698765432") == "82"
        assert iban_check_digits("DE", "370400440532013000") == "89"

    def test_check(self):
        assert iban_check("GB82WEST12345698765432")
        assert iban_check("GB82 WEST 1234 5698 7654 32")
        assert iban_check("DE89370400440532013000")

    def test_check_rejects(self):
        assert not iban_check("GB82WEST12345698765431")
        assert not iban_check("GB82")
        assert not iban_check("GB82-WEST")
