import pytest

from idverify.checks import FieldComparator, compare, compare_all
from idverify.models import EnteredFields, ExtractedFields, FieldName


@pytest.mark.parametrize("field", list(FieldName))
def test_missing_data_never_matches(field):
    assert compare(field, None, "anything") is False
    assert compare(field, "", "anything") is False
    assert compare(field, "anything", "") is False
    assert compare(field, "anything", None) is False


@pytest.mark.parametrize("field", list(FieldName))
def test_values_without_meaningful_characters_never_match(field):
    assert compare(field, "---", "---") is False


def test_id_number_spacing_is_ignored():
    assert compare(FieldName.ID_NUMBER, "123412341234", "123412341234")
    assert compare(FieldName.ID_NUMBER, "1234 5678 9012", "123456789012")


def test_different_id_numbers_do_not_match():
    assert not compare(FieldName.ID_NUMBER, "123456789013", "123456789012")


def test_partial_name_matches_in_both_directions():
    assert compare(FieldName.NAME, "Ravi Kumar", "ravi kumar sharma")
    assert compare(FieldName.NAME, "ravi kumar sharma", "Ravi Kumar")


@pytest.mark.parametrize("a, b", [
    ("Ravi Kumar", "ravi kumar sharma"),
    ("Ravi Kumar", "Priya Sharma"),
    ("R. Kumar", "Ravi Kumar"),
])
def test_name_comparison_is_symmetric(a, b):
    assert compare(FieldName.NAME, a, b) == compare(FieldName.NAME, b, a)


def test_different_names_do_not_match():
    assert not compare(FieldName.NAME, "Ravi Kumar", "Priya Sharma")


def test_dates_match_across_separators():
    assert compare(FieldName.DATE_OF_BIRTH, "15/08/1985", "15-08-1985")


def test_dates_are_not_reordered():
    assert not compare(FieldName.DATE_OF_BIRTH, "01/02/2000", "02/01/2000")


def test_partial_date_does_not_match():
    assert not compare(FieldName.DATE_OF_BIRTH, "1985", "15/08/1985")


def test_phone_with_country_code_matches():
    assert compare(FieldName.PHONE_NUMBER, "9876543210", "+919876543210")
    assert compare(FieldName.PHONE_NUMBER, "+91 98765 43210", "9876543210")


def test_different_phones_do_not_match():
    assert not compare(FieldName.PHONE_NUMBER, "9876543210", "9876543211")


def test_field_can_be_given_by_name():
    assert compare("phone_number", "9876543210", "98765-43210")


def test_normalizers():
    comparator = FieldComparator()
    assert comparator.normalize_text("Ravi K. Kumar-Sharma") == "ravikkumarsharma"
    assert comparator.normalize_digits("+91 (987) 654-3210") == "919876543210"


def test_compare_all():
    extracted = ExtractedFields(
        name="Ravi Kumar",
        date_of_birth="15/08/1985",
        id_number="123456789012",
    )
    entered = EnteredFields(
        name="Ravi Kumar",
        date_of_birth="15/08/1985",
        id_number="999999999999",
        phone_number="9876543210",
    )

    flags = compare_all(extracted, entered)

    assert flags.name is True
    assert flags.date_of_birth is True
    assert flags.id_number is False
    assert flags.phone_number is False
    assert flags.match_count == 2
