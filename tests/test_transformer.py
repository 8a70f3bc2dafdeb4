import json

import pytest

from nestedcsv.decoder import DecodedRecord, decode
from nestedcsv.errors import ValidationError
from nestedcsv.transformer import TransformedRecord, transform


def _record(fields, line_number=2):
    return DecodedRecord(line_number=line_number, fields=fields)


def test_transform_reshapes_sample_row():
    content = (
        "name.firstName,name.lastName,age,address.city,address.state,gender,phone\n"
        "Aarav,Sharma,30,Mumbai,Maharashtra,male,9123456789"
    )

    [record] = transform(decode(content))

    assert record == TransformedRecord(
        name="Aarav Sharma",
        age=30,
        address={"city": "Mumbai", "state": "Maharashtra"},
        additional_info={"gender": "male", "phone": "9123456789"},
        line_number=2,
    )


def test_transform_without_extra_columns_has_no_additional_info():
    [record] = transform([_record({"name": {"firstName": "A", "lastName": "B"}, "age": "5"})])

    assert record.address is None
    assert record.additional_info is None


def test_transform_scalar_address_is_dropped():
    [record] = transform(
        [_record({"name": {"firstName": "A", "lastName": "B"}, "age": "5", "address": "n/a"})]
    )

    assert record.address is None
    assert record.additional_info is None


def test_transform_keeps_nested_extra_fields():
    [record] = transform(
        [
            _record(
                {
                    "name": {"firstName": "A", "lastName": "B", "middle": "C"},
                    "age": "5",
                    "contact": {"email": "a@example.com"},
                }
            )
        ]
    )

    assert record.name == "A B"
    assert record.additional_info == {"contact": {"email": "a@example.com"}}


def test_missing_age_fails_whole_file_with_source_line_number():
    content = (
        "name.firstName,name.lastName,age\n"
        "John,Doe,30\n"
        "\n"
        "Jane,Roe,\n"
        "Jim,Poe,40\n"
    )
    records = decode(content)

    with pytest.raises(ValidationError) as excinfo:
        transform(records)

    assert excinfo.value.line_number == 4
    assert excinfo.value.field == "age"
    assert "Row 4" in str(excinfo.value)


@pytest.mark.parametrize(
    "fields",
    [
        {"age": "30"},
        {"name": "John Doe", "age": "30"},
        {"name": {"firstName": "John"}, "age": "30"},
        {"name": {"firstName": "", "lastName": "Doe"}, "age": "30"},
    ],
)
def test_missing_name_parts_fail(fields):
    with pytest.raises(ValidationError) as excinfo:
        transform([_record(fields, line_number=7)])

    assert excinfo.value.field == "name"
    assert excinfo.value.line_number == 7


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("30", 30), (" 42 years", 42), ("30.9", 30), ("-5", -5), ("0", 0), ("999", 999)],
)
def test_age_uses_leading_integer(raw, expected):
    [record] = transform([_record({"name": {"firstName": "A", "lastName": "B"}, "age": raw})])

    assert record.age == expected


@pytest.mark.parametrize("raw", ["abc", {"years": "3"}])
def test_non_numeric_age_fails(raw):
    with pytest.raises(ValidationError):
        transform([_record({"name": {"firstName": "A", "lastName": "B"}, "age": raw})])


def test_to_row_serialises_structured_values():
    record = TransformedRecord(
        name="A B",
        age=3,
        address={"city": "Pune"},
        additional_info=None,
    )

    row = record.to_row()

    assert row["name"] == "A B"
    assert row["age"] == 3
    assert json.loads(row["address"]) == {"city": "Pune"}
    assert row["additional_info"] is None
