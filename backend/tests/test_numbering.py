"""Unit tests for document number generation."""

from datetime import datetime, timezone

from bandwidth_billing.utils.numbering import generate_document_number, to_base36


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "Z"
    assert to_base36(36) == "10"


def test_document_number_has_prefix():
    number = generate_document_number("PB", now=datetime(2024, 1, 1, tzinfo=timezone.utc))

    assert number.startswith("PB-")
    assert len(number) > 3


def test_document_numbers_increase_with_time():
    earlier = generate_document_number("SI", now=datetime(2024, 1, 1, tzinfo=timezone.utc))
    later = generate_document_number("SI", now=datetime(2024, 6, 1, tzinfo=timezone.utc))

    assert earlier != later


def test_numbers_generated_in_the_same_millisecond_are_unique():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    numbers = [generate_document_number("RC", now=now) for _ in range(1000)]

    assert len(set(numbers)) == len(numbers)
    assert all(number.startswith("RC-") for number in numbers)


def test_document_number_format():
    number = generate_document_number("PP", now=datetime(2024, 1, 1, tzinfo=timezone.utc))

    prefix, timestamp, tail = number.split("-")
    assert prefix == "PP"
    assert timestamp == to_base36(1704067200000)
    assert len(tail) == 5
    assert tail.isalnum() and tail == tail.upper()
