"""Tests for duplicate detection."""

import pytest

from vcf_manager.dedupe import find_groups, find_groups_by_name, find_groups_by_phone
from vcf_manager.models import Contact


class TestNameGroups:

    def test_same_name_grouped(self):
        a = Contact(full_name="Ana López")
        b = Contact(full_name="Luis")
        c = Contact(full_name="ana lópez ")

        assert find_groups_by_name([a, b, c]) == [[a.id, c.id]]

    def test_no_duplicates(self):
        assert find_groups_by_name([Contact(full_name="Ana"), Contact(full_name="Luis")]) == []

    def test_blank_names_never_grouped(self):
        assert find_groups_by_name([Contact(full_name=" "), Contact(full_name="")]) == []

    def test_group_order_follows_first_occurrence(self):
        a1, b1, a2, b2 = (Contact(full_name=n) for n in ["A", "B", "A", "B"])
        assert find_groups_by_name([a1, b1, a2, b2]) == [[a1.id, a2.id], [b1.id, b2.id]]


class TestPhoneGroups:

    def test_national_and_international_forms_match(self):
        a = Contact(full_name="Ana", phones=["612 345 678"])
        b = Contact(full_name="Ana work", phones=["0034612345678"])
        c = Contact(full_name="Luis", phones=["699000111"])

        groups = find_groups_by_phone([a, b, c])
        assert groups == [sorted([a.id, b.id])]

    def test_shared_numbers_reported_once(self):
        a = Contact(full_name="A", phones=["612345678", "699000111"])
        b = Contact(full_name="B", phones=["+34 612 345 678", "+34 699 000 111"])

        assert find_groups_by_phone([a, b]) == [sorted([a.id, b.id])]

    def test_same_contact_twice_is_not_a_duplicate(self):
        a = Contact(full_name="A", phones=["612345678", "+34612345678"])
        assert find_groups_by_phone([a]) == []

    def test_groups_are_not_transitive(self):
        a = Contact(full_name="A", phones=["611111111"])
        b = Contact(full_name="B", phones=["611111111", "622222222"])
        c = Contact(full_name="C", phones=["622222222"])

        groups = find_groups_by_phone([a, b, c])
        assert groups == [sorted([a.id, b.id]), sorted([b.id, c.id])]

    def test_empty_phones_ignored(self):
        a = Contact(full_name="A", phones=[""])
        b = Contact(full_name="B", phones=["--"])
        assert find_groups_by_phone([a, b]) == []


class TestFindGroups:

    def test_dispatch(self):
        a = Contact(full_name="Ana", phones=["612345678"])
        b = Contact(full_name="Ana", phones=["699000111"])
        assert find_groups([a, b], "name") == [[a.id, b.id]]
        assert find_groups([a, b], "phone") == []

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            find_groups([], "email")
