"""Tests for the vCard tokenizer and parser."""

from vcf_manager.models import Contact
from vcf_manager.vcard import parser
from vcf_manager.vcard import (
    DEFAULT_IMPORT_VERSION,
    decode_value,
    has_legacy_version_contacts,
    parse,
    split_blocks,
    tokenize,
)


TWO_CARDS = (
    "BEGIN:VCARD\n"
    "VERSION:3.0\n"
    "FN:Ana López\n"
    "TEL:612345678\n"
    "END:VCARD\n"
    "BEGIN:VCARD\n"
    "VERSION:4.0\n"
    "N:García;Luis;;;\n"
    "EMAIL:luis@example.com\n"
    "GENDER:M\n"
    "END:VCARD\n"
)


class TestParse:

    def test_two_cards(self):
        contacts = parse(TWO_CARDS)

        assert len(contacts) == 2
        ana, luis = contacts
        assert ana.full_name == "Ana López"
        assert ana.phones == ["612345678"]
        assert ana.original_version == "3.0"
        assert luis.full_name == "García Luis"
        assert luis.emails == ["luis@example.com"]
        assert luis.gender == "M"
        assert luis.original_version == "4.0"

    def test_ids_are_unique(self):
        contacts = parse(TWO_CARDS + TWO_CARDS)
        assert len({c.id for c in contacts}) == 4

    def test_empty_input(self):
        assert parse("") == []
        assert parse("   \n  ") == []

    def test_no_name_sentinel(self):
        contacts = parse("BEGIN:VCARD\nVERSION:3.0\nTEL:612345678\nEND:VCARD")
        assert contacts[0].full_name == "No Name"

    def test_custom_no_name(self):
        contacts = parse("BEGIN:VCARD\nTEL:612345678\nEND:VCARD", no_name="Sin nombre")
        assert contacts[0].full_name == "Sin nombre"

    def test_fn_wins_over_n(self):
        contacts = parse("BEGIN:VCARD\nN:Doe;John;;;\nFN:Johnny\nEND:VCARD")
        assert contacts[0].full_name == "Johnny"

    def test_missing_version_defaults(self):
        contacts = parse("BEGIN:VCARD\nFN:Ana\nEND:VCARD")
        assert contacts[0].original_version == DEFAULT_IMPORT_VERSION == "2.1"
        assert has_legacy_version_contacts(contacts)

    def test_broken_block_gets_default_version(self, monkeypatch):
        def broken(block, no_name):
            raise ValueError("bad card")

        monkeypatch.setattr(parser, "parse_block", broken)
        contact = parse("BEGIN:VCARD\nFN:Ana\nEND:VCARD")[0]

        assert contact.full_name == "No Name"
        assert contact.original_version == "2.1"

    def test_crlf_line_endings(self):
        text = "BEGIN:VCARD\r\nVERSION:3.0\r\nFN:Ana\r\nTEL:612345678\r\nEND:VCARD\r\n"
        contact = parse(text)[0]
        assert contact.full_name == "Ana"
        assert contact.phones == ["612345678"]

    def test_multiple_phones_and_emails_in_order(self):
        text = (
            "BEGIN:VCARD\nFN:Ana\n"
            "TEL;TYPE=CELL:612345678\n"
            "TEL;TYPE=WORK:911234567\n"
            "EMAIL;TYPE=INTERNET:a@example.com\n"
            "EMAIL:b@example.com\n"
            "END:VCARD"
        )
        contact = parse(text)[0]
        assert contact.phones == ["612345678", "911234567"]
        assert contact.emails == ["a@example.com", "b@example.com"]

    def test_property_names_are_case_insensitive(self):
        contact = parse("begin:vcard\nfn:Ana\ntel:612345678\nend:vcard")[0]
        assert contact.full_name == "Ana"
        assert contact.phones == ["612345678"]

    def test_grouped_properties(self):
        contact = parse("BEGIN:VCARD\nFN:Ana\nitem1.TEL:612345678\nEND:VCARD")[0]
        assert contact.phones == ["612345678"]

    def test_impp_value_keeps_colons(self):
        contact = parse("BEGIN:VCARD\nFN:Ana\nIMPP:xmpp:ana@example.com\nEND:VCARD")[0]
        assert contact.impp == ["xmpp:ana@example.com"]

    def test_address_components_flattened(self):
        contact = parse("BEGIN:VCARD\nFN:Ana\nADR:;;Calle Mayor 1;Madrid;;28013;Spain\nEND:VCARD")[0]
        assert "Calle Mayor 1" in contact.address
        assert ";" not in contact.address

    def test_optional_fields_absent_are_none(self):
        contact = parse("BEGIN:VCARD\nFN:Ana\nEND:VCARD")[0]
        assert contact.title is None
        assert contact.note is None
        assert contact.gender is None
        assert contact.organization == ""
        assert contact.impp == []

    def test_folded_lines(self):
        contact = parse("BEGIN:VCARD\nFN:Ana\nNOTE:first part\n  second part\nEND:VCARD")[0]
        assert contact.note == "first part second part"

    def test_hex_escapes_decoded(self):
        contact = parse("BEGIN:VCARD\nFN;ENCODING=QUOTED-PRINTABLE:Jos=C3=A9\nEND:VCARD")[0]
        assert contact.full_name == "José"

    def test_unparseable_lines_skipped(self):
        contact = parse("BEGIN:VCARD\nFN:Ana\nthis is garbage\nTEL:612345678\nEND:VCARD")[0]
        assert contact.full_name == "Ana"
        assert contact.phones == ["612345678"]

    def test_short_fragments_ignored(self):
        contacts = parse("junk\nBEGIN:VCARD\nFN:Ana\nEND:VCARD\nBEGIN:VCARD\n")
        assert [c.full_name for c in contacts] == ["Ana"]


class TestSplitBlocks:

    def test_case_insensitive_markers(self):
        blocks = split_blocks("begin:vcard\nFN:A\nend:vcard\nBEGIN:VCARD\nFN:B\nEND:VCARD")
        assert len(blocks) == 2


class TestTokenizer:

    def test_params_and_value(self):
        props = list(tokenize("TEL;TYPE=CELL;PREF=1:+34 612"))
        assert len(props) == 1
        assert props[0].name == "TEL"
        assert props[0].params == ["TYPE=CELL", "PREF=1"]
        assert props[0].value == "+34 612"


class TestDecodeValue:

    def test_plain_value_trimmed(self):
        assert decode_value("  Ana  ") == "Ana"

    def test_valid_escapes(self):
        assert decode_value("Jos=C3=A9") == "José"

    def test_invalid_escapes_keep_raw(self):
        assert decode_value("bad =FF escape") == "bad =FF escape"

    def test_empty(self):
        assert decode_value("") == ""


class TestLegacyDetection:

    def test_legacy_present(self):
        assert has_legacy_version_contacts([Contact(original_version="3.0")])

    def test_only_latest(self):
        assert not has_legacy_version_contacts([Contact(original_version="4.0")])

    def test_unknown_version_is_legacy(self):
        assert has_legacy_version_contacts([Contact()])
        assert has_legacy_version_contacts([Contact(original_version="4.0"), Contact()])

    def test_empty(self):
        assert not has_legacy_version_contacts([])
