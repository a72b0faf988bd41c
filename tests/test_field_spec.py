import pytest

from import_engine.field_spec import FieldSpec, parse_header


def test_plain_column():
    fs = FieldSpec.parse("Name", 1)
    assert fs.path_parts == ("Name",)
    assert fs.target_column == "Name"
    assert fs.lookup_column is None
    assert fs.lookup_table is None
    assert not fs.is_key
    assert fs.column_index == 1


def test_path_lookup_and_key():
    fs = FieldSpec.parse("A>B_ID[Value]/K", 3)
    assert fs.path_parts == ("A", "B_ID")
    assert fs.target_column == "B_ID"
    assert fs.lookup_column == "Value"
    assert fs.is_key
    assert fs.column_index == 3
    assert fs.original == "A>B_ID[Value]/K"


def test_lowercase_key_suffix_and_whitespace():
    fs = FieldSpec.parse("  AD_User > C_BPartner_ID [ Value ] /k ", 2)
    assert fs.is_key
    assert fs.path_parts == ("AD_User", "C_BPartner_ID")
    assert fs.lookup_column == "Value"
    assert fs.original == "AD_User > C_BPartner_ID [ Value ] /k"


def test_lookup_table_from_path():
    assert FieldSpec.parse("AD_User>C_BPartner_ID[Value]", 1).lookup_table == "AD_User"


def test_lookup_table_from_id_suffix():
    assert FieldSpec.parse("C_BPartner_ID[Value]", 1).lookup_table == "C_BPartner"
    assert FieldSpec.parse("AD_Org_id[Name]", 1).lookup_table == "AD_Org"


def test_key_without_lookup():
    fs = FieldSpec.parse("Value/K", 1)
    assert fs.is_key
    assert fs.target_column == "Value"
    assert fs.lookup_column is None


def test_empty_segments_dropped():
    assert FieldSpec.parse("A>>B", 1).path_parts == ("A", "B")


def test_parse_is_repeatable():
    assert FieldSpec.parse("X>Y_ID[Name]/K", 4) == FieldSpec.parse("X>Y_ID[Name]/K", 4)


@pytest.mark.parametrize("token", ["", "   ", "/K", ">", "[X]", "a[b", "][", "A>", "  >B  "])
def test_malformed_tokens_never_raise(token):
    fs = FieldSpec.parse(token, 1)
    assert fs.path_parts
    if token.strip():
        assert fs.target_column.strip()


def test_parse_header_numbers_from_one():
    specs = parse_header(["Name", "Value/K", "C_BPartner_ID[Value]"])
    assert [fs.column_index for fs in specs] == [1, 2, 3]
    assert [fs.target_column for fs in specs] == ["Name", "Value", "C_BPartner_ID"]


def test_original_is_trimmed_for_diagnostics():
    fs = FieldSpec.parse(" C_BPartner_ID[Value] ", 2)
    assert fs.original == "C_BPartner_ID[Value]"
    assert fs.label == "C_BPartner_ID[Value]"
