"""Tests for VCF header parsing and rewriting."""

import pytest

from vcf_info2format.errors import UnknownFieldTypeError
from vcf_info2format.models import FieldDeclaration, FieldType
from vcf_info2format.vcf_parser import VCFHeader, VCFHeaderParser

RAW_HEADER = (
    "##fileformat=VCFv4.2\n"
    '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total Depth">\n'
    '##INFO=<ID=CSQ,Number=.,Type=String,Description="Consequence, with a comma. Format: A|B">\n'
    '##INFO=<ID=ODD,Number=1,Type=Character,Description="Single character">\n'
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">\n'
    "##contig=<ID=chr1,length=248956422>\n"
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tSAMPLE1\n"
)


class TestFieldDefinitionParsing:
    def test_parses_quoted_description_with_commas(self):
        parser = VCFHeaderParser()
        field_def = parser._parse_field_definition(
            'ID=CSQ,Number=.,Type=String,Description="Consequence, with a comma"'
        )
        assert field_def == {
            "ID": "CSQ",
            "Number": ".",
            "Type": "String",
            "Description": "Consequence, with a comma",
        }

    def test_definition_without_id_is_ignored(self):
        parser = VCFHeaderParser()
        assert parser._parse_field_definition("Number=1,Type=Integer") is None

    def test_info_fields_keep_header_order(self):
        parser = VCFHeaderParser()
        declarations = parser.parse_info_fields(RAW_HEADER.splitlines())
        assert [d.id for d in declarations] == ["DP", "CSQ", "ODD"]
        assert declarations[0].number == "1"
        assert declarations[0].type_name == "Integer"
        assert declarations[0].description == "Total Depth"

    def test_format_fields(self):
        parser = VCFHeaderParser()
        declarations = parser.parse_format_fields(RAW_HEADER.splitlines())
        assert [d.id for d in declarations] == ["GT"]


class TestRawDeclarationResolve:
    def test_resolve_known_type(self):
        decl = VCFHeaderParser().parse_info_fields(RAW_HEADER.splitlines())[0]
        assert decl.resolve() == FieldDeclaration("DP", "1", FieldType.INTEGER, "Total Depth")

    def test_resolve_unknown_type_names_the_type(self):
        decl = VCFHeaderParser().parse_info_fields(RAW_HEADER.splitlines())[2]
        with pytest.raises(UnknownFieldTypeError) as exc_info:
            decl.resolve()
        assert exc_info.value.type_name == "Character"
        assert "ODD" in str(exc_info.value)


class TestVCFHeader:
    def test_from_string_splits_meta_and_columns(self):
        header = VCFHeader.from_string(RAW_HEADER)
        assert len(header.meta_lines) == 6
        assert header.column_line.startswith("#CHROM")
        assert header.samples == ["SAMPLE1"]
        assert header.sample_count == 1

    def test_sites_only_header_has_no_samples(self):
        raw = "##fileformat=VCFv4.2\n#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
        assert VCFHeader.from_string(raw).sample_count == 0

    def test_missing_column_line_raises(self):
        with pytest.raises(ValueError, match="#CHROM"):
            VCFHeader.from_string("##fileformat=VCFv4.2\n")

    def test_remove_info_returns_new_header(self):
        header = VCFHeader.from_string(RAW_HEADER)
        new_header = header.remove_info({"DP"})
        assert [d.id for d in new_header.info_declarations()] == ["CSQ", "ODD"]
        assert [d.id for d in header.info_declarations()] == ["DP", "CSQ", "ODD"]

    def test_add_format_appends_after_existing_lines(self):
        header = VCFHeader.from_string(RAW_HEADER)
        declaration = FieldDeclaration("DP", "1", FieldType.INTEGER, "Total Depth")
        new_header = header.add_format(declaration)
        assert new_header.meta_lines[-1] == (
            '##FORMAT=<ID=DP,Number=1,Type=Integer,Description="Total Depth">'
        )
        assert new_header.format_types == {"GT": "String", "DP": "Integer"}

    def test_to_string_round_trips(self):
        header = VCFHeader.from_string(RAW_HEADER)
        assert header.to_string() == RAW_HEADER
