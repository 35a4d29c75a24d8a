"""Pytest configuration and fixtures for vcf-info2format tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from fixtures.memory_io import MemoryReader, MemoryRecord, MemoryWriter  # noqa: E402
from fixtures.vcf_generator import (  # noqa: E402
    SyntheticVariant,
    VCFGenerator,
    make_depth_vcf_file,
    make_multi_value_vcf_file,
    make_sites_only_vcf_file,
    make_somatic_vcf_file,
    make_trio_vcf_file,
)

from vcf_info2format.vcf_parser import VCFHeader  # noqa: E402

__all__ = [
    "MemoryReader",
    "MemoryRecord",
    "MemoryWriter",
    "SyntheticVariant",
    "VCFGenerator",
]


def header_for(samples: list[str] | None = None, extra_lines: list[str] | None = None) -> VCFHeader:
    """Build a header from the generator template, optionally with extra meta lines."""
    text = VCFGenerator.generate([], samples)
    header = VCFHeader.from_string(text)
    if extra_lines:
        header = VCFHeader(header.meta_lines + tuple(extra_lines), header.column_line)
    return header


@pytest.fixture
def single_sample_header() -> VCFHeader:
    return header_for()


@pytest.fixture
def trio_header() -> VCFHeader:
    return header_for(["PROBAND", "MOTHER", "FATHER"])


@pytest.fixture
def somatic_vcf(tmp_path) -> Path:
    return make_somatic_vcf_file(tmp_path)


@pytest.fixture
def multi_value_vcf(tmp_path) -> Path:
    return make_multi_value_vcf_file(tmp_path)


@pytest.fixture
def depth_vcf(tmp_path) -> Path:
    return make_depth_vcf_file(tmp_path)


@pytest.fixture
def trio_vcf(tmp_path) -> Path:
    return make_trio_vcf_file(tmp_path)


@pytest.fixture
def sites_only_vcf(tmp_path) -> Path:
    return make_sites_only_vcf_file(tmp_path)
