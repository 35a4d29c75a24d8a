"""VCF header parsing and rewriting."""

import re
from dataclasses import dataclass
from functools import cached_property

from .models import FieldDeclaration, FieldType

INFO_PATTERN = re.compile(r"^##INFO=<(.+)>\s*$")
FORMAT_PATTERN = re.compile(r"^##FORMAT=<(.+)>\s*$")

FIXED_COLUMNS = ("#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO")


@dataclass(frozen=True)
class RawDeclaration:
    """An INFO/FORMAT header line split into its key/value pairs.

    ``Type`` is kept as text here; it is only resolved to a ``FieldType``
    for fields that are actually requested.
    """

    id: str
    values: dict[str, str]
    line: str

    @property
    def number(self) -> str:
        return self.values.get("Number", ".")

    @property
    def type_name(self) -> str | None:
        return self.values.get("Type")

    @property
    def description(self) -> str:
        return self.values.get("Description", "")

    def resolve(self) -> FieldDeclaration:
        return FieldDeclaration(
            id=self.id,
            number=self.number,
            type=FieldType.parse(self.id, self.type_name),
            description=self.description,
        )


class VCFHeaderParser:
    """Parser for VCF header information."""

    def parse_info_fields(self, header_lines: list[str]) -> list[RawDeclaration]:
        """Parse INFO field definitions from header lines, in order."""
        return self._parse_declarations(header_lines, INFO_PATTERN)

    def parse_format_fields(self, header_lines: list[str]) -> list[RawDeclaration]:
        """Parse FORMAT field definitions from header lines, in order."""
        return self._parse_declarations(header_lines, FORMAT_PATTERN)

    def _parse_declarations(
        self, header_lines: list[str], pattern: re.Pattern
    ) -> list[RawDeclaration]:
        declarations = []
        for line in header_lines:
            match = pattern.match(line)
            if match:
                field_def = self._parse_field_definition(match.group(1))
                if field_def:
                    declarations.append(
                        RawDeclaration(id=field_def["ID"], values=field_def, line=line)
                    )
        return declarations

    def _parse_field_definition(self, field_string: str) -> dict[str, str] | None:
        """Parse a field definition string like 'ID=AC,Number=A,Type=Integer,Description="..."'"""
        field_def = {}

        # Handle quoted descriptions that may contain commas
        parts = []
        current_part = ""
        in_quotes = False

        for char in field_string:
            if char == '"':
                in_quotes = not in_quotes
                current_part += char
            elif char == "," and not in_quotes:
                parts.append(current_part)
                current_part = ""
            else:
                current_part += char

        if current_part:
            parts.append(current_part)

        for part in parts:
            if "=" in part:
                key, value = part.split("=", 1)
                if key == "Description" and value.startswith('"') and value.endswith('"'):
                    value = value[1:-1]
                field_def[key] = value

        return field_def if "ID" in field_def else None


_HEADER_PARSER = VCFHeaderParser()


@dataclass(frozen=True)
class VCFHeader:
    """Ordered VCF header: ``##`` meta lines plus the ``#CHROM`` column line.

    Instances are never modified; ``remove_info`` and ``add_format`` return
    new headers.
    """

    meta_lines: tuple[str, ...]
    column_line: str

    @classmethod
    def from_string(cls, raw_header: str) -> "VCFHeader":
        meta_lines = []
        column_line = None
        for line in raw_header.splitlines():
            if not line.strip():
                continue
            if line.startswith("##"):
                meta_lines.append(line)
            elif line.startswith("#CHROM"):
                column_line = line
            else:
                raise ValueError(f"Unexpected line in VCF header: {line[:80]}")
        if column_line is None:
            raise ValueError("VCF header has no #CHROM line")
        return cls(tuple(meta_lines), column_line)

    @property
    def samples(self) -> list[str]:
        columns = self.column_line.split("\t")
        # FIXED_COLUMNS + FORMAT come before the sample names
        return columns[len(FIXED_COLUMNS) + 1:]

    @property
    def sample_count(self) -> int:
        return len(self.samples)

    @cached_property
    def format_types(self) -> dict[str, str | None]:
        """FORMAT id to declared ``Type`` text."""
        return {raw.id: raw.type_name for raw in self.format_declarations()}

    def info_declarations(self) -> list[RawDeclaration]:
        return _HEADER_PARSER.parse_info_fields(list(self.meta_lines))

    def format_declarations(self) -> list[RawDeclaration]:
        return _HEADER_PARSER.parse_format_fields(list(self.meta_lines))

    def remove_info(self, field_ids: set[str] | frozenset[str]) -> "VCFHeader":
        """Return a header without the INFO declarations named in ``field_ids``."""
        removed = {decl.line for decl in self.info_declarations() if decl.id in field_ids}
        kept = tuple(line for line in self.meta_lines if line not in removed)
        return VCFHeader(kept, self.column_line)

    def add_format(self, declaration: FieldDeclaration) -> "VCFHeader":
        """Return a header declaring ``declaration`` as a FORMAT field.

        An existing FORMAT declaration with the same id is rewritten in place;
        otherwise the line is appended.
        """
        line = declaration.to_format_line()
        existing = {raw.line for raw in self.format_declarations() if raw.id == declaration.id}
        if not existing:
            return VCFHeader(self.meta_lines + (line,), self.column_line)
        meta_lines = tuple(line if meta in existing else meta for meta in self.meta_lines)
        return VCFHeader(meta_lines, self.column_line)

    def to_string(self) -> str:
        return "\n".join(self.meta_lines + (self.column_line,)) + "\n"
