"""Data models for field declarations, field plans and extracted values."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from .errors import UnknownFieldTypeError

QUAL_FIELD_ID = "QUAL"
QUAL_DESCRIPTION = "Phred-scaled quality score for the assertion made in ALT"


class FieldType(str, Enum):
    """Storage type of an INFO/FORMAT field."""

    FLAG = "Flag"
    INTEGER = "Integer"
    FLOAT = "Float"
    STRING = "String"

    @classmethod
    def parse(cls, field_id: str, type_name: str | None) -> "FieldType":
        """Resolve a header ``Type=`` value, failing on anything unknown."""
        for member in cls:
            if member.value == type_name:
                return member
        raise UnknownFieldTypeError(field_id, str(type_name))


@dataclass(frozen=True)
class FieldDeclaration:
    """One ``##INFO`` or ``##FORMAT`` declaration from a VCF header."""

    id: str
    number: str
    type: FieldType
    description: str

    def to_format_line(self) -> str:
        """Render as a ``##FORMAT`` header line."""
        return (
            f"##FORMAT=<ID={self.id},Number={self.number},"
            f'Type={self.type.value},Description="{self.description}">'
        )


QUAL_DECLARATION = FieldDeclaration(
    id=QUAL_FIELD_ID,
    number="1",
    type=FieldType.FLOAT,
    description=QUAL_DESCRIPTION,
)


@dataclass(frozen=True)
class FieldPlan:
    """Resolved INFO field ids and their types, in header order.

    Built once by the planner before any record is read and never changed
    afterwards.
    """

    entries: tuple[tuple[str, FieldType], ...] = ()
    transfer_qual: bool = False

    def __iter__(self) -> Iterator[tuple[str, FieldType]]:
        return iter(self.entries)

    @property
    def field_ids(self) -> list[str]:
        return [fid for fid, _ in self.entries]


@dataclass(frozen=True)
class FlagValue:
    """Presence of an INFO flag, stored as integer 1 or 0."""

    present: bool
    field_type: FieldType = field(default=FieldType.FLAG, init=False)

    @property
    def values(self) -> tuple[int]:
        return (1 if self.present else 0,)


@dataclass(frozen=True)
class IntegerValue:
    values: tuple[int | None, ...]
    field_type: FieldType = field(default=FieldType.INTEGER, init=False)


@dataclass(frozen=True)
class FloatValue:
    values: tuple[float | None, ...]
    field_type: FieldType = field(default=FieldType.FLOAT, init=False)


@dataclass(frozen=True)
class StringValue:
    values: tuple[str, ...]
    field_type: FieldType = field(default=FieldType.STRING, init=False)


ExtractedValue = FlagValue | IntegerValue | FloatValue | StringValue


def make_value(field_type: FieldType, raw) -> ExtractedValue:
    """Build the extracted value variant for ``field_type`` from raw INFO data."""
    if field_type is FieldType.FLAG:
        return FlagValue(bool(raw))
    items = tuple(raw) if isinstance(raw, (list, tuple)) else (raw,)
    if field_type is FieldType.INTEGER:
        return IntegerValue(tuple(None if v is None else int(v) for v in items))
    if field_type is FieldType.FLOAT:
        return FloatValue(tuple(None if v is None else float(v) for v in items))
    if field_type is FieldType.STRING:
        if len(items) == 1 and isinstance(items[0], str):
            items = tuple(items[0].split(","))
        return StringValue(tuple(str(v) for v in items))
    raise ValueError(f"Unsupported field type: {field_type!r}")
