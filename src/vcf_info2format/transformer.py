"""Per-record transfer of INFO values into FORMAT values."""

from collections.abc import Sequence
from typing import Any, Protocol

from .errors import FieldTransferError, TransferError
from .models import QUAL_FIELD_ID, ExtractedValue, FieldPlan, FieldType, make_value
from .vcf_parser import VCFHeader


class TransferRecord(Protocol):
    """Record operations the transformer needs from the VCF I/O layer."""

    def info_flag(self, field_id: str) -> bool:
        """Return True if the INFO flag is set."""
        ...

    def info_values(self, field_id: str, field_type: FieldType) -> Any | None:
        """Return the raw INFO value, or None if the record does not carry it."""
        ...

    def clear_info(self, field_id: str, field_type: FieldType) -> None:
        """Remove the INFO value from the record."""
        ...

    @property
    def qual(self) -> float | None:
        ...

    def translate(self, header: VCFHeader) -> None:
        """Associate the record with the output header."""
        ...

    def push_format(self, field_id: str, field_type: FieldType, values: Sequence) -> None:
        """Store ``values`` as a FORMAT field of the sole sample."""
        ...


class RecordTransformer:
    """Move the INFO values named in a field plan into FORMAT values.

    Holds nothing between records except the plan and the output header.
    """

    def __init__(self, plan: FieldPlan, header: VCFHeader):
        self.plan = plan
        self.header = header

    def extract(self, record: TransferRecord, ordinal: int | None = None) -> dict[str, ExtractedValue]:
        """Read and clear every planned INFO field present on ``record``."""
        data: dict[str, ExtractedValue] = {}
        for field_id, field_type in self.plan:
            try:
                if field_type is FieldType.FLAG:
                    present = record.info_flag(field_id)
                    if present:
                        record.clear_info(field_id, field_type)
                    data[field_id] = make_value(field_type, present)
                    continue

                raw = record.info_values(field_id, field_type)
                if raw is None:
                    continue
                data[field_id] = make_value(field_type, raw)
                record.clear_info(field_id, field_type)
            except TransferError:
                raise
            except Exception as e:
                raise FieldTransferError(field_id, ordinal, e) from e
        return data

    def insert(
        self,
        record: TransferRecord,
        data: dict[str, ExtractedValue],
        ordinal: int | None = None,
    ) -> None:
        """Store extracted values (and QUAL, if planned) as FORMAT values."""
        for field_id, value in data.items():
            try:
                record.push_format(field_id, value.field_type, value.values)
            except TransferError:
                raise
            except Exception as e:
                raise FieldTransferError(field_id, ordinal, e) from e

        if self.plan.transfer_qual:
            try:
                record.push_format(QUAL_FIELD_ID, FieldType.FLOAT, [record.qual])
            except TransferError:
                raise
            except Exception as e:
                raise FieldTransferError(QUAL_FIELD_ID, ordinal, e) from e

    def transform(self, record: TransferRecord, ordinal: int | None = None) -> TransferRecord:
        """Extract, re-target and re-insert in that order. Returns ``record``."""
        data = self.extract(record, ordinal)

        try:
            record.translate(self.header)
        except TransferError:
            raise
        except Exception as e:
            where = f" #{ordinal}" if ordinal is not None else ""
            raise TransferError(
                f"Can not associate record{where} with the output header: {e}"
            ) from e

        self.insert(record, data, ordinal)
        return record
