"""Reading and writing VCF files with cyvcf2."""

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import numpy as np
from cyvcf2 import VCF, Writer

from .errors import InputError, MalformedRecordError, OutputError
from .models import FieldType
from .vcf_parser import VCFHeader

logger = logging.getLogger(__name__)

STDIO = "-"
MISSING = "."

# htslib sentinels for a missing vector element
INT32_MISSING = np.iinfo(np.int32).min
FLOAT32_MISSING_BITS = 0x7F800001


def format_array(field_type: FieldType, values: Sequence) -> np.ndarray:
    """Encode the values of the single sample for ``Variant.set_format``.

    Flags are stored as integers. ``None`` (and NaN for floats) become the
    htslib missing value.
    """
    values = list(values) or [None]
    if field_type is FieldType.STRING:
        text = ",".join(MISSING if v is None else str(v) for v in values)
        return np.array([text.encode()], dtype=np.bytes_)
    if field_type is FieldType.FLOAT:
        data = np.array([[np.nan if v is None else v for v in values]], dtype=np.float32)
        missing = np.isnan(data)
        data.view(np.uint32)[missing] = FLOAT32_MISSING_BITS
        return data
    return np.array([[INT32_MISSING if v is None else int(v) for v in values]], dtype=np.int32)


def writer_mode(path: str | Path) -> str:
    """Pick the htslib write mode from the output file name."""
    name = str(path)
    if name == STDIO:
        return "w"
    if name.endswith((".vcf.gz", ".vcf.bgz")):
        return "wz"
    if name.endswith(".bcf"):
        return "wb"
    return "w"


class CyVCF2Record:
    """A cyvcf2 Variant adapted to the transformer's record operations.

    INFO values are read and removed on the variant itself. Once bound to the
    output header with ``translate``, FORMAT values are set with
    ``Variant.set_format``; the writer maps the variant onto the output
    header when it is written.
    """

    def __init__(self, variant):
        self.variant = variant
        self.header: VCFHeader | None = None

    def info_flag(self, field_id: str) -> bool:
        return bool(self.variant.INFO.get(field_id))

    def info_values(self, field_id: str, field_type: FieldType) -> Any | None:
        return self.variant.INFO.get(field_id)

    def clear_info(self, field_id: str, field_type: FieldType) -> None:
        if self.header is not None:
            raise RuntimeError("INFO values can not be removed after translate()")
        del self.variant.INFO[field_id]

    @property
    def qual(self) -> float | None:
        return self.variant.QUAL

    def translate(self, header: VCFHeader) -> None:
        self.header = header

    def push_format(self, field_id: str, field_type: FieldType, values: Sequence) -> None:
        if self.header is None:
            raise RuntimeError("Record has not been translated to the output header")
        declared = self.header.format_types.get(field_id)
        if declared is None:
            raise ValueError(f"FORMAT field '{field_id}' is not declared in the output header")
        if declared != field_type.value:
            raise ValueError(
                f"FORMAT field '{field_id}' is declared as {declared}, got {field_type.value}"
            )
        self.variant.set_format(field_id, format_array(field_type, values))


class VCFReader:
    """Stream records of a VCF/BCF file (or STDIN) one at a time."""

    def __init__(self, path: str | Path):
        self.path = str(path)
        if self.path == STDIO:
            logger.debug("Reading from STDIN")
        else:
            logger.debug("Opening input VCF at %s", self.path)
            if not Path(self.path).exists():
                raise InputError(f"VCF file not found: {self.path}")
        try:
            self._vcf = VCF(self.path)
            self.header = VCFHeader.from_string(self._vcf.raw_header)
        except (OSError, ValueError) as e:
            raise InputError(f"Can not open input VCF {self.path}: {e}") from e

    def declare_formats(self, header: VCFHeader) -> None:
        """Declare on the input header the FORMAT fields of ``header`` it lacks.

        A variant only accepts FORMAT values for ids its own header declares.
        Must be called before the first record is read.
        """
        known = self.header.format_types
        for raw in header.format_declarations():
            if raw.id in known:
                continue
            try:
                self._vcf.add_format_to_header(
                    {
                        "ID": raw.id,
                        "Number": raw.number,
                        "Type": raw.type_name,
                        "Description": raw.description,
                    }
                )
            except Exception as e:
                raise InputError(f"Can not declare FORMAT field '{raw.id}': {e}") from e

    def __iter__(self) -> Iterator[CyVCF2Record]:
        records = iter(self._vcf)
        ordinal = 0
        while True:
            ordinal += 1
            try:
                variant = next(records)
            except StopIteration:
                return
            except Exception as e:
                raise MalformedRecordError(ordinal, e) from e
            yield CyVCF2Record(variant)

    def close(self) -> None:
        self._vcf.close()

    def __enter__(self) -> "VCFReader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class VCFWriter:
    """Write records against a rewritten header to a file or STDOUT."""

    def __init__(self, path: str | Path, header: VCFHeader):
        self.path = str(path)
        self.header = header
        if self.path == STDIO:
            logger.debug("Writing to STDOUT")
        else:
            logger.debug("Opening output VCF at %s", self.path)
        try:
            self._writer = Writer.from_string(
                self.path, header.to_string(), mode=writer_mode(self.path)
            )
            self._writer.write_header()
        except (OSError, ValueError) as e:
            raise OutputError(f"Can not open output VCF {self.path}: {e}") from e

    def write(self, record: CyVCF2Record) -> None:
        try:
            self._writer.write_record(record.variant)
        except Exception as e:
            raise OutputError(f"Can not write record to output stream: {e}") from e

    def close(self) -> None:
        self._writer.close()

    def __enter__(self) -> "VCFWriter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def open_reader(path: str | Path) -> VCFReader:
    return VCFReader(path)


def open_writer(path: str | Path, header: VCFHeader) -> VCFWriter:
    return VCFWriter(path, header)
