"""vcf-info2format: move INFO annotations into FORMAT fields of a single-sample VCF."""

__version__ = "0.1.0"

from .errors import (  # noqa: E402
    ConfigurationError,
    FieldTransferError,
    FormatConflictError,
    InputError,
    MalformedRecordError,
    OutputError,
    SampleCountError,
    TransferError,
    UnknownFieldTypeError,
    UnresolvableFieldError,
)
from .models import QUAL_FIELD_ID, FieldDeclaration, FieldPlan, FieldType  # noqa: E402
from .pipeline import RunState, TransferPipeline, TransferResult, transfer_fields  # noqa: E402
from .planner import SchemaPlanner, plan_transfer  # noqa: E402
from .transformer import RecordTransformer, TransferRecord  # noqa: E402
from .vcf_parser import VCFHeader, VCFHeaderParser  # noqa: E402

__all__ = [
    "ConfigurationError",
    "FieldDeclaration",
    "FieldPlan",
    "FieldTransferError",
    "FieldType",
    "FormatConflictError",
    "InputError",
    "MalformedRecordError",
    "OutputError",
    "QUAL_FIELD_ID",
    "RecordTransformer",
    "RunState",
    "SampleCountError",
    "SchemaPlanner",
    "TransferError",
    "TransferPipeline",
    "TransferRecord",
    "TransferResult",
    "UnknownFieldTypeError",
    "UnresolvableFieldError",
    "VCFHeader",
    "VCFHeaderParser",
    "plan_transfer",
    "transfer_fields",
]
