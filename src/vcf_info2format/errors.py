"""Exceptions raised while moving INFO fields into FORMAT fields.

Every error is terminal for a run: nothing is skipped or retried.
"""


class TransferError(Exception):
    """Base class for all transfer failures."""

    pass


class ConfigurationError(TransferError):
    """Raised when neither fields nor QUAL were requested."""

    pass


class SampleCountError(TransferError):
    """Raised when the input VCF does not have exactly one sample."""

    def __init__(self, sample_count: int):
        self.sample_count = sample_count
        super().__init__(
            f"Input is not a single-sample VCF: found {sample_count} samples"
        )


class UnresolvableFieldError(TransferError):
    """Raised when requested fields are not INFO fields of the input header."""

    def __init__(self, missing_ids: list[str], message: str | None = None):
        self.missing_ids = list(missing_ids)
        if message is None:
            quoted = ", ".join(f"'{field_id}'" for field_id in self.missing_ids)
            message = f"Input VCF does not contain INFO field(s): {quoted}"
        super().__init__(message)


class UnknownFieldTypeError(UnresolvableFieldError):
    """Raised when a requested INFO field declares a type we cannot carry."""

    def __init__(self, field_id: str, type_name: str):
        self.field_id = field_id
        self.type_name = type_name
        super().__init__(
            [field_id], f"Unknown type '{type_name}' for INFO field '{field_id}'"
        )


class MalformedRecordError(TransferError):
    """Raised when a record cannot be parsed from the input stream."""

    def __init__(self, ordinal: int, cause: Exception | str):
        self.ordinal = ordinal
        self.cause = cause
        super().__init__(f"Malformed VCF record #{ordinal}: {cause}")


class FieldTransferError(TransferError):
    """Raised when a value cannot be read, cleared or stored for a record."""

    def __init__(self, field_id: str, ordinal: int | None, cause: Exception | str):
        self.field_id = field_id
        self.ordinal = ordinal
        self.cause = cause
        where = f" in record #{ordinal}" if ordinal is not None else ""
        super().__init__(f"Can not transfer field '{field_id}'{where}: {cause}")


class OutputError(TransferError):
    """Raised when the output can not be opened or written."""

    pass


class FormatConflictError(TransferError):
    """Raised when a field is already declared as FORMAT with a different type."""

    def __init__(self, conflicts: list[tuple[str, str | None, str]]):
        self.conflicts = list(conflicts)
        self.field_ids = [field_id for field_id, _, _ in self.conflicts]
        described = ", ".join(
            f"'{field_id}' (FORMAT {existing}, moving {moved})"
            for field_id, existing, moved in self.conflicts
        )
        super().__init__(f"Input VCF declares FORMAT field(s) with a different type: {described}")


class InputError(TransferError):
    """Raised when the input VCF can not be opened or its header read."""

    pass
