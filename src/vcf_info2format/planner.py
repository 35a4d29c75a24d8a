"""Schema planning: decide which INFO declarations move to FORMAT."""

import logging
from collections.abc import Iterable

from .errors import FormatConflictError, SampleCountError, UnresolvableFieldError
from .models import QUAL_DECLARATION, QUAL_FIELD_ID, FieldPlan, FieldType
from .vcf_parser import VCFHeader

logger = logging.getLogger(__name__)


class SchemaPlanner:
    """Rewrite a single-sample VCF header and resolve the requested fields.

    The planner never reads records. Everything that can be checked from the
    header alone is checked here so that a run fails before the first record.
    """

    def plan(
        self,
        header: VCFHeader,
        fields: Iterable[str],
        transfer_qual: bool = False,
    ) -> tuple[VCFHeader, FieldPlan]:
        """Build the output header and the field plan.

        Args:
            header: Header of the input VCF. It is not modified.
            fields: INFO field ids to move into FORMAT.
            transfer_qual: Also declare a ``QUAL`` FORMAT field.

        Returns:
            Tuple of (rewritten header, field plan).

        Raises:
            SampleCountError: If the header does not declare exactly one sample.
            UnknownFieldTypeError: If a requested INFO field has an unknown type.
            UnresolvableFieldError: If requested fields are not INFO fields.
            FormatConflictError: If a target FORMAT id is declared with another type.
        """
        if header.sample_count != 1:
            raise SampleCountError(header.sample_count)

        requested = list(dict.fromkeys(fields))
        pending = set(requested)
        entries: list[tuple[str, FieldType]] = []
        declarations = []

        for raw in header.info_declarations():
            if raw.id not in pending:
                continue
            pending.discard(raw.id)
            declaration = raw.resolve()
            declarations.append(declaration)
            entries.append((declaration.id, declaration.type))

        logger.debug("Found %d INFO fields: %s", len(entries), entries)

        if pending:
            raise UnresolvableFieldError([f for f in requested if f in pending])

        targets = list(entries)
        if transfer_qual:
            targets.append((QUAL_FIELD_ID, QUAL_DECLARATION.type))
        existing_format = header.format_types
        conflicts = [
            (field_id, existing_format[field_id], field_type.value)
            for field_id, field_type in targets
            if field_id in existing_format and existing_format[field_id] != field_type.value
        ]
        if conflicts:
            raise FormatConflictError(conflicts)

        new_header = header.remove_info({declaration.id for declaration in declarations})
        for declaration in declarations:
            logger.debug("Adding new FORMAT header record: %s", declaration.to_format_line())
            new_header = new_header.add_format(declaration)

        if transfer_qual:
            logger.debug("Adding new FORMAT header record: %s", QUAL_DECLARATION.to_format_line())
            new_header = new_header.add_format(QUAL_DECLARATION)

        return new_header, FieldPlan(entries=tuple(entries), transfer_qual=transfer_qual)


def plan_transfer(
    header: VCFHeader, fields: Iterable[str], transfer_qual: bool = False
) -> tuple[VCFHeader, FieldPlan]:
    """Convenience wrapper around ``SchemaPlanner().plan``."""
    return SchemaPlanner().plan(header, fields, transfer_qual)
