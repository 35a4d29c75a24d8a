"""Pipeline driver: plan the header, then stream and transform every record."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from .config import TransferConfig
from .errors import ConfigurationError, SampleCountError
from .planner import SchemaPlanner
from .reporting import NullReporter, ProgressReporter
from .transformer import RecordTransformer
from .vcf_io import open_reader, open_writer

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    """Lifecycle of a transfer run. ``DONE`` and ``FAILED`` are terminal."""

    START = "start"
    VALIDATING_HEADER = "validating_header"
    BUILDING_PLAN = "building_plan"
    STREAMING_RECORDS = "streaming_records"
    DONE = "done"
    FAILED = "failed"


@dataclass
class TransferResult:
    """Summary of a completed run."""

    records_transformed: int
    fields: list[str] = field(default_factory=list)
    transfer_qual: bool = False
    elapsed_seconds: float = 0.0


class TransferPipeline:
    """Move INFO fields of a single-sample VCF into FORMAT fields.

    A run either transforms every input record or fails as a whole. Nothing
    is read from the record stream until the output header and field plan
    are complete.
    """

    def __init__(
        self,
        config: TransferConfig,
        reporter: ProgressReporter | None = None,
        reader_factory: Callable = open_reader,
        writer_factory: Callable = open_writer,
    ):
        self.config = config
        self.reporter = reporter or NullReporter()
        self.reader_factory = reader_factory
        self.writer_factory = writer_factory
        self.state = RunState.START
        self.records_seen = 0

    def run(self) -> TransferResult:
        try:
            return self._run()
        except Exception:
            self.state = RunState.FAILED
            raise
        finally:
            self.reporter.stop()

    def _run(self) -> TransferResult:
        start_time = time.perf_counter()

        if not self.config.has_work:
            raise ConfigurationError(
                "No field for conversion identified. Use '--qual' or '--field' options"
            )

        with self.reader_factory(self.config.input_path) as reader:
            self.state = RunState.VALIDATING_HEADER
            header = reader.header
            if header.sample_count != 1:
                raise SampleCountError(header.sample_count)

            self.state = RunState.BUILDING_PLAN
            logger.debug("Building new header")
            new_header, plan = SchemaPlanner().plan(
                header, self.config.fields, self.config.transfer_qual
            )
            reader.declare_formats(new_header)
            transformer = RecordTransformer(plan, new_header)

            with self.writer_factory(self.config.output_path, new_header) as writer:
                self.state = RunState.STREAMING_RECORDS
                self.reporter.start()
                for record in reader:
                    self.records_seen += 1
                    self.reporter.record_processed(self.records_seen)
                    transformer.transform(record, self.records_seen)
                    writer.write(record)

        self.state = RunState.DONE
        self.reporter.finish(self.records_seen)
        return TransferResult(
            records_transformed=self.records_seen,
            fields=plan.field_ids,
            transfer_qual=plan.transfer_qual,
            elapsed_seconds=time.perf_counter() - start_time,
        )


def transfer_fields(
    input_path: str,
    output_path: str,
    fields: list[str],
    transfer_qual: bool = False,
    reporter: ProgressReporter | None = None,
) -> TransferResult:
    """Run a transfer with a configuration built from the arguments."""
    config = TransferConfig(
        input_path=input_path,
        output_path=output_path,
        fields=list(fields),
        transfer_qual=transfer_qual,
    )
    return TransferPipeline(config, reporter).run()
