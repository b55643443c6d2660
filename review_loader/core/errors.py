"""Loader error taxonomy.

Errors are ``RuntimeError`` subclasses whose message starts with a short
text code (``invalid_batch_size``, ``sink_failed`` ...), so callers can
match on the code the same way they match on plain runtime errors.
"""

from __future__ import annotations


class LoaderError(RuntimeError):
    """Base class for everything the loader raises on purpose."""


class ConfigurationError(LoaderError):
    """Invalid load parameters; raised before anything is written."""


class SinkFailure(LoaderError):
    """The storage sink could not complete a batch insert.

    ``batches_completed`` and ``rows_inserted`` describe what was already
    committed before the failing batch, so a run can be resumed or audited.
    """

    def __init__(
        self,
        batch_index: int,
        batches_completed: int,
        rows_inserted: int,
        reason: str,
    ) -> None:
        super().__init__(
            f"sink_failed: batch_index={batch_index} "
            f"({batches_completed} completed, {rows_inserted} rows): {reason}"
        )
        self.batch_index = batch_index
        self.batches_completed = batches_completed
        self.rows_inserted = rows_inserted
        self.reason = reason
