"""
Data-source mode controller.

A DataSourceContext is either LIVE or DEGRADED. Any DatabaseError or
SourceUnavailable raised by a live read or write moves it to DEGRADED and
logs a warning; after that every read is answered from the sample dataset
registered for the entity class. Only an explicit set_mode()/toggle()
brings it back to LIVE.

Writes run inside transaction.atomic() and report a MutationResult
(pending -> committed | failed). A write attempted while DEGRADED fails
without touching the database.
"""
import copy
import logging
from dataclasses import dataclass

from django.db import DatabaseError, models, transaction

logger = logging.getLogger(__name__)


class DataSourceMode(models.TextChoices):
    LIVE = 'live', 'Live'
    DEGRADED = 'degraded', 'Degraded'


class SourceUnavailable(Exception):
    """Raised by live calls when the backing store cannot be reached."""


SOURCE_ERRORS = (DatabaseError, SourceUnavailable)


class MutationStatus:
    PENDING = 'pending'
    COMMITTED = 'committed'
    FAILED = 'failed'


@dataclass
class MutationResult:
    status: str = MutationStatus.PENDING
    value: object = None
    error: str = ''

    @property
    def committed(self):
        return self.status == MutationStatus.COMMITTED

    @property
    def failed(self):
        return self.status == MutationStatus.FAILED


# entity_class -> list of rows, or a callable returning one
_SAMPLE_DATA = {}


def register_sample_data(entity_class, rows):
    """
    Register the degraded-mode dataset for an entity class.

    Rows must carry the same keys as the live serializer output.
    """
    _SAMPLE_DATA[entity_class] = rows


def get_sample_data(entity_class):
    """Return a fresh copy of the sample rows for ``entity_class``."""
    rows = _SAMPLE_DATA.get(entity_class, [])
    if callable(rows):
        rows = rows()
    return copy.deepcopy(list(rows))


def registered_sample_classes():
    return set(_SAMPLE_DATA)


class DataSourceContext:
    """
    Holds the data-source mode and routes reads and writes.

    Usage:
        data_source = DataSourceContext()
        rows = data_source.read(lambda: serialize(queryset), EntityClass.PDI_OBJECTIVE)
        result = data_source.write(lambda: ObjectiveService.create(...))
    """

    def __init__(self, mode=DataSourceMode.LIVE):
        self._mode = self._validate_mode(mode)

    def __repr__(self):
        return f"<DataSourceContext mode={self._mode}>"

    @staticmethod
    def _validate_mode(mode):
        if mode not in DataSourceMode.values:
            raise ValueError(f"Unknown data source mode: {mode!r}")
        return DataSourceMode(mode)

    @property
    def mode(self):
        return self._mode

    @property
    def is_degraded(self):
        return self._mode == DataSourceMode.DEGRADED

    def set_mode(self, mode):
        new_mode = self._validate_mode(mode)
        if new_mode != self._mode:
            logger.info("Data source mode changed: %s -> %s", self._mode, new_mode)
        self._mode = new_mode
        return self._mode

    def toggle(self):
        if self.is_degraded:
            return self.set_mode(DataSourceMode.LIVE)
        return self.set_mode(DataSourceMode.DEGRADED)

    def degrade(self, error):
        """Enter DEGRADED after a source failure. No-op when already degraded."""
        if self.is_degraded:
            return
        logger.warning("Live data source failed, switching to sample data: %s", error)
        self._mode = DataSourceMode.DEGRADED

    def read(self, live_call, entity_class):
        """
        Return ``live_call()``, or the sample rows for ``entity_class`` when
        degraded or when the live call fails.
        """
        if self.is_degraded:
            return get_sample_data(entity_class)
        try:
            return live_call()
        except SOURCE_ERRORS as exc:
            self.degrade(exc)
            return get_sample_data(entity_class)

    def write(self, mutation):
        """
        Run ``mutation`` atomically.

        Source failures roll back and return a failed MutationResult. Other
        exceptions (validation, permission) roll back and propagate.
        """
        result = MutationResult()
        if self.is_degraded:
            result.status = MutationStatus.FAILED
            result.error = 'Data source is degraded; changes are disabled'
            return result

        try:
            with transaction.atomic():
                result.value = mutation()
        except SOURCE_ERRORS as exc:
            self.degrade(exc)
            result.status = MutationStatus.FAILED
            result.error = str(exc) or exc.__class__.__name__
            return result

        result.status = MutationStatus.COMMITTED
        return result
