"""
Measurement store: the single owner of the editable measurement tables.

Every command runs to completion and publishes a wholly new immutable
:class:`Snapshot`:

    edit -> parse/validate -> derive edited row -> refit whole collection

Input problems never raise. A bad value is recorded in the snapshot's
``errors`` map under ``(row_id, field)`` and leaves the row untouched; a
structural command whose precondition fails is a no-op that returns a
:class:`CommandResult` explaining why.

The resistance store persists its rows through an injected storage
collaborator after each change. Persistence is best-effort: failures are
logged and never undo or block the in-memory update.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .analysis import (
    AcousticAnalysis,
    ResistanceSummary,
    TrendAnalysis,
    acoustic_regression,
    calculate_ionization_energy,
    resistance_summary,
    resistance_trend,
)
from .config import DEFAULT_CONFIG, LabConfig
from .derivation import derive_acoustic_fields, derive_resistance_fields
from .models import AcousticMeasurement, ResistanceMeasurement
from .schema import AcousticField, ResistanceField, coerce_field
from .storage import MeasurementStorage
from .validation import parse_value, validate

logger = logging.getLogger(__name__)

ErrorKey = Tuple[int, str]

ADD_ROW_REJECTED = (
    "Fill in every field of the current row with valid values "
    "before adding a new one"
)
DELETE_LAST_REJECTED = "Cannot delete the only remaining row"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a store command; truthy when the command was applied."""

    ok: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of one table: rows, field errors, and a change counter."""

    rows: tuple
    errors: Mapping[ErrorKey, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    version: int = 0

    def error_for(self, row_id: int, field_name) -> Optional[str]:
        key = getattr(field_name, "value", field_name)
        return self.errors.get((int(row_id), key))


class _MeasurementStore:
    field_kind = None
    row_type = None

    def __init__(self, config: LabConfig = DEFAULT_CONFIG):
        self.config = config
        self._snapshot = Snapshot(rows=())

    # -- derivation hooks -------------------------------------------------
    def _derive(self, row):
        raise NotImplementedError

    def _refit(self, rows: List) -> List:
        return rows

    def _rows_changed(self, rows: tuple) -> None:
        """Called after a command publishes new rows."""

    # -- queries ----------------------------------------------------------
    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def rows(self) -> tuple:
        return self._snapshot.rows

    @property
    def errors(self) -> Mapping[ErrorKey, str]:
        return self._snapshot.errors

    def _index_of(self, row_id) -> Optional[int]:
        for index, row in enumerate(self._snapshot.rows):
            if row.id == row_id:
                return index
        return None

    def is_last_row_filled(self) -> bool:
        """Last row has its required inputs and no outstanding field error."""
        rows = self._snapshot.rows
        if not rows:
            return False
        last = rows[-1]
        has_error = any(row_id == last.id for row_id, _ in self._snapshot.errors)
        return last.is_filled() and not has_error

    # -- publishing -------------------------------------------------------
    def _publish(
        self, rows: List, errors: Dict[ErrorKey, str], rows_changed: bool = True
    ) -> Snapshot:
        self._snapshot = Snapshot(
            rows=tuple(rows),
            errors=MappingProxyType(dict(errors)),
            version=self._snapshot.version + 1,
        )
        if rows_changed:
            self._rows_changed(self._snapshot.rows)
        return self._snapshot

    def _initial_rows(self, rows: List) -> None:
        derived = [
            self._derive(replace(row, id=index + 1)) for index, row in enumerate(rows)
        ]
        if not derived:
            derived = [self._derive(self.row_type.empty(1))]
        self._snapshot = Snapshot(rows=tuple(self._refit(derived)))

    # -- commands ---------------------------------------------------------
    def update_field(self, row_id: int, field_name, text) -> CommandResult:
        """Parse, validate and apply one cell edit.

        Args:
            row_id: Target row number.
            field_name: Field enum member or its string value.
            text: Raw cell text (or a number, or ``None`` for an empty cell).

        Returns:
            CommandResult: ``ok`` when the value was applied; otherwise the
            validation message, which is also stored in ``errors``.

        Raises:
            KeyError: If ``field_name`` is not an editable field of this table.
        """
        fld = coerce_field(field_name, self.field_kind)
        index = self._index_of(row_id)
        if index is None:
            reason = f"Row {row_id} does not exist"
            logger.info("Rejected edit of %s: %s", fld.value, reason)
            return CommandResult(False, reason)

        key = (int(row_id), fld.value)
        errors = dict(self._snapshot.errors)
        try:
            value = parse_value(text)
        except ValueError as exc:
            error = str(exc)
        else:
            error = validate(fld, value, self.config.bounds)

        if error:
            errors[key] = error
            self._publish(list(self._snapshot.rows), errors, rows_changed=False)
            logger.debug("Invalid %s for row %s: %s", fld.value, row_id, error)
            return CommandResult(False, error)

        errors.pop(key, None)
        rows = list(self._snapshot.rows)
        rows[index] = self._derive(replace(rows[index], **{fld.value: value}))
        self._publish(self._refit(rows), errors)
        return CommandResult(True)

    def add_row(self) -> CommandResult:
        """Append an empty row once the last row is completely and validly filled."""
        if not self.is_last_row_filled():
            logger.info("Rejected add_row: %s", ADD_ROW_REJECTED)
            return CommandResult(False, ADD_ROW_REJECTED)
        rows = list(self._snapshot.rows)
        rows.append(self._derive(self.row_type.empty(len(rows) + 1)))
        self._publish(self._refit(rows), dict(self._snapshot.errors))
        return CommandResult(True)

    def delete_row(self, row_id: int) -> CommandResult:
        """Remove a row and renumber the remaining rows densely from 1.

        Errors of the removed row are dropped; errors of shifted rows move
        with their rows.
        """
        rows = self._snapshot.rows
        if len(rows) <= 1:
            logger.info("Rejected delete_row(%s): %s", row_id, DELETE_LAST_REJECTED)
            return CommandResult(False, DELETE_LAST_REJECTED)
        if self._index_of(row_id) is None:
            reason = f"Row {row_id} does not exist"
            logger.info("Rejected delete_row(%s): %s", row_id, reason)
            return CommandResult(False, reason)

        kept = [row for row in rows if row.id != row_id]
        new_ids = {row.id: index + 1 for index, row in enumerate(kept)}
        renumbered = [replace(row, id=new_ids[row.id]) for row in kept]
        errors = {
            (new_ids[old_id], name): message
            for (old_id, name), message in self._snapshot.errors.items()
            if old_id in new_ids
        }
        self._publish(self._refit(renumbered), errors)
        return CommandResult(True)

    def reset(self) -> Snapshot:
        """Return to a single empty row with no errors."""
        rows = self._refit([self._derive(self.row_type.empty(1))])
        return self._publish(rows, {})


class ResistanceStore(_MeasurementStore):
    """Table of the temperature-dependent resistance experiment.

    Args:
        storage: Persistence collaborator; rows are loaded from it on
            construction, saved after every change and cleared on reset.
        config: Bounds and activation-energy method.
    """

    field_kind = ResistanceField
    row_type = ResistanceMeasurement

    def __init__(
        self,
        storage: Optional[MeasurementStorage] = None,
        config: LabConfig = DEFAULT_CONFIG,
    ):
        super().__init__(config)
        self.storage = storage
        self._initial_rows(self._load())

    def _load(self) -> List[ResistanceMeasurement]:
        if self.storage is None:
            return []
        try:
            rows = list(self.storage.load())
        except Exception:
            logger.exception("Failed to load stored measurements")
            return []
        return sorted(rows, key=lambda m: m.id)

    def _derive(self, row: ResistanceMeasurement) -> ResistanceMeasurement:
        return derive_resistance_fields(row)

    def _refit(self, rows: List[ResistanceMeasurement]) -> List[ResistanceMeasurement]:
        return calculate_ionization_energy(rows, method=self.config.activation_method)

    def _rows_changed(self, rows: tuple) -> None:
        if self.storage is None:
            return
        try:
            self.storage.save(rows)
        except Exception:
            logger.exception("Failed to persist measurements")

    def reset(self) -> Snapshot:
        snapshot = super().reset()
        if self.storage is not None:
            try:
                self.storage.clear()
            except Exception:
                logger.exception("Failed to clear stored measurements")
        return snapshot

    @property
    def ionization_energy(self) -> Optional[float]:
        return self.rows[0].ionization_energy if self.rows else None

    def trend(self) -> TrendAnalysis:
        return resistance_trend(self.rows)

    def summary(self) -> ResistanceSummary:
        return resistance_summary(self.rows)


class AcousticStore(_MeasurementStore):
    """Table of the acousto-optic attenuation experiment."""

    field_kind = AcousticField
    row_type = AcousticMeasurement

    def __init__(self, config: LabConfig = DEFAULT_CONFIG):
        super().__init__(config)
        self._initial_rows([])

    def _derive(self, row: AcousticMeasurement) -> AcousticMeasurement:
        return derive_acoustic_fields(row)

    def analysis(self) -> AcousticAnalysis:
        return acoustic_regression(self.rows)
