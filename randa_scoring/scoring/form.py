"""
Evaluation input record
randa_scoring/scoring/form.py

EvaluationInput is the immutable snapshot the calculators consume.
EvaluationForm is the mutable record a host (form UI, batch script) edits:
weights, element levels and the 2-5 student learning measures. Measure ids
are allocated per form instance and carry no meaning beyond identity.

Usage:
    form = EvaluationForm()
    form.set_equal_weights()
    form.set_level("s1a", 4)
    extra = form.add_measure()
    form.set_measure(extra.measure_id, weight=10, rating="Expected")
    snapshot = form.snapshot()
"""

import itertools
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import structlog

from randa_scoring.core.exceptions import (
    MeasureLimitException,
    UnknownElementException,
    UnknownMeasureException,
    UnknownStandardException,
)
from randa_scoring.models.enumerations import MSLRating
from randa_scoring.scoring.rubric import (
    DEFAULT_MEASURES,
    ELEMENT_KEYS,
    MAX_MEASURES,
    MIN_MEASURES,
    STANDARDS,
    Standard,
)
from randa_scoring.scoring.utils import parse_level, parse_weight

logger = structlog.get_logger(__name__)

EQUAL_WEIGHT = 25.0
SAMPLE_LEVEL = 4
SAMPLE_MEASURES = (
    (15.0, MSLRating.EXPECTED),
    (15.0, MSLRating.MORE_THAN_EXPECTED),
)

_UNSET: Any = object()


def parse_msl_rating(value: Any) -> Optional[MSLRating]:
    """Accept an MSLRating, its label ("Expected") or its name ("more_than_expected")."""
    if isinstance(value, MSLRating):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return MSLRating(text)
    except ValueError:
        pass
    name = text.upper().replace(" ", "_").replace("-", "_")
    return MSLRating.__members__.get(name)


@dataclass(frozen=True)
class MeasureEntry:
    """One student learning measure. A blank weight on the form is None."""
    weight: Optional[float]
    rating: Optional[MSLRating] = None
    measure_id: Optional[int] = None


@dataclass(frozen=True)
class EvaluationInput:
    """Immutable, already-parsed input to one scoring pass."""
    pp_weights: Tuple[float, ...]
    element_levels: Mapping[str, Optional[int]]
    measures: Tuple[MeasureEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_raw(
        cls,
        pp_weights: Optional[Iterable[Any]] = None,
        element_levels: Optional[Mapping[str, Any]] = None,
        measures: Optional[Iterable[Any]] = None,
    ) -> "EvaluationInput":
        """
        Build an input from loosely typed host data.

        Malformed values degrade instead of raising: unparseable or negative
        weights become 0, levels outside 1-5 become unset, unknown measure
        ratings become unset. Missing standard weights are padded with 0 and
        unknown element keys are ignored.

        Args:
            pp_weights: Up to 4 standard weights (numbers or numeric strings).
            element_levels: Mapping of element key ("s1a") -> level.
            measures: MeasureEntry objects or dicts with "weight"/"rating".
        """
        weights = [parse_weight(w) for w in list(pp_weights or [])[: len(STANDARDS)]]
        weights += [0.0] * (len(STANDARDS) - len(weights))

        raw_levels = element_levels or {}
        levels = {key: parse_level(raw_levels.get(key)) for key in ELEMENT_KEYS}

        entries: List[MeasureEntry] = []
        for raw in measures or []:
            if isinstance(raw, MeasureEntry):
                entries.append(
                    replace(raw, weight=parse_weight(raw.weight), rating=parse_msl_rating(raw.rating))
                )
            else:
                entries.append(
                    MeasureEntry(
                        weight=parse_weight(raw.get("weight")),
                        rating=parse_msl_rating(raw.get("rating")),
                        measure_id=raw.get("measure_id"),
                    )
                )

        return cls(pp_weights=tuple(weights), element_levels=levels, measures=tuple(entries))

    def element_points(self, standard: Standard) -> List[int]:
        """Points per element of a standard: level - 1 when set, else 0."""
        points = []
        for key in standard.element_keys:
            level = self.element_levels.get(key)
            points.append(level - 1 if level else 0)
        return points


class EvaluationForm:
    """Mutable input record for a single evaluation."""

    def __init__(self) -> None:
        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Blank weights, unset every element and start over with 2 blank measures."""
        self._ids = itertools.count(1)
        self.pp_weights: List[Optional[float]] = [None] * len(STANDARDS)
        self.element_levels: Dict[str, Optional[int]] = {key: None for key in ELEMENT_KEYS}
        self.measures: List[MeasureEntry] = [self._new_measure() for _ in range(DEFAULT_MEASURES)]
        logger.debug("form_reset")

    def set_equal_weights(self) -> None:
        self.pp_weights = [EQUAL_WEIGHT] * len(STANDARDS)

    def load_sample(self) -> None:
        """Equal weights, every element at level 4, and two rated measures."""
        self.reset()
        self.set_equal_weights()
        for key in ELEMENT_KEYS:
            self.element_levels[key] = SAMPLE_LEVEL
        self.measures = [
            replace(self._new_measure(), weight=weight, rating=rating)
            for weight, rating in SAMPLE_MEASURES
        ]
        logger.debug("form_sample_loaded")

    # ------------------------------------------------------------------
    # Field edits
    # ------------------------------------------------------------------

    def set_weight(self, standard_index: int, value: Any) -> None:
        """Set one standard weight; blank input clears it."""
        if not 0 <= standard_index < len(STANDARDS):
            raise UnknownStandardException(standard_index)
        self.pp_weights[standard_index] = None if _is_blank(value) else parse_weight(value)

    def set_level(self, element_key: str, value: Any) -> None:
        if element_key not in self.element_levels:
            raise UnknownElementException(element_key)
        self.element_levels[element_key] = parse_level(value)

    def set_measure(self, measure_id: int, weight: Any = _UNSET, rating: Any = _UNSET) -> MeasureEntry:
        idx = self._measure_index(measure_id)
        entry = self.measures[idx]
        if weight is not _UNSET:
            entry = replace(entry, weight=None if _is_blank(weight) else parse_weight(weight))
        if rating is not _UNSET:
            entry = replace(entry, rating=parse_msl_rating(rating))
        self.measures[idx] = entry
        return entry

    # ------------------------------------------------------------------
    # Measure list
    # ------------------------------------------------------------------

    @property
    def can_add_measure(self) -> bool:
        return len(self.measures) < MAX_MEASURES

    @property
    def can_remove_measure(self) -> bool:
        return len(self.measures) > MIN_MEASURES

    def add_measure(self) -> MeasureEntry:
        if not self.can_add_measure:
            raise MeasureLimitException(len(self.measures), MAX_MEASURES, "add")
        entry = self._new_measure()
        self.measures.append(entry)
        logger.debug("measure_added", measure_id=entry.measure_id, count=len(self.measures))
        return entry

    def remove_measure(self, measure_id: int) -> None:
        idx = self._measure_index(measure_id)
        if not self.can_remove_measure:
            raise MeasureLimitException(len(self.measures), MIN_MEASURES, "remove")
        del self.measures[idx]
        logger.debug("measure_removed", measure_id=measure_id, count=len(self.measures))

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> EvaluationInput:
        """Freeze the current state; blank weights count as 0."""
        return EvaluationInput(
            pp_weights=tuple(w or 0.0 for w in self.pp_weights),
            element_levels=dict(self.element_levels),
            measures=tuple(
                replace(m, weight=m.weight or 0.0) for m in self.measures
            ),
        )

    def _new_measure(self) -> MeasureEntry:
        return MeasureEntry(weight=None, rating=None, measure_id=next(self._ids))

    def _measure_index(self, measure_id: int) -> int:
        for idx, entry in enumerate(self.measures):
            if entry.measure_id == measure_id:
                return idx
        raise UnknownMeasureException(measure_id)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
