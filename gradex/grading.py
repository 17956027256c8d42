import logging
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence, Tuple

from .config import SCORE_CEILING, SCORE_FLOOR

logger = logging.getLogger(__name__)


# ------------------------
# Rounding
# ------------------------
def round_half_up(x: float, places: int) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(x)).quantize(quantum, rounding=ROUND_HALF_UP))


class InvalidGradeScaleError(ValueError):
    pass


# ------------------------
# Grade bands
# ------------------------
@dataclass(frozen=True)
class GradeBand:
    min_score: float
    max_score: float
    letter: str
    points: float

    def describe(self) -> str:
        return f"{self.letter} {self.min_score:g}-{self.max_score:g} = {self.points:.1f}"


@dataclass(frozen=True)
class GradeResult:
    letter: str
    points: float
    scale: str
    band: GradeBand


class GradeScale:
    """
    Named, immutable table of grade bands.

    Bands are stored highest first. The table is checked when the scale is
    built: it must span SCORE_FLOOR..SCORE_CEILING with no overlap and no gap
    an integer score could fall into, so every integer score in range matches
    exactly one band.
    """

    def __init__(self, name: str, bands: Iterable[GradeBand]):
        ordered = tuple(sorted(bands, key=lambda b: b.min_score, reverse=True))
        _validate_bands(name, ordered)
        self._name = name
        self._bands = ordered

    @classmethod
    def from_rows(cls, name: str, rows: Iterable[Sequence]) -> "GradeScale":
        """rows: (letter, min_score, max_score, points) tuples."""
        bands = []
        for letter, low, high, points in rows:
            bands.append(GradeBand(float(low), float(high), str(letter), float(points)))
        return cls(name, bands)

    @property
    def name(self) -> str:
        return self._name

    @property
    def bands(self) -> Tuple[GradeBand, ...]:
        return self._bands

    @property
    def highest(self) -> GradeBand:
        return self._bands[0]

    @property
    def lowest(self) -> GradeBand:
        return self._bands[-1]

    @property
    def max_points(self) -> float:
        return max(b.points for b in self._bands)

    def letters(self) -> Tuple[str, ...]:
        return tuple(b.letter for b in self._bands)

    def describe(self) -> str:
        return f"{self._name}: " + ", ".join(b.describe() for b in self._bands)

    def resolve(self, score: float) -> GradeBand:
        if score < SCORE_FLOOR or score > SCORE_CEILING:
            logger.warning("Score %s outside %g-%g, clamping", score, SCORE_FLOOR, SCORE_CEILING)
        clamped = min(max(score, SCORE_FLOOR), SCORE_CEILING)

        # Highest first: the first lower bound reached wins
        for band in self._bands:
            if clamped >= band.min_score:
                return band

        # Nothing matched (NaN): documented fallback
        return self.lowest

    def __eq__(self, other):
        if not isinstance(other, GradeScale):
            return NotImplemented
        return self._name == other._name and self._bands == other._bands

    def __hash__(self):
        return hash((self._name, self._bands))

    def __repr__(self):
        return f"GradeScale({self._name!r}, {list(self._bands)!r})"


def _validate_bands(name: str, bands: Tuple[GradeBand, ...]) -> None:
    if not name:
        raise InvalidGradeScaleError("Grade scale needs a name.")
    if not bands:
        raise InvalidGradeScaleError(f"Grade scale {name!r} has no bands.")

    letters = [b.letter for b in bands]
    if len(set(letters)) != len(letters):
        raise InvalidGradeScaleError(f"Grade scale {name!r} repeats a letter: {letters}.")

    for band in bands:
        if not band.letter:
            raise InvalidGradeScaleError(f"Grade scale {name!r} has a band without a letter.")
        if not all(math.isfinite(v) for v in (band.min_score, band.max_score, band.points)):
            raise InvalidGradeScaleError(f"Band {band.letter} has a missing or non-numeric bound.")
        if band.min_score > band.max_score:
            raise InvalidGradeScaleError(
                f"Band {band.letter} has min {band.min_score:g} above max {band.max_score:g}."
            )
        if band.points < 0:
            raise InvalidGradeScaleError(f"Band {band.letter} has negative points ({band.points:g}).")

    if bands[0].max_score != SCORE_CEILING:
        raise InvalidGradeScaleError(
            f"Grade scale {name!r} tops out at {bands[0].max_score:g}, expected {SCORE_CEILING:g}."
        )
    if bands[-1].min_score != SCORE_FLOOR:
        raise InvalidGradeScaleError(
            f"Grade scale {name!r} starts at {bands[-1].min_score:g}, expected {SCORE_FLOOR:g}."
        )

    for upper, lower in zip(bands, bands[1:]):
        if lower.max_score >= upper.min_score:
            raise InvalidGradeScaleError(
                f"Bands {lower.letter} and {upper.letter} overlap at {upper.min_score:g}."
            )
        if upper.min_score > lower.max_score + 1:
            raise InvalidGradeScaleError(
                f"Gap between bands {lower.letter} ({lower.max_score:g}) "
                f"and {upper.letter} ({upper.min_score:g})."
            )

    # Fractional bounds can still leave a whole-number score outside every band
    for score in range(int(SCORE_FLOOR), int(SCORE_CEILING) + 1):
        if not any(b.min_score <= score <= b.max_score for b in bands):
            raise InvalidGradeScaleError(f"Gap in grade scale {name!r}: no band covers score {score}.")


# University of Nigeria, Nsukka 5-point scale
UNN_5_POINT = GradeScale.from_rows(
    "UNN 5-point",
    [
        ("A", 70, 100, 5.0),
        ("B", 60, 69, 4.0),
        ("C", 50, 59, 3.0),
        ("D", 45, 49, 2.0),
        ("E", 40, 44, 1.0),
        ("F", 0, 39, 0.0),
    ],
)


# ------------------------
# Core logic
# ------------------------
def classify_score(score: float, scale: Optional[GradeScale] = None) -> GradeResult:
    scale = scale or UNN_5_POINT
    band = scale.resolve(score)
    return GradeResult(letter=band.letter, points=band.points, scale=scale.name, band=band)


def is_carryover(score: float, scale: Optional[GradeScale] = None) -> bool:
    """A carryover is any score that lands in the scale's lowest band."""
    scale = scale or UNN_5_POINT
    return classify_score(score, scale).band == scale.lowest
