"""Filter criteria value objects shared by the filter engine and services."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FocalLengthCategory(str, Enum):
    """Focal length buckets used by the catalog browser."""

    ALL = "all"
    ULTRA_WIDE = "ultra_wide"
    WIDE = "wide"
    STANDARD = "standard"
    TELEPHOTO = "telephoto"
    SUPER_TELEPHOTO = "super_telephoto"

    @property
    def display_name(self) -> str:
        return _CATEGORY_LABELS[self]

    @classmethod
    def for_focal_length(cls, focal_length: float) -> "FocalLengthCategory":
        """Return the concrete (non-``ALL``) category containing ``focal_length``."""

        if focal_length <= 12:
            return cls.ULTRA_WIDE
        if focal_length <= 35:
            return cls.WIDE
        if focal_length <= 70:
            return cls.STANDARD
        if focal_length <= 180:
            return cls.TELEPHOTO
        return cls.SUPER_TELEPHOTO


_CATEGORY_LABELS: dict[FocalLengthCategory, str] = {
    FocalLengthCategory.ALL: "All",
    FocalLengthCategory.ULTRA_WIDE: "Ultra Wide (≤12mm)",
    FocalLengthCategory.WIDE: "Wide (13–35mm)",
    FocalLengthCategory.STANDARD: "Standard (36–70mm)",
    FocalLengthCategory.TELEPHOTO: "Telephoto (71–180mm)",
    FocalLengthCategory.SUPER_TELEPHOTO: "Super Telephoto (181mm+)",
}


class LensFilterCriteria(BaseModel):
    """Immutable conjunction of optional lens predicates.

    Every field except ``only_rentable`` is optional; ``None`` means the
    dimension is unconstrained. Focal length bounds match lenses whose range
    overlaps ``[min_focal_length, max_focal_length]``; aperture bounds are an
    inclusive check on the lens's maximum aperture.
    """

    model_config = ConfigDict(frozen=True)

    format: str | None = None
    focal_length_category: FocalLengthCategory | None = None
    manufacturer: str | None = None
    search_query: str | None = None
    only_rentable: bool = False
    min_focal_length: float | None = None
    max_focal_length: float | None = None
    min_aperture: float | None = None
    max_aperture: float | None = None

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the criteria impose no constraint at all."""

        return self == LensFilterCriteria()

    def merge(self, other: "LensFilterCriteria") -> "LensFilterCriteria":
        """Return criteria matching exactly the lenses both ``self`` and ``other`` match.

        Numeric windows are intersected (the larger minimum and the smaller
        maximum win) and ``only_rentable`` is OR-ed. Text and category fields
        set on both sides must agree; a search query that contains the other
        one is kept since it implies it.

        Raises:
            ValueError: If both sides constrain the same text or category
                field with incompatible values.
        """

        return LensFilterCriteria(
            format=_merge_exact("format", self.format, other.format),
            focal_length_category=_merge_category(
                self.focal_length_category, other.focal_length_category
            ),
            manufacturer=_merge_exact(
                "manufacturer", self.manufacturer, other.manufacturer
            ),
            search_query=_merge_query(self.search_query, other.search_query),
            only_rentable=self.only_rentable or other.only_rentable,
            min_focal_length=_merge_bound(
                max, self.min_focal_length, other.min_focal_length
            ),
            max_focal_length=_merge_bound(
                min, self.max_focal_length, other.max_focal_length
            ),
            min_aperture=_merge_bound(max, self.min_aperture, other.min_aperture),
            max_aperture=_merge_bound(min, self.max_aperture, other.max_aperture),
        )


def _blank(value: str | None) -> bool:
    return not (value or "").strip()


def _merge_exact(field: str, left: str | None, right: str | None) -> str | None:
    if _blank(right):
        return left
    if _blank(left):
        return right
    if left.strip().lower() != right.strip().lower():
        raise ValueError(f"conflicting {field} constraints: {left!r} and {right!r}")
    return left


def _merge_query(left: str | None, right: str | None) -> str | None:
    if _blank(right):
        return left
    if _blank(left):
        return right
    left_needle, right_needle = left.strip().lower(), right.strip().lower()
    if right_needle in left_needle:
        return left
    if left_needle in right_needle:
        return right
    raise ValueError(
        f"search queries {left!r} and {right!r} cannot be combined into one"
    )


def _merge_category(
    left: FocalLengthCategory | None, right: FocalLengthCategory | None
) -> FocalLengthCategory | None:
    if right is None or right is FocalLengthCategory.ALL:
        return left
    if left is None or left is FocalLengthCategory.ALL:
        return right
    if left is not right:
        raise ValueError(
            f"conflicting focal length categories: {left.value} and {right.value}"
        )
    return left


def _merge_bound(pick, left: float | None, right: float | None) -> float | None:
    if left is None:
        return right
    if right is None:
        return left
    return pick(left, right)
