"""Lens filtering, text search and grouping helpers.

Everything here is synchronous and side-effect free: functions receive lens
sequences that were already fetched and return new lists that preserve the
input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from lens_catalog.schemas.catalog import Lens, LensGroup, LensSeries
from lens_catalog.schemas.filters import FocalLengthCategory, LensFilterCriteria

SEARCHABLE_FIELDS: tuple[str, ...] = ("name", "manufacturer", "description")
"""Lens attributes consulted by free-text search."""

_GROUPING_NOISE_WORDS = ("series", "edition")


def _clean(value: str | None) -> str | None:
    cleaned = (value or "").strip()
    return cleaned or None


def normalize_criteria(
    *,
    format: str | None = None,
    focal_length_category: FocalLengthCategory | str | None = None,
    manufacturer: str | None = None,
    search_query: str | None = None,
    only_rentable: bool = False,
    min_focal_length: float | None = None,
    max_focal_length: float | None = None,
    min_aperture: float | None = None,
    max_aperture: float | None = None,
) -> LensFilterCriteria:
    """Return sanitized criteria for consistent lens filtering.

    Blank strings collapse to ``None`` and the ``all`` focal category is
    dropped so that both mean "no constraint".
    """

    category: FocalLengthCategory | None = None
    if focal_length_category:
        category = FocalLengthCategory(focal_length_category)
        if category is FocalLengthCategory.ALL:
            category = None

    return LensFilterCriteria(
        format=_clean(format),
        focal_length_category=category,
        manufacturer=_clean(manufacturer),
        search_query=_clean(search_query),
        only_rentable=only_rentable,
        min_focal_length=min_focal_length,
        max_focal_length=max_focal_length,
        min_aperture=min_aperture,
        max_aperture=max_aperture,
    )


def matches_query(lens: Lens, query: str) -> bool:
    """Case-insensitive substring match against the searchable lens fields."""

    needle = query.strip().lower()
    if not needle:
        return True
    for field_name in SEARCHABLE_FIELDS:
        value = getattr(lens, field_name, None) or ""
        if needle in value.lower():
            return True
    return False


def overlaps_focal_range(
    lens: Lens, *, minimum: float | None, maximum: float | None
) -> bool:
    """Return ``True`` when the lens's focal range shares a point with the bounds.

    Both bounds are inclusive and a missing bound is open on that side, so a
    24-70mm zoom matches a 40-60mm window, a 10-30mm window and a 70-200mm
    window alike. Inverted bounds go through the same two checks, so only a
    lens whose range reaches both bounds matches them.
    """

    if minimum is not None and lens.focal_length_max < minimum:
        return False
    if maximum is not None and lens.focal_length_min > maximum:
        return False
    return True


def within_aperture_range(
    lens: Lens, *, minimum: float | None, maximum: float | None
) -> bool:
    """Inclusive check of the lens's maximum aperture against the bounds."""

    if minimum is not None and lens.max_aperture < minimum:
        return False
    if maximum is not None and lens.max_aperture > maximum:
        return False
    return True


def lens_matches(lens: Lens, criteria: LensFilterCriteria) -> bool:
    """Return ``True`` when ``lens`` satisfies every active predicate."""

    if criteria.only_rentable and not lens.is_rentable:
        return False

    format_value = _clean(criteria.format)
    if format_value:
        wanted = format_value.lower()
        if not any(candidate.strip().lower() == wanted for candidate in lens.formats):
            return False

    category = criteria.focal_length_category
    if category is not None and category is not FocalLengthCategory.ALL:
        if lens.focal_length_category is not category:
            return False

    manufacturer = _clean(criteria.manufacturer)
    if manufacturer:
        if lens.manufacturer.strip().lower() != manufacturer.lower():
            return False

    query = _clean(criteria.search_query)
    if query and not matches_query(lens, query):
        return False

    if not overlaps_focal_range(
        lens,
        minimum=criteria.min_focal_length,
        maximum=criteria.max_focal_length,
    ):
        return False

    return within_aperture_range(
        lens,
        minimum=criteria.min_aperture,
        maximum=criteria.max_aperture,
    )


def filter_lenses(
    lenses: Iterable[Lens], criteria: LensFilterCriteria
) -> list[Lens]:
    """Return the lenses that satisfy ``criteria`` in their original order."""

    return [lens for lens in lenses if lens_matches(lens, criteria)]


def search_lenses(lenses: Iterable[Lens], query: str) -> list[Lens]:
    """Return the lenses matching ``query``; a blank query returns all lenses."""

    if not query.strip():
        return list(lenses)
    return [lens for lens in lenses if matches_query(lens, query)]


def _grouping_key(value: str) -> str:
    key = value.lower()
    for noise in (" ", "-", "."):
        key = key.replace(noise, "")
    for word in _GROUPING_NOISE_WORDS:
        key = key.replace(word, "")
    return key


def group_lenses(lenses: Sequence[Lens]) -> list[LensGroup]:
    """Group lenses by manufacturer, then by series/model name.

    Names are normalised before grouping so "Master Prime" and
    "master-prime series" land together; the first-seen spelling is used as
    the display name.
    """

    manufacturers: dict[str, list[Lens]] = {}
    for lens in lenses:
        manufacturers.setdefault(_grouping_key(lens.manufacturer), []).append(lens)

    groups: list[LensGroup] = []
    for members in manufacturers.values():
        series_buckets: dict[str, list[Lens]] = {}
        for lens in members:
            series_name = lens.model or lens.name
            series_buckets.setdefault(_grouping_key(series_name), []).append(lens)

        series = [
            LensSeries(
                name=bucket[0].model or bucket[0].name,
                lenses=tuple(sorted(bucket, key=lambda item: item.name)),
            )
            for bucket in series_buckets.values()
        ]
        series.sort(key=lambda item: item.name)
        groups.append(
            LensGroup(manufacturer=members[0].manufacturer, series=tuple(series))
        )

    groups.sort(key=lambda group: group.manufacturer)
    return groups


__all__ = [
    "SEARCHABLE_FIELDS",
    "filter_lenses",
    "group_lenses",
    "lens_matches",
    "matches_query",
    "normalize_criteria",
    "overlaps_focal_range",
    "search_lenses",
    "within_aperture_range",
]
