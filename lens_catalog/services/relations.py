"""Join helpers linking rental houses to the lenses they stock."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from lens_catalog.errors import LensNotFound, RentalNotFound
from lens_catalog.schemas.catalog import Lens, Rental


def lenses_for_rental(
    rental_id: str,
    all_lenses: Sequence[Lens],
    all_rentals: Sequence[Rental],
) -> list[Lens]:
    """Return the lenses stocked by ``rental_id`` in catalog order.

    Inventory entries pointing at lenses missing from ``all_lenses`` are
    skipped.
    """

    rental = next(
        (candidate for candidate in all_rentals if candidate.rental_id == rental_id),
        None,
    )
    if rental is None:
        raise RentalNotFound(rental_id)

    return [lens for lens in all_lenses if lens.lens_id in rental.lens_ids]


def rentals_for_lens(
    lens_id: str,
    all_lenses: Sequence[Lens],
    all_rentals: Sequence[Rental],
) -> list[Rental]:
    """Return the rental houses stocking ``lens_id`` in catalog order."""

    if not any(lens.lens_id == lens_id for lens in all_lenses):
        raise LensNotFound(lens_id)

    return [rental for rental in all_rentals if lens_id in rental.lens_ids]


def rentable_lens_ids(all_rentals: Iterable[Rental]) -> frozenset[str]:
    """Union of every rental inventory."""

    lens_ids: set[str] = set()
    for rental in all_rentals:
        lens_ids.update(rental.lens_ids)
    return frozenset(lens_ids)


__all__ = ["lenses_for_rental", "rentable_lens_ids", "rentals_for_lens"]
