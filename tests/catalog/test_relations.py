"""Tests for the rental/lens join helpers."""

from __future__ import annotations

import pytest

from lens_catalog.errors import LensNotFound, RentalNotFound
from lens_catalog.schemas.catalog import Lens, Rental
from lens_catalog.services.relations import (
    lenses_for_rental,
    rentable_lens_ids,
    rentals_for_lens,
)


def test_lenses_for_rental_returns_exactly_referenced_lenses(
    catalog_lenses: list[Lens], catalog_rentals: list[Rental]
) -> None:
    lenses = lenses_for_rental("R1", catalog_lenses, catalog_rentals)

    assert [lens.lens_id for lens in lenses] == ["L1", "L3"]


def test_lenses_for_rental_skips_unknown_inventory(
    catalog_lenses: list[Lens], catalog_rentals: list[Rental]
) -> None:
    lenses = lenses_for_rental("R2", catalog_lenses, catalog_rentals)

    assert [lens.lens_id for lens in lenses] == ["L3"]


def test_lenses_for_rental_with_empty_inventory(
    catalog_lenses: list[Lens], catalog_rentals: list[Rental]
) -> None:
    assert lenses_for_rental("R3", catalog_lenses, catalog_rentals) == []


def test_rentals_for_lens_includes_every_stockist(
    catalog_lenses: list[Lens], catalog_rentals: list[Rental]
) -> None:
    rentals = rentals_for_lens("L3", catalog_lenses, catalog_rentals)

    assert [rental.rental_id for rental in rentals] == ["R1", "R2"]
    assert rentals_for_lens("L2", catalog_lenses, catalog_rentals) == []


def test_unknown_identifiers_raise(
    catalog_lenses: list[Lens], catalog_rentals: list[Rental]
) -> None:
    with pytest.raises(RentalNotFound) as rental_error:
        lenses_for_rental("R404", catalog_lenses, catalog_rentals)
    with pytest.raises(LensNotFound) as lens_error:
        rentals_for_lens("L404", catalog_lenses, catalog_rentals)

    assert rental_error.value.identifier == "R404"
    assert lens_error.value.message == "Lens with ID 'L404' not found"


def test_rentable_lens_ids_unions_inventories(catalog_rentals: list[Rental]) -> None:
    assert rentable_lens_ids(catalog_rentals) == frozenset({"L1", "L3", "L99"})
