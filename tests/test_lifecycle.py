from __future__ import annotations

import pytest

from pyvtrack.lifecycle import (
    LifecycleInput,
    LifecycleStage,
    classify,
    count_stages,
    filter_by_stage,
    has_container,
    is_valid_date,
)
from pyvtrack.models.car import Car


def _input(purchase: object = None, warehouse: object = None, container: object = None) -> LifecycleInput:
    return LifecycleInput(purchase_date=purchase, warehouse_date=warehouse, container_number=container)


class TestPredicates:
    @pytest.mark.parametrize("value", ["2025-01-01", "garbage", " 2025-02-30 "])
    def test_valid_dates(self, value: str) -> None:
        assert is_valid_date(value) is True

    @pytest.mark.parametrize("value", [None, "", "   ", "0000-00-00", " 0000-00-00 ", "null", "NULL", "Null", 20250101])
    def test_invalid_dates(self, value: object) -> None:
        assert is_valid_date(value) is False

    def test_has_container(self) -> None:
        assert has_container("CNT123") is True
        assert has_container(" MSCU1234567 ") is True
        assert has_container("") is False
        assert has_container("  ") is False
        assert has_container(None) is False
        assert has_container(123) is False


class TestClassify:
    def test_container_means_shipping(self) -> None:
        assert classify(_input(container="CNT123")) == LifecycleStage.SHIPPING

    def test_container_wins_over_dates(self) -> None:
        assert classify(_input("2025-01-01", "2025-02-01", "CNT123")) == LifecycleStage.SHIPPING

    def test_warehouse_beats_purchase(self) -> None:
        assert classify(_input("2025-01-01", "2025-02-01", None)) == LifecycleStage.WAREHOUSE

    def test_purchase_only_is_new(self) -> None:
        assert classify(_input("2025-01-01", None, "")) == LifecycleStage.NEW

    def test_zero_warehouse_date_is_absent(self) -> None:
        assert classify(_input(None, "0000-00-00", None)) == LifecycleStage.UNCLASSIFIED

    def test_zero_warehouse_date_falls_through_to_new(self) -> None:
        assert classify(_input("2025-01-01", "0000-00-00", None)) == LifecycleStage.NEW

    def test_nothing_set_is_unclassified(self) -> None:
        assert classify(_input()) == LifecycleStage.UNCLASSIFIED

    def test_non_string_values_are_absent(self) -> None:
        record = _input(purchase=20250101, warehouse=True, container=42)
        assert record.container_number is None
        assert classify(record) == LifecycleStage.UNCLASSIFIED

    def test_from_record_accepts_both_key_styles(self) -> None:
        camel = LifecycleInput.from_record({"warehouseDate": "2025-02-01", "status": "SHIPPED"})
        snake = LifecycleInput.from_record({"container_number": "CNT1"})
        assert classify(camel) == LifecycleStage.WAREHOUSE
        assert classify(snake) == LifecycleStage.SHIPPING


class TestAggregates:
    def _cars(self) -> list[Car]:
        return [
            Car.model_validate({"id": 1, "containerNumber": "CNT1"}),
            Car.model_validate({"id": 2, "warehouseDate": "2025-02-01"}),
            Car.model_validate({"id": 3, "purchaseDate": "2025-01-01"}),
            Car.model_validate({"id": 4, "purchaseDate": "2025-01-01", "warehouseDate": "0000-00-00"}),
            Car.model_validate({"id": 5}),
        ]

    def test_count_stages(self) -> None:
        counts = count_stages(self._cars())
        assert counts.all == 5
        assert counts.shipping == 1
        assert counts.warehouse == 1
        assert counts.new == 2
        assert counts.unclassified == 1
        assert counts.for_stage(LifecycleStage.NEW) == 2
        assert counts.for_stage(None) == 5

    def test_count_stages_on_inputs(self) -> None:
        counts = count_stages([_input(container="C"), _input()])
        assert counts.shipping == 1
        assert counts.unclassified == 1

    def test_count_stages_empty(self) -> None:
        counts = count_stages([])
        assert counts.all == 0
        assert counts.new == 0

    def test_filter_by_stage(self) -> None:
        cars = self._cars()
        assert [c.id for c in filter_by_stage(cars, LifecycleStage.NEW)] == ["3", "4"]
        assert [c.id for c in filter_by_stage(cars, LifecycleStage.SHIPPING)] == ["1"]
        assert len(filter_by_stage(cars, None)) == 5
