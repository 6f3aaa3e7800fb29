"""Tests for row parsing with VtrackBaseModel."""

from __future__ import annotations

import pytest

from pyvtrack.lifecycle import LifecycleInput, LifecycleStage, classify
from pyvtrack.models import Agent, Car, search_cars

GARBLED = "Ù…Ø«Ø§Ù„"
ARABIC = "مثال"


class TestCar:
    def test_camel_case_row(self) -> None:
        car = Car.model_validate(
            {
                "id": 12,
                "make": "Toyota",
                "model": "Camry",
                "year": "2019",
                "vin": "4T1B11HK5KU000000",
                "containerNumber": "MSCU1234567",
                "warehouseDate": "2025-02-01",
                "purchaseDate": "2025-01-01",
                "agent_name": GARBLED,
                "agent_username": "ahmad",
                "agent_id": 7,
            }
        )

        assert car.id == "12"
        assert car.year == 2019
        assert car.container_number == "MSCU1234567"
        assert car.agent_id == "7"
        assert car.stage == LifecycleStage.SHIPPING
        assert car.title == "Camry 2019"
        assert car.agent_label == ARABIC

    def test_snake_case_and_synonym_keys(self) -> None:
        car = Car.model_validate(
            {
                "car_id": "3",
                "brandName": "Nissan",
                "modelName": "Patrol",
                "makingYear": 2021,
                "warehouse_date": "2025-03-01",
                "terminalName": "Jebel Ali",
                "userid": "9",
            }
        )

        assert car.id == "3"
        assert car.make == "Nissan"
        assert car.model == "Patrol"
        assert car.year == 2021
        assert car.terminal == "Jebel Ali"
        assert car.agent_id == "9"
        assert car.stage == LifecycleStage.WAREHOUSE

    def test_placeholders_fall_back_to_defaults(self) -> None:
        car = Car.model_validate({"id": "5", "containerNumber": "", "year": "--", "purchaseDate": "2025-01-01"})

        assert car.container_number is None
        assert car.year is None
        assert car.stage == LifecycleStage.NEW
        assert car.raw["containerNumber"] == ""

    @pytest.mark.parametrize(
        "row",
        [
            {"id": 1, "containerNumber": "--", "purchaseDate": "--"},
            {"id": 2, "purchaseDate": "--"},
            {"id": 3, "containerNumber": "   ", "warehouseDate": " 2025-02-01 "},
            {"id": 4, "containerNumber": 123, "purchaseDate": "0000-00-00"},
            {"id": 5, "container_number": "", "containerNumber": "MSCU1"},
            {"id": 6, "warehouseDate": "null", "purchaseDate": "\t"},
        ],
    )
    def test_stage_matches_classify_on_raw_row(self, row: dict[str, object]) -> None:
        assert Car.model_validate(row).stage == classify(LifecycleInput.from_record(row))

    def test_dash_values_are_kept(self) -> None:
        car = Car.model_validate({"id": 1, "containerNumber": "--", "make": "--"})
        assert car.container_number == "--"
        assert car.make == "--"
        assert car.stage == LifecycleStage.SHIPPING

    def test_numeric_free_text_is_stringified(self) -> None:
        car = Car.model_validate({"id": 2, "model": 500, "make": 3.0, "status": 1})
        assert car.model == "500"
        assert car.make == "3"
        assert car.status == "1"
        assert car.title == "500"

    def test_raw_value_follows_aliases(self) -> None:
        car = Car.model_validate({"brand": GARBLED, "agentName": "Ahmad", "notes": "x", "color": ""})
        assert car.raw_value("make") == GARBLED
        assert car.raw_value("agent_name") == "Ahmad"
        assert car.raw_value("note") == "x"
        assert car.raw_value("color") is None

    def test_status_does_not_affect_stage(self) -> None:
        car = Car.model_validate({"id": "5", "status": "SHIPPED"})
        assert car.stage == LifecycleStage.UNCLASSIFIED

    def test_title_fallback(self) -> None:
        assert Car.model_validate({"id": "1"}).title == "Vehicle"
        assert Car.model_validate({"id": "1", "year": 2020}).title == "2020"

    def test_agent_label_fallbacks(self) -> None:
        assert Car.model_validate({"agent_username": "khalid"}).agent_label == "khalid"
        assert Car.model_validate({"agent_id": 4}).agent_label == "4"
        assert Car.model_validate({}).agent_label == ""

    def test_display_recovers_text_fields(self) -> None:
        car = Car.model_validate({"destination": GARBLED, "make": " Kia "})
        display = car.display()
        assert display["destination"] == ARABIC
        assert display["make"] == "Kia"
        assert display["note"] == ""


class TestSearchCars:
    def _cars(self) -> list[Car]:
        return [
            Car.model_validate({"id": 1, "vin": "JTDKB20U", "destination": "Dubai Port", "agent_name": "Ahmad"}),
            Car.model_validate({"id": 2, "lot": "55123", "containerNumber": "MSCU777", "make": "Kia"}),
        ]

    def test_empty_query_returns_everything(self) -> None:
        assert len(search_cars(self._cars(), "")) == 2
        assert len(search_cars(self._cars(), None)) == 2

    def test_matches_case_insensitively(self) -> None:
        assert [c.id for c in search_cars(self._cars(), "dubai")] == ["1"]
        assert [c.id for c in search_cars(self._cars(), " mscu ")] == ["2"]
        assert [c.id for c in search_cars(self._cars(), "AHMAD")] == ["1"]

    def test_no_match(self) -> None:
        assert search_cars(self._cars(), "toyota") == []


class TestAgent:
    def test_display_name_recovers_and_falls_back(self) -> None:
        assert Agent.model_validate({"id": 1, "name": GARBLED}).display_name == ARABIC
        assert Agent.model_validate({"id": 2, "username": "khalid"}).display_name == "khalid"
        assert Agent.model_validate({"id": 3}).display_name == ""

    def test_numeric_id_is_string(self) -> None:
        agent = Agent.model_validate({"id": 10, "name": "Sara"})
        assert agent.id == "10"
        assert agent.raw == {"id": 10, "name": "Sara"}
