"""
Unit Tests for the Assembly Service

Covers:
1. Recipe + component resolution
2. Stock checks (missing rows, short quantities) with no side effects
3. Deduction, new assembly row and audit entries
4. Assembly-only access for get/update/delete
"""
import pytest
from datetime import date

from conrodworks.db.session import unit_of_work
from conrodworks.exceptions import (
    NotFoundError,
    InsufficientInventoryError,
    MissingComponentError,
)
from conrodworks.models import PreProductionItem, ActivityLog
from conrodworks.services import assembly_service

from tests.factories import (
    create_test_conrod,
    create_test_pin,
    create_test_ball_bearing,
    create_test_recipe_with_stock,
    create_test_assembly,
    activity_for,
)

YAMAHA = ("Yamaha YZF-R15 Conrod", "NRB", "7")


@pytest.mark.unit
class TestCreateAssembly:

    def test_deducts_both_components_and_creates_assembly(
        self, db_session, pin_stock, ball_bearing_stock
    ):
        result = assembly_service.create_assembly(db_session, *YAMAHA, quantity=10)
        db_session.commit()

        db_session.refresh(pin_stock)
        db_session.refresh(ball_bearing_stock)
        assert pin_stock.quantity == 30
        assert ball_bearing_stock.quantity == 15

        assembly = result.assembly
        assert assembly.type == "conrod"
        assert assembly.name == "Yamaha YZF-R15 Conrod"
        assert assembly.variant == "NRB"
        assert assembly.size == "7"
        assert assembly.quantity == 10
        assert result.recipe.serial_number == "CR002"

    def test_logs_create_and_two_deducts(self, db_session, pin_stock, ball_bearing_stock):
        result = assembly_service.create_assembly(db_session, *YAMAHA, quantity=10)
        db_session.commit()

        logs = activity_for(db_session, "conrod-assembly")
        assert [log.action for log in logs] == ["CREATE", "DEDUCT", "DEDUCT"]

        create, pin_log, bb_log = logs
        assert create.entity_id == result.assembly.id
        assert create.details == (
            "Variant: NRB, Size: 7, Quantity: 10. Components used: "
            "10x PIN-YZF-002 (7), 10x BB-6200-2RS (NRB, 7)"
        )
        assert pin_log.entity_id == pin_stock.id
        assert pin_log.details == "Pin: PIN-YZF-002 (7) - Deducted: 10, Remaining: 30"
        assert bb_log.entity_id == ball_bearing_stock.id
        assert bb_log.details == (
            "Ball Bearing: BB-6200-2RS (NRB, 7) - Deducted: 10, Remaining: 15"
        )

    def test_quantity_equal_to_stock_is_allowed(self, db_session, pin_stock, ball_bearing_stock):
        assembly_service.create_assembly(db_session, *YAMAHA, quantity=25)
        db_session.commit()

        db_session.refresh(ball_bearing_stock)
        assert ball_bearing_stock.quantity == 0

    def test_date_updated_defaults_to_today(self, db_session, pin_stock, ball_bearing_stock):
        result = assembly_service.create_assembly(db_session, *YAMAHA, quantity=1)
        assert result.assembly.date_updated == date.today()
        assert pin_stock.date_updated == date.today()

    def test_explicit_date_is_stamped_on_all_rows(self, db_session, pin_stock, ball_bearing_stock):
        stamp = date(2026, 1, 15)
        result = assembly_service.create_assembly(
            db_session, *YAMAHA, quantity=1, date_updated=stamp
        )
        assert result.assembly.date_updated == stamp
        assert pin_stock.date_updated == stamp
        assert ball_bearing_stock.date_updated == stamp

    def test_unknown_recipe_is_not_found(self, db_session, pin_stock, ball_bearing_stock):
        with pytest.raises(NotFoundError) as exc_info:
            assembly_service.create_assembly(db_session, "Yamaha YZF-R15 Conrod", "NRB", "8", 1)

        assert exc_info.value.message == "Recipe not found for this conrod configuration"
        assert db_session.query(PreProductionItem).filter_by(type="conrod").count() == 0

    def test_short_ball_bearing_leaves_stock_untouched(
        self, db_session, pin_stock, ball_bearing_stock
    ):
        with pytest.raises(InsufficientInventoryError) as exc_info:
            assembly_service.create_assembly(db_session, *YAMAHA, quantity=30)

        assert exc_info.value.details["requested"] == 30
        assert exc_info.value.details["available"] == 25
        assert "BB-6200-2RS" in exc_info.value.message

        db_session.rollback()
        db_session.refresh(pin_stock)
        assert pin_stock.quantity == 40
        assert db_session.query(PreProductionItem).filter_by(type="conrod").count() == 0
        assert db_session.query(ActivityLog).count() == 0

    def test_short_pin_reports_pin(self, db_session):
        create_test_recipe_with_stock(
            db_session,
            pin_quantity=2,
            ball_bearing_quantity=50,
            conrod_name="KTM Duke 200 Conrod",
            conrod_variant="NRB",
            conrod_size="3",
        )
        with pytest.raises(InsufficientInventoryError) as exc_info:
            assembly_service.create_assembly(db_session, "KTM Duke 200 Conrod", "NRB", "3", 5)

        assert exc_info.value.details["item"].startswith("pin ")
        assert exc_info.value.details["available"] == 2

    def test_missing_pin_row(self, db_session, ball_bearing_stock):
        with pytest.raises(MissingComponentError) as exc_info:
            assembly_service.create_assembly(db_session, *YAMAHA, quantity=1)
        assert exc_info.value.details["type"] == "pin"

    def test_missing_ball_bearing_row(self, db_session, pin_stock):
        with pytest.raises(MissingComponentError) as exc_info:
            assembly_service.create_assembly(db_session, *YAMAHA, quantity=1)
        assert exc_info.value.details["type"] == "ballBearing"

    def test_ball_bearing_must_match_variant(self, db_session, pin_stock):
        # Same name and size, different variant: not the recipe's bearing
        create_test_ball_bearing(
            db_session, name="BB-6200-2RS", variant="Standard", size="7", quantity=100
        )
        db_session.commit()

        with pytest.raises(MissingComponentError):
            assembly_service.create_assembly(db_session, *YAMAHA, quantity=1)

    def test_pin_must_match_size(self, db_session, ball_bearing_stock):
        create_test_pin(db_session, name="PIN-YZF-002", size="8", quantity=100)
        db_session.commit()

        with pytest.raises(MissingComponentError):
            assembly_service.create_assembly(db_session, *YAMAHA, quantity=1)

    def test_each_run_creates_a_new_row(self, db_session, pin_stock, ball_bearing_stock):
        first = assembly_service.create_assembly(db_session, *YAMAHA, quantity=2)
        second = assembly_service.create_assembly(db_session, *YAMAHA, quantity=3)
        db_session.commit()

        assert first.assembly.id != second.assembly.id
        db_session.refresh(pin_stock)
        assert pin_stock.quantity == 35

    def test_failure_inside_unit_of_work_rolls_back_deduction(
        self, db_session, pin_stock, ball_bearing_stock
    ):
        with pytest.raises(RuntimeError):
            with unit_of_work(db_session):
                assembly_service.create_assembly(db_session, *YAMAHA, quantity=10)
                raise RuntimeError("downstream failure")

        db_session.refresh(pin_stock)
        db_session.refresh(ball_bearing_stock)
        assert pin_stock.quantity == 40
        assert ball_bearing_stock.quantity == 25
        assert db_session.query(ActivityLog).count() == 0

    def test_inventory_deducted_summary(self, db_session, pin_stock, ball_bearing_stock):
        result = assembly_service.create_assembly(db_session, *YAMAHA, quantity=4)
        summary = result.inventory_deducted()

        assert summary["pin"] == {
            "id": pin_stock.id,
            "name": "PIN-YZF-002",
            "size": "7",
            "quantity": 4,
            "remaining": 36,
        }
        assert summary["ball_bearing"]["variant"] == "NRB"
        assert summary["ball_bearing"]["remaining"] == 21


@pytest.mark.unit
class TestAssemblyRows:

    def test_list_only_returns_conrod_rows(self, db_session, pin_stock, assembly_stock):
        rows = assembly_service.list_assemblies(db_session)
        assert [row.id for row in rows] == [assembly_stock.id]

    def test_get_rejects_component_rows(self, db_session, pin_stock):
        with pytest.raises(NotFoundError):
            assembly_service.get_assembly(db_session, pin_stock.id)

    def test_update_logs_changes_and_stamps_today(self, db_session):
        assembly = create_test_assembly(
            db_session, name="KTM Duke 200 Conrod", variant="NRB", size="3",
            quantity=4, date_updated=date(2025, 1, 1),
        )
        db_session.commit()

        assembly_service.update_assembly(db_session, assembly.id, {"quantity": 6, "size": "3"})
        db_session.commit()

        assert assembly.quantity == 6
        assert assembly.date_updated == date.today()
        log = activity_for(db_session, "conrod-assembly")[-1]
        assert log.action == "UPDATE"
        assert log.details == "Quantity: 4 → 6"

    def test_update_without_changes_logs_minor_updates(self, db_session, assembly_stock):
        assembly_service.update_assembly(db_session, assembly_stock.id, {})
        log = activity_for(db_session, "conrod-assembly")[-1]
        assert log.details == "Minor updates"

    def test_delete_logs_and_removes(self, db_session, assembly_stock):
        assembly_id = assembly_stock.id
        assembly_service.delete_assembly(db_session, assembly_id)
        db_session.commit()

        assert db_session.get(PreProductionItem, assembly_id) is None
        log = activity_for(db_session, "conrod-assembly")[-1]
        assert log.action == "DELETE"
        assert log.entity_id == assembly_id
        assert log.details == "Variant: NRB, Size: 7, Quantity: 12"

    def test_delete_component_row_is_not_found(self, db_session, pin_stock):
        with pytest.raises(NotFoundError):
            assembly_service.delete_assembly(db_session, pin_stock.id)

    def test_recipe_alone_is_not_an_assembly(self, db_session):
        recipe = create_test_conrod(db_session)
        with pytest.raises(NotFoundError):
            assembly_service.get_assembly(db_session, recipe.id)
