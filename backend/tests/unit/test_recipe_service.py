"""
Unit Tests for the Recipe Service
"""
import pytest

from conrodworks.exceptions import NotFoundError, DuplicateError, ValidationError
from conrodworks.models import Conrod
from conrodworks.services import recipe_service

from tests.factories import create_test_conrod


@pytest.mark.unit
class TestFindRecipe:

    def test_exact_triple(self, db_session, sample_recipe):
        recipe = recipe_service.find_recipe(db_session, "Yamaha YZF-R15 Conrod", "NRB", "7")
        assert recipe.id == sample_recipe.id

    @pytest.mark.parametrize("name,variant,size", [
        ("Yamaha YZF-R15 Conrod", "NRB", "8"),
        ("Yamaha YZF-R15 Conrod", "Standard", "7"),
        ("yamaha yzf-r15 conrod", "NRB", "7"),
    ])
    def test_any_mismatch_is_not_found(self, db_session, sample_recipe, name, variant, size):
        with pytest.raises(NotFoundError):
            recipe_service.find_recipe(db_session, name, variant, size)

    def test_build_recipe_view(self, sample_recipe):
        view = recipe_service.build_recipe(sample_recipe)

        assert view["dimensions"] == {
            "small_end_diameter": 14.8,
            "big_end_diameter": 40.5,
            "center_distance": 108.2,
        }
        assert view["required_components"] == {
            "conrod": {"name": "Yamaha YZF-R15 Conrod"},
            "pin": {"name": "PIN-YZF-002", "size": "7"},
            "ball_bearing": {"name": "BB-6200-2RS", "variant": "NRB", "size": "7"},
        }


@pytest.mark.unit
class TestUniqueNames:

    def test_sorted_and_distinct(self, db_session):
        create_test_conrod(db_session, pin_name="PIN-B")
        create_test_conrod(db_session, pin_name="PIN-A")
        create_test_conrod(db_session, pin_name="PIN-B")

        assert recipe_service.unique_names(db_session, "pin") == ["PIN-A", "PIN-B"]

    def test_empty_names_skipped(self, db_session):
        create_test_conrod(db_session, ball_bearing_name="")
        create_test_conrod(db_session, ball_bearing_name="BB-1")

        assert recipe_service.unique_names(db_session, "ballBearing") == ["BB-1"]

    def test_unknown_kind(self, db_session):
        with pytest.raises(ValidationError):
            recipe_service.unique_names(db_session, "crankshaft")


@pytest.mark.unit
class TestCrud:

    def test_duplicate_serial_on_create(self, db_session, sample_recipe):
        data = {c.name: getattr(sample_recipe, c.name) for c in Conrod.__table__.columns
                if c.name not in ("id", "created_at")}
        with pytest.raises(DuplicateError):
            recipe_service.create_conrod(db_session, data)

    def test_partial_update_keeps_other_fields(self, db_session, sample_recipe):
        recipe_service.update_conrod(db_session, sample_recipe.id, {"amount": 9})

        assert sample_recipe.amount == 9
        assert sample_recipe.pin_name == "PIN-YZF-002"

    def test_update_to_taken_serial(self, db_session, sample_recipe):
        other = create_test_conrod(db_session)
        with pytest.raises(DuplicateError):
            recipe_service.update_conrod(db_session, other.id, {"serial_number": "CR002"})

    def test_update_keeping_own_serial(self, db_session, sample_recipe):
        recipe_service.update_conrod(db_session, sample_recipe.id, {"serial_number": "CR002"})

    def test_delete_unknown(self, db_session):
        with pytest.raises(NotFoundError):
            recipe_service.delete_conrod(db_session, 42)


@pytest.mark.unit
class TestBulkImport:

    def test_all_rows_imported_with_defaults(self, db_session):
        result = recipe_service.bulk_import(db_session, [
            {"serial_number": "X1", "conrod_name": "Conrod X"},
            {"serial_number": "X2", "conrod_name": "Conrod Y", "pin_name": "PIN-Y", "amount": 3},
        ])

        assert result.errors == []
        assert len(result.imported) == 2
        first = result.imported[0]
        assert first.conrod_variant == ""
        assert first.small_end_diameter == 0.0
        assert first.amount == 0
        assert result.imported[1].pin_name == "PIN-Y"

    def test_bad_rows_reported_and_others_kept(self, db_session, sample_recipe):
        result = recipe_service.bulk_import(db_session, [
            {"serial_number": "N1", "conrod_name": "New 1"},
            {"serial_number": "CR002", "conrod_name": "Clash with table"},
            {"serial_number": "N1", "conrod_name": "Clash within batch"},
            {"conrod_name": "No serial"},
            {"serial_number": "N2", "conrod_name": "New 2"},
        ])

        assert [c.serial_number for c in result.imported] == ["N1", "N2"]
        assert [e["index"] for e in result.errors] == [1, 2, 3]
        assert result.errors[0]["serial_number"] == "CR002"
        assert "already exists" in result.errors[0]["error"]
        assert result.errors[2]["serial_number"] is None
        assert result.total == 5
        assert db_session.query(Conrod).count() == 3
