"""Tests for engine state JSON export and import."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from periodization_engine.errors import PlanImportError
from periodization_engine.models.athlete import AthleteProfile
from periodization_engine.models.enums import (
    EXPORT_FORMAT_VERSION,
    AdaptationType,
    RecommendationPriority,
)
from periodization_engine.models.journal import AdaptationJournal, AdaptationJournalEntry
from periodization_engine.models.plan import Plan
from periodization_engine.models.recommendation import AdaptationRecommendation
from periodization_engine.serialization.plan_json import (
    from_document,
    from_json_string,
    plan_to_dict,
    to_document,
    to_json_string,
)

EXPORTED_AT = datetime(2026, 2, 1, 9, 30, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _journal() -> AdaptationJournal:
    rec = AdaptationRecommendation(
        type=AdaptationType.DELOAD,
        priority=RecommendationPriority.HIGH,
        rationale="High fatigue detected",
        actions=("reduce_volume_40_percent",),
        confidence=0.72,
        volume_adjustment=-0.4,
        intensity_adjustment=-0.15,
        duration_weeks=1,
        source="fatigue_trend",
    )
    entry = AdaptationJournalEntry(
        week=3,
        timestamp=datetime(2026, 1, 20, 7, 0, tzinfo=timezone.utc),
        recommendations=(rec,),
        confidence=0.72,
        description="Emergency deload",
        system_wide=True,
        plan_revision=2,
    )
    return AdaptationJournal().append(entry)


def _document(plan: Plan, profile: AthleteProfile | None = None) -> dict:
    return to_document(plan, _journal(), 1.2, EXPORTED_AT, profile)


def _import_error(document: object) -> PlanImportError:
    with pytest.raises(PlanImportError) as exc_info:
        from_document(document)
    return exc_info.value


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


class TestExport:
    def test_document_header(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        assert doc["version"] == EXPORT_FORMAT_VERSION == "1.0"
        assert doc["athlete_id"] == "lifter-1"
        assert doc["exported_at"] == "2026-02-01T09:30:00+00:00"
        assert doc["sensitivity"] == 1.2
        assert "profile" not in doc

    def test_enums_written_by_name(self, block_plan: Plan) -> None:
        plan = plan_to_dict(block_plan)
        assert plan["selection"]["key"] == "BLOCK"
        assert plan["macrocycle"]["model_key"] == "BLOCK"
        assert plan["macrocycle"]["start_date"] == "2026-01-05"
        assert _document(block_plan)["journal"][0]["recommendations"][0]["type"] == "DELOAD"

    def test_week_without_competition(self, block_plan: Plan) -> None:
        week = plan_to_dict(block_plan)["microcycles"][0]
        assert week["week"] == 1
        assert week["competition_prep"] is None
        assert week["taper_week"] is None

    def test_json_string_is_valid_json(self, meet_plan: Plan) -> None:
        text = to_json_string(meet_plan, AdaptationJournal(), 1.0, EXPORTED_AT)
        assert json.loads(text)["plan"]["revision"] == 1
        assert "\n  " in text


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


class TestRoundTrip:
    def test_block_plan(self, block_plan: Plan) -> None:
        state = from_document(_document(block_plan))
        assert state.plan == block_plan
        assert state.journal == _journal()
        assert state.sensitivity == 1.2
        assert state.exported_at == EXPORTED_AT
        assert state.profile is None

    def test_competition_prep_survives(self, meet_plan: Plan) -> None:
        text = to_json_string(meet_plan, _journal(), 1.2, EXPORTED_AT)
        state = from_json_string(text)
        assert state.plan == meet_plan
        taper = state.plan.microcycle_for_week(11)
        assert taper.is_taper_week
        assert taper.competition_prep.competition_name == "National Championships"

    def test_profile_included(
        self, block_plan: Plan, advanced_powerlifter: AthleteProfile
    ) -> None:
        state = from_document(_document(block_plan, advanced_powerlifter))
        assert state.profile == advanced_powerlifter


class TestImportValidation:
    def test_invalid_json(self) -> None:
        with pytest.raises(PlanImportError, match="Invalid JSON"):
            from_json_string("{not json")

    def test_not_an_object(self) -> None:
        error = _import_error(["1.0"])
        assert error.path == "$"
        assert "Expected an object" in str(error)

    def test_unsupported_version(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        doc["version"] = "2.0"
        error = _import_error(doc)
        assert error.path == "$.version"
        assert "Unsupported format version" in str(error)

    def test_missing_field_names_path(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        del doc["plan"]["microcycles"][2]["target_rpe"]
        error = _import_error(doc)
        assert error.path == "$.plan.microcycles[2].target_rpe"
        assert str(error) == "$.plan.microcycles[2].target_rpe: Missing field"

    def test_deload_taper_conflict(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        assert doc["plan"]["microcycles"][3]["is_deload_week"]
        doc["plan"]["microcycles"][3]["is_taper_week"] = True
        error = _import_error(doc)
        assert error.path == "$.plan.microcycles[3]"
        assert "both deload and taper" in str(error)

    def test_missing_week(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        del doc["plan"]["microcycles"][7]
        assert _import_error(doc).path == "$.plan.microcycles"

    def test_confidence_out_of_range(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        doc["journal"][0]["recommendations"][0]["confidence"] = 1.5
        error = _import_error(doc)
        assert error.path == "$.journal[0].recommendations[0].confidence"

    def test_integer_is_not_a_boolean(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        doc["plan"]["microcycles"][0]["is_deload_week"] = 0
        error = _import_error(doc)
        assert "Expected a boolean" in str(error)

    def test_unknown_enum_name(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        doc["plan"]["selection"]["key"] = "MYSTERY"
        assert _import_error(doc).path == "$.plan.selection.key"

    def test_non_positive_sensitivity(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        doc["sensitivity"] = 0
        assert _import_error(doc).path == "$.sensitivity"

    def test_nan_multiplier_rejected(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        doc["plan"]["microcycles"][0]["volume_multiplier"] = float("nan")
        error = _import_error(doc)
        assert error.path == "$.plan.microcycles[0].volume_multiplier"
        assert "Expected a finite number" in str(error)

    def test_infinite_sensitivity_in_json_rejected(self, block_plan: Plan) -> None:
        text = to_json_string(block_plan, _journal(), 1.2, EXPORTED_AT)
        text = text.replace('"sensitivity": 1.2', '"sensitivity": Infinity')
        with pytest.raises(PlanImportError) as exc_info:
            from_json_string(text)
        assert exc_info.value.path == "$.sensitivity"

    def test_mismatched_athlete(self, block_plan: Plan) -> None:
        doc = _document(block_plan)
        doc["athlete_id"] = "someone-else"
        assert _import_error(doc).path == "$.plan.athlete_id"
