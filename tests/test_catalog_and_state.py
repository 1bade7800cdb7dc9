"""
Tests for the plan catalog, upload validation, persisted state and journals.

Covers:
- Upload validation messages (first violation wins)
- Catalog merge/shadowing, lookup fallback, upsert ordering, removal
- State sanitising, stores, and session logging
"""

import json
import tempfile
from pathlib import Path

import pytest

from training_os.core.catalog import PlanCatalog
from training_os.core.journal import (
    complete_session,
    entries_by_date,
    record_session,
    record_soreness,
)
from training_os.core.models import AppState, WorkoutLogEntry
from training_os.core.planner import plan_session, session_title
from training_os.core.plans import BUILTIN_PLANS
from training_os.core.resolver import resolve_workout
from training_os.core.settings import load_settings
from training_os.io.serializers import (
    ValidationError,
    app_state_to_dict,
    dict_to_app_state,
    dict_to_plan,
    is_plan_shape_safe,
    parse_soreness_pairs,
    validate_mode,
    validate_uploaded_plan,
)
from training_os.io.state_store import DataDir, PlanStore, StateStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def catalog(temp_dir):
    return PlanCatalog(PlanStore(temp_dir / "plans.json"))


def _upload_doc(plan_id: str = "my-plan", **overrides) -> dict:
    doc = {
        "id": plan_id,
        "name": "My plan",
        "kind": "static",
        "dayKeys": ["A", "B"],
        "days": {
            "A": {
                "title": "Upper",
                "items": [
                    {"id": "a1", "slot": "prep", "name": "Band pull-aparts", "dose": "2×15"},
                    {"id": "a2", "slot": "strength", "name": "Push-ups", "dose": "3×12"},
                    {"id": "a3", "slot": "finish", "name": "Plank", "dose": "3×30s"},
                ],
            },
            "B": {"title": "Lower", "items": []},
        },
    }
    doc.update(overrides)
    return doc


def _entry(date_key: str, day: str = "A", plan_id: str = "functional-fitness-45") -> WorkoutLogEntry:
    return WorkoutLogEntry(date_key=date_key, plan_id=plan_id, day=day, mode="base", title=f"Day {day}")


# =============================================================================
# Upload validation
# =============================================================================


class TestValidateUpload:
    def test_valid_plan(self):
        assert validate_uploaded_plan(_upload_doc()) is None

    @pytest.mark.parametrize(
        "doc,reason",
        [
            ([], "Plan must be a JSON object"),
            ("plan", "Plan must be a JSON object"),
            (None, "Plan must be a JSON object"),
        ],
    )
    def test_non_object(self, doc, reason):
        assert validate_uploaded_plan(doc) == reason

    def test_missing_id(self):
        assert validate_uploaded_plan(_upload_doc(id=None)) == "Plan requires string id"

    def test_missing_name(self):
        assert validate_uploaded_plan(_upload_doc(name="")) == "Plan requires string name"

    def test_icon_must_be_string(self):
        assert validate_uploaded_plan(_upload_doc(icon=5)) == "Plan.icon must be a string if provided"

    def test_generated_kind_rejected(self):
        reason = validate_uploaded_plan(_upload_doc(kind="generated_v1"))
        assert reason == "Only static plans are supported for upload (kind: 'static')"

    def test_missing_kind_rejected(self):
        doc = _upload_doc()
        del doc["kind"]
        assert "Only static plans" in validate_uploaded_plan(doc)

    def test_empty_day_keys(self):
        assert validate_uploaded_plan(_upload_doc(dayKeys=[])) == "Plan requires dayKeys array"

    def test_non_string_day_keys(self):
        reason = validate_uploaded_plan(_upload_doc(dayKeys=["A", 2]))
        assert reason == "Plan dayKeys must be non-empty strings"

    def test_days_must_be_object(self):
        assert validate_uploaded_plan(_upload_doc(days=[])) == "Plan requires days object"

    def test_missing_day(self):
        assert validate_uploaded_plan(_upload_doc(dayKeys=["A", "B", "C"])) == "Missing days['C']"

    def test_title_must_be_string(self):
        doc = _upload_doc()
        doc["days"]["B"]["title"] = 3
        assert validate_uploaded_plan(doc) == "days['B'].title must be a string"

    def test_empty_object_day_reports_title(self):
        doc = _upload_doc()
        doc["days"]["B"] = {}
        assert validate_uploaded_plan(doc) == "days['B'].title must be a string"

    def test_items_must_be_array(self):
        doc = _upload_doc()
        doc["days"]["A"]["items"] = {}
        assert validate_uploaded_plan(doc) == "days['A'].items must be an array"

    def test_first_violation_wins(self):
        doc = _upload_doc(name="", kind="generated_v1")
        assert validate_uploaded_plan(doc) == "Plan requires string name"

    def test_accepted_upload_passes_shape_filter(self):
        assert is_plan_shape_safe(_upload_doc())


# =============================================================================
# Catalog
# =============================================================================


class TestCatalog:
    def test_builtins_listed_first(self, catalog):
        catalog.upload(_upload_doc())
        ids = [p.id for p in catalog.list_all()]
        assert ids[: len(BUILTIN_PLANS)] == [p.id for p in BUILTIN_PLANS]
        assert ids[-1] == "my-plan"

    def test_find_unknown_returns_default(self, catalog):
        assert catalog.find("does-not-exist").id == BUILTIN_PLANS[0].id
        assert catalog.find(None).id == BUILTIN_PLANS[0].id

    def test_user_plan_shadows_builtin(self, catalog):
        catalog.upload(_upload_doc("midday-tuneup", name="My midday"))
        found = catalog.find("midday-tuneup")
        assert found.name == "My midday"
        assert [p.id for p in catalog.list_all()].count("midday-tuneup") == 1

    def test_invalid_upload_not_persisted(self, catalog, temp_dir):
        with pytest.raises(ValidationError, match="Plan requires string name"):
            catalog.upload(_upload_doc(name=""))
        assert not (temp_dir / "plans.json").exists()
        assert catalog.user_plans() == []

    def test_upsert_replaces_in_place_and_prepends_new(self, catalog):
        catalog.upload(_upload_doc("one"))
        catalog.upload(_upload_doc("two"))
        assert [p.id for p in catalog.user_plans()] == ["two", "one"]

        catalog.upload(_upload_doc("one", name="Renamed"))
        plans = catalog.user_plans()
        assert [p.id for p in plans] == ["two", "one"]
        assert plans[1].name == "Renamed"

    def test_remove(self, catalog):
        catalog.upload(_upload_doc())
        assert catalog.remove("my-plan") is True
        assert catalog.remove("my-plan") is False
        assert catalog.remove(BUILTIN_PLANS[0].id) is False

    def test_clear_user_plans(self, catalog):
        catalog.upload(_upload_doc())
        catalog.clear_user_plans()
        assert catalog.user_plans() == []

    def test_export_round_trip_validates(self, catalog):
        for plan in catalog.builtins:
            if plan.kind == "static":
                exported = json.loads(catalog.export_plan_json(plan))
                assert exported == catalog.export_plan(plan)
                assert validate_uploaded_plan(exported) is None
                assert dict_to_plan(exported) == plan

    def test_legacy_bonus_key_read(self):
        doc = _upload_doc(highPerformanceExtraByDay={"A": {"id": "x", "name": "Thruster", "dose": "5×4"}})
        plan = dict_to_plan(doc)
        assert plan.bonus_by_day["A"].name == "Thruster"

    def test_slot_aliases_and_unknown_slots(self):
        doc = _upload_doc()
        doc["days"]["B"]["items"] = [
            {"name": "Jog", "dose": "5 min", "slot": "warm-up"},
            {"name": "Stretch", "dose": "5 min", "slot": "finisher"},
            {"name": "Mystery", "dose": "1×1", "slot": "bogus"},
        ]
        items = dict_to_plan(doc).days["B"].items
        assert [i.slot for i in items] == ["prep", "finish", "strength"]
        assert items[0].id == "b1"

    def test_corrupt_records_dropped_silently(self, temp_dir):
        path = temp_dir / "plans.json"
        path.write_text(
            json.dumps([_upload_doc("ok"), {"id": "broken"}, "junk", _upload_doc("blank", dayKeys=[])])
        )
        store = PlanStore(path)
        assert [p.id for p in store.load_plans()] == ["ok"]

    def test_generated_user_record_dropped(self, temp_dir, catalog):
        path = temp_dir / "plans.json"
        path.write_text(
            json.dumps(
                [{"id": "functional-fitness-45", "name": "Hijack", "kind": "generated_v1", "dayKeys": ["A", "B"]}]
            )
        )
        assert PlanStore(path).load_plans() == []

        default = catalog.find("functional-fitness-45")
        assert default == BUILTIN_PLANS[0]
        assert resolve_workout(default, "A", "base").day == "A"

    def test_generated_kind_only_with_allow_flag(self):
        doc = {"id": "gen", "name": "Gen", "kind": "generated_v1", "dayKeys": ["A", "B", "C", "D"]}
        assert not is_plan_shape_safe(doc)
        assert is_plan_shape_safe(doc, allow_generated=True)
        with pytest.raises(ValidationError):
            dict_to_plan(doc)
        assert dict_to_plan(doc, allow_generated=True).kind == "generated_v1"

    def test_unreadable_plans_file(self, temp_dir):
        path = temp_dir / "plans.json"
        path.write_text("{not json")
        assert PlanStore(path).load_plans() == []


# =============================================================================
# State sanitising and stores
# =============================================================================


class TestAppStateSerialisation:
    def test_defaults_for_non_object(self):
        assert dict_to_app_state("nope") == AppState()
        assert dict_to_app_state(None).active_plan_id == "functional-fitness-45"

    def test_bad_fields_replaced(self):
        state = dict_to_app_state(
            {
                "lastDay": 7,
                "soreness": {"rotation": "purple", "single_leg": "yellow"},
                "workoutLog": [
                    {"dateISO": "2026-03-02", "planId": "x", "day": "B", "mode": "weird"},
                    {"planId": "missing-date"},
                    "junk",
                ],
                "sorenessLog": "not a list",
                "activePlanId": "",
            }
        )
        assert state.last_day is None
        assert state.soreness == {"single_leg": "yellow"}
        assert len(state.workout_log) == 1
        assert state.workout_log[0].mode == "base"
        assert state.soreness_log == ()
        assert state.active_plan_id == "functional-fitness-45"

    def test_round_trip(self):
        state = AppState(
            last_day="C",
            soreness={"shoulder_stability": "red"},
            workout_log=(_entry("2026-03-02", "C"),),
            active_plan_id="midday-tuneup",
            day_override="A",
        )
        assert dict_to_app_state(app_state_to_dict(state)) == state

    def test_wire_keys(self):
        d = app_state_to_dict(AppState(last_day="B"))
        assert set(d) == {
            "lastDay",
            "soreness",
            "sorenessLog",
            "workoutLog",
            "activePlanId",
            "dayOverride",
        }


class TestStateStore:
    def test_missing_file_gives_defaults(self, temp_dir):
        store = StateStore(temp_dir / "state.json")
        assert not store.exists()
        assert store.load() == AppState()

    def test_corrupt_file_gives_defaults(self, temp_dir):
        path = temp_dir / "state.json"
        path.write_text("{{{")
        assert StateStore(path).load() == AppState()

    def test_save_full_state(self, temp_dir):
        store = StateStore(temp_dir / "state.json")
        store.save(AppState(last_day="B", active_plan_id="midday-tuneup"))
        loaded = store.load()
        assert loaded.last_day == "B"
        assert loaded.active_plan_id == "midday-tuneup"

    def test_save_patch_merges(self, temp_dir):
        store = StateStore(temp_dir / "state.json")
        store.save(AppState(last_day="B", soreness={"rotation": "yellow"}))
        store.save(day_override="D")
        loaded = store.load()
        assert loaded.last_day == "B"
        assert loaded.soreness == {"rotation": "yellow"}
        assert loaded.day_override == "D"

    def test_unknown_patch_field(self, temp_dir):
        with pytest.raises(ValidationError):
            StateStore(temp_dir / "state.json").save(favourite_colour="blue")

    def test_reset(self, temp_dir):
        store = StateStore(temp_dir / "state.json")
        store.save(AppState(last_day="B"))
        store.reset()
        assert store.load() == AppState()


class TestLoadNotes:
    def test_set_get_and_overwrite(self, temp_dir):
        data = DataDir(temp_dir)
        assert data.load_notes.get("KB swings") == ""
        data.load_notes.set("KB swings", "24kg")
        data.load_notes.set("KB swings", "28kg")
        assert data.load_notes.get("KB swings") == "28kg"

    def test_reset_all_clears_everything(self, temp_dir):
        data = DataDir(temp_dir)
        data.load_notes.set("KB swings", "24kg")
        data.state.save(AppState(last_day="A"))
        PlanCatalog(data.plans).upload(_upload_doc())

        data.reset_all()
        assert data.load_notes.load_all() == {}
        assert not data.state.exists()
        assert data.plans.load_plans() == []


# =============================================================================
# Journals and session planning
# =============================================================================


class TestJournal:
    def test_same_date_overwrites(self):
        log = record_session((), _entry("2026-03-02", "A"))
        log = record_session(log, _entry("2026-03-02", "B"))
        assert len(log) == 1
        assert log[0].day == "B"

    def test_newest_first(self):
        log = ()
        for d in ["2026-03-03", "2026-03-01", "2026-03-02"]:
            log = record_session(log, _entry(d))
        assert [e.date_key for e in log] == ["2026-03-03", "2026-03-02", "2026-03-01"]

    def test_soreness_same_date_overwrites(self):
        log = record_soreness((), "2026-03-02", {"shoulder_stability": "yellow"})
        log = record_soreness(log, "2026-03-02", {"shoulder_stability": "red"})
        assert len(log) == 1
        assert log[0].soreness == {"shoulder_stability": "red"}

    def test_soreness_newest_first(self):
        log = ()
        for d in ["2026-03-03", "2026-03-01", "2026-03-02"]:
            log = record_soreness(log, d, {"single_leg": "green"})
        assert [e.date_key for e in log] == ["2026-03-03", "2026-03-02", "2026-03-01"]

    def test_soreness_snapshot_copied(self):
        current = {"rotation": "yellow"}
        log = record_soreness((), "2026-03-02", current)
        current["rotation"] = "red"
        assert log[0].soreness == {"rotation": "yellow"}

    def test_entries_by_date_first_wins(self):
        log = [_entry("2026-03-02", "B"), _entry("2026-03-02", "A")]
        assert entries_by_date(log)["2026-03-02"].day == "B"

    def test_complete_session(self, catalog):
        state = AppState(last_day="A", day_override="C")
        session = plan_session(state, catalog, "base")
        assert session.day_key == "C"
        assert session.forced

        new_state = complete_session(
            state,
            plan=session.plan,
            workout=session.workout,
            mode="base",
            soreness={"shoulder_stability": "red"},
            date_key="2026-03-02",
            title=session.title,
        )
        assert new_state.last_day == "C"
        assert new_state.day_override is None
        assert new_state.soreness == {"shoulder_stability": "red"}
        assert new_state.soreness_log[0].date_key == "2026-03-02"
        assert new_state.workout_log[0].items == session.workout.items
        assert new_state.workout_log[0].title == "Day C — Shoulders + Control"
        assert state.day_override == "C"  # input untouched

    def test_red_shoulders_change_next_session(self, catalog):
        state = AppState(last_day="B", soreness={"shoulder_stability": "red"})
        session = plan_session(state, catalog, "base")
        assert session.day_key == "D"
        assert session.workout.day == "D"
        assert not session.forced

    def test_session_title(self, catalog):
        fixed = catalog.find("functional-fitness-45-fixed")
        assert session_title(fixed, "A") == "Day A — Accel + Rotation 🔥"


# =============================================================================
# Scalar parsing and settings
# =============================================================================


class TestScalars:
    @pytest.mark.parametrize("raw,expected", [("hp", "high_performance"), ("Standard", "base")])
    def test_mode_aliases(self, raw, expected):
        assert validate_mode(raw) == expected

    def test_unknown_mode(self):
        with pytest.raises(ValidationError):
            validate_mode("turbo")

    def test_soreness_pairs(self):
        result = parse_soreness_pairs(["shoulder-stability=red", "single_leg=yellow,rotation=green"])
        assert result == {"shoulder_stability": "red", "single_leg": "yellow", "rotation": "green"}

    @pytest.mark.parametrize("pair", ["shoulders=red", "rotation=purple", "rotation"])
    def test_bad_soreness_pairs(self, pair):
        with pytest.raises(ValidationError):
            parse_soreness_pairs([pair])


class TestSettings:
    def test_defaults(self, temp_dir):
        settings = load_settings(temp_dir)
        assert settings["default_mode"] == "base"
        assert settings["default_plan_id"] == "functional-fitness-45"

    def test_user_overrides(self, temp_dir):
        (temp_dir / "settings.yaml").write_text(
            "default_mode: high_performance\nshow_descriptions: false\nunknown: 1\n"
        )
        settings = load_settings(temp_dir)
        assert settings["default_mode"] == "high_performance"
        assert settings["show_descriptions"] is False
        assert "unknown" not in settings

    def test_partial_override_keeps_other_defaults(self, temp_dir):
        (temp_dir / "settings.yaml").write_text("default_plan_id: midday-tuneup\n")
        settings = load_settings(temp_dir)
        assert settings == {
            "default_mode": "base",
            "default_plan_id": "midday-tuneup",
            "show_descriptions": True,
        }

    def test_invalid_values_ignored(self, temp_dir):
        (temp_dir / "settings.yaml").write_text("default_mode: turbo\n")
        assert load_settings(temp_dir)["default_mode"] == "base"

    def test_unparseable_file_warns(self, temp_dir):
        (temp_dir / "settings.yaml").write_text("default_mode: [unclosed\n")
        with pytest.warns(UserWarning):
            settings = load_settings(temp_dir)
        assert settings["default_mode"] == "base"
