import json
from datetime import date

import pytest

from ayusetu.integrations.clients.mocks import MockInsightsClient
from ayusetu.integrations.clients.mocks.insights import summarize_lifestyle
from ayusetu.integrations.contracts.insights import (
    ExerciseEntry,
    LifestyleEntry,
    LifestyleEntryInput,
    MedicationInput,
    SymptomInput,
    WaterEntry,
)
from ayusetu.integrations.errors import ServiceError


def test_parsed_data_follows_category():
    water = LifestyleEntryInput(date="2026-01-14", category="water", data={"glasses": 6, "totalML": 1500})

    assert water.parsed_data() == WaterEntry(glasses=6, total_ml=1500)


def test_summary_only_counts_entries_for_the_day():
    entries = [
        LifestyleEntry(id="a", date="2026-01-14", category="diet", data={"mealType": "lunch", "calories": 600}),
        LifestyleEntry(id="b", date="2026-01-14", category="stress", data={"level": 4}),
        LifestyleEntry(id="c", date="2026-01-14", category="stress", data={"level": 7}),
        LifestyleEntry(id="d", date="2026-01-14", category="habit", data={"habitName": "Meditate", "completed": True}),
        LifestyleEntry(id="e", date="2026-01-14", category="habit", data={"habitName": "Read", "completed": False}),
        LifestyleEntry(id="f", date="2026-01-13", category="diet", data={"mealType": "dinner", "calories": 900}),
    ]

    summary = summarize_lifestyle("2026-01-14", entries)

    assert summary.total_calories_consumed == 600
    assert summary.stress_level == 5.5
    assert (summary.habits_completed, summary.habits_total) == (1, 2)


@pytest.mark.asyncio
async def test_trends_filter_by_metric(config):
    client = MockInsightsClient(config)

    trends = await client.get_health_trends(["bp_systolic", "weight"])

    assert [t.metric for t in trends] == ["bp_systolic", "weight"]
    assert len(await client.get_health_trends()) == 3


@pytest.mark.asyncio
async def test_insights_filter_by_category(config):
    client = MockInsightsClient(config)

    activity = await client.get_health_insights("activity")

    assert [i.id for i in activity] == ["insight-002"]
    assert await client.get_health_insights("symptoms") == []


@pytest.mark.asyncio
async def test_create_tracker_is_listed(config):
    client = MockInsightsClient(config)

    tracker = await client.create_disease_tracker("diabetes", "Type 2 Diabetes")

    assert tracker.status == "active"
    assert tracker.metrics == []
    assert tracker.start_date == date.today().isoformat()
    assert [t.id for t in await client.get_disease_trackers()] == ["tracker-001", tracker.id]


@pytest.mark.asyncio
async def test_update_tracker_metric(config):
    client = MockInsightsClient(config)

    updated = await client.update_tracker_metric("tracker-001", "Systolic BP", 132)
    untouched = await client.update_tracker_metric("tracker-001", "Heart Rate", 70)

    systolic = next(m for m in updated.metrics if m.name == "Systolic BP")
    assert systolic.value == 132
    assert systolic.last_recorded == date.today().isoformat()
    assert [m.name for m in untouched.metrics] == ["Systolic BP", "Diastolic BP"]
    assert untouched.last_updated != "2026-01-14"


@pytest.mark.asyncio
async def test_update_unknown_tracker_fails(config):
    client = MockInsightsClient(config)

    with pytest.raises(ServiceError, match="Tracker not found"):
        await client.update_tracker_metric("tracker-missing", "Systolic BP", 120)


@pytest.mark.asyncio
async def test_added_medication_is_listed(config):
    client = MockInsightsClient(config)

    added = await client.add_medication(
        MedicationInput(name="Atorvastatin", dosage="10mg", frequency="Once daily at night", start_date="2026-01-15",
                        prescribed_by="Dr. Rajesh Kumar", purpose="Cholesterol", instructions="After dinner")
    )
    log = await client.log_medication_taken(added.id, taken_time="2026-01-15T21:05:00Z")

    assert added.id in {m.id for m in await client.get_medications()}
    assert log.status == "taken"
    assert log.taken_time == "2026-01-15T21:05:00Z"


@pytest.mark.asyncio
async def test_lifestyle_summary_is_computed_from_entries(config):
    client = MockInsightsClient(config)

    before = await client.get_lifestyle_summary("2026-01-14")
    await client.add_lifestyle_entry(
        LifestyleEntryInput(date="2026-01-14", category="exercise",
                            data={"type": "Cycling", "duration": 20, "intensity": "vigorous", "caloriesBurned": 200})
    )
    after = await client.get_lifestyle_summary("2026-01-14")

    assert before.total_calories_burned == 150
    assert before.exercise_duration == 30
    assert before.sleep_duration == 6.5
    assert before.stress_level == 0
    assert after.total_calories_burned == 350
    assert after.exercise_duration == 50
    assert (await client.get_lifestyle_summary("2026-01-20")).exercise_duration == 0


@pytest.mark.asyncio
async def test_invalid_lifestyle_entry_is_rejected(config):
    client = MockInsightsClient(config)

    with pytest.raises(ServiceError, match="Invalid lifestyle entry"):
        await client.add_lifestyle_entry(
            LifestyleEntryInput(date="2026-01-15", category="stress", data={"level": 11})
        )

    assert len(await client.get_lifestyle_entries()) == 2


@pytest.mark.asyncio
async def test_lifestyle_entries_keep_typed_payload(config):
    client = MockInsightsClient(config)

    entries = await client.get_lifestyle_entries(start_date="2026-01-14", end_date="2026-01-14")

    exercise = next(e for e in entries if e.category == "exercise")
    assert isinstance(exercise.parsed_data(), ExerciseEntry)
    assert exercise.parsed_data().calories_burned == 150


@pytest.mark.asyncio
async def test_symptoms_filter_by_date(config):
    client = MockInsightsClient(config)
    await client.add_symptom(SymptomInput(date="2026-01-15", symptom="Fatigue", severity=5))

    recent = await client.get_symptoms(start_date="2026-01-13")
    early = await client.get_symptoms(end_date="2026-01-12")

    assert [s.symptom for s in recent] == ["Headache", "Fatigue"]
    assert [s.id for s in early] == ["symp-002"]


@pytest.mark.asyncio
async def test_live_trends_join_metrics(live_services, router):
    router.add("GET", "/v1/insights/trends", [])

    await live_services.insights.get_health_trends(["bp_systolic", "weight"])

    assert router.last("GET", "/v1/insights/trends").url.params["metrics"] == "bp_systolic,weight"


@pytest.mark.asyncio
async def test_live_medication_log_and_tracker_bodies(live_services, router):
    router.add("POST", "/v1/insights/medications/med-1/log", {
        "id": "log-1", "medicationId": "med-1", "scheduledTime": "2026-01-15T09:00:00Z", "status": "taken",
    })
    router.add("PUT", "/v1/insights/trackers/t-1/metrics", {"oops": True})

    log = await live_services.insights.log_medication_taken("med-1")
    with pytest.raises(ServiceError, match="Failed to update tracker metric"):
        await live_services.insights.update_tracker_metric("t-1", "Systolic BP", 128)

    assert log.medication_id == "med-1"
    assert json.loads(router.last("POST", "/v1/insights/medications/med-1/log").content) == {"status": "taken"}
    body = json.loads(router.last("PUT", "/v1/insights/trackers/t-1/metrics").content)
    assert body == {"metricName": "Systolic BP", "value": 128}
