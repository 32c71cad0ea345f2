import json
from datetime import date

import pytest
from pydantic import ValidationError

from ayusetu.integrations.clients.mocks import MockFamilyWellnessClient
from ayusetu.integrations.clients.mocks.family_wellness import body_mass_index, one_year_after
from ayusetu.integrations.contracts.family_wellness import (
    AddFamilyMemberRequest,
    CompletePreventiveCareRequest,
    CreateWellnessGoalRequest,
    LogWellnessRequest,
    UpdateFamilyMemberRequest,
    VaccinationsQuery,
    WellnessLogsQuery,
    age_group_for,
)
from ayusetu.integrations.errors import ServiceError


def test_age_groups():
    assert [age_group_for(age) for age in (0, 2, 5, 13, 20, 60)] == [
        "infant", "toddler", "child", "teen", "adult", "senior",
    ]
    assert age_group_for(59) == "adult"


def test_body_mass_index():
    assert body_mass_index(78, 175) == 25.5
    assert body_mass_index(58, 162) == 22.1


def test_one_year_after_leap_day():
    assert one_year_after(date(2024, 2, 29)) == date(2025, 2, 28)
    assert one_year_after(date(2026, 1, 15)) == date(2027, 1, 15)


def test_goal_target_must_be_positive():
    with pytest.raises(ValidationError):
        CreateWellnessGoalRequest(family_member_id="fm-001", goal_type="custom", title="t", description="d",
                                  target_value=0, unit="x", target_date="2026-12-31")


@pytest.mark.asyncio
async def test_added_member_gets_age_group(config):
    client = MockFamilyWellnessClient(config)
    born = f"{date.today().year - 3}-04-01"

    member = await client.add_family_member(
        AddFamilyMemberRequest(name="Anaya", relation="child", date_of_birth=born, gender="female")
    )

    assert member.age == 3
    assert member.age_group == "toddler"
    assert member.id in {m.id for m in await client.get_family_members()}


@pytest.mark.asyncio
async def test_update_member_recomputes_bmi(config):
    client = MockFamilyWellnessClient(config)

    updated = await client.update_family_member(
        UpdateFamilyMemberRequest(member_id="fm-002", weight=60, height=160, allergies=["Dust"])
    )

    assert updated.bmi == 23.4
    assert updated.allergies == ["Dust"]
    assert updated.name == "Priya Kumar"


@pytest.mark.asyncio
async def test_update_unknown_member_fails(config):
    client = MockFamilyWellnessClient(config)

    with pytest.raises(ServiceError, match="Member not found"):
        await client.update_family_member(UpdateFamilyMemberRequest(member_id="fm-missing", name="X"))


@pytest.mark.asyncio
async def test_vaccinations_filter(config):
    client = MockFamilyWellnessClient(config)

    child = await client.get_vaccinations(VaccinationsQuery(family_member_id="fm-003"))
    overdue = await client.get_vaccinations(VaccinationsQuery(status="overdue"))

    assert {v.id for v in child} == {"vac-001", "vac-002"}
    assert [v.id for v in overdue] == ["vac-003"]
    assert len(await client.get_vaccinations()) == 3


@pytest.mark.asyncio
async def test_vaccine_schedule_by_age_group(config):
    client = MockFamilyWellnessClient(config)

    infant = await client.get_vaccine_schedule("infant")

    assert {s.vaccine_name for s in infant} == {"BCG", "Hepatitis B"}


@pytest.mark.asyncio
async def test_wellness_logs_newest_first_within_range(config):
    client = MockFamilyWellnessClient(config)
    await client.log_wellness(LogWellnessRequest(family_member_id="fm-001", date="2026-01-16", steps=4000))
    await client.log_wellness(LogWellnessRequest(family_member_id="fm-001", date="2026-01-02", steps=9000))

    logs = await client.get_wellness_logs(WellnessLogsQuery(family_member_id="fm-001", start_date="2026-01-10"))

    assert [log.date for log in logs] == ["2026-01-16", "2026-01-14"]


@pytest.mark.asyncio
async def test_complete_preventive_care_schedules_next_year(config):
    client = MockFamilyWellnessClient(config)

    item = await client.complete_preventive_care(
        CompletePreventiveCareRequest(item_id="pc-001", completed_date="2026-02-10")
    )

    assert item.status == "completed"
    assert item.last_completed_date == "2026-02-10"
    assert item.next_due_date == "2027-02-10"


@pytest.mark.asyncio
async def test_complete_unknown_preventive_item_fails(config):
    client = MockFamilyWellnessClient(config)

    with pytest.raises(ServiceError, match="Item not found"):
        await client.complete_preventive_care(
            CompletePreventiveCareRequest(item_id="nope", completed_date="2026-01-01")
        )


@pytest.mark.asyncio
async def test_goal_progress_caps_and_marks_achieved(config):
    client = MockFamilyWellnessClient(config)
    goal = await client.create_wellness_goal(
        CreateWellnessGoalRequest(family_member_id="fm-002", goal_type="sleep", title="Sleep 8h",
                                  description="Nightly", target_value=8, unit="hours", target_date="2026-06-01")
    )
    assert goal.status == "not-started"

    halfway = await client.update_goal_progress(goal.id, 4)
    done = await client.update_goal_progress(goal.id, 10)

    assert halfway.progress_percentage == 50
    assert halfway.status == "in-progress"
    assert done.progress_percentage == 100
    assert done.status == "achieved"
    achieved = await client.get_wellness_goals("fm-002", status="achieved")
    assert [g.id for g in achieved] == [goal.id]


@pytest.mark.asyncio
async def test_unknown_goal_fails(config):
    client = MockFamilyWellnessClient(config)

    with pytest.raises(ServiceError, match="Goal not found"):
        await client.update_goal_progress("goal-missing", 1)


@pytest.mark.asyncio
async def test_live_member_update_puts_to_member_path(live_services, router):
    router.add("PUT", "/family-wellness/members/fm-1", {"oops": True})

    with pytest.raises(ServiceError, match="Failed to update family member"):
        await live_services.family_wellness.update_family_member(
            UpdateFamilyMemberRequest(member_id="fm-1", weight=70)
        )

    assert json.loads(router.last("PUT", "/family-wellness/members/fm-1").content) == {"weight": 70}


@pytest.mark.asyncio
async def test_live_logs_and_goal_progress_wire(live_services, router):
    router.add("GET", "/family-wellness/wellness-logs", [])
    router.add("PUT", "/family-wellness/goals/g-1/progress", {})

    await live_services.family_wellness.get_wellness_logs(
        WellnessLogsQuery(family_member_id="fm-1", end_date="2026-01-31")
    )
    with pytest.raises(ServiceError):
        await live_services.family_wellness.update_goal_progress("g-1", 3.5)

    params = router.last("GET", "/family-wellness/wellness-logs").url.params
    assert params["familyMemberId"] == "fm-1"
    assert params["endDate"] == "2026-01-31"
    assert "startDate" not in params
    body = json.loads(router.last("PUT", "/family-wellness/goals/g-1/progress").content)
    assert body == {"currentValue": 3.5}
