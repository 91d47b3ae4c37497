import pytest

from tech_matcher.errors import InvalidInputError
from tech_matcher.filtering import capacity_of, filter_candidates, is_at_capacity


def test_excludes_offline(make_technician):
    roster = [
        make_technician(id="a"),
        make_technician(id="b", availability_status="offline"),
        make_technician(id="c", availability_status="unavailable"),
    ]
    assert [t.id for t in filter_candidates(roster)] == ["a"]


def test_keeps_busy_and_emergency(make_technician):
    roster = [
        make_technician(id="a", availability_status="busy"),
        make_technician(id="b", availability_status="emergency"),
    ]
    assert [t.id for t in filter_candidates(roster)] == ["a", "b"]


def test_excludes_at_capacity(make_technician):
    roster = [
        make_technician(id="full", current_job_ids=["1", "2"], max_jobs_per_day=2),
        make_technician(id="room", current_job_ids=["1"], max_jobs_per_day=2),
        make_technician(id="zero", max_jobs_per_day=0),
    ]
    assert [t.id for t in filter_candidates(roster)] == ["room"]


def test_missing_capacity_uses_default(make_technician):
    tech = make_technician(max_jobs_per_day=None, current_job_ids=["1", "2", "3"])

    assert capacity_of(tech) == 8
    assert not is_at_capacity(tech)
    assert is_at_capacity(tech, default_max_jobs_per_day=3)
    assert filter_candidates([tech], default_max_jobs_per_day=3) == []


def test_does_not_filter_on_skills_or_area(make_technician):
    roster = [make_technician(id="x", skills=["welding"], service_areas=["Kumasi"])]
    assert len(filter_candidates(roster)) == 1


def test_preserves_input_order(make_technician):
    ids = ["z", "a", "m", "b"]
    roster = [make_technician(id=i) for i in ids]
    assert [t.id for t in filter_candidates(roster)] == ids


def test_accepts_raw_records(technician_record):
    out = filter_candidates([technician_record])
    assert out[0].id == "tech-123"


@pytest.mark.parametrize("bad", [None, "tech-1", {"id": "tech-1"}, 42])
def test_rejects_non_collections(bad):
    with pytest.raises(InvalidInputError):
        filter_candidates(bad)


def test_rejects_non_record_members():
    with pytest.raises(InvalidInputError):
        filter_candidates([["not", "a", "record"]])
