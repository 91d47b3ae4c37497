import pytest
from pydantic import ValidationError

from tech_matcher.errors import InvalidInputError
from tech_matcher.models import (
    AvailabilityStatus,
    CustomerProfile,
    JobComplexity,
    JobRequirements,
    SupplierProfile,
    TechnicianLevel,
    TechnicianProfile,
    parse_user_record,
)


def test_from_record_flattens_metadata(technician_record):
    tech = TechnicianProfile.from_record(technician_record)

    assert tech.id == "tech-123"
    assert tech.display_name == "Kwame Mensah"
    assert tech.skills == frozenset({"ac_installation", "electrical"})
    assert tech.service_areas == frozenset({"accra", "tema"})
    assert tech.availability_status == AvailabilityStatus.AVAILABLE
    assert tech.level == TechnicianLevel.SENIOR
    assert tech.max_jobs_per_day == 6
    assert tech.primary_specialization == "ac_installation"
    assert tech.has_vehicle and tech.has_tool_kit
    assert not tech.is_emergency_technician


def test_snake_case_and_camel_case_both_accepted():
    a = TechnicianProfile.model_validate({"id": "t", "serviceAreas": ["Tema"], "yearsOfExperience": 4})
    b = TechnicianProfile.model_validate({"id": "t", "service_areas": ["Tema"], "years_of_experience": 4})
    assert a == b


def test_profiles_are_frozen(base_technician):
    with pytest.raises(ValidationError):
        base_technician.level = TechnicianLevel.JUNIOR


def test_missing_fields_take_conservative_defaults():
    tech = TechnicianProfile.from_record({"uid": "t-1"})

    assert tech.skills == frozenset()
    assert tech.service_areas == frozenset()
    assert tech.availability_status == AvailabilityStatus.BUSY
    assert tech.level == TechnicianLevel.TECHNICIAN
    assert tech.current_job_ids == ()
    assert tech.max_jobs_per_day is None
    assert tech.average_rating == 0
    assert not tech.has_vehicle


def test_numeric_fields_are_clamped():
    tech = TechnicianProfile.from_record(
        {"id": "t", "averageRating": 7, "firstTimeFixRate": 140, "yearsOfExperience": -3, "maxJobsPerDay": "x"}
    )
    assert tech.average_rating == 5
    assert tech.first_time_fix_rate == 100
    assert tech.years_of_experience == 0
    assert tech.max_jobs_per_day is None


def test_job_ids_deduplicated_in_order():
    tech = TechnicianProfile.from_record({"id": "t", "currentJobIds": ["b", "a", "b", None, ""]})
    assert tech.current_job_ids == ("b", "a")
    assert tech.workload == 2


@pytest.mark.parametrize(
    "raw, expected",
    [("unavailable", AvailabilityStatus.OFFLINE), ("Available", AvailabilityStatus.AVAILABLE), (None, AvailabilityStatus.BUSY)],
)
def test_availability_aliases(raw, expected):
    assert TechnicianProfile.from_record({"availabilityStatus": raw}).availability_status == expected


def test_level_ordering_and_alias():
    assert TechnicianProfile.from_record({"level": "mid"}).level == TechnicianLevel.TECHNICIAN
    assert TechnicianLevel.LEAD.at_least(TechnicianLevel.SENIOR)
    assert not TechnicianLevel.JUNIOR.at_least(TechnicianLevel.TECHNICIAN)


def test_from_record_rejects_non_mapping():
    with pytest.raises(InvalidInputError):
        TechnicianProfile.from_record("tech-123")


def test_parse_user_record_dispatches_on_role(technician_record):
    assert isinstance(parse_user_record(technician_record), TechnicianProfile)
    assert isinstance(parse_user_record({"uid": "c", "role": "customer", "phone": "0244"}), CustomerProfile)
    assert isinstance(parse_user_record({"uid": "s", "role": "Supplier", "businessName": "CoolParts"}), SupplierProfile)


def test_customer_record_has_no_technician_fields():
    customer = parse_user_record({"uid": "c", "role": "customer", "metadata": {"skills": ["welding"]}})
    assert not hasattr(customer, "skills")


def test_parse_user_record_rejects_unknown_role():
    with pytest.raises(ValidationError):
        parse_user_record({"uid": "x", "role": "robot"})


def test_job_requirements_normalization():
    req = JobRequirements.model_validate(
        {"requiredSkills": ["AC_Repair", "ac_repair", " Electrical "], "serviceArea": " Accra ", "complexity": "weird"}
    )
    assert req.required_skills == ("ac_repair", "electrical")
    assert req.service_area == "accra"
    assert req.complexity == JobComplexity.MODERATE
    assert JobRequirements.coerce(req) is req


def test_null_id_falls_back_to_uid():
    assert TechnicianProfile.from_record({"id": None, "uid": "tech-9"}).id == "tech-9"
    assert parse_user_record({"id": None, "uid": "tech-9", "role": "technician"}).id == "tech-9"


def test_null_metadata_values_take_defaults():
    tech = TechnicianProfile.from_record(
        {"uid": "tech-9", "metadata": {"availabilityStatus": None, "maxJobsPerDay": None, "skills": None}}
    )
    assert tech.availability_status == AvailabilityStatus.BUSY
    assert tech.max_jobs_per_day is None
    assert tech.skills == frozenset()
