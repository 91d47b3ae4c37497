"""
Pytest configuration and shared fixtures.
"""

import logging
from typing import Any, Dict

import pytest

from tech_matcher.logger import ROOT_LOGGER
from tech_matcher.models import TechnicianProfile


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """configure_logging() attaches handlers to a process-wide logger; detach them after each test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def technician_record() -> Dict[str, Any]:
    """Stored technician document: identity at the top, role fields under metadata."""
    return {
        "uid": "tech-123",
        "email": "tech@example.com",
        "role": "technician",
        "displayName": "Kwame Mensah",
        "metadata": {
            "skills": ["ac_installation", "electrical"],
            "serviceAreas": ["Accra", "Tema"],
            "availabilityStatus": "available",
            "currentJobIds": [],
            "maxJobsPerDay": 6,
            "level": "senior",
            "yearsOfExperience": 6,
            "certifications": [],
            "primarySpecialization": "ac_installation",
            "isTeamLead": False,
            "totalJobsCompleted": 40,
            "totalJobsAssigned": 50,
            "averageRating": 4.8,
            "firstTimeFixRate": 92,
            "averageJobDuration": 2.5,
            "hasVehicle": True,
            "hasToolKit": True,
            "isEmergencyTechnician": False,
        },
    }


@pytest.fixture
def base_technician(technician_record) -> TechnicianProfile:
    return TechnicianProfile.from_record(technician_record)


@pytest.fixture
def make_technician():
    """
    Factory for flat technician profiles. Defaults describe an available,
    mid-level technician in Accra with no jobs and an unremarkable record.
    """

    def _make(**overrides) -> TechnicianProfile:
        data = {
            "id": "tech-1",
            "display_name": "Test Tech",
            "skills": ["ac_repair"],
            "service_areas": ["Accra"],
            "availability_status": "available",
            "level": "technician",
            "years_of_experience": 3,
            "current_job_ids": [],
            "max_jobs_per_day": 4,
            "average_rating": 4.0,
            "first_time_fix_rate": 80,
        }
        data.update(overrides)
        return TechnicianProfile.model_validate(data)

    return _make
