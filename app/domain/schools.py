"""Domain models for schools and response coverage."""
from app.domain.forms import CamelModel


class School(CamelModel):
    """A school, keyed by its 11-digit UDISE code."""
    udise_code: str
    school_name: str
    district_name: str
    taluka_name: str


class DistrictCoverage(CamelModel):
    """How many of a district's schools have submitted responses."""
    name: str
    school_count: int
    response_count: int
    completion_rate: int


class TalukaCoverage(DistrictCoverage):
    district: str


class DashboardStats(CamelModel):
    total_schools: int
    total_forms: int
    total_responses: int
