# empoweru/schemas/statistics.py
from pydantic import BaseModel, ConfigDict, Field


class DegreeStatistics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    total: int = Field(..., alias="Total Scholarships")
    applied: int = Field(..., alias="Applied Scholarships")
