from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    basic = "Basic"
    intermediate = "Intermediate"
    advanced = "Advanced"


class RoadmapRequest(BaseModel):
    domain: str = Field(default="", description="Domaine à apprendre, ex: 'Machine Learning'")
    difficulty: Optional[Difficulty] = Field(default=None, description="Basic, Intermediate ou Advanced")


class RoadmapResponse(BaseModel):
    roadmap: str
    status: str = "success"
