from enum import Enum
from typing import List
from pydantic import BaseModel, Field


class AngleMode(str, Enum):
    deg = "deg"
    rad = "rad"


class EvaluateRequest(BaseModel):
    expression: str = Field(..., min_length=1, description="Ex: '2π*sin(30'")
    angleMode: AngleMode = Field(default=AngleMode.deg)


class EvaluateResponse(BaseModel):
    expression: str
    result: str = Field(..., description="Résultat formaté, ou 'Error'")


class CalculatorState(BaseModel):
    display: str = "0"
    memory: float = 0
    history: List[str] = Field(default_factory=list, description="10 derniers calculs, le plus récent en tête")
    angleMode: AngleMode = AngleMode.deg


class PressRequest(BaseModel):
    state: CalculatorState = Field(default_factory=CalculatorState)
    key: str = Field(..., min_length=1, description="Touche: chiffre, opérateur, 'C', 'AC', '=', 'M+', 'sin('...")
