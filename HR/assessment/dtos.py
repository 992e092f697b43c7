"""
Data Transfer Objects for assessments.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class SelfAssessmentDTO:
    competency_id: int
    nota: Decimal
    comentario: Optional[str] = None
    ciclo: Optional[str] = None


@dataclass
class ManagerAssessmentDTO:
    avaliado_id: int
    competency_id: int
    nota: Decimal
    comentario: Optional[str] = None
    ciclo: Optional[str] = None
