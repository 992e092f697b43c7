"""
Data Transfer Objects for teams.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class TeamCreateDTO:
    nome: str
    descricao: Optional[str] = None
    leader_id: Optional[int] = None
    member_ids: List[int] = field(default_factory=list)


@dataclass
class TeamUpdateDTO:
    nome: Optional[str] = None
    descricao: Optional[str] = None
    leader_id: Optional[int] = None


@dataclass
class OneOnOneDTO:
    colaborador_id: int
    data_reuniao: date


@dataclass
class FeedbackDTO:
    colaborador_id: int
    feedback: str


@dataclass
class PerformanceReviewDTO:
    colaborador_id: int
    feedback: str
    data_reuniao: Optional[date] = None
