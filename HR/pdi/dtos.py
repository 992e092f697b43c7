"""
Data Transfer Objects for the PDI app.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class ObjectiveCreateDTO:
    titulo: str
    descricao: Optional[str] = None
    colaborador_id: Optional[int] = None
    competency_id: Optional[int] = None
    mentor_id: Optional[int] = None
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None


@dataclass
class ObjectiveUpdateDTO:
    """Owner-maintained fields."""
    titulo: Optional[str] = None
    descricao: Optional[str] = None
    competency_id: Optional[int] = None
    mentor_id: Optional[int] = None
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    objetivo_status: Optional[str] = None
    progresso: Optional[int] = None


@dataclass
class ObjectiveEvaluationDTO:
    """Supervisor decision on an objective."""
    status: Optional[str] = None
    pontos_extra: Optional[int] = None


@dataclass
class CommentCreateDTO:
    texto: str
