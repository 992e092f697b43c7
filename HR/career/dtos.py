"""
Data Transfer Objects for the career app.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional


@dataclass
class CareerStageDTO:
    titulo: str
    ordem: int
    fase: str = 'desenvolvimento'
    is_final: bool = False


@dataclass
class CareerTrackCreateDTO:
    nome: str
    descricao: Optional[str] = None
    stages: List[CareerStageDTO] = field(default_factory=list)


@dataclass
class CareerTrackUpdateDTO:
    nome: Optional[str] = None
    descricao: Optional[str] = None


@dataclass
class CompetencyCreateDTO:
    nome: str
    tipo: str
    stage_id: Optional[int] = None
    descricao: Optional[str] = None


@dataclass
class SalaryRecordCreateDTO:
    user_id: int
    valor: Decimal
    data_inicio: date
    cargo: Optional[str] = None
    data_fim: Optional[date] = None
    motivo: Optional[str] = None
