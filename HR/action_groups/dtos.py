"""
Data Transfer Objects for action groups.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class ActionGroupCreateDTO:
    nome: str
    descricao: Optional[str] = None
    member_ids: List[int] = field(default_factory=list)


@dataclass
class ActionGroupUpdateDTO:
    nome: Optional[str] = None
    descricao: Optional[str] = None
    status: Optional[str] = None


@dataclass
class TaskCreateDTO:
    titulo: str
    descricao: Optional[str] = None
    responsavel_id: Optional[int] = None
    data_limite: Optional[date] = None


@dataclass
class TaskUpdateDTO:
    titulo: Optional[str] = None
    status: Optional[str] = None
    responsavel_id: Optional[int] = None
    data_limite: Optional[date] = None
