"""
Data Transfer Objects for HR records and tests.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class HRRecordCreateDTO:
    user_id: int
    titulo: str
    tipo: Optional[str] = None
    conteudo: Optional[str] = None
    data_sessao: Optional[datetime] = None
    sensitivity: Optional[str] = None


@dataclass
class HRRecordUpdateDTO:
    titulo: Optional[str] = None
    tipo: Optional[str] = None
    conteudo: Optional[str] = None
    data_sessao: Optional[datetime] = None
    sensitivity: Optional[str] = None


@dataclass
class HRTestCreateDTO:
    user_id: int
    test_type: str
    questions: Dict[str, Any] = field(default_factory=dict)


@dataclass
class HRTestCompleteDTO:
    answers: Dict[str, Any]
