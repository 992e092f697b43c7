"""
Degraded-mode datasets for the career app.

Keys mirror the serializers' Meta.fields.
"""
from core.security.fallback import register_sample_data
from core.security.ownership import EntityClass

SAMPLE_TRACKS = [
    {
        'id': 1,
        'nome': 'Desenvolvimento Backend',
        'descricao': 'Trilha técnica para engenharia de backend',
        'status': 'ativo',
        'stages': [
            {'id': 1, 'fase': 'desenvolvimento', 'titulo': 'Estagiário', 'ordem': 1, 'is_final': False},
            {'id': 2, 'fase': 'desenvolvimento', 'titulo': 'Júnior', 'ordem': 2, 'is_final': False},
            {'id': 3, 'fase': 'especializacao', 'titulo': 'Especialista', 'ordem': 3, 'is_final': True},
        ],
        'created_at': '2024-01-01T00:00:00Z',
        'updated_at': '2024-01-01T00:00:00Z',
    },
]

SAMPLE_COMPETENCIES = [
    {'id': 1, 'nome': 'Python', 'tipo': 'hard', 'descricao': 'Linguagem Python', 'stage_id': 2, 'stage_titulo': 'Júnior'},
    {'id': 2, 'nome': 'Comunicação', 'tipo': 'soft', 'descricao': 'Comunicação clara', 'stage_id': None, 'stage_titulo': None},
]

SAMPLE_SALARY_HISTORY = [
    {
        'id': 1,
        'user_id': 1,
        'user_nome': 'Colaborador Exemplo',
        'cargo': 'Desenvolvedor Júnior',
        'valor': '5000.00',
        'data_inicio': '2024-01-01',
        'data_fim': None,
        'motivo': 'Admissão',
        'created_at': '2024-01-01T00:00:00Z',
    },
]


def register():
    from HR.career.services import COMPETENCY_DATASET

    register_sample_data(EntityClass.TRACK_CONFIGURATION, SAMPLE_TRACKS)
    register_sample_data(COMPETENCY_DATASET, SAMPLE_COMPETENCIES)
    register_sample_data(EntityClass.SALARY_RECORD, SAMPLE_SALARY_HISTORY)
