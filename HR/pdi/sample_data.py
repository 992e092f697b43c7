"""
Degraded-mode datasets for the PDI app.

Keys mirror the serializers' Meta.fields.
"""
from core.security.fallback import register_sample_data
from core.security.ownership import EntityClass

SAMPLE_OBJECTIVES = [
    {
        'id': 1,
        'colaborador_id': 1,
        'colaborador_nome': 'João Silva',
        'competency_id': 1,
        'competency_nome': 'Python',
        'mentor_id': 2,
        'mentor_nome': 'Maria Santos',
        'titulo': 'Aprender Django avançado',
        'descricao': 'Dominar ORM, signals e otimização de queries',
        'status': 'aprovado',
        'objetivo_status': 'em_andamento',
        'progresso': 65,
        'pontos_extra': 0,
        'data_inicio': '2024-01-01',
        'data_fim': '2024-03-31',
        'created_by_id': 1,
        'created_at': '2024-01-01T10:00:00Z',
        'updated_at': '2024-01-15T10:00:00Z',
    },
    {
        'id': 2,
        'colaborador_id': 1,
        'colaborador_nome': 'João Silva',
        'competency_id': None,
        'competency_nome': None,
        'mentor_id': None,
        'mentor_nome': None,
        'titulo': 'Certificação AWS',
        'descricao': 'Obter certificação AWS Solutions Architect Associate',
        'status': 'aprovado',
        'objetivo_status': 'pendente',
        'progresso': 0,
        'pontos_extra': 20,
        'data_inicio': '2024-02-01',
        'data_fim': '2024-06-30',
        'created_by_id': 1,
        'created_at': '2024-01-15T10:00:00Z',
        'updated_at': '2024-01-15T10:00:00Z',
    },
]

SAMPLE_COMMENTS = [
    {
        'id': 1,
        'objective_id': 1,
        'user_id': 2,
        'user_nome': 'Maria Santos',
        'texto': 'Bom progresso, continue assim.',
        'created_at': '2024-01-20T10:00:00Z',
    },
]

SAMPLE_ACHIEVEMENTS = [
    {
        'id': 1,
        'user_id': 1,
        'user_nome': 'João Silva',
        'titulo': 'Primeiro Objetivo',
        'descricao': 'Completou seu primeiro objetivo PDI',
        'conquistado_em': '2023-12-15T10:00:00Z',
        'objective_id': None,
        'objective_titulo': None,
    },
]


def register():
    register_sample_data(EntityClass.PDI_OBJECTIVE, SAMPLE_OBJECTIVES)
    register_sample_data(EntityClass.PDI_COMMENT, SAMPLE_COMMENTS)
    register_sample_data(EntityClass.ACHIEVEMENT, SAMPLE_ACHIEVEMENTS)
