"""
Degraded-mode datasets for teams and touchpoints. Keys mirror the
serializers' Meta.fields.
"""
from core.security.fallback import register_sample_data
from core.security.ownership import EntityClass

SAMPLE_TEAMS = [
    {
        'id': 1,
        'nome': 'Time de Produto',
        'descricao': 'Squad responsável pelo produto principal',
        'leader_id': 2,
        'leader_nome': 'Gestor Exemplo',
        'created_by_id': 2,
        'member_ids': [1, 2],
        'status': 'ativo',
        'created_at': '2024-01-01T00:00:00Z',
        'updated_at': '2024-01-01T00:00:00Z',
    },
]


SAMPLE_TOUCHPOINTS = [
    {
        'id': 1,
        'colaborador_id': 1,
        'colaborador_nome': 'João Silva',
        'gestor_id': 2,
        'gestor_nome': 'Gestor Exemplo',
        'tipo': 'one_on_one',
        'ciclo': '2024',
        'feedback': 'Reunião 1:1 agendada',
        'data_reuniao': '2024-03-12',
        'created_at': '2024-03-01T09:00:00Z',
    },
    {
        'id': 2,
        'colaborador_id': 1,
        'colaborador_nome': 'João Silva',
        'gestor_id': 2,
        'gestor_nome': 'Gestor Exemplo',
        'tipo': 'feedback',
        'ciclo': '2024',
        'feedback': 'Ótima apresentação na sprint review.',
        'data_reuniao': None,
        'created_at': '2024-02-20T16:30:00Z',
    },
]


def register():
    register_sample_data(EntityClass.TEAM, SAMPLE_TEAMS)
    register_sample_data(EntityClass.TOUCHPOINT, SAMPLE_TOUCHPOINTS)
