"""
Degraded-mode datasets for action groups and their tasks. Keys mirror the
serializers' Meta.fields.
"""
from core.security.fallback import register_sample_data
from core.security.ownership import EntityClass

SAMPLE_GROUPS = [
    {
        'id': 1,
        'nome': 'Melhoria do Onboarding',
        'descricao': 'Revisar o processo de integração de novos colaboradores',
        'status': 'active',
        'created_by_id': 2,
        'created_by_nome': 'Maria Santos',
        'member_ids': [1, 3],
        'member_count': 2,
        'task_count': 3,
        'completed_tasks': 1,
        'progress': 33,
        'created_at': '2024-01-15T10:00:00Z',
        'updated_at': '2024-02-01T10:00:00Z',
    },
]

SAMPLE_TASKS = [
    {
        'id': 1,
        'group_id': 1,
        'titulo': 'Mapear etapas atuais',
        'descricao': '',
        'responsavel_id': 1,
        'responsavel_nome': 'João Silva',
        'status': 'done',
        'concluida': True,
        'data_limite': '2024-01-31',
        'created_at': '2024-01-15T10:00:00Z',
        'updated_at': '2024-01-30T10:00:00Z',
    },
    {
        'id': 2,
        'group_id': 1,
        'titulo': 'Criar checklist do primeiro dia',
        'descricao': 'Acessos, equipamentos e apresentações',
        'responsavel_id': 3,
        'responsavel_nome': 'Ana Costa',
        'status': 'doing',
        'concluida': False,
        'data_limite': '2024-02-15',
        'created_at': '2024-01-16T10:00:00Z',
        'updated_at': '2024-02-01T10:00:00Z',
    },
    {
        'id': 3,
        'group_id': 1,
        'titulo': 'Coletar feedback dos últimos contratados',
        'descricao': '',
        'responsavel_id': None,
        'responsavel_nome': None,
        'status': 'todo',
        'concluida': False,
        'data_limite': None,
        'created_at': '2024-01-16T11:00:00Z',
        'updated_at': '2024-01-16T11:00:00Z',
    },
]


def register():
    register_sample_data(EntityClass.ACTION_GROUP, SAMPLE_GROUPS)
    register_sample_data(EntityClass.ACTION_GROUP_TASK, SAMPLE_TASKS)
