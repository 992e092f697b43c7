"""
Degraded-mode datasets for HR records and tests.

Keys mirror the serializers' Meta.fields. Rows are confidential, so the
masking layer still applies to them.
"""
from core.security.fallback import register_sample_data
from core.security.ownership import EntityClass

SAMPLE_HR_RECORDS = [
    {
        'id': 1,
        'user_id': 1,
        'user_nome': 'João Silva',
        'tipo': 'sessao',
        'titulo': 'Sessão de acolhimento',
        'conteudo': 'Conversa inicial sobre adaptação à equipe.',
        'data_sessao': '2024-02-10T14:00:00Z',
        'sensitivity': 'confidential',
        'created_by_id': 3,
        'created_at': '2024-02-10T15:00:00Z',
        'updated_at': '2024-02-10T15:00:00Z',
    },
]

SAMPLE_HR_TESTS = [
    {
        'id': 1,
        'user_id': 1,
        'user_nome': 'João Silva',
        'administered_by_id': 3,
        'test_type': 'burnout',
        'questions': {'q1': 'Sinto-me esgotado ao final do dia', 'q2': 'Tenho dificuldade para desligar do trabalho'},
        'answers': {'q1': 2, 'q2': 3},
        'score': '2.5',
        'interpretation': 'Baixo risco',
        'completed_at': '2024-01-15T10:00:00Z',
        'sensitivity': 'confidential',
        'created_at': '2024-01-10T10:00:00Z',
    },
]


def register():
    register_sample_data(EntityClass.HR_RECORD, SAMPLE_HR_RECORDS)
    register_sample_data(EntityClass.HR_TEST, SAMPLE_HR_TESTS)
