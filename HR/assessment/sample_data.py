"""
Degraded-mode dataset for assessments. Keys mirror AssessmentSerializer.Meta.fields.
"""
from core.security.fallback import register_sample_data
from core.security.ownership import EntityClass

SAMPLE_ASSESSMENTS = [
    {
        'id': 1,
        'competency_id': 1,
        'competency_nome': 'Python',
        'competency_tipo': 'hard',
        'avaliado_id': 1,
        'avaliado_nome': 'João Silva',
        'avaliador_id': 1,
        'tipo': 'autoavaliacao',
        'nota': '8.00',
        'ciclo': '2024',
        'comentario': '',
        'created_at': '2024-03-01T10:00:00Z',
        'updated_at': '2024-03-01T10:00:00Z',
    },
    {
        'id': 2,
        'competency_id': 1,
        'competency_nome': 'Python',
        'competency_tipo': 'hard',
        'avaliado_id': 1,
        'avaliado_nome': 'João Silva',
        'avaliador_id': 2,
        'tipo': 'gestor',
        'nota': '7.00',
        'ciclo': '2024',
        'comentario': 'Boa evolução no semestre',
        'created_at': '2024-03-05T10:00:00Z',
        'updated_at': '2024-03-05T10:00:00Z',
    },
    {
        'id': 3,
        'competency_id': 2,
        'competency_nome': 'Comunicação',
        'competency_tipo': 'soft',
        'avaliado_id': 1,
        'avaliado_nome': 'João Silva',
        'avaliador_id': 1,
        'tipo': 'autoavaliacao',
        'nota': '6.00',
        'ciclo': '2024',
        'comentario': '',
        'created_at': '2024-03-01T10:00:00Z',
        'updated_at': '2024-03-01T10:00:00Z',
    },
]


def register():
    register_sample_data(EntityClass.ASSESSMENT, SAMPLE_ASSESSMENTS)
