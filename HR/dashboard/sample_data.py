"""
Degraded-mode dashboard stats, one row per role.
"""
from core.security.fallback import register_sample_data

OWN_STATS = {'activeObjectives': 2, 'achievements': 1, 'progress': 33, 'competencies': 2}

SAMPLE_STATS = [
    dict(OWN_STATS, role='colaborador'),
    dict(OWN_STATS, role='gestor', teamMembers=1, pendingAssessments=0),
    dict(OWN_STATS, role='rh', appointments=1, activeUsers=3),
    dict(OWN_STATS, role='admin', totalUsers=3, activeTracks=1),
]


def register():
    from HR.dashboard.services import DASHBOARD_STATS_DATASET

    register_sample_data(DASHBOARD_STATS_DATASET, SAMPLE_STATS)
