"""
Dashboard services.

Stats are counted per role: everyone gets their own PDI numbers, gestores
also get their direct reports, rh gets upcoming sessions and admins get
the organisation totals. The activity feed is assembled from the
policy-filtered objective and assessment listings, so it never shows a
row the actor could not open directly.
"""
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Avg
from django.utils import timezone

from core.security.roles import Role
from HR.assessment.models import Assessment
from HR.assessment.services import AssessmentService
from HR.career.models import CareerTrack
from HR.pdi.models import Achievement, PDIObjective
from HR.pdi.services import ObjectiveService
from HR.wellness.models import HRRecord

logger = logging.getLogger(__name__)

User = get_user_model()

DASHBOARD_STATS_DATASET = 'dashboard_stats'


def _own_stats(actor):
    objectives = PDIObjective.objects.filter(colaborador=actor)
    progress = objectives.exclude(
        objetivo_status=PDIObjective.ObjetivoStatus.CANCELADO
    ).aggregate(avg=Avg('progresso'))['avg']
    return {
        'activeObjectives': objectives.open().count(),
        'achievements': Achievement.objects.filter(user=actor).count(),
        'progress': round(progress or 0),
        'competencies': (
            Assessment.objects
            .filter(avaliado=actor, tipo=Assessment.Tipo.AUTOAVALIACAO)
            .values('competency')
            .distinct()
            .count()
        ),
    }


def _gestor_stats(actor):
    reports = User.objects.reports_of(actor).active()
    return {
        'teamMembers': reports.count(),
        'pendingAssessments': PDIObjective.objects.filter(
            colaborador__in=reports,
            status=PDIObjective.Status.PROPOSTO_COLABORADOR,
        ).count(),
    }


def _rh_stats(actor):
    return {
        'appointments': HRRecord.objects.filter(
            tipo=HRRecord.Tipo.SESSAO,
            data_sessao__gte=timezone.now(),
        ).count(),
        'activeUsers': User.objects.active().count(),
    }


def _admin_stats(actor):
    return {
        'totalUsers': User.objects.count(),
        'activeTracks': CareerTrack.objects.active().count(),
    }


ROLE_STATS = {
    Role.GESTOR: _gestor_stats,
    Role.RH: _rh_stats,
    Role.ADMIN: _admin_stats,
}


class DashboardService:

    @staticmethod
    def stats(data_source, actor):
        """
        Return the stats dict for the actor's role.

        In degraded mode the sample row registered for the role is served.
        """
        def live_call():
            stats = _own_stats(actor)
            extra = ROLE_STATS.get(actor.role)
            if extra:
                stats.update(extra(actor))
            return [dict(stats, role=actor.role)]

        rows = data_source.read(live_call, DASHBOARD_STATS_DATASET)
        for row in rows:
            if row.get('role') == actor.role:
                return row
        return rows[0] if rows else {'role': actor.role}

    @staticmethod
    def activity(data_source, actor, limit=None):
        """
        Recent objective and assessment events visible to the actor,
        newest first.
        """
        limit = limit or getattr(settings, 'PDI_ACTIVITY_LIMIT', 20)
        events = []

        for row in ObjectiveService.list_visible(data_source, actor):
            events.append({
                'id': row.get('id'),
                'type': 'pdi',
                'title': f"Objetivo PDI: {row.get('titulo')}",
                'description': f"Status: {row.get('objetivo_status')}",
                'timestamp': row.get('updated_at'),
                'user': row.get('colaborador_nome'),
            })

        for row in AssessmentService.list_visible(data_source, actor):
            events.append({
                'id': row.get('id'),
                'type': 'assessment',
                'title': f"Avaliação: {row.get('competency_nome')}",
                'description': f"Nota: {row.get('nota')}/10 ({row.get('tipo')})",
                'timestamp': row.get('created_at'),
                'user': row.get('avaliado_nome'),
            })

        events.sort(key=lambda event: str(event['timestamp'] or ''), reverse=True)
        return events[:limit]
