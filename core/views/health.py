import logging

from django.db import DatabaseError, connections
from django.http import JsonResponse

from core.services.symptoms import catalog_seeded

logger = logging.getLogger(__name__)


def healthz(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        seeded = catalog_seeded()
    except DatabaseError as e:
        logger.exception('Health check failed')
        return JsonResponse({'ok': False, 'error': str(e)}, status=500)
    return JsonResponse({'ok': True, 'db': bool(row and row[0] == 1), 'symptomsSeeded': seeded})
