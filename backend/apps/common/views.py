import time

from django.core.files.storage import default_storage
from django.db import connections
from django.db.utils import OperationalError
from django.http import JsonResponse

from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _db_check(alias='default'):
    started = time.monotonic()
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute('SELECT 1')
    except OperationalError as e:
        # Expected operational DB issues (connection refused, etc.)
        logger.warning('Database health check encountered operational error', alias=alias, error=str(e))
        return {'status': 'fail', 'error': str(e)}
    latency = round((time.monotonic() - started) * 1000, 2)
    logger.debug('Database health check succeeded', alias=alias, latency_ms=latency)
    return {'status': 'ok', 'latency_ms': latency}


def _storage_check():
    """Uploaded images need a reachable media root."""
    try:
        default_storage.listdir('')
    except FileNotFoundError:
        # Nothing uploaded yet; the directory is created on first save
        return {'status': 'ok', 'detail': 'media root not created yet'}
    except OSError as e:
        logger.warning('Storage health check failed', error=str(e))
        return {'status': 'fail', 'error': str(e)}
    return {'status': 'ok'}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: verifies the database and image storage."""
    checks = {
        'database': _db_check(),
        'storage': _storage_check(),
    }
    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 200 if not failing else 503
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse({'status': overall_status, 'checks': checks}, status=http_status)
