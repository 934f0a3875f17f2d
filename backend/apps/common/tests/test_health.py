import json
import unittest
from unittest import mock

from django.db.utils import OperationalError

from apps.common import views


class HealthViewsUnitTests(unittest.TestCase):
    def test_live_health_returns_alive_payload(self):
        response = views.live_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'alive')

    @mock.patch('apps.common.views._storage_check', return_value={'status': 'ok'})
    @mock.patch('apps.common.views._db_check', return_value={'status': 'ok', 'latency_ms': 1.23})
    def test_ready_health_ok_when_dependencies_pass(self, mock_db_check, mock_storage_check):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'ok')
        self.assertEqual(payload['checks']['database'], mock_db_check.return_value)
        self.assertEqual(payload['checks']['storage'], mock_storage_check.return_value)

    @mock.patch('apps.common.views._storage_check', return_value={'status': 'ok'})
    @mock.patch('apps.common.views._db_check', return_value={'status': 'fail', 'error': 'db down'})
    def test_ready_health_degraded_on_dependency_failure(self, mock_db_check, _mock_storage_check):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 503)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'degraded')
        self.assertEqual(payload['checks']['database'], mock_db_check.return_value)


class StorageCheckTests(unittest.TestCase):
    @mock.patch('apps.common.views.default_storage')
    def test_missing_media_root_is_ok(self, storage):
        storage.listdir.side_effect = FileNotFoundError('media')
        self.assertEqual(views._storage_check()['status'], 'ok')

    @mock.patch('apps.common.views.default_storage')
    def test_unreadable_media_root_fails(self, storage):
        storage.listdir.side_effect = PermissionError('denied')
        result = views._storage_check()
        self.assertEqual(result['status'], 'fail')
        self.assertIn('denied', result['error'])


class DatabaseCheckTests(unittest.TestCase):
    @mock.patch('apps.common.views.connections')
    def test_operational_error_reports_failure(self, connections):
        connections.__getitem__.return_value.cursor.side_effect = OperationalError('refused')
        result = views._db_check()
        self.assertEqual(result, {'status': 'fail', 'error': 'refused'})
