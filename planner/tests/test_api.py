import shutil
import tempfile
import unittest
from pathlib import Path
from fastapi.testclient import TestClient
from planner.api.api_run import app, get_state
from planner.infra.Storage import MemoryStorage
from planner.logic.agenda.state import PlannerState, build_state
from planner.logic.dates.date_keys import current_date, to_key, shift_day


class TestPlannerAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.state = PlannerState(MemoryStorage()).load()
        app.dependency_overrides[get_state] = lambda: self.state

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_today(self):
        resp = self.client.get('/api/today')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        today = current_date()
        self.assertEqual(data['date'], to_key(today))
        self.assertEqual(data['label'], 'Today')
        self.assertTrue(data['is_today'])
        self.assertIsNotNone(data['short_label'])
        self.assertEqual(data['previous'], to_key(shift_day(today, -1)))
        self.assertEqual(data['next'], to_key(shift_day(today, 1)))
        self.assertEqual([p['period'] for p in data['periods']], list(range(7)))

    def test_day_view_for_other_day(self):
        data = self.client.get('/api/days/2024-03-14').json()
        self.assertEqual(data['date'], '2024-03-14')
        self.assertFalse(data['is_today'])
        self.assertEqual(data['previous'], '2024-03-13')
        self.assertEqual(data['next'], '2024-03-15')
        first = data['periods'][0]
        self.assertEqual(first, {
            'period': 0, 'subject': '', 'subject_is_explicit': False,
            'placeholder': 'Add Subject...', 'notes': '', 'homework': '', 'has_homework': False,
        })

    def test_malformed_date_key(self):
        self.assertEqual(self.client.get('/api/days/2024-13-01').status_code, 400)
        self.assertEqual(self.client.put('/api/days/soon/periods/1',
                                         json={'field': 'notes', 'value': 'x'}).status_code, 400)

    def test_padded_day_key_is_rejected_and_agenda_survives(self):
        self.client.put('/api/days/2024-03-10/periods/2', json={'field': 'subject', 'value': 'Algebra II'})
        resp = self.client.put('/api/days/2024-01-%205/periods/1', json={'field': 'notes', 'value': 'x'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get('/api/days/2024-01-%205').status_code, 400)

        restarted = PlannerState(self.state.repository.storage).load()
        self.assertEqual(restarted.agenda.day_keys(), ['2024-03-10'])
        self.assertEqual(restarted.agenda.get_period('2024-03-10', 2).subject, 'Algebra II')

    def test_long_text_is_accepted(self):
        notes = 'lab write-up ' * 1600
        resp = self.client.put('/api/days/2024-03-11/periods/4', json={'field': 'notes', 'value': notes})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['periods'][4]['notes'], notes)

        subject = 'Advanced Placement ' * 30
        resp = self.client.put('/api/defaults/4', json={'value': subject})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['defaults'][4], subject)

    def test_edit_period_and_fallback(self):
        self.client.put('/api/defaults/2', json={'value': 'Biology'})
        resp = self.client.put('/api/days/2024-03-11/periods/3', json={'field': 'homework', 'value': 'Ch. 5'})
        self.assertEqual(resp.status_code, 200)
        periods = resp.json()['periods']
        self.assertEqual(periods[2]['subject'], 'Biology')
        self.assertEqual(periods[2]['placeholder'], 'Biology')
        self.assertFalse(periods[2]['subject_is_explicit'])
        self.assertTrue(periods[3]['has_homework'])

        resp = self.client.put('/api/days/2024-03-11/periods/2', json={'field': 'subject', 'value': ''})
        period = resp.json()['periods'][2]
        self.assertEqual(period['subject'], '')
        self.assertTrue(period['subject_is_explicit'])
        self.assertEqual(self.state.agenda.get_day('2024-03-11')[2].subject, '')

    def test_edit_rejects_bad_input(self):
        self.assertEqual(self.client.put('/api/days/2024-03-11/periods/7',
                                         json={'field': 'notes', 'value': 'x'}).status_code, 400)
        self.assertEqual(self.client.put('/api/days/2024-03-11/periods/1',
                                         json={'field': 'grade', 'value': 'A'}).status_code, 422)
        self.assertEqual(self.client.put('/api/defaults/9', json={'value': 'Art'}).status_code, 400)
        self.assertEqual(self.state.agenda.day_keys(), [])

    def test_defaults(self):
        self.client.put('/api/defaults/0', json={'value': 'Homeroom'})
        resp = self.client.get('/api/defaults')
        self.assertEqual(resp.json()['defaults'], ['Homeroom', '', '', '', '', '', ''])

    def test_theme(self):
        self.assertEqual(self.client.get('/api/theme').json(), {'theme': 'light'})
        self.assertEqual(self.client.post('/api/theme/toggle').json(), {'theme': 'dark'})
        self.assertEqual(self.client.put('/api/theme', json={'theme': 'light'}).json(), {'theme': 'light'})
        self.assertEqual(self.client.put('/api/theme', json={'theme': 'blue'}).status_code, 422)

    def test_backups_need_file_storage(self):
        self.assertEqual(self.client.post('/api/backups').status_code, 400)


class TestBackupAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.state = build_state(self.tmp)
        app.dependency_overrides[get_state] = lambda: self.state

    def tearDown(self):
        app.dependency_overrides.clear()
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_backup_and_restore(self):
        self.client.put('/api/defaults/1', json={'value': 'Art'})
        results = self.client.post('/api/backups').json()['results']
        self.assertTrue(results['student_agenda_defaults.json'])
        self.assertFalse(results['student_agenda_data.json'])

        listed = self.client.get('/api/backups', params={'namespace': 'student_agenda_defaults'}).json()['backups']
        self.assertEqual(len(listed), 1)

        self.client.put('/api/defaults/1', json={'value': 'Music'})
        resp = self.client.post('/api/backups/restore', json={'name': listed[0]['name']})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get('/api/defaults').json()['defaults'][1], 'Art')

    def test_restore_unknown_backup(self):
        resp = self.client.post('/api/backups/restore', json={'name': 'nothing__here.json'})
        self.assertEqual(resp.status_code, 404)


if __name__ == '__main__':
    unittest.main()
