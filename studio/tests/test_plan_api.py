import inspect
import unittest

from fastapi.testclient import TestClient

from studio.api.api_ai import (
    api_current_plan, api_plan_events, api_plan_pdf, get_backend_client, get_plan_store,
)
from studio.api.api_run import app
from studio.domain.errors import BackendRequestFailure
from studio.events.web_observers import start as start_event_observers
from studio.infra.Plan_Store import PlanStore
from studio.tests.fakes import FakeBackend, plan_text

PROFILE = {
    "age": 28, "sex": "hombre", "weight_kg": 80, "height_cm": 180,
    "level": "principiante", "goal": "perder grasa", "days_per_week": 2, "weeks": 2,
}


class TestPlanAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)
        start_event_observers()

    def setUp(self):
        self.store = PlanStore()
        self.backend = FakeBackend(text=plan_text(fence="json", weeks=(1, 2), days=2, exercises=2),
                                   fail_on=("exercise 2 0 1",))
        app.dependency_overrides[get_plan_store] = lambda: self.store
        app.dependency_overrides[get_backend_client] = lambda: self.backend

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_empty_state(self):
        resp = self.client.get('/api/plan')
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.json()['plan'])
        self.assertEqual(self.client.get('/api/plan/pdf').status_code, 404)

    def test_generate_then_enrich(self):
        resp = self.client.post('/api/plan', json=PROFILE)
        self.assertEqual(resp.status_code, 200, resp.text)
        initial = resp.json()
        cursor = initial['cursor']
        plan = initial['plan']
        self.assertTrue(plan['title'])
        self.assertGreaterEqual(len(plan['weeks']), 1)
        # first render: every exercise shows the pending placeholder
        first_exercises = [ex for w in plan['weeks'] for d in w['days'] for ex in d['exercises']]
        self.assertTrue(all(ex['pending'] and ex['image'] is None for ex in first_exercises))
        self.assertEqual(initial['progress'], {'total': 8, 'ready': 0})

        # enrichment ran as a background task after the response
        current = self.client.get('/api/plan').json()
        self.assertEqual(current['plan']['plan_id'], plan['plan_id'])
        exercises = {ex['key']: ex for w in current['plan']['weeks'] for d in w['days'] for ex in d['exercises']}
        self.assertTrue(exercises['w2-d0-e1']['pending'])
        self.assertIsNone(exercises['w2-d0-e1']['image'])
        ready = [ex for key, ex in exercises.items() if key != 'w2-d0-e1']
        self.assertTrue(all(not ex['pending'] and ex['image'].startswith('data:image/jpeg') for ex in ready))
        self.assertEqual(current['progress'], {'total': 8, 'ready': 7})

        events = self.client.get(f'/api/plan/events?since={cursor}').json()['events']
        types = [e['type'] for e in events if e.get('plan_id') == plan['plan_id']]
        self.assertEqual(types[0], 'plan.generated')
        self.assertEqual(types.count('plan.leaf_enriched'), 7)
        self.assertEqual(types.count('plan.leaf_failed'), 1)
        self.assertEqual(types[-1], 'plan.enrichment_done')
        # leaf events only name the exercise; images are read back from /api/plan
        self.assertTrue(all('image' not in e for e in events))

        pdf = self.client.get('/api/plan/pdf')
        self.assertEqual(pdf.status_code, 200)
        self.assertTrue(pdf.content.startswith(b'%PDF'))

    def test_invalid_input_sends_no_request(self):
        data = dict(PROFILE)
        del data['age']
        resp = self.client.post('/api/plan', json=data)
        self.assertEqual(resp.status_code, 422)
        self.assertIn('age', resp.json()['error'])
        self.assertEqual(self.backend.text_prompts, [])
        self.assertIsNone(self.store.snapshot)

    def test_malformed_response(self):
        self.backend.text = "Lo siento, no puedo generar el plan."
        resp = self.client.post('/api/plan', json=PROFILE)
        self.assertEqual(resp.status_code, 502)
        self.assertNotIn('Lo siento', resp.json()['error'])
        self.assertIsNone(self.store.snapshot)

    def test_backend_failure(self):
        self.backend.text = BackendRequestFailure("timeout")
        resp = self.client.post('/api/plan', json=PROFILE)
        self.assertEqual(resp.status_code, 502)
        self.assertIn('error', resp.json())
        self.assertEqual(self.backend.image_queries, [])

    def test_new_generation_replaces_previous_plan(self):
        first = self.client.post('/api/plan', json=PROFILE).json()['plan']['plan_id']
        second = self.client.post('/api/plan', json=PROFILE).json()['plan']['plan_id']
        self.assertNotEqual(first, second)
        self.assertEqual(self.client.get('/api/plan').json()['plan']['plan_id'], second)

    def test_read_routes_run_on_the_event_loop(self):
        for route in (api_current_plan, api_plan_events, api_plan_pdf):
            self.assertTrue(inspect.iscoroutinefunction(route), route.__name__)


class TestPages(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_pages_render(self):
        coach = self.client.get('/')
        self.assertEqual(coach.status_code, 200)
        self.assertIn('profile-form', coach.text)
        ads = self.client.get('/ads')
        self.assertEqual(ads.status_code, 200)
        self.assertIn('Cinematográfico', ads.text)
        self.assertIn('16:9', ads.text)

    def test_pages_escape_generated_text(self):
        coach = self.client.get('/').text
        self.assertIn('function escapeHtml', coach)
        for raw in ('${plan.title}', '${ex.name}', '${ex.description}', '${d.day}'):
            self.assertNotIn(raw, coach)
        ads = self.client.get('/ads').text
        self.assertIn('escapeHtml(img.format)', ads)
        self.assertNotIn('${img.format}', ads)


if __name__ == '__main__':
    unittest.main()
