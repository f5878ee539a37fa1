import os
import tempfile
import unittest

from fastapi.testclient import TestClient

from jobpulse.api.deps import get_aggregator, get_classifier, load_classifier
from jobpulse.api.main import app
from jobpulse.core.aggregate import Aggregator
from jobpulse.core.models import Job
from jobpulse.filters.rules import Classifier
from jobpulse.providers.base import SourceProvider, UpstreamUnavailable


class StaticProvider(SourceProvider):
    def __init__(self, name, jobs=None, error=None):
        super().__init__(ttl=0)
        self.name = name
        self.jobs = jobs or []
        self.error = error

    def fetch_jobs(self):
        if self.error is not None:
            raise self.error
        return list(self.jobs)


class BrokenAggregator(Aggregator):
    def aggregate(self):
        raise RuntimeError("merge exploded")


def _job(job_id, title, source, **kwargs):
    return Job(id=job_id, title=title, url=f"https://example.com/{job_id}", source=source, **kwargs)


class JobsEndpointTests(unittest.TestCase):
    def setUp(self):
        providers = [
            StaticProvider("remoteok", [
                _job("remoteok-1", "Senior BI Manager", "RemoteOK", location="Remote",
                     posted="2024-05-03T00:00:00Z"),
                _job("remoteok-2", "Truck Driver", "RemoteOK", posted="2024-05-04T00:00:00Z"),
            ]),
            StaticProvider("remotive", [
                _job("remotive-1", "Junior SQL Analyst", "Remotive", location="Austin, TX",
                     posted="2024-05-01T00:00:00Z"),
                _job("remotive-2", "Reporting Associate", "Remotive", location="Berlin, Germany",
                     tags=["Tableau"], posted="2024-05-02T00:00:00Z"),
            ]),
            StaticProvider("arbeitnow", error=UpstreamUnavailable("down")),
            StaticProvider("jobicy", []),
        ]
        self.aggregator = Aggregator(providers)
        app.dependency_overrides[get_aggregator] = lambda: self.aggregator
        app.dependency_overrides[get_classifier] = lambda: Classifier()
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_aggregator, None)
        app.dependency_overrides.pop(get_classifier, None)

    def test_defaults_keep_entry_level_data_roles(self):
        resp = self.client.get("/api/jobs")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()

        self.assertEqual([j["id"] for j in data["jobs"]], ["remotive-2", "remotive-1"])
        self.assertEqual(data["total"], 2)
        self.assertEqual(data["sources"], {"remoteok": 2, "remotive": 2, "arbeitnow": 0, "jobicy": 0})
        self.assertNotIn("error", data)

    def test_entry_false_keeps_senior_roles(self):
        data = self.client.get("/api/jobs", params={"entry": "false"}).json()
        ids = [j["id"] for j in data["jobs"]]
        self.assertIn("remoteok-1", ids)
        self.assertNotIn("remoteok-2", ids)

    def test_toggle_values_are_case_sensitive(self):
        data = self.client.get("/api/jobs", params={"entry": "FALSE"}).json()
        self.assertNotIn("remoteok-1", [j["id"] for j in data["jobs"]])

        data = self.client.get("/api/jobs", params={"us": "TRUE"}).json()
        self.assertEqual(data["total"], 2)

    def test_data_false_keeps_non_data_roles(self):
        data = self.client.get("/api/jobs", params={"data": "false"}).json()
        self.assertIn("remoteok-2", [j["id"] for j in data["jobs"]])

    def test_query_matches_tag(self):
        data = self.client.get("/api/jobs", params={"q": "tableau"}).json()
        self.assertEqual([j["id"] for j in data["jobs"]], ["remotive-2"])

    def test_location_and_source(self):
        data = self.client.get("/api/jobs", params={"location": "austin", "source": "Remotive"}).json()
        self.assertEqual([j["id"] for j in data["jobs"]], ["remotive-1"])

        data = self.client.get("/api/jobs", params={"source": "Jobicy"}).json()
        self.assertEqual(data["total"], 0)

    def test_us_toggle(self):
        data = self.client.get("/api/jobs", params={"us": "true"}).json()
        self.assertEqual([j["id"] for j in data["jobs"]], ["remotive-1"])

    def test_unknown_order_falls_back(self):
        resp = self.client.get("/api/jobs", params={"order": "alphabetical"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["total"], 2)

    def test_full_fetch_variant(self):
        data = self.client.get("/api/jobs/all").json()
        self.assertEqual(data["total"], 4)
        self.assertEqual(
            [j["id"] for j in data["jobs"]],
            ["remoteok-2", "remoteok-1", "remotive-2", "remotive-1"],
        )

    def test_optional_fields_omitted(self):
        data = self.client.get("/api/jobs/all").json()
        job = data["jobs"][0]
        self.assertNotIn("salary", job)
        self.assertEqual(job["tags"], [])
        self.assertEqual(job["company"], "Unknown")

    def test_failure_degrades_to_error_envelope(self):
        app.dependency_overrides[get_aggregator] = lambda: BrokenAggregator([])
        resp = self.client.get("/api/jobs")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["jobs"], [])
        self.assertEqual(data["total"], 0)
        self.assertEqual(data["sources"], {"remoteok": 0, "remotive": 0, "arbeitnow": 0, "jobicy": 0})
        self.assertIn("merge exploded", data["error"])

    def _use_rules_file(self, path):
        app.dependency_overrides.pop(get_classifier, None)
        prev = os.environ.get("JOBPULSE_RULES_FILE")
        os.environ["JOBPULSE_RULES_FILE"] = path
        load_classifier.cache_clear()

        def restore():
            if prev is None:
                os.environ.pop("JOBPULSE_RULES_FILE", None)
            else:
                os.environ["JOBPULSE_RULES_FILE"] = prev
            load_classifier.cache_clear()

        self.addCleanup(restore)

    def test_missing_rules_file_degrades_to_error_envelope(self):
        with tempfile.TemporaryDirectory() as tmp:
            self._use_rules_file(os.path.join(tmp, "missing.yaml"))
            for path in ("/api/jobs", "/api/jobs/all"):
                resp = self.client.get(path)
                self.assertEqual(resp.status_code, 200, path)
                data = resp.json()
                self.assertEqual(data["jobs"], [])
                self.assertEqual(data["total"], 0)
                self.assertEqual(data["sources"], {"remoteok": 0, "remotive": 0, "arbeitnow": 0, "jobicy": 0})
                self.assertIn("missing.yaml", data["error"])

    def test_malformed_rules_file_degrades_to_error_envelope(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "rules.yaml")
            with open(path, "w", encoding="utf-8") as f:
                f.write("data: sql\n")
            self._use_rules_file(path)
            resp = self.client.get("/api/jobs")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["total"], 0)
        self.assertIn("must be a list", resp.json()["error"])

    def test_rules_file_is_applied(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "rules.yaml")
            with open(path, "w", encoding="utf-8") as f:
                f.write("data:\n  - driver\n")
            self._use_rules_file(path)
            data = self.client.get("/api/jobs").json()

        self.assertEqual([j["id"] for j in data["jobs"]], ["remoteok-2"])

    def test_healthz(self):
        resp = self.client.get("/healthz")
        self.assertEqual(resp.json(), {"status": "ok"})


if __name__ == "__main__":
    unittest.main()
