import unittest

from jobpulse.core.models import Job
from jobpulse.filters.pipeline import FilterParams, apply, order_jobs, sort_by_recency


def _job(n, **kwargs):
    data = {
        "id": f"test-{n}",
        "title": "Data Analyst",
        "company": "Acme",
        "url": f"https://example.com/{n}",
        "source": "RemoteOK",
    }
    data.update(kwargs)
    return Job(**data)


class FilterPipelineTests(unittest.TestCase):
    def test_data_and_entry_scenario(self):
        jobs = [
            _job(1, title="Senior BI Manager", location="Remote"),
            _job(2, title="Junior SQL Analyst", location="Austin, TX"),
        ]
        kept = apply(jobs, FilterParams(data_only=True, entry_only=True))
        self.assertEqual([j.id for j in kept], ["test-2"])

    def test_query_matches_tags(self):
        jobs = [
            _job(1, title="Analyst", tags=["tableau", "excel"]),
            _job(2, title="Analyst", tags=["looker"]),
        ]
        kept = apply(jobs, FilterParams(query="Tableau"))
        self.assertEqual([j.id for j in kept], ["test-1"])

    def test_query_matches_company(self):
        jobs = [_job(1, company="Tableau Software"), _job(2, company="Acme")]
        kept = apply(jobs, FilterParams(query="tableau"))
        self.assertEqual([j.id for j in kept], ["test-1"])

    def test_location_is_case_insensitive_substring(self):
        jobs = [_job(1, location="Berlin, Germany"), _job(2, location="Remote")]
        kept = apply(jobs, FilterParams(location="GERMANY"))
        self.assertEqual([j.id for j in kept], ["test-1"])

    def test_source_is_exact_display_name(self):
        jobs = [_job(1, source="RemoteOK"), _job(2, source="Jobicy")]
        self.assertEqual([j.id for j in apply(jobs, FilterParams(source="Jobicy"))], ["test-2"])
        self.assertEqual(apply(jobs, FilterParams(source="jobicy")), [])

    def test_us_only(self):
        jobs = [_job(1, location="Remote"), _job(2, location="London, UK"), _job(3, location="New York, NY")]
        kept = apply(jobs, FilterParams(us_only=True))
        self.assertEqual([j.id for j in kept], ["test-1", "test-3"])

    def test_inactive_toggles_keep_everything(self):
        jobs = [_job(1, title="Truck Driver"), _job(2, title="Senior Data Engineer")]
        self.assertEqual(len(apply(jobs, FilterParams())), 2)

    def test_idempotent_and_input_untouched(self):
        jobs = [
            _job(1, posted="2024-05-01T00:00:00Z"),
            _job(2, posted="2024-05-03T00:00:00Z", title="Senior Analyst"),
            _job(3, posted="2024-05-02T00:00:00Z", tags=["sql"]),
        ]
        before = list(jobs)
        params = FilterParams(query="analyst", entry_only=True, data_only=True)
        first = apply(jobs, params)
        second = apply(jobs, params)
        self.assertEqual(first, second)
        self.assertEqual(jobs, before)


class OrderingTests(unittest.TestCase):
    def test_recency_descending_for_dated_jobs(self):
        jobs = [
            _job(1, posted="2024-04-30T12:00:00Z"),
            _job(2, posted="2024-05-02 08:00:00"),
            _job(3, posted="2024-05-01T00:00:00+00:00"),
            _job(4, posted="2024-05-02T09:00:00+00:00"),
        ]
        ordered = sort_by_recency(jobs)
        self.assertEqual([j.id for j in ordered], ["test-4", "test-2", "test-3", "test-1"])

    def test_undated_jobs_keep_insertion_order(self):
        jobs = [_job(1), _job(2), _job(3, posted="not a date")]
        self.assertEqual([j.id for j in sort_by_recency(jobs)], ["test-1", "test-2", "test-3"])

    def test_random_order_is_seedable(self):
        jobs = [_job(n) for n in range(10)]
        a = order_jobs(jobs, "random", seed=7)
        b = order_jobs(jobs, "random", seed=7)
        self.assertEqual(a, b)
        self.assertEqual(sorted(j.id for j in a), sorted(j.id for j in jobs))

    def test_random_order_through_params(self):
        jobs = [_job(n) for n in range(5)]
        kept = apply(jobs, FilterParams(order="random", seed=3))
        self.assertEqual(kept, order_jobs(jobs, "random", seed=3))

    def test_unknown_order_rejected(self):
        with self.assertRaises(ValueError):
            order_jobs([], "alphabetical")


if __name__ == "__main__":
    unittest.main()
