"""Tests for non-preemptive job scheduling."""

import pytest

from algorithms.scheduling import SAMPLE_JOBS
from algorithms.step import StepKind
from engine import InvalidInput
from conftest import execute


def _schedule(runner, jobs, policy):
    return execute(runner, "scheduling", {"jobs": jobs, "policy": policy})


def _late(run):
    return [e["name"] for e in run.result["schedule"] if e["late"]]


class TestTimeline:
    def test_shortest_job_first(self, runner):
        jobs = [{"name": "a", "duration": 2000}, {"name": "b", "duration": 1500}, {"name": "c", "duration": 3000}]
        run = _schedule(runner, jobs, "sjf")
        schedule = run.result["schedule"]
        assert [e["name"] for e in schedule] == ["b", "a", "c"]
        assert [e["start"] for e in schedule] == [0, 1500, 3500]
        assert run.result["makespan"] == 6500
        assert run.result["average_wait"] == pytest.approx(5000 / 3)

    def test_jobs_run_back_to_back(self, runner):
        run = _schedule(runner, SAMPLE_JOBS, "fcfs")
        schedule = run.result["schedule"]
        for prev, nxt in zip(schedule, schedule[1:]):
            assert nxt["start"] == prev["finish"]
        assert run.result["makespan"] == sum(job["duration"] for job in SAMPLE_JOBS)

    def test_one_schedule_step_per_job(self, runner):
        run = _schedule(runner, SAMPLE_JOBS, "edf")
        assert sum(1 for s in run.steps if s.kind is StepKind.SCHEDULE) == len(SAMPLE_JOBS)
        assert run.outcome is StepKind.DONE


class TestPolicies:
    def test_edf_meets_every_sample_deadline(self, runner):
        run = _schedule(runner, SAMPLE_JOBS, "edf")
        assert run.result["missed_deadlines"] == 0
        assert run.result["makespan"] == 9500

    @pytest.mark.parametrize("policy, late", [
        ("sjf",      ["Deploy App"]),
        ("priority", ["Send Email"]),
        ("fcfs",     ["Send Email"]),
    ])
    def test_missed_deadlines(self, runner, policy, late):
        run = _schedule(runner, SAMPLE_JOBS, policy)
        assert _late(run) == late
        assert run.result["missed_deadlines"] == 1
        assert run.counters["missed_deadlines"] == 1

    def test_priority_order(self, runner):
        run = _schedule(runner, SAMPLE_JOBS, "priority")
        assert [e["name"] for e in run.result["schedule"]] == [
            "Run Tests", "Compile Code", "Deploy App", "Send Email", "Backup Data",
        ]

    def test_ties_keep_input_order(self, runner):
        jobs = [{"name": n, "duration": 1000} for n in "xyz"]
        for policy in ("sjf", "priority", "edf"):
            run = _schedule(runner, jobs, policy)
            assert [e["name"] for e in run.result["schedule"]] == ["x", "y", "z"]

    def test_jobs_without_deadline_go_last_under_edf(self, runner):
        jobs = [
            {"name": "open", "duration": 500},
            {"name": "due", "duration": 500, "deadline": 9000},
        ]
        run = _schedule(runner, jobs, "edf")
        assert [e["name"] for e in run.result["schedule"]] == ["due", "open"]
        assert _late(run) == []

    def test_fcfs_follows_arrival(self, runner):
        jobs = [
            {"name": "late-comer", "duration": 500, "arrival": 5},
            {"name": "early-bird", "duration": 500, "arrival": 1},
        ]
        run = _schedule(runner, jobs, "fcfs")
        assert [e["name"] for e in run.result["schedule"]] == ["early-bird", "late-comer"]


class TestInput:
    @pytest.mark.parametrize("data", [
        {"jobs": []},
        {"jobs": "build,test"},
        {"jobs": [{"name": "a"}]},
        {"jobs": [{"duration": 50}]},
        {"jobs": [{"duration": 1000, "deadline": 100}]},
        {"jobs": [{"duration": 1000, "priority": 11}]},
        {"jobs": [{"duration": 1000}], "policy": "round-robin"},
    ])
    def test_rejected(self, runner, data):
        with pytest.raises(InvalidInput):
            runner.start("scheduling", data)

    def test_defaults(self, runner):
        run = _schedule(runner, [{"duration": 1000}], "sjf")
        assert run.result["schedule"][0]["name"] == "Job 1"
        assert run.steps[0].payload["jobs"][0]["priority"] == 5
