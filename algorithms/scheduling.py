"""
scheduling.py — Non-Preemptive Job Scheduling
===============================================
Sort the jobs by one key, then run them back to back from t = 0:

    sjf       shortest duration first
    edf       earliest deadline first (jobs without a deadline go last)
    priority  lowest number first (1 = most urgent)
    fcfs      arrival order

The sort is stable, so equal keys keep their input order.  Every job
is available at t = 0, so a job's wait equals its start time.  A job is
late when it finishes after its deadline.
"""

from typing import Any, Dict, List, Optional

from algorithms.inputs import as_int, as_str, in_range, one_of, require
from algorithms.step import StepKind
from engine.errors import InvalidInput


POLICIES = ("sjf", "edf", "priority", "fcfs")

POLICY_NAMES = {
    "sjf":      "Shortest Job First (SJF)",
    "edf":      "Earliest Deadline First (EDF)",
    "priority": "Priority Scheduling",
    "fcfs":     "First Come First Serve (FCFS)",
}

MIN_DURATION     = 100
MIN_DEADLINE     = 500
DEFAULT_PRIORITY = 5

PSEUDOCODE: List[str] = [
    "def schedule(jobs, policy):",
    "    order ← sort(jobs, key=policy)",
    "    t ← 0",
    "    for job in order:",
    "        job.start ← t; t ← t + job.duration",
    "        job.late ← t > job.deadline",
    "    return order",
]

SAMPLE_JOBS: List[Dict[str, Any]] = [
    {"name": "Compile Code", "duration": 2000, "deadline": 5000,  "priority": 2},
    {"name": "Run Tests",    "duration": 1500, "deadline": 4000,  "priority": 1},
    {"name": "Deploy App",   "duration": 3000, "deadline": 8000,  "priority": 3},
    {"name": "Send Email",   "duration": 500,  "deadline": 2000,  "priority": 4},
    {"name": "Backup Data",  "duration": 2500, "deadline": 10000, "priority": 5},
]


def _job(raw: Any, index: int) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise InvalidInput(f"jobs[{index}] must be an object")
    name = as_str(raw.get("name", f"Job {index + 1}"), f"jobs[{index}].name")
    duration = as_int(require(raw, "duration"), f"jobs[{index}].duration")
    if duration < MIN_DURATION:
        raise InvalidInput(f"jobs[{index}].duration must be at least {MIN_DURATION}")
    deadline: Optional[int] = None
    if raw.get("deadline") is not None:
        deadline = as_int(raw["deadline"], f"jobs[{index}].deadline")
        if deadline < MIN_DEADLINE:
            raise InvalidInput(f"jobs[{index}].deadline must be at least {MIN_DEADLINE}")
    priority = in_range(as_int(raw.get("priority", DEFAULT_PRIORITY), f"jobs[{index}].priority"),
                        1, 10, f"jobs[{index}].priority")
    arrival = as_int(raw.get("arrival", index), f"jobs[{index}].arrival")
    return {"name": name, "duration": duration, "deadline": deadline, "priority": priority, "arrival": arrival}


def prepare(data: Dict[str, Any]) -> Dict[str, Any]:
    jobs = require(data, "jobs")
    if not isinstance(jobs, list) or not jobs:
        raise InvalidInput("jobs must be a non-empty list")
    return {
        "jobs":   [_job(raw, i) for i, raw in enumerate(jobs)],
        "policy": one_of(data.get("policy", "sjf"), POLICIES, "policy"),
    }


def _key(policy: str):
    if policy == "sjf":
        return lambda job: job["duration"]
    if policy == "edf":
        return lambda job: (job["deadline"] is None, job["deadline"] or 0)
    if policy == "priority":
        return lambda job: job["priority"]
    return lambda job: job["arrival"]


def schedule_jobs(jobs: List[Dict[str, Any]], policy: str, emit):
    """Returns {"schedule", "makespan", "average_wait", "missed_deadlines"}."""
    yield emit(StepKind.START, f"{POLICY_NAMES[policy]} over {len(jobs)} job(s).", policy=policy, jobs=jobs)

    ordered = sorted(jobs, key=_key(policy))
    yield emit(StepKind.HIGHLIGHT, "Order: " + " → ".join(job["name"] for job in ordered),
               order=[job["name"] for job in ordered])

    now = 0
    schedule = []
    for job in ordered:
        start, finish = now, now + job["duration"]
        late = job["deadline"] is not None and finish > job["deadline"]
        entry = {"name": job["name"], "start": start, "finish": finish, "wait": start, "late": late}
        schedule.append(entry)
        if late:
            emit.count("missed_deadlines")
        yield emit(StepKind.SCHEDULE,
                   f"{job['name']}: {start}ms – {finish}ms" + (" (misses its deadline)" if late else ""),
                   **entry)
        now = finish

    result = {
        "schedule":         schedule,
        "makespan":         now,
        "average_wait":     sum(e["wait"] for e in schedule) / len(schedule),
        "missed_deadlines": sum(1 for e in schedule if e["late"]),
    }
    yield emit.final(StepKind.DONE,
                     f"Scheduled {len(jobs)} job(s): makespan {result['makespan']}ms, "
                     f"average wait {result['average_wait']:.1f}ms, {result['missed_deadlines']} late.",
                     **result)
    return result
