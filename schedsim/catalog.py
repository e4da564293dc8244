"""
Short descriptions of each algorithm for ``schedsim info``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class AlgorithmInfo:
    name: str
    description: str
    pros: Tuple[str, ...] = ()
    cons: Tuple[str, ...] = ()
    use_cases: Tuple[str, ...] = ()


CATALOG: Dict[str, AlgorithmInfo] = {
    "fcfs": AlgorithmInfo(
        name="First-Come, First-Served (FCFS)",
        description="Runs processes to completion in the order they arrive.",
        pros=("Trivial to implement", "No starvation"),
        cons=("Convoy effect: short jobs wait behind long ones", "Poor fit for interactive work"),
        use_cases=("Batch jobs where response time does not matter", "Workloads of similar-length jobs"),
    ),
    "sjf": AlgorithmInfo(
        name="Shortest Job First (non-preemptive)",
        description="Whenever the CPU frees up, runs the waiting process with the smallest burst time.",
        pros=("Minimal average waiting time when all jobs arrive together",),
        cons=("Long jobs can starve", "Burst times must be known in advance"),
        use_cases=("Batch systems with known run times", "Minimizing average waiting time"),
    ),
    "srtf": AlgorithmInfo(
        name="Shortest Remaining Time First (preemptive SJF)",
        description="Every time unit, runs the process with the least remaining work.",
        pros=("Lowest average waiting time of the classic policies", "Short arrivals are served at once"),
        cons=("Frequent context switches", "Long jobs can starve"),
        use_cases=("Interactive mixes of short and long jobs",),
    ),
    "priority": AlgorithmInfo(
        name="Priority (non-preemptive)",
        description="Runs the waiting process with the lowest priority number to completion.",
        pros=("Important work runs first",),
        cons=("Low priority processes can starve (no aging)",),
        use_cases=("Systems where some jobs simply matter more",),
    ),
    "priority-preemptive": AlgorithmInfo(
        name="Priority (preemptive)",
        description="Every time unit, runs the ready process with the lowest priority number.",
        pros=("Urgent arrivals preempt immediately",),
        cons=("More context switches", "Low priority processes can starve (no aging)"),
        use_cases=("Real-time work where urgent tasks must run at once",),
    ),
    "rr": AlgorithmInfo(
        name="Round Robin (RR)",
        description="Serves the ready queue in turn, one time quantum per dispatch.",
        pros=("Fair CPU sharing", "Good response time", "No starvation"),
        cons=("Results hinge on the quantum", "Higher average waiting than SJF"),
        use_cases=("Time-sharing systems", "Many users needing an even share of the CPU"),
    ),
    "mlfq": AlgorithmInfo(
        name="Multilevel Feedback Queue (MLFQ)",
        description=(
            "Round-robin queues of decreasing priority and growing quanta; a process that "
            "uses its full quantum drops one level."
        ),
        pros=("Favors short and interactive jobs", "Needs no burst time estimates"),
        cons=("Quanta need tuning", "Demoted processes can starve (no priority boost)"),
        use_cases=("General-purpose operating systems", "Mixed interactive and batch workloads"),
    ),
}
