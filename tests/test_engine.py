from prisched.engine import simulate
from prisched.models import IDLE_LABEL, Process


def _segments(result):
    return [(s.label, s.start_time, s.end_time) for s in result.timeline]


def _procs():
    return [
        Process("P1", arrival_time=0, burst_time=8, priority=2, id=1),
        Process("P2", arrival_time=1, burst_time=4, priority=1, id=2),
        Process("P3", arrival_time=2, burst_time=9, priority=4, id=3),
    ]


def test_single_process():
    res = simulate([Process("P1", arrival_time=0, burst_time=5, priority=1, id=1)])
    assert _segments(res) == [("P1", 0, 5)]
    p = res.processes[0]
    assert p.completion_time == 5
    assert p.turnaround_time == 5
    assert p.waiting_time == 0
    assert res.metrics.cpu_utilization == 100.0


def test_higher_priority_arrival_preempts():
    res = simulate(
        [
            Process("P1", arrival_time=0, burst_time=8, priority=2, id=1),
            Process("P2", arrival_time=1, burst_time=4, priority=1, id=2),
        ]
    )
    assert _segments(res) == [("P1", 0, 1), ("P2", 1, 5), ("P1", 5, 12)]
    p1, p2 = res.processes
    assert p2.completion_time == 5
    assert p2.waiting_time == 0
    assert p1.completion_time == 12
    assert p1.turnaround_time == 12
    assert p1.waiting_time == 4
    assert p1.start_times == [0]
    assert res.total_time == 12


def test_leading_idle_gap():
    res = simulate([Process("P1", arrival_time=3, burst_time=2, priority=1, id=1)])
    assert _segments(res) == [(IDLE_LABEL, 0, 3), ("P1", 3, 5)]
    assert res.timeline[0].process_id is None
    assert res.idle_ticks == 3
    assert res.metrics.cpu_utilization == 40.0


def test_empty_input():
    res = simulate([])
    assert res.timeline == []
    assert res.processes == []
    assert res.total_time == 0
    assert res.idle_ticks == 0
    assert res.metrics.cpu_utilization == 0
    assert res.metrics.avg_turnaround == 0
    assert res.metrics.avg_waiting == 0


def test_idle_between_processes():
    res = simulate(
        [
            Process("A", arrival_time=0, burst_time=2, priority=1, id=1),
            Process("B", arrival_time=5, burst_time=1, priority=1, id=2),
        ]
    )
    assert _segments(res) == [("A", 0, 2), (IDLE_LABEL, 2, 5), ("B", 5, 6)]
    assert res.idle_ticks == 3


def test_sample_workload_schedule():
    res = simulate(_procs())
    assert _segments(res) == [("P1", 0, 1), ("P2", 1, 5), ("P1", 5, 12), ("P3", 12, 21)]
    assert [p.completion_time for p in res.processes] == [12, 5, 21]
    assert [p.waiting_time for p in res.processes] == [4, 0, 10]
    assert res.metrics.avg_turnaround == (12 + 4 + 19) / 3
    assert res.metrics.avg_waiting == (4 + 0 + 10) / 3


def test_priority_tie_goes_to_earlier_arrival():
    res = simulate(
        [
            Process("LATE", arrival_time=1, burst_time=2, priority=1, id=1),
            Process("EARLY", arrival_time=0, burst_time=3, priority=1, id=2),
        ]
    )
    assert _segments(res) == [("EARLY", 0, 3), ("LATE", 3, 5)]


def test_full_tie_keeps_input_order():
    procs = [
        Process("X", arrival_time=0, burst_time=2, priority=3, id=1),
        Process("Y", arrival_time=0, burst_time=2, priority=3, id=2),
    ]
    assert _segments(simulate(procs)) == [("X", 0, 2), ("Y", 2, 4)]
    assert _segments(simulate(list(reversed(procs)))) == [("Y", 0, 2), ("X", 2, 4)]


def test_input_not_mutated_and_repeatable():
    procs = _procs()
    snapshot = [Process(p.pid, p.arrival_time, p.burst_time, p.priority, p.id) for p in procs]

    first = simulate(procs)
    second = simulate(procs)

    assert procs == snapshot
    assert first == second
    assert first.processes[0] is not second.processes[0]


def test_unsorted_input_is_accepted():
    res = simulate(
        [
            Process("B", arrival_time=4, burst_time=1, priority=1, id=2),
            Process("A", arrival_time=0, burst_time=2, priority=5, id=1),
        ]
    )
    assert _segments(res) == [("A", 0, 2), (IDLE_LABEL, 2, 4), ("B", 4, 5)]
    assert [p.pid for p in res.processes] == ["B", "A"]


def test_lower_priority_process_starves_while_others_keep_arriving():
    procs = [Process("LOW", arrival_time=0, burst_time=1, priority=9, id=1)]
    procs += [Process(f"H{t}", arrival_time=t, burst_time=1, priority=1, id=t + 2) for t in range(5)]
    res = simulate(procs)
    assert res.timeline[-1].label == "LOW"
    assert res.processes[0].completion_time == 6
    assert res.processes[0].start_time == 5


def test_timeline_and_completion_invariants():
    procs = [
        Process("P1", arrival_time=2, burst_time=3, priority=2, id=1),
        Process("P2", arrival_time=0, burst_time=1, priority=3, id=2),
        Process("P3", arrival_time=4, burst_time=2, priority=1, id=3),
        Process("P4", arrival_time=12, burst_time=4, priority=2, id=4),
        Process("P5", arrival_time=3, burst_time=5, priority=2, id=5),
    ]
    res = simulate(procs)

    cursor = 0
    for prev, seg in zip([None] + res.timeline[:-1], res.timeline):
        assert seg.start_time == cursor
        assert seg.end_time > seg.start_time
        if prev is not None:
            assert prev.label != seg.label
        cursor = seg.end_time
    assert cursor == res.total_time

    assert sum(p.burst_time for p in procs) + res.idle_ticks == res.total_time

    for p in res.processes:
        assert p.remaining == 0
        assert p.completion_time >= p.arrival_time + p.burst_time
        assert (p.completion_time == p.arrival_time + p.burst_time) == (p.waiting_time == 0)
        ran = sum(s.duration for s in res.timeline if s.label == p.pid)
        assert ran == p.burst_time


def test_process_named_like_idle_gets_its_own_segment():
    res = simulate([Process(IDLE_LABEL, arrival_time=2, burst_time=2, priority=1, id=1)])
    assert [(s.label, s.start_time, s.end_time, s.process_id) for s in res.timeline] == [
        (IDLE_LABEL, 0, 2, None),
        (IDLE_LABEL, 2, 4, 1),
    ]
    assert res.idle_ticks == 2
