from fakes import make_result
from teacher_performance.performance.ranking import RankingReporter


def test_descending_total_with_name_then_id_tie_break():
    results = [
        make_result(4, "dan", 15.0),
        make_result(2, "Bob", 18.0),
        make_result(3, "alice", 15.0),
        make_result(1, "Alice", 15.0),
    ]

    ranking = RankingReporter(results)

    assert [r.teacher_id for r in ranking.ordered()] == [2, 1, 3, 4]
    assert ranking.rank_of(3) == 3
    assert ranking.rank_of(99) is None
    assert len(ranking) == 4


def test_order_does_not_depend_on_input_order():
    results = [make_result(i, f"T{i}", float(i % 3)) for i in range(1, 8)]

    assert [r.teacher_id for r in RankingReporter(results).ordered()] == [
        r.teacher_id for r in RankingReporter(reversed(results)).ordered()
    ]


def test_top_n():
    ranking = RankingReporter([make_result(i, f"T{i}", float(i)) for i in range(1, 6)])

    assert [r.teacher_id for r in ranking.top(3)] == [5, 4, 3]
    assert len(ranking.top(10)) == 5
    assert ranking.top(0) == []
