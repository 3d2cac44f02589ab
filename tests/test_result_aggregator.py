import random
import threading
import time

from index_bench.models.index_cost_record import IndexCostRecord
from index_bench.service.aggregator.result_aggregator import ResultAggregator, render_results


def costs(seed: float):
    return (
        IndexCostRecord("Btree", 10.0 + seed, "1.0 MB"),
        IndexCostRecord("Bitmap", 20.0 + seed, "2.0 KB"),
    )


def test_render_keeps_insertion_order():
    aggregator = ResultAggregator()
    for label in ["C", "A", "B"]:
        aggregator.record(label, costs(0))

    lines = aggregator.render().splitlines()
    assert [line.split("|")[1].strip() for line in lines[2:]] == ["C", "A", "B"]


def test_rerecording_a_label_replaces_in_place():
    aggregator = ResultAggregator()
    aggregator.record("A", costs(0))
    aggregator.record("B", costs(0))
    aggregator.record("A", costs(5))

    assert [label for label, _ in aggregator.results()] == ["A", "B"]
    assert aggregator.results()[0][1][0].construction_time_ms == 15.0
    assert len(aggregator) == 2


def test_render_is_stable():
    aggregator = ResultAggregator()
    aggregator.record("fmtA index cost", costs(1))
    aggregator.record("fmtB index cost", costs(2))

    assert aggregator.render() == aggregator.render()
    assert aggregator.render() == render_results(aggregator.results())


def test_render_layout():
    aggregator = ResultAggregator()
    aggregator.record("fmtA index cost", costs(0.5))
    aggregator.record("fmtB index cost", costs(1))

    lines = aggregator.render().splitlines()
    assert [cell.strip() for cell in lines[0].split("|")[1:-1]] == [
        "Test", "Btree Time (ms)", "Btree Size", "Bitmap Time (ms)", "Bitmap Size"
    ]
    assert [cell.strip() for cell in lines[2].split("|")[1:-1]] == [
        "fmtA index cost", "10.500", "1.0 MB", "20.500", "2.0 KB"
    ]
    assert "fmtA" in lines[2] and "fmtB" in lines[3]


def test_reserved_order_survives_concurrent_recording():
    labels = [f"fmt{i} index cost" for i in range(8)]
    aggregator = ResultAggregator()
    for label in labels:
        aggregator.reserve(label)

    rng = random.Random(42)
    delays = [rng.uniform(0, 0.02) for _ in labels]

    def produce(label, delay):
        time.sleep(delay)
        aggregator.record(label, costs(delay))

    threads = [threading.Thread(target=produce, args=(label, delay)) for label, delay in zip(labels, delays)]
    for thread in reversed(threads):
        thread.start()
    for thread in threads:
        thread.join()

    assert [label for label, _ in aggregator.results()] == labels


def test_unfilled_reservations_are_not_rendered():
    aggregator = ResultAggregator()
    aggregator.reserve("A")
    aggregator.reserve("B")
    aggregator.record("B", costs(0))

    assert [label for label, _ in aggregator.results()] == ["B"]


def test_empty_results_render_empty():
    assert ResultAggregator().render() == ""
