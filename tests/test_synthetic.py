from collections import Counter
from datetime import datetime, timedelta, timezone
import numpy as np
import pytest
from aquafuzzy import generate_synthetic_data, InvalidInputError
from aquafuzzy.diagnostics.synthetic import (
    DEFAULT_CLUSTER_DEFINITIONS, HISTORY_WINDOW, box_muller, generate_degradation_data,
)
from aquafuzzy.diagnostics.types import ClusterDefinition

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def test_default_scenario_counts_and_labels():
    points = generate_synthetic_data(rng=0, now=NOW)
    assert len(points) == 105
    assert Counter(p.label for p in points) == {"Normal": 60, "Alerta": 30, "Falla Inminente": 15}
    assert all(len(p.features) == 2 for p in points)

def test_ids_are_unique_and_sequential():
    points = generate_synthetic_data(rng=0, now=NOW)
    ids = sorted(p.id for p in points)
    assert ids == [f"M{i:04d}" for i in range(105)]

def test_output_is_shuffled():
    points = generate_synthetic_data(rng=0, now=NOW)
    assert [p.label for p in points] != sorted((p.label for p in points), key=["Normal", "Alerta", "Falla Inminente"].index)

def test_same_seed_same_data():
    a = generate_synthetic_data(rng=3, now=NOW)
    b = generate_synthetic_data(rng=np.random.default_rng(3), now=NOW)
    assert [(p.id, p.features, p.timestamp) for p in a] == [(p.id, p.features, p.timestamp) for p in b]

def test_timestamps_within_history_window():
    for p in generate_synthetic_data(rng=1, now=NOW):
        assert NOW - HISTORY_WINDOW < p.timestamp <= NOW

def test_blobs_center_on_their_definition():
    points = generate_synthetic_data(rng=2, now=NOW)
    for cluster in DEFAULT_CLUSTER_DEFINITIONS:
        mine = np.array([p.features for p in points if p.label == cluster.name])
        assert np.allclose(mine.mean(axis=0), cluster.center, atol=3 * max(cluster.std_dev))

def test_short_std_dev_reuses_first_entry():
    defs = [ClusterDefinition("X", center=(1, 2, 3), std_dev=(0, 5), count=10, color="hsl(0, 0%, 0%)")]
    points = generate_synthetic_data(defs, rng=4, now=NOW)
    assert all(p.features[0] == 1.0 and p.features[2] == 3.0 for p in points)
    assert len({p.features[1] for p in points}) > 1

def test_box_muller_is_roughly_standard_normal():
    rng = np.random.default_rng(9)
    samples = np.array([box_muller(rng) for _ in range(4000)])
    assert np.all(np.isfinite(samples))
    assert abs(samples.mean()) < 0.1
    assert abs(samples.std() - 1.0) < 0.1

def test_degradation_series_follows_the_line():
    points = generate_degradation_data((10, 20), (90, 100), steps=5, rng=0, now=NOW)
    assert [p.id for p in points] == [f"DEG001_T{i:03d}" for i in range(5)]
    assert all(p.label == "Degradation" for p in points)
    for i, p in enumerate(points):
        expected = (10 + 20 * i, 20 + 20 * i)
        assert all(abs(f - e) <= 1.5 for f, e in zip(p.features, expected))
        assert p.timestamp == NOW - timedelta(days=5 - i)

def test_degradation_single_step_stays_at_start():
    (point,) = generate_degradation_data((50,), (0,), steps=1, machine_id="M7", rng=0, now=NOW)
    assert point.id == "M7_T000"
    assert abs(point.features[0] - 50) <= 1.5

def test_degradation_rejects_bad_input():
    with pytest.raises(InvalidInputError):
        generate_degradation_data((0, 0), (1, 1), steps=0)
    with pytest.raises(InvalidInputError):
        generate_degradation_data((0, 0), (1,), steps=3)

def test_definition_without_std_dev_rejected():
    defs = [ClusterDefinition("X", center=(1, 2), std_dev=(), count=3, color="hsl(0, 0%, 0%)")]
    with pytest.raises(InvalidInputError):
        generate_synthetic_data(defs, rng=0, now=NOW)
