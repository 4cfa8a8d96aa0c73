# tests/test_property_based.py
"""
Property-Based Tests

Hypothesis tests covering:
  - layout position bounds and monotonicity
  - collision stagger invariants
  - running-average vote folding
  - hover hit testing
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from types import SimpleNamespace

from app.scoring.aggregation import fold_vote
from app.timeline.hover import hit_test
from app.timeline.layout import TimelineGeometry, compute_position, resolve_collisions

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

GEOMETRY = TimelineGeometry()

unit_st = st.floats(min_value=0.0, max_value=1.0, allow_nan=False, allow_infinity=False)
any_score_st = st.one_of(
    st.none(),
    st.text(max_size=3),
    st.floats(allow_nan=True, allow_infinity=True),
    st.integers(min_value=-10, max_value=10),
)


@st.composite
def entity_list_st(draw):
    """Draw a list of entities with unique ids and scores clustered enough to collide."""
    scores = draw(st.lists(unit_st, min_size=0, max_size=30))
    return [SimpleNamespace(id=f"c{i}", score=s) for i, s in enumerate(scores)]


# ---------------------------------------------------------------------------
# Layout Property Tests
# ---------------------------------------------------------------------------


class TestPositionPropertyBased:

    @given(any_score_st)
    @settings(max_examples=500)
    def test_position_always_on_page(self, score):
        """Any score, valid or not, lands inside the usable range."""
        position = compute_position(score, GEOMETRY.top_vh, GEOMETRY.usable_vh)
        assert GEOMETRY.top_vh <= position <= GEOMETRY.top_vh + GEOMETRY.usable_vh

    @given(unit_st, unit_st)
    @settings(max_examples=500)
    def test_position_monotone(self, a, b):
        """A higher score never sits above a lower one."""
        low, high = sorted((a, b))
        assert compute_position(low, 15.0, 170.0) <= compute_position(high, 15.0, 170.0)


class TestCollisionPropertyBased:

    @given(entity_list_st())
    @settings(max_examples=500)
    def test_every_entity_gets_a_stagger(self, entities):
        staggers = resolve_collisions(entities, GEOMETRY)
        assert set(staggers) == {e.id for e in entities}
        assert set(staggers.values()) <= {0.0, GEOMETRY.stagger_px, -GEOMETRY.stagger_px}

    @given(entity_list_st())
    @settings(max_examples=500)
    def test_colliding_neighbours_differ(self, entities):
        """Sorted neighbours within the threshold never share a stagger."""
        staggers = resolve_collisions(entities, GEOMETRY)
        ordered = sorted(
            entities,
            key=lambda e: compute_position(e.score, GEOMETRY.top_vh, GEOMETRY.usable_vh),
        )
        for prev, cur in zip(ordered, ordered[1:]):
            gap = (
                compute_position(cur.score, GEOMETRY.top_vh, GEOMETRY.usable_vh)
                - compute_position(prev.score, GEOMETRY.top_vh, GEOMETRY.usable_vh)
            )
            if gap <= GEOMETRY.collision_threshold_vh:
                assert staggers[cur.id] != staggers[prev.id]
            else:
                assert staggers[cur.id] == 0.0

    @given(entity_list_st())
    @settings(max_examples=200)
    def test_deterministic(self, entities):
        assert resolve_collisions(entities, GEOMETRY) == resolve_collisions(list(entities), GEOMETRY)


# ---------------------------------------------------------------------------
# Aggregation Property Tests
# ---------------------------------------------------------------------------


class TestFoldVotePropertyBased:

    @given(unit_st, st.lists(unit_st, min_size=1, max_size=50))
    @settings(max_examples=500)
    def test_running_average_is_mean(self, seed, votes):
        score, count = seed, 1
        for vote in votes:
            score, count = fold_vote(score, count, vote)
        assert count == len(votes) + 1
        assert score == pytest.approx(sum([seed] + votes) / count, abs=1e-9)

    @given(unit_st, st.integers(min_value=0, max_value=10_000), unit_st)
    @settings(max_examples=500)
    def test_fold_stays_in_unit_range(self, score, count, vote):
        new_score, new_count = fold_vote(score, count, vote)
        assert new_count == count + 1
        assert -1e-12 <= new_score <= 1.0 + 1e-12


# ---------------------------------------------------------------------------
# Hover Property Tests
# ---------------------------------------------------------------------------


class TestHitTestPropertyBased:

    @given(
        st.floats(min_value=0, max_value=5000, allow_nan=False),
        st.lists(st.floats(min_value=0, max_value=5000, allow_nan=False), max_size=20),
    )
    @settings(max_examples=500)
    def test_hit_is_nearest_within_threshold(self, pointer_y, ys):
        positions = [(f"c{i}", y) for i, y in enumerate(ys)]
        result = hit_test(pointer_y, positions, 48)
        distances = {pin_id: abs(y - pointer_y) for pin_id, y in positions}
        if result is None:
            assert all(d > 48 for d in distances.values())
        else:
            assert distances[result] <= 48
            assert distances[result] == min(distances.values())
