"""Tests for the recommendation scoring engine."""

import pytest

from conftest import make_interaction, make_product
from shopreco.domain.models.interaction import InteractionType
from shopreco.domain.services.scoring_svc import ScoringEngine, ScoringWeights


@pytest.fixture
def engine():
    return ScoringEngine()


def _ids(result):
    return [p.id for p in result]


# ── Cold start ─────────────────────────────────────


def test_cold_start_ranks_by_popularity_with_stable_ties(engine):
    catalog = [
        make_product(1, "Audio", 10),
        make_product(2, "Audio", 50),
        make_product(3, "Gaming", 10),
        make_product(4, "Gaming", 80),
        make_product(5, "Furniture", 50),
    ]
    result = engine.recommend("new-user", catalog, [], limit=5)
    assert _ids(result) == [4, 2, 5, 1, 3]


def test_cold_start_truncates_to_limit(engine):
    catalog = [make_product(i, "Audio", i) for i in range(1, 11)]
    result = engine.recommend("new-user", catalog, [], limit=3)
    assert _ids(result) == [10, 9, 8]
    assert result[0].score == pytest.approx(0.10)


def test_cold_start_does_not_reorder_input(engine):
    catalog = [make_product(1, "Audio", 5), make_product(2, "Audio", 90)]
    engine.recommend("new-user", catalog, [])
    assert _ids(catalog) == [1, 2]


def test_empty_catalog_yields_nothing(engine):
    assert engine.recommend("u1", [], []) == []
    assert engine.recommend("u1", [], [make_interaction(1, "view")]) == []


def test_default_limit_is_five():
    catalog = [make_product(i, "Audio", i) for i in range(10)]
    assert len(ScoringEngine().recommend("u1", catalog, [])) == 5
    assert len(ScoringEngine(default_limit=2).recommend("u1", catalog, [])) == 2


@pytest.mark.parametrize("k", [0, 1, 2, 3, 4, 10])
def test_result_never_longer_than_limit(engine, k):
    catalog = [make_product(i, "Audio" if i % 2 else "Gaming", i * 3) for i in range(1, 5)]
    history = [make_interaction(1, "view")]
    assert len(engine.recommend("u1", catalog, history, limit=k)) <= k
    assert len(engine.recommend("u1", catalog, [], limit=k)) <= k


def test_zero_limit_is_empty(engine, catalog):
    assert engine.recommend("u1", catalog, [], limit=0) == []
    assert engine.recommend("u1", catalog, [make_interaction(1, "view")], limit=0) == []


# ── Warm path ──────────────────────────────────────


def test_worked_example(engine, catalog):
    result = engine.recommend("u1", catalog, [make_interaction(1, "purchase")], limit=5)

    assert _ids(result) == [2, 3]
    assert result[0].score == pytest.approx(2.0 + 0.10 + 0.5)
    assert result[1].score == pytest.approx(0.50)


@pytest.mark.parametrize("kind", ["view", "cart", "purchase", "wishlist"])
def test_seen_products_never_recommended(engine, kind):
    catalog = [make_product(i, "Audio", 100 - i) for i in range(1, 6)]
    history = [make_interaction(2, kind), make_interaction(4, "view")]
    result = engine.recommend("u1", catalog, history, limit=10)
    assert 2 not in _ids(result)
    assert 4 not in _ids(result)
    assert _ids(result) == [1, 3, 5]


def test_scoring_is_deterministic(engine):
    catalog = [make_product(i, ["Audio", "Gaming", "Furniture"][i % 3], (i * 37) % 100) for i in range(30)]
    history = [make_interaction(i, kind) for i, kind in [(3, "view"), (4, "cart"), (5, "purchase"), (4, "view")]]

    first = engine.recommend("u1", catalog, history, limit=10)
    second = engine.recommend("u1", catalog, history, limit=10)

    assert [(p.id, p.score) for p in first] == [(p.id, p.score) for p in second]


def test_popularity_increase_never_lowers_score_or_rank(engine):
    history = [make_interaction(1, "view")]
    base = [
        make_product(1, "Audio", 10),
        make_product(2, "Audio", 20),
        make_product(3, "Audio", 30),
        make_product(4, "Gaming", 90),
    ]
    before = engine.recommend("u1", base, history, limit=10)

    boosted = [p if p.id != 2 else make_product(2, "Audio", 35) for p in base]
    after = engine.recommend("u1", boosted, history, limit=10)

    score = {p.id: p.score for p in before}
    score_after = {p.id: p.score for p in after}
    assert score_after[2] > score[2]
    assert _ids(after).index(2) <= _ids(before).index(2)
    assert _ids(after).index(2) < _ids(after).index(3)


def test_category_affinity_beats_untouched_category(engine):
    catalog = [
        make_product(1, "Audio", 0),
        make_product(2, "Gaming", 40),
        make_product(3, "Audio", 40),
    ]
    result = engine.recommend("u1", catalog, [make_interaction(1, "view")], limit=5)
    score = {p.id: p.score for p in result}
    assert score[3] > score[2]
    assert _ids(result) == [3, 2]


def test_interaction_weight_order_purchase_cart_view(engine):
    catalog = [
        make_product("p-seen", "A"),
        make_product("c-seen", "B"),
        make_product("v-seen", "C"),
        make_product("v-cand", "C", 20),
        make_product("c-cand", "B", 20),
        make_product("p-cand", "A", 20),
    ]
    history = [
        make_interaction("v-seen", "view"),
        make_interaction("c-seen", "cart"),
        make_interaction("p-seen", "purchase"),
    ]
    result = engine.recommend("u1", catalog, history, limit=5)
    score = {p.id: p.score for p in result}

    assert score["p-cand"] > score["c-cand"] > score["v-cand"]
    assert _ids(result) == ["p-cand", "c-cand", "v-cand"]


def test_repeated_interactions_compound(engine):
    catalog = [
        make_product(1, "Audio"),
        make_product(2, "Audio"),
        make_product(3, "Audio", 10),
    ]
    history = [
        make_interaction(1, "purchase"),
        make_interaction(2, "purchase"),
        make_interaction(1, "view"),
    ]
    [only] = engine.recommend("u1", catalog, history)
    assert only.id == 3
    assert only.score == pytest.approx(2.0 + 0.5 + 0.5 + 0.1 + 0.10)


def test_unknown_interaction_type_weighs_nothing(engine):
    catalog = [make_product(1, "Audio"), make_product(2, "Audio", 30)]
    [only] = engine.recommend("u1", catalog, [make_interaction(1, "wishlist")])
    # Still seen, still an affinity category, zero interaction weight
    assert only.id == 2
    assert only.score == pytest.approx(2.0 + 0.30)


def test_misspelled_interaction_type_weighs_nothing(engine):
    catalog = [make_product(1, "Audio"), make_product(2, "Audio")]
    [only] = engine.recommend("u1", catalog, [make_interaction(1, " Purchase ")])
    assert only.score == pytest.approx(2.0)


def test_weights_added_one_interaction_at_a_time(engine):
    # 2.0 + 0.3 + 0.3 lands one ulp below 2.0 + 0.5 + 0.1, so B ranks first
    catalog = [
        make_product("x1", "Audio"),
        make_product("y1", "Gaming"),
        make_product("a", "Audio"),
        make_product("b", "Gaming"),
    ]
    history = [
        make_interaction("x1", "cart"),
        make_interaction("x1", "cart"),
        make_interaction("y1", "purchase"),
        make_interaction("y1", "view"),
    ]
    result = engine.recommend("u1", catalog, history)
    assert _ids(result) == ["b", "a"]
    assert result[0].score == 2.0 + 0.0 + 0.5 + 0.1
    assert result[1].score == 2.0 + 0.0 + 0.3 + 0.3
    assert result[1].score < result[0].score


def test_digit_string_ids_match_numeric_catalog_ids(engine, catalog):
    result = engine.recommend("u1", catalog, [make_interaction("3", "purchase")])
    assert 3 not in _ids(result)
    assert _ids(result) == [1, 2]
    assert result[0].score == pytest.approx(0.80)


def test_interaction_on_missing_product_is_tolerated(engine, catalog):
    history = [make_interaction(999, "purchase"), make_interaction(None, "cart")]
    result = engine.recommend("u1", catalog, history)
    assert _ids(result) == [1, 3, 2]
    assert [p.score for p in result] == pytest.approx([0.80, 0.50, 0.10])


def test_missing_popularity_counts_as_zero(engine):
    catalog = [make_product(1, "Audio"), make_product(2, "Audio", None), make_product(3, "Audio", 5)]
    result = engine.recommend("u1", catalog, [make_interaction(1, "view")])
    assert _ids(result) == [3, 2]
    assert result[1].score == pytest.approx(2.0 + 0.1)


def test_weights_are_configurable(catalog):
    weights = ScoringWeights(
        affinity=0.0,
        popularity_divisor=10.0,
        interaction={InteractionType.PURCHASE: 1.0},
    )
    engine = ScoringEngine(weights=weights)
    result = engine.recommend("u1", catalog, [make_interaction(1, "purchase"), make_interaction(1, "view")])
    score = {p.id: p.score for p in result}
    assert score[2] == pytest.approx(1.0 + 1.0)
    assert score[3] == pytest.approx(5.0)
    assert _ids(result) == [3, 2]


def test_scored_products_keep_catalog_fields(engine, catalog):
    [first, *_] = engine.recommend("u1", catalog, [])
    assert first.name == "Studio Headphones"
    assert first.price == 199.0
    assert first.category == "Audio"
