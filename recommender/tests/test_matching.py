from __future__ import annotations

from recommender.catalog.data_store import load_catalog
from recommender.catalog.models import Product
from recommender.recommendations.matching import (
    get_recommendations,
    is_single_mode,
    score_product,
)
from recommender.recommendations.models import SelectionCriteria

SMALL_CATALOG = [
    Product(
        id=1,
        name="RD Station CRM",
        category="Vendas",
        preferences=["Integração fácil com ferramentas de e-mail"],
        features=["Gestão de leads e oportunidades"],
    ),
    Product(
        id=3,
        name="RD Conversas",
        category="Omnichannel",
        preferences=["Integração com chatbots"],
        features=["Chat ao vivo e mensagens automatizadas"],
    ),
]


def _ids(results):
    return [r.id for r in results]


# ── Worked examples ──────────────────────────────────────────────────────


def test_single_product_best_match():
    criteria = SelectionCriteria(
        selected_preferences=["Integração com chatbots"],
        selected_features=["Chat ao vivo e mensagens automatizadas"],
        recommendation_type="SingleProduct",
    )
    results = get_recommendations(criteria, SMALL_CATALOG)
    assert len(results) == 1
    assert results[0].id == 3
    assert results[0].name == "RD Conversas"
    assert results[0].score == 2


def test_multiple_products_sorted_by_score_then_id_desc():
    criteria = SelectionCriteria(
        selected_preferences=[
            "Integração fácil com ferramentas de e-mail",
            "Integração com chatbots",
        ],
        recommendation_type="MultipleProducts",
    )
    results = get_recommendations(criteria, SMALL_CATALOG)
    assert _ids(results) == [3, 1]
    assert [r.score for r in results] == [1, 1]


def test_unknown_preference_returns_empty():
    criteria = SelectionCriteria(
        selected_preferences=["Something nobody offers"],
        recommendation_type="MultipleProducts",
    )
    assert get_recommendations(criteria, SMALL_CATALOG) == []


# ── Defaults / fail-soft ─────────────────────────────────────────────────


def test_no_arguments_returns_empty():
    assert get_recommendations() == []


def test_empty_catalog_returns_empty():
    criteria = SelectionCriteria(selected_preferences=["Integração com chatbots"])
    assert get_recommendations(criteria, []) == []
    assert get_recommendations(criteria) == []


def test_default_criteria_returns_empty():
    assert get_recommendations(None, SMALL_CATALOG) == []
    assert get_recommendations({}, SMALL_CATALOG) == []
    assert get_recommendations(SelectionCriteria(), SMALL_CATALOG) == []


def test_garbage_inputs_degrade_to_empty():
    assert get_recommendations("not criteria", SMALL_CATALOG) == []
    assert get_recommendations({"selected_preferences": ["Integração com chatbots"]}, "nope") == []
    assert get_recommendations({"selected_preferences": "Integração com chatbots"}, SMALL_CATALOG) == []


def test_blank_selections_are_ignored():
    criteria = {"selected_preferences": ["   ", ""], "recommendation_type": "MultipleProducts"}
    assert get_recommendations(criteria, SMALL_CATALOG) == []


def test_non_string_selections_are_ignored():
    criteria = {
        "selected_preferences": [None, 42, "Integração com chatbots"],
        "recommendation_type": "MultipleProducts",
    }
    assert _ids(get_recommendations(criteria, SMALL_CATALOG)) == [3]


def test_malformed_catalog_entries_are_skipped():
    catalog = [
        {"id": "not-an-int", "name": "Broken"},
        {"name": "No id"},
        42,
        {
            "id": 7,
            "name": "Dict product",
            "preferences": ["Integração com chatbots"],
        },
    ]
    results = get_recommendations(
        {"selectedPreferences": ["Integração com chatbots"]}, catalog,
    )
    assert _ids(results) == [7]


def test_camel_case_mapping_criteria():
    criteria = {
        "selectedPreferences": ["Integração com chatbots"],
        "selectedFeatures": ["Gestão de leads e oportunidades"],
        "recommendationType": "MultipleProducts",
    }
    assert _ids(get_recommendations(criteria, SMALL_CATALOG)) == [3, 1]


# ── Scoring rule ─────────────────────────────────────────────────────────


def test_selection_contained_in_product_entry_matches():
    criteria = SelectionCriteria(selected_preferences=["CHATBOTS"])
    results = get_recommendations(criteria, SMALL_CATALOG)
    assert _ids(results) == [3]


def test_product_entry_contained_in_selection_matches():
    criteria = SelectionCriteria(
        selected_features=["  Quero chat ao vivo e mensagens automatizadas no site  "],
    )
    results = get_recommendations(criteria, SMALL_CATALOG)
    assert _ids(results) == [3]
    assert results[0].matched_features == ["Chat ao vivo e mensagens automatizadas"]


def test_each_product_entry_counts_once():
    product = SMALL_CATALOG[1]
    scored = score_product(product, ["integração", "chatbots", "com"], [])
    assert scored.score == 1
    assert scored.matched_preferences == ["Integração com chatbots"]


def test_preferences_and_features_are_scored_separately():
    # A feature string selected as a preference does not score.
    criteria = SelectionCriteria(
        selected_preferences=["Chat ao vivo e mensagens automatizadas"],
        recommendation_type="MultipleProducts",
    )
    assert get_recommendations(criteria, SMALL_CATALOG) == []


def test_score_product_does_not_mutate_input():
    product = SMALL_CATALOG[1]
    before = product.model_dump()
    scored = score_product(product, ["integração com chatbots"], [])
    assert product.model_dump() == before
    assert scored is not product
    assert not hasattr(product, "score")


# ── Mode handling ────────────────────────────────────────────────────────


class TestModes:
    def test_single_aliases(self):
        for value in ("SingleProduct", "  singleproduct ", "Produto Único", "produto unico"):
            assert is_single_mode(value)

    def test_multiple_aliases(self):
        for value in ("MultipleProducts", "Múltiplos Produtos", " multiplos produtos "):
            assert not is_single_mode(value)

    def test_missing_or_unknown_defaults_to_single(self):
        for value in (None, "", "   ", "whatever", 3):
            assert is_single_mode(value)

    def test_single_mode_returns_highest_id_on_tie(self):
        criteria = SelectionCriteria(
            selected_preferences=[
                "Integração fácil com ferramentas de e-mail",
                "Integração com chatbots",
            ],
            recommendation_type="Produto Único",
        )
        assert _ids(get_recommendations(criteria, SMALL_CATALOG)) == [3]

    def test_empty_type_is_single(self):
        criteria = {
            "selectedPreferences": [
                "Integração fácil com ferramentas de e-mail",
                "Integração com chatbots",
            ],
            "recommendationType": "",
        }
        assert len(get_recommendations(criteria, SMALL_CATALOG)) == 1


# ── Properties over the seed catalog ─────────────────────────────────────


def test_seed_catalog_multi_mode_ordering():
    catalog = load_catalog()
    criteria = SelectionCriteria(
        selected_preferences=[
            "Integração fácil com ferramentas de e-mail",
            "Automação de marketing",
        ],
        selected_features=["Rastreamento de comportamento do usuário"],
        recommendation_type="MultipleProducts",
    )
    results = get_recommendations(criteria, catalog)
    assert [r.name for r in results] == ["RD Station Marketing", "RD Station CRM"]
    assert [r.score for r in results] == [2, 1]


def test_equal_scores_in_descending_id_order():
    catalog = load_catalog()
    criteria = SelectionCriteria(
        selected_preferences=[
            "Integração fácil com ferramentas de e-mail",
            "Automação de marketing",
            "Integração com chatbots",
            "Análise preditiva de dados",
        ],
        recommendation_type="MultipleProducts",
    )
    results = get_recommendations(criteria, catalog)
    assert _ids(results) == [4, 3, 2, 1]


def test_idempotent():
    catalog = load_catalog()
    criteria = SelectionCriteria(
        selected_preferences=["Integração"],
        selected_features=["Gestão"],
        recommendation_type="MultipleProducts",
    )
    first = get_recommendations(criteria, catalog)
    second = get_recommendations(criteria, catalog)
    assert [r.model_dump() for r in first] == [r.model_dump() for r in second]


def test_adding_a_selection_never_lowers_scores():
    catalog = load_catalog()
    base = SelectionCriteria(
        selected_preferences=["Automação de marketing"],
        recommendation_type="MultipleProducts",
    )
    extended = SelectionCriteria(
        selected_preferences=["Automação de marketing", "Análise preditiva de dados"],
        recommendation_type="MultipleProducts",
    )
    before = {r.id: r.score for r in get_recommendations(base, catalog)}
    after = {r.id: r.score for r in get_recommendations(extended, catalog)}
    for product_id, score in before.items():
        assert after[product_id] >= score
    assert after[4] == 1


def test_multi_mode_bounds_and_single_mode_length():
    catalog = load_catalog()
    selections = {
        "selected_preferences": ["de"],
        "selected_features": ["de"],
    }
    multi = get_recommendations({**selections, "recommendation_type": "MultipleProducts"}, catalog)
    single = get_recommendations({**selections, "recommendation_type": "SingleProduct"}, catalog)
    assert 0 < len(multi) <= len(catalog)
    assert len(single) == 1
    assert single[0].id == multi[0].id
    scores = [r.score for r in multi]
    assert scores == sorted(scores, reverse=True)


def test_engine_does_not_mutate_inputs():
    catalog = load_catalog()
    catalog_before = [p.model_dump() for p in catalog]
    criteria = SelectionCriteria(
        selected_preferences=["  Integração com chatbots  "],
        recommendation_type="MultipleProducts",
    )
    criteria_before = criteria.model_dump()

    get_recommendations(criteria, catalog)

    assert [p.model_dump() for p in catalog] == catalog_before
    assert criteria.model_dump() == criteria_before


# ── Inconsistent inputs ──────────────────────────────────────────────────


def test_blank_product_entries_never_match():
    catalog = [
        Product(id=5, name="Blank prefs", preferences=["   ", ""], features=[" "]),
        SMALL_CATALOG[1],
    ]
    criteria = SelectionCriteria(
        selected_preferences=["anything", "Integração com chatbots"],
        selected_features=["whatever"],
        recommendation_type="MultipleProducts",
    )
    results = get_recommendations(criteria, catalog)
    assert _ids(results) == [3]


def test_unvalidated_product_instances_are_skipped():
    broken = Product.model_construct(id=9, name="Broken", category="", preferences=None, features=[])
    nameless = Product.model_construct(id=10, preferences=["Integração com chatbots"], features=[])
    criteria = SelectionCriteria(
        selected_preferences=["Integração com chatbots"],
        recommendation_type="MultipleProducts",
    )
    results = get_recommendations(criteria, [broken, nameless, *SMALL_CATALOG])
    assert _ids(results) == [3]
