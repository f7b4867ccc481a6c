import asyncio

from app.application.commands import SearchCommand, parse_limit
from app.domain.vocabulary import SearchVocabulary


def _run(uc, **params):
    return asyncio.run(uc.run(SearchCommand.from_params(**params)))["results"]


def test_gold_standard_end_to_end(make_uc, fake_source):
    src = fake_source("ext")
    results = _run(make_uc(sources=[src]), q="gold standard")
    assert [r["id"] for r in results] == ["on-gold-standard"]
    # catalog matched, so no external call without external=1
    assert src.calls == []

def test_alias_query(make_uc):
    results = _run(make_uc(), q="ON")
    assert results[0]["brand"] == "Optimum Nutrition"

def test_empty_query_returns_catalog_filtered_and_sorted(make_uc, demo_catalog):
    assert [r["id"] for r in _run(make_uc(), q="  ")] == [r["id"] for r in demo_catalog]
    assert [r["id"] for r in _run(make_uc(), type="whey", sort="price")] == ["mp-impact-whey", "on-gold-standard"]
    assert [r["pricePerKg"] for r in _run(make_uc(), sort="price")] == [25, 28, 32, 40]

def test_every_result_has_origin(make_uc, fake_source):
    ext = fake_source("ext", [{"brand": "New", "product": "Thing"}])
    results = _run(make_uc(sources=[ext]), q="", external="1")
    assert results and all("origin" in r for r in results)

def test_no_match_without_external_data_is_empty(make_uc, fake_source):
    src = fake_source("ext")
    assert _run(make_uc(sources=[src]), q="zzz unknown") == []
    # auto fallback still asked the sources, once, with the expanded query
    assert src.calls == ["zzz unknown"]

def test_no_match_falls_back_to_external(make_uc, fake_source):
    src = fake_source("ext", [{"brand": "Scitec", "product": "100% Whey Professional", "source": "OpenFoodFacts"}])
    results = _run(make_uc(sources=[src]), q="scitec")
    assert [r["brand"] for r in results] == ["Scitec"]
    assert results[0]["source"] == "OpenFoodFacts"

def test_forced_external_appends_and_dedups(make_uc, fake_source):
    dup = {"brand": "optimum nutrition", "product": "GOLD STANDARD WHEY", "source": "FoodRepo"}
    new = {"brand": "Optimum Nutrition", "product": "Gold Standard Casein", "type": "Casein", "source": "FoodRepo"}
    src = fake_source("ext", [dup, new])
    results = _run(make_uc(sources=[src]), q="gold standard", external="1")
    assert [(r["product"], r["source"]) for r in results] == [
        ("Gold Standard Whey", "KV"), ("Gold Standard Casein", "FoodRepo"),
    ]
    assert len(src.calls) == 1

def test_forced_external_with_no_local_calls_once(make_uc, fake_source):
    src = fake_source("ext")
    _run(make_uc(sources=[src]), q="nothing here", external="1")
    assert len(src.calls) == 1

def test_failing_sources_degrade(make_uc, fake_source):
    bad = fake_source("bad", exc=RuntimeError("down"))
    good = fake_source("good", [{"brand": "Good", "product": "Whey"}])
    results = _run(make_uc(sources=[bad, good]), q="nomatch")
    assert [r["brand"] for r in results] == ["Good"]

def test_type_filter_without_local_hits_asks_sources(make_uc, fake_source):
    src = fake_source("ext", [{"brand": "X", "product": "Micellar", "type": "Casein"},
                              {"brand": "Y", "product": "Whey", "type": "Whey"}])
    results = _run(make_uc(sources=[src]), type="casein")
    assert [r["brand"] for r in results] == ["X"]

def test_external_results_are_sorted_with_catalog(make_uc, fake_source):
    src = fake_source("ext", [{"brand": "Cheap", "product": "Whey", "pricePerKg": 10}])
    results = _run(make_uc(sources=[src]), q="whey", external="1", sort="price")
    assert [r["pricePerKg"] for r in results] == [10, 25, 32]

def test_limit_clamp(make_uc, demo_catalog):
    rows = [dict(demo_catalog[0], id=f"p{i}") for i in range(10)]
    uc = make_uc(rows=rows)
    assert len(_run(uc, limit="999999")) == 10
    assert len(_run(uc, limit="3")) == 3
    assert len(_run(uc, limit="0")) == 1
    assert len(_run(uc, limit="-5")) == 1
    assert len(_run(uc, limit="lots")) == 10

def test_resolve_limit(make_uc):
    uc = make_uc(default_limit=50, max_limit=10000)
    assert uc.resolve_limit(None, 4) == 50
    assert uc.resolve_limit(None, 200) == 200
    assert uc.resolve_limit(999999, 10) == 10000
    assert uc.resolve_limit(999999, 20000) == 20000
    assert uc.resolve_limit(0, 10) == 1

def test_custom_vocabulary_is_used(make_uc):
    uc = make_uc(vocabulary=SearchVocabulary(aliases=(("bk", "bulk"),)))
    assert [r["id"] for r in _run(uc, q="bk")] == ["bulk-vegan"]

def test_broken_catalog_still_answers(make_uc, fake_source):
    src = fake_source("ext", [{"brand": "Ext", "product": "Whey"}])
    assert [r["brand"] for r in _run(make_uc(rows="not a list", sources=[src]), q="whey")] == ["Ext"]

def test_command_parsing():
    cmd = SearchCommand.from_params(q="  Gold ", type=" Whey ", sort="PRICE", external="1", limit="12")
    assert (cmd.q, cmd.type, cmd.sort, cmd.external, cmd.limit) == ("Gold", "Whey", "price", True, 12)
    assert SearchCommand.from_params(external="true").external is False
    assert SearchCommand.from_params().limit is None
    assert parse_limit("12.7") == 12
    assert parse_limit("x") is None
