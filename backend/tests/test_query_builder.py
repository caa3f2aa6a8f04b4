import pytest

from gridvault.services.search.query_builder import (
    BRIEFING_PATH,
    HIGHLIGHT_PATHS,
    NAME_PATH,
    TEXT_PATHS,
    build_compound_query,
    build_search_pipeline,
)


def test_pipeline_stages_in_order():
    pipeline = build_search_pipeline("report")

    assert [list(stage)[0] for stage in pipeline] == ["$search", "$limit", "$project"]
    assert pipeline[0]["$search"]["index"] == "default"
    assert pipeline[1]["$limit"] == 50


def test_index_and_limit_are_configurable():
    pipeline = build_search_pipeline("report", index="files_idx", limit=5)

    assert pipeline[0]["$search"]["index"] == "files_idx"
    assert pipeline[1]["$limit"] == 5


def test_compound_query_clauses():
    compound = build_compound_query("quarterly")
    name, text, briefing = compound["should"]

    assert compound["minimumShouldMatch"] == 1

    assert name["autocomplete"]["path"] == NAME_PATH
    assert name["autocomplete"]["query"] == "quarterly"
    assert name["autocomplete"]["fuzzy"] == {"maxEdits": 1, "prefixLength": 2}
    assert "score" not in name["autocomplete"]

    assert text["text"]["path"] == TEXT_PATHS
    assert text["text"]["score"] == {"boost": {"value": 2}}
    assert text["text"]["fuzzy"] == {"maxEdits": 1, "prefixLength": 2}

    assert briefing["text"]["path"] == BRIEFING_PATH
    assert briefing["text"]["score"] == {"boost": {"value": 2}}


def test_query_is_passed_verbatim_to_every_clause():
    q = 'ubuntu "22.04" <iso>'
    compound = build_compound_query(q)

    queries = [spec["query"] for clause in compound["should"] for spec in clause.values()]
    assert queries == [q, q, q]


def test_highlight_and_projection():
    search, _, project = build_search_pipeline("x1")

    assert search["$search"]["highlight"]["path"] == HIGHLIGHT_PATHS
    assert len(HIGHLIGHT_PATHS) == 6
    assert project["$project"]["score"] == {"$meta": "searchScore"}
    assert project["$project"]["highlights"] == {"$meta": "searchHighlights"}
    for key in ("_id", "filename", "uploadDate", "length", "metadata"):
        assert project["$project"][key] == 1


def test_builder_does_not_share_mutable_constants():
    first = build_compound_query("a1")
    first["should"][1]["text"]["path"].append("metadata.extra")
    first["should"][0]["autocomplete"]["fuzzy"]["maxEdits"] = 9

    second = build_compound_query("a1")
    assert "metadata.extra" not in second["should"][1]["text"]["path"]
    assert second["should"][0]["autocomplete"]["fuzzy"]["maxEdits"] == 1


@pytest.mark.parametrize("q", ["", "   ", "\t\n"])
def test_blank_query_is_rejected(q):
    with pytest.raises(ValueError):
        build_search_pipeline(q)
