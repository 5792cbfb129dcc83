from collections import namedtuple

from app.core.mutual_match import canonical_pair_key, resolve_mutual

Edge = namedtuple("Edge", ["selector_id", "selected_id"])


def test_canonical_pair_key_is_order_independent():
    assert canonical_pair_key("a", "b") == canonical_pair_key("b", "a")
    assert canonical_pair_key(101, 102) == "101:102"


def test_empty_edge_set():
    r = resolve_mutual([])
    assert r.total == 0
    assert r.mutual_pair_count == 0
    assert r.edges == []
    assert r.pairs == []


def test_one_way_selection_is_not_mutual():
    r = resolve_mutual([Edge("A", "B")])
    assert r.total == 1
    assert r.mutual_pair_count == 0
    assert r.edges[0].is_mutual is False
    assert r.edges[0].pair_key is None


def test_reciprocal_selections_count_as_one_pair():
    r = resolve_mutual([Edge("A", "B"), Edge("B", "A")])
    assert r.total == 2
    assert r.mutual_pair_count == 1
    assert all(a.is_mutual for a in r.edges)
    assert r.edges[0].pair_key == r.edges[1].pair_key
    assert r.pairs == [("A", "B")]


def test_101_to_104_scenario():
    # 101 -> 102, 102 -> 101, 101 -> 103; 104 selects nobody
    edges = [Edge(101, 102), Edge(102, 101), Edge(101, 103)]
    r = resolve_mutual(edges)

    assert r.total == 3
    assert r.mutual_pair_count == 1
    assert [a.is_mutual for a in r.edges] == [True, True, False]
    assert r.mutual_edges() == [Edge(101, 102), Edge(102, 101)]


def test_self_edge_is_never_mutual():
    r = resolve_mutual([Edge("A", "A")])
    assert r.edges[0].is_mutual is False
    assert r.mutual_pair_count == 0


def test_input_order_is_preserved():
    edges = [Edge("C", "D"), Edge("A", "B"), Edge("D", "C")]
    r = resolve_mutual(edges)
    assert [a.edge for a in r.edges] == edges


def test_several_pairs_and_one_sided_edges():
    edges = [
        Edge("A", "B"), Edge("B", "A"),
        Edge("C", "D"), Edge("D", "C"),
        Edge("A", "C"), Edge("E", "A"),
    ]
    r = resolve_mutual(edges)
    assert r.mutual_pair_count == 2
    assert r.pairs == [("A", "B"), ("C", "D")]
    assert sum(1 for a in r.edges if a.is_mutual) == 4


def test_mixed_id_types_match_by_string_form():
    import uuid

    a, b = uuid.uuid4(), uuid.uuid4()
    r = resolve_mutual([Edge(a, b), Edge(str(b), str(a))])
    assert r.mutual_pair_count == 1
