from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Hashable, Iterable, List, Optional, Protocol, Set, Tuple, TypeVar


class DirectedEdge(Protocol):
    selector_id: Any
    selected_id: Any


E = TypeVar("E", bound=DirectedEdge)


def canonical_pair_key(a: Hashable, b: Hashable) -> str:
    """
    Order-independent key for the unordered pair {a, b}.
    canonical_pair_key(a, b) == canonical_pair_key(b, a)
    """
    lo, hi = sorted((str(a), str(b)))
    return f"{lo}:{hi}"


@dataclass(frozen=True)
class AnnotatedEdge(Generic[E]):
    edge: E
    is_mutual: bool
    pair_key: Optional[str] = None  # set only for mutual edges


@dataclass
class MutualResolution(Generic[E]):
    edges: List[AnnotatedEdge[E]] = field(default_factory=list)
    total: int = 0
    mutual_pair_count: int = 0
    # sorted (lo, hi) id-string tuples, one per distinct mutual pair
    pairs: List[Tuple[str, str]] = field(default_factory=list)

    def mutual_edges(self) -> List[E]:
        return [a.edge for a in self.edges if a.is_mutual]


def resolve_mutual(edges: Iterable[E]) -> MutualResolution[E]:
    """
    Symmetric closure over a set of directed selections.

    - index every (selector, selected) once
    - an edge (a, b) is mutual iff (b, a) is indexed; (a, a) never is
    - distinct pairs are counted via canonical_pair_key, so the two
      directed rows of one match count once

    Linear in len(edges). Input order is preserved in the result.
    """
    edge_list = list(edges)
    index: Set[Tuple[str, str]] = {
        (str(e.selector_id), str(e.selected_id)) for e in edge_list
    }

    annotated: List[AnnotatedEdge[E]] = []
    pair_keys: Set[str] = set()
    pairs: Set[Tuple[str, str]] = set()

    for e in edge_list:
        a, b = str(e.selector_id), str(e.selected_id)
        mutual = a != b and (b, a) in index
        if not mutual:
            annotated.append(AnnotatedEdge(edge=e, is_mutual=False))
            continue

        key = canonical_pair_key(a, b)
        pair_keys.add(key)
        pairs.add(tuple(sorted((a, b))))
        annotated.append(AnnotatedEdge(edge=e, is_mutual=True, pair_key=key))

    return MutualResolution(
        edges=annotated,
        total=len(edge_list),
        mutual_pair_count=len(pair_keys),
        pairs=sorted(pairs),
    )
