from typing import Iterable, List

from documentmitra.models.service import ServiceNode

MIN_QUERY_LENGTH = 2
DEFAULT_LIMIT = 5


def matches_query(node: ServiceNode, needle: str) -> bool:
    """Case-insensitive substring match on name and description."""
    if needle in node.name.lower():
        return True
    return bool(node.description) and needle in node.description.lower()


def search_services(
    nodes: Iterable[ServiceNode],
    query: str,
    limit: int = DEFAULT_LIMIT,
    min_length: int = MIN_QUERY_LENGTH,
) -> List[ServiceNode]:
    """Suggest services for a search box.

    ``nodes`` is normally the flattened catalog. Matches keep the order
    of ``nodes``; there is no relevance ranking. Queries shorter than
    ``min_length`` (after trimming) return no suggestions.
    """
    needle = (query or "").strip().lower()
    if len(needle) < min_length or limit <= 0:
        return []

    results: List[ServiceNode] = []
    for node in nodes:
        if matches_query(node, needle):
            results.append(node)
            if len(results) >= limit:
                break
    return results
