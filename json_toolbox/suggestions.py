from __future__ import annotations

from typing import Any, List, Tuple, Union

from .paths import build_query_path, is_query_name

Step = Union[str, int]
WILDCARD = '*'


def find_list_paths(data: Any, parent: Tuple[Step, ...] = ()) -> List[Tuple[Step, ...]]:
    """Find all field paths in the document that point to a list.

    Lists of objects are followed through their first element; steps below a
    list are recorded under a '*' step.
    """
    paths: List[Tuple[Step, ...]] = []
    if isinstance(data, dict):
        for k, v in data.items():
            if not is_query_name(k):
                continue
            current = parent + (k,)
            if isinstance(v, list):
                paths.append(current)
                if v and isinstance(v[0], dict):
                    paths.extend(find_list_paths(v[0], current + (WILDCARD,)))
            elif isinstance(v, dict):
                paths.extend(find_list_paths(v, current))
    elif isinstance(data, list) and not parent:
        paths.append(())
        if data and isinstance(data[0], dict):
            paths.extend(find_list_paths(data[0], (WILDCARD,)))
    return paths


def extract_leaf_paths(data: Any, parent: Tuple[Step, ...] = ()) -> List[Tuple[Step, ...]]:
    """Paths to scalar fields, projecting through at most one list of objects."""
    paths: List[Tuple[Step, ...]] = []
    if isinstance(data, list):
        if not parent and data and isinstance(data[0], dict):
            paths.extend(extract_leaf_paths(data[0], (WILDCARD,)))
        return paths
    if not isinstance(data, dict):
        return paths

    for k, v in data.items():
        if not is_query_name(k):
            continue
        current = parent + (k,)
        if isinstance(v, dict):
            paths.extend(extract_leaf_paths(v, current))
        elif isinstance(v, list):
            if WILDCARD not in parent and v and isinstance(v[0], dict):
                paths.extend(extract_leaf_paths(v[0], current + (WILDCARD,)))
        else:
            paths.append(current)
    return paths


def suggest_queries(data: Any, limit: int = 20) -> List[str]:
    """Example queries for a loaded document, most general first."""
    suggestions: List[str] = ['$']

    for steps in find_list_paths(data):
        wildcards = steps.count(WILDCARD)
        if wildcards == 0:
            suggestions.append(build_query_path(steps + (WILDCARD,)))
            suggestions.append(build_query_path(steps + (0,)))
        elif wildcards == 1:
            suggestions.append(build_query_path(steps))

    for steps in extract_leaf_paths(data):
        suggestions.append(build_query_path(steps))

    seen = set()
    unique = [s for s in suggestions if not (s in seen or seen.add(s))]
    return unique[: max(1, int(limit))]
