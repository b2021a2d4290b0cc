from __future__ import annotations

from typing import Callable, Iterable

from ScrapbookSearch.core.query import ROOT_ID, Scope

Reachability = Callable[[str], Iterable[str]]


def resolve_roots(scope: Scope, reachability: Reachability) -> list[str]:
    """Expand a root scope into the candidate item ids.

    The pool is every id reachable from an included root (the whole book when
    none is included) minus every id reachable from an excluded root. Ids keep
    the order in which they were first reached.

    Args:
        scope: Root ids to include and exclude.
        reachability: Returns ids reachable from a root, the root included.

    Returns:
        Candidate ids without duplicates.
    """
    pool: dict[str, None] = {}
    for root in scope.include or (ROOT_ID,):
        for item_id in reachability(root):
            pool.setdefault(item_id, None)
    for root in scope.exclude:
        for item_id in reachability(root):
            pool.pop(item_id, None)
    return list(pool)
