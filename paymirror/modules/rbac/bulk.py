"""
Bulk mutation helpers.

Update endpoints accept three shapes: one path id with an object body, a
comma-separated list of path ids sharing one object body, or an array body
whose items carry their own ``id``. ``parse_update_request`` turns any of them
into an (ids, data) call shape; ``to_pairs`` turns a call shape into the
canonical list of ``(id, patch)`` pairs that ``apply_patches`` writes.

Each pair is written with its own request. Nothing is rolled back when a later
write fails; callers get back only the rows that were actually matched.
"""

import logging
from pydantic import BaseModel
from supabase import Client
from paymirror.core.errors import InvalidArgumentError, ValidationError
from typing import Any, Dict, List, Optional, Tuple, Type, Union

logger = logging.getLogger(__name__)

Pair = Tuple[int, Dict[str, Any]]
Ids = Union[int, List[int]]


def parse_path_id(raw: str) -> int:
    try:
        return int(raw.strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid id: {raw!r}")


def parse_path_ids(raw: str) -> List[int]:
    """Parse "3,4,5" into [3, 4, 5]; empty segments are skipped"""
    ids = [parse_path_id(part) for part in raw.split(",") if part.strip()]
    if not ids:
        raise ValidationError("At least one id is required")
    return ids


def patch_of(model: BaseModel) -> Dict[str, Any]:
    """Only the fields the client actually sent, keyed by column name"""
    return model.model_dump(exclude_unset=True, exclude={"id"})


def parse_update_request(
    path_id: str,
    body: Union[BaseModel, List[BaseModel]],
    item_cls: Type[BaseModel]
) -> Tuple[Ids, Union[BaseModel, List[BaseModel]]]:
    """Normalize the three accepted request shapes into an (ids, data) call shape"""
    if isinstance(body, list):
        # Array body: every item names its own row, the path id is ignored
        return [item.id for item in body], body
    if "," in path_id:
        ids = parse_path_ids(path_id)
        patch = patch_of(body)
        return ids, [item_cls(id=row_id, **patch) for row_id in ids]
    return parse_path_id(path_id), body


def to_pairs(ids: Ids, data: Union[BaseModel, List[BaseModel]]) -> Tuple[bool, List[Pair]]:
    """
    Check the call shape and build (id, patch) pairs.
    Returns (is_bulk, pairs). Mismatched shapes are rejected before any write.
    """
    if isinstance(ids, list) and isinstance(data, list):
        if len(ids) != len(data):
            raise InvalidArgumentError("Invalid parameters: ids and data must have the same length")
        return True, [(item.id, patch_of(item)) for item in data]
    if isinstance(ids, int) and not isinstance(ids, bool) and not isinstance(data, list):
        return False, [(ids, patch_of(data))]
    raise InvalidArgumentError("Invalid parameters: id and data must both be arrays or both be single values")


def apply_patches(
    supabase: Client,
    table: str,
    pairs: List[Pair],
    scope: Optional[Dict[str, Any]] = None
) -> List[Dict[str, Any]]:
    """
    Write each patch to its row, one request per pair.
    ``scope`` adds equality filters to every write (e.g. row ownership).
    An empty patch reads the row back instead of issuing an empty update.
    """
    updated = []
    for row_id, patch in pairs:
        if patch:
            query = supabase.table(table).update(patch).eq("id", row_id)
        else:
            query = supabase.table(table).select("*").eq("id", row_id)
        for column, value in (scope or {}).items():
            query = query.eq(column, value)
        result = query.execute()
        if not result.data:
            logger.debug(f"No {table} row matched id={row_id} scope={scope}")
        updated.extend(result.data or [])
    return updated
