"""
Upstream payload normalization.

The content backend is inconsistent about response shapes (bare arrays,
`{data: [...]}` wrappers, resource-named keys). These functions turn
whatever arrived into the envelope the frontend expects.
"""

import copy
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..models.resource import ResourceSpec

_PLACEHOLDER_RE = re.compile(r"{(\w+)}")


def normalize_envelope(payload: Any) -> Any:
    """
    Default shape:
      - bare list            -> {"data": list, "success": True}
      - object with data list -> unchanged
      - anything else         -> {"data": [payload] or [], "success": True}
    """
    if isinstance(payload, list):
        return {"data": payload, "success": True}
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload
    return {"data": [payload] if payload else [], "success": True}


def extract_collection(payload: Any, keys: Iterable[str]) -> Optional[List[Any]]:
    """Return the payload itself if it is a list, else the first list under `keys`."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return None


def _upstream_total(payload: Any, fallback: int) -> int:
    total = payload.get("total") if isinstance(payload, dict) else None
    return total or fallback


def shape_collection(payload: Any, keys: Iterable[str]) -> Dict[str, Any]:
    items = extract_collection(payload, keys) or []
    return {"data": items, "success": True, "total": _upstream_total(payload, len(items))}


def shape_category_index(payload: Any) -> Dict[str, Any]:
    items = extract_collection(payload, ("categories", "data"))
    if items is None:
        index = {"total": 0, "categories": []}
    else:
        index = {"total": _upstream_total(payload, len(items)), "categories": items}
    return {"data": index, "success": True}


def shape_record(payload: Any) -> Dict[str, Any]:
    if isinstance(payload, dict):
        return {**payload, "success": True}
    return {"data": payload, "success": True}


def shape_sub_category(payload: Any, fallback: Any) -> Dict[str, Any]:
    if isinstance(payload, dict):
        return {
            "data": payload,
            "success": True,
            "sub_category_id": payload.get("sub_category_id"),
            "total": payload.get("total"),
        }
    return {"data": payload or fallback, "success": True}


def render_fallback(value: Any, params: Mapping[str, str]) -> Any:
    """Deep-copy a fallback template, filling `{name}` placeholders from path params."""
    if isinstance(value, str):
        return _PLACEHOLDER_RE.sub(lambda m: params.get(m.group(1), m.group(0)), value)
    if isinstance(value, dict):
        return {k: render_fallback(v, params) for k, v in value.items()}
    if isinstance(value, list):
        return [render_fallback(v, params) for v in value]
    return copy.deepcopy(value)


def shape_payload(resource: ResourceSpec, payload: Any, path_params: Mapping[str, str]) -> Any:
    """Dispatch to the resource's configured shape."""
    if resource.shape == "collection":
        return shape_collection(payload, resource.collection_keys)
    if resource.shape == "category_index":
        return shape_category_index(payload)
    if resource.shape == "record":
        return shape_record(payload)
    if resource.shape == "sub_category":
        return shape_sub_category(payload, render_fallback(resource.fallback, path_params))
    return normalize_envelope(payload)


def fallback_envelope(
    resource: ResourceSpec, error: str, path_params: Mapping[str, str]
) -> Dict[str, Any]:
    return {
        "data": render_fallback(resource.fallback, path_params),
        "success": False,
        "error": error,
    }
