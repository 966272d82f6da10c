"""Turn a tool's pydantic argument model into the parameter schema sent to providers."""

from typing import Any, Dict, List, Optional, Set, Type, cast

import jsonref  # type: ignore
from pydantic import BaseModel

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

METADATA_KEYS = frozenset({"$defs", "definitions", "$schema", "$id", "title"})

# Values under these keys are literal data, not sub-schemas
LITERAL_KEYS = frozenset({"default", "enum", "const", "examples"})


def parameters_schema(args_model: Type[BaseModel], tool_name: str) -> Dict[str, Any]:
    """Render ``args_model`` as a self-contained JSON schema.

    References are inlined, so the result must be acyclic: self-referencing
    models (trees, linked lists) are rejected.

    Raises:
        ToolValidationError: If the argument model references itself.
    """
    raw_schema = args_model.model_json_schema()

    cycle = find_reference_cycle(raw_schema)
    if cycle:
        msg = (
            f"Recursive structure detected in tool '{tool_name}': {' -> '.join(cycle)}. "
            "Recursive structures are not allowed in tool inputs. "
            "Use parent_id, lists, or a workflow loop instead."
        )
        logger.error(msg)
        raise ToolValidationError(msg, tool_name=tool_name)

    # proxies=False returns plain dicts; merge_props keeps a field's description next to its $ref
    inlined = jsonref.replace_refs(raw_schema, proxies=False, merge_props=True)
    return cast(Dict[str, Any], tidy_schema(inlined))


def find_reference_cycle(schema: Dict[str, Any]) -> Optional[List[str]]:
    """Return the definition names forming a ``$ref`` cycle reachable from the root, if any."""
    definitions = schema.get("$defs") or schema.get("definitions") or {}
    edges = {name: _referenced_definitions(body) for name, body in definitions.items()}
    acyclic: Set[str] = set()

    def visit(name: str, trail: List[str]) -> Optional[List[str]]:
        if name in trail:
            return trail[trail.index(name):] + [name]
        if name in acyclic:
            return None
        for target in edges.get(name, []):
            found = visit(target, trail + [name])
            if found:
                return found
        acyclic.add(name)
        return None

    root = {key: value for key, value in schema.items() if key not in ("$defs", "definitions")}
    for name in _referenced_definitions(root):
        found = visit(name, [])
        if found:
            return found
    return None


def tidy_schema(node: Any) -> Any:
    """Strip pydantic metadata and normalize a schema for tool calling.

    * ``title``, ``$defs`` and similar keys are dropped.
    * ``Optional[T]`` (``anyOf`` with a ``null`` branch) and single-entry
      ``allOf`` wrappers collapse to ``T``; the outer description and default win.
    * Objects with declared properties are closed with
      ``additionalProperties: false``. Free-form objects (``dict``
      parameters) keep accepting arbitrary keys.
    """
    if isinstance(node, list):
        return [tidy_schema(item) for item in node]
    if not isinstance(node, dict):
        return node

    unwrapped = _unwrap(node)
    if unwrapped is not None:
        return tidy_schema(unwrapped)

    tidied: Dict[str, Any] = {}
    for key, value in node.items():
        if key in METADATA_KEYS:
            continue
        if key in LITERAL_KEYS:
            tidied[key] = value
        elif key == "properties" and isinstance(value, dict):
            # Keys here are parameter names, e.g. a parameter may be called "title"
            tidied[key] = {name: tidy_schema(prop) for name, prop in value.items()}
        else:
            tidied[key] = tidy_schema(value)

    if tidied.get("type") == "object" and "properties" in tidied:
        tidied.setdefault("additionalProperties", False)
    return tidied


def _unwrap(node: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    all_of = node.get("allOf")
    if isinstance(all_of, list) and len(all_of) == 1 and isinstance(all_of[0], dict):
        inner, wrapper = all_of[0], "allOf"
    else:
        variants = node.get("anyOf")
        if not isinstance(variants, list):
            return None
        non_null = [v for v in variants if not (isinstance(v, dict) and v.get("type") == "null")]
        if len(non_null) != 1 or len(non_null) == len(variants) or not isinstance(non_null[0], dict):
            return None
        inner, wrapper = non_null[0], "anyOf"

    outer = {key: value for key, value in node.items() if key != wrapper}
    return {**inner, **outer}


def _referenced_definitions(node: Any) -> List[str]:
    refs: List[str] = []
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#/"):
            refs.append(ref.rsplit("/", 1)[-1])
        for value in node.values():
            refs.extend(_referenced_definitions(value))
    elif isinstance(node, list):
        for item in node:
            refs.extend(_referenced_definitions(item))
    return refs
