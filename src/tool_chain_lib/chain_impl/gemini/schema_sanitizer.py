"""
Adapt tool parameter schemas to the subset Google Gemini accepts.

Function declarations reject ``additionalProperties``, and a ``required``
entry naming an undeclared property fails the request. Parameter names are
never filtered, so a parameter called ``additionalProperties`` survives.
"""

from typing import Any, Dict, cast

UNSUPPORTED_KEYS = frozenset({"additionalProperties"})
LITERAL_KEYS = frozenset({"default", "enum", "const", "examples"})


def sanitize(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``schema`` that Gemini accepts as function parameters.

    Args:
        schema: A tool's parameter schema (refs already inlined).

    Returns:
        The sanitized schema dictionary.
    """
    return cast(Dict[str, Any], _for_gemini(schema))


def _for_gemini(node: Any) -> Any:
    if isinstance(node, list):
        return [_for_gemini(item) for item in node]
    if not isinstance(node, dict):
        return node

    result: Dict[str, Any] = {}
    for key, value in node.items():
        if key in UNSUPPORTED_KEYS:
            continue
        if key in LITERAL_KEYS:
            result[key] = value
        elif key == "properties" and isinstance(value, dict):
            result[key] = {name: _for_gemini(prop) for name, prop in value.items()}
        else:
            result[key] = _for_gemini(value)

    if "required" in result:
        declared = result.get("properties") or {}
        required = [name for name in result["required"] if name in declared]
        if required:
            result["required"] = required
        else:
            del result["required"]

    return result
