"""Property mappings of CMS content items and the merge used for locale variants.

콘텐츠 타입마다 스키마가 다르기 때문에 properties는 임의의 JSON 값
(문자열, 숫자, 중첩 dict, 리스트)을 담는 dict로 다룹니다.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

PropertyMapping = Dict[str, Any]


def is_mapping(value: Any) -> bool:
    """Return True for dict-like values. Lists and strings are not mappings."""
    return isinstance(value, Mapping)


def merge_properties(base: Any, override: Optional[Any] = None) -> Any:
    """Deep-merge ``override`` on top of ``base`` and return a new mapping.

    The merge is right-biased: for a key present on both sides the override
    value wins, unless both values are mappings, in which case they are merged
    recursively. Lists are opaque values and are replaced as a whole.

    Neither input is mutated. Non-mapping inputs are tolerated:

    - no ``override``: a shallow copy of ``base`` (``base`` itself when it is
      not a mapping)
    - ``base`` not a mapping: a shallow copy of ``override``

    Args:
        base: 원본 콘텐츠의 properties
        override: 번역된 properties (선택)

    Returns:
        병합된 properties
    """
    if override is None:
        return dict(base) if is_mapping(base) else base

    if not is_mapping(base):
        return dict(override) if is_mapping(override) else override

    if not is_mapping(override):
        return dict(base)

    merged: PropertyMapping = dict(base)
    for key, value in override.items():
        if key in base and is_mapping(base[key]) and is_mapping(value):
            merged[key] = merge_properties(base[key], value)
        else:
            merged[key] = value
    return merged
