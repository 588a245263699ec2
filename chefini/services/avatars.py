"""
Chefini API - Avatar catalogue.

Selectable profile avatars and the rule for what a profile shows.
"""

from typing import Dict, List, Optional

AVATAR_BASE_URL = "https://api.dicebear.com/9.x/notionists/svg?seed="

_SEEDS = [
    "Felix", "Aneka", "Chef", "Maria", "Leo", "Mila",
    "Robert", "Jasmine", "Oliver", "Sara", "George", "Lilly",
]

AVATAR_OPTIONS: List[Dict[str, str]] = [
    {"id": f"chef{index}", "src": f"{AVATAR_BASE_URL}{seed}", "label": seed}
    for index, seed in enumerate(_SEEDS, start=1)
]

_AVATARS_BY_ID = {option["id"]: option for option in AVATAR_OPTIONS}


def is_valid_avatar(avatar_id: str) -> bool:
    return avatar_id in _AVATARS_BY_ID


def avatar_src(avatar_id: Optional[str]) -> Optional[str]:
    option = _AVATARS_BY_ID.get(avatar_id or "")
    return option["src"] if option else None


def avatar_display(
    avatar: Optional[str],
    image: Optional[str],
    name: Optional[str]
) -> Dict[str, str]:
    """
    Resolve what a profile shows.

    Priority: chosen avatar, then the Google profile image, then the
    uppercase first letter of the name ("C" when there is no name).

    Example:
        >>> avatar_display(None, None, "maya")
        {'type': 'initial', 'value': 'M'}
    """
    src = avatar_src(avatar)
    if src:
        return {"type": "image", "value": src}
    if image:
        return {"type": "image", "value": image}
    initial = (name or "").strip()[:1].upper()
    return {"type": "initial", "value": initial or "C"}
