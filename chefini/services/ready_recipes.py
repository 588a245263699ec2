"""
Chefini API - Daily dishes.

Curated, non-AI recipes served as-is from `GET /recipes/ready`.
"""

from typing import Any, Dict, List, Optional

CLASSICS_AUTHOR = {"name": "Chefini Classics"}


def _dish(
    dish_id: str,
    title: str,
    category: str,
    time: str,
    ingredients: List[str],
    instructions: List[str],
    macros: Dict[str, int],
    tip: str
) -> Dict[str, Any]:
    return {
        "id": dish_id,
        "title": title,
        "category": category,
        "time": time,
        "ingredients": [{"item": item, "missing": False} for item in ingredients],
        "instructions": instructions,
        "macros": macros,
        "tip": tip,
        "createdBy": CLASSICS_AUTHOR,
    }


READY_RECIPES: List[Dict[str, Any]] = [
    _dish(
        "jeera-aloo", "Jeera Aloo (Cumin Potatoes)", "Indian Staple", "20 min",
        ["Boiled Potatoes (cubed)", "Cumin Seeds (Jeera)", "Turmeric Powder", "Green Chilies (slit)", "Oil or Ghee"],
        [
            "Heat oil or ghee in a pan on medium heat.",
            "Add cumin seeds and let them splutter and turn brown.",
            "Add green chilies and turmeric powder.",
            "Toss in the boiled potato cubes and salt.",
            "Roast on high flame for 5 minutes until potatoes form a crust.",
        ],
        {"calories": 220, "protein": 4, "carbs": 35, "fats": 8},
        "The nutty flavor of fried cumin transforms plain potatoes instantly. Do not skimp on the roasting step.",
    ),
    _dish(
        "dal-tadka", "Dal Tadka (Yellow Lentils)", "Indian Staple", "30 min",
        ["Toor or Moong Dal (boiled)", "Ghee", "Garlic (chopped)", "Dry Red Chili", "Cumin Seeds"],
        [
            "Boil the dal with salt and turmeric until soft.",
            "In a separate small pan, heat the ghee aggressively.",
            "Add cumin, dry red chili, and chopped garlic.",
            "Let the garlic turn golden brown.",
            "Pour the sizzling tempering over the boiled dal immediately and cover.",
        ],
        {"calories": 180, "protein": 10, "carbs": 25, "fats": 6},
        "The magic is in the tadka added at the very end. Keep the pot covered to trap the aroma.",
    ),
    _dish(
        "khichdi", "Comfort Khichdi", "Indian Staple", "25 min",
        ["Rice", "Moong Dal", "Turmeric", "Salt", "Ghee"],
        [
            "Wash rice and dal together.",
            "Pressure cook with 4 cups of water, salt, and turmeric for 3 whistles.",
            "Once done, mash it slightly with a ladle.",
            "Top generously with ghee before serving.",
        ],
        {"calories": 320, "protein": 12, "carbs": 50, "fats": 10},
        "A one-pot comfort meal that digests easily and tastes best with a dollop of ghee.",
    ),
    _dish(
        "poha", "Poha (Flattened Rice)", "Indian Staple", "15 min",
        ["Thick Poha (soaked)", "Mustard Seeds", "Turmeric", "Peanuts", "Lemon Juice"],
        [
            "Rinse poha in a colander and let it drain.",
            "Heat oil, crackle mustard seeds and roast peanuts.",
            "Add turmeric and the moist poha.",
            "Mix gently, cover and steam for 2 minutes.",
            "Finish with a squeeze of lemon juice.",
        ],
        {"calories": 280, "protein": 5, "carbs": 45, "fats": 9},
        "Light and fluffy; the lemon-turmeric combination gives it a zesty kick.",
    ),
    _dish(
        "egg-bhurji", "Anda (Egg) Bhurji", "Indian Staple", "10 min",
        ["Eggs (2-3)", "Onions (chopped)", "Green Chilies", "Salt", "Turmeric"],
        [
            "Saute chopped onions and chilies in oil until translucent.",
            "Crack the eggs directly into the pan.",
            "Add salt and turmeric.",
            "Scramble vigorously until the eggs are cooked and dry.",
        ],
        {"calories": 240, "protein": 18, "carbs": 4, "fats": 16},
        "Ready in five minutes and goes well with bread or roti.",
    ),
    _dish(
        "lemon-rice", "Zesty Lemon Rice", "Indian Staple", "15 min",
        ["Cooked Rice", "Lemon Juice", "Turmeric", "Peanuts or Cashews", "Green Chilies"],
        [
            "Heat oil and roast peanuts until crunchy.",
            "Add green chilies and turmeric, then turn off the heat.",
            "Add the cooked rice and salt.",
            "Mix well and squeeze fresh lemon juice on top.",
        ],
        {"calories": 260, "protein": 5, "carbs": 42, "fats": 8},
        "A great way to use leftover rice.",
    ),
    _dish(
        "upma", "Rava Upma", "Indian Staple", "15 min",
        ["Semolina (Rava/Sooji)", "Mustard Seeds", "Curry Leaves", "Water", "Oil/Ghee"],
        [
            "Dry roast the semolina until fragrant and set aside.",
            "Heat oil, add mustard seeds and curry leaves.",
            "Add water and bring to a boil.",
            "Slowly pour in roasted semolina while stirring to avoid lumps.",
        ],
        {"calories": 220, "protein": 6, "carbs": 38, "fats": 6},
        "Roasting the semolina first gives it a nutty aroma that carries the dish.",
    ),
    _dish(
        "aloo-seddho-bhaat", "Aloo Seddho Bhaat", "Bengali Special", "20 min",
        ["Steamed Rice", "Boiled Potatoes", "Mustard Oil (Raw)", "Green Chilies", "Salt"],
        [
            "Steam rice and boil potatoes.",
            "Mash the potato with salt and a crushed green chili.",
            "Drizzle raw mustard oil generously.",
            "Mix well and eat with the hot rice.",
        ],
        {"calories": 350, "protein": 6, "carbs": 65, "fats": 5},
        "Raw mustard oil provides a signature wasabi-like kick.",
    ),
    _dish(
        "musur-dal", "Bengali Musur Dal", "Bengali Special", "25 min",
        ["Masoor Dal (Red Lentils)", "Turmeric", "Salt", "Kalonji (Nigella Seeds)", "Dried Red Chili"],
        [
            "Boil red lentils with water, salt, and turmeric until fully dissolved.",
            "Heat oil in a ladle.",
            "Add nigella seeds and a broken dry red chili.",
            "Pour the tempering into the dal.",
        ],
        {"calories": 140, "protein": 9, "carbs": 22, "fats": 3},
        "Lighter than North Indian dal; kalonji gives it a distinct aroma.",
    ),
]


def list_ready_recipes(category: Optional[str] = None) -> List[Dict[str, Any]]:
    if not category:
        return READY_RECIPES
    return [recipe for recipe in READY_RECIPES if recipe["category"].lower() == category.lower()]
