"""
Static nutrition reference data.

All rows are per 100 g in the order
(calories, protein, carbs, fat, fiber, sugar, sodium).
"""

from types import MappingProxyType
from typing import Mapping, Tuple

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium")

Row = Tuple[float, float, float, float, float, float, float]

NUTRITION_PER_100G: Mapping[str, Row] = MappingProxyType({
    # Vegetables
    "tomato": (18, 0.9, 3.9, 0.2, 1.2, 2.6, 5),
    "onion": (40, 1.1, 9.3, 0.1, 1.7, 4.2, 4),
    "garlic": (149, 6.4, 33.1, 0.5, 2.1, 1.0, 17),
    "potato": (77, 2.0, 17.5, 0.1, 2.2, 0.8, 6),
    "sweet potato": (86, 1.6, 20.1, 0.1, 3.0, 4.2, 6),
    "carrot": (41, 0.9, 9.6, 0.2, 2.8, 4.7, 69),
    "bell pepper": (31, 1.0, 7.3, 0.3, 2.5, 4.2, 4),
    "spinach": (23, 2.9, 3.6, 0.4, 2.2, 0.4, 79),
    "broccoli": (34, 2.8, 6.6, 0.4, 2.6, 1.5, 33),
    "cucumber": (16, 0.7, 4.0, 0.1, 0.5, 1.7, 2),
    "lettuce": (15, 1.4, 2.9, 0.2, 1.3, 0.8, 28),
    "zucchini": (17, 1.2, 3.1, 0.3, 1.0, 2.5, 8),
    "mushroom": (22, 3.1, 3.3, 0.3, 1.0, 2.0, 5),
    "celery": (16, 0.7, 3.0, 0.2, 1.6, 1.3, 80),
    "cauliflower": (25, 1.9, 5.0, 0.3, 2.0, 1.9, 30),

    # Proteins
    "chicken breast": (165, 31, 0, 3.6, 0, 0, 74),
    "chicken thigh": (209, 26, 0, 10.9, 0, 0, 84),
    "chicken": (239, 27.3, 0, 13.6, 0, 0, 82),
    "ground beef": (254, 26.1, 0, 15.7, 0, 0, 75),
    "beef": (250, 26.1, 0, 15.4, 0, 0, 72),
    "salmon": (208, 25.4, 0, 12.4, 0, 0, 59),
    "tuna": (184, 30, 0, 6.3, 0, 0, 47),
    "fish": (206, 22, 0, 12.4, 0, 0, 59),
    "egg": (155, 13, 1.1, 10.6, 0, 1.1, 124),
    "tofu": (76, 8.1, 1.9, 4.8, 0.3, 0.6, 7),
    "black beans": (132, 8.9, 23.7, 0.5, 8.7, 0.3, 2),
    "lentils": (116, 9, 20.1, 0.4, 7.9, 1.8, 2),
    "chickpeas": (164, 8.9, 27.4, 2.6, 7.6, 4.8, 7),

    # Dairy
    "milk": (42, 3.4, 5, 1, 0, 5, 44),
    "whole milk": (61, 3.2, 4.8, 3.3, 0, 4.8, 43),
    "cheese": (113, 7.1, 1, 9, 0, 1, 621),
    "cheddar cheese": (403, 24.9, 1.3, 33.1, 0, 0.5, 621),
    "mozzarella": (280, 22.2, 2.2, 17.1, 0, 1, 627),
    "yogurt": (59, 10, 3.6, 0.4, 0, 3.2, 36),
    "greek yogurt": (97, 9, 3.9, 5, 0, 3.2, 35),
    "butter": (717, 0.9, 0.1, 81.1, 0, 0.1, 11),

    # Grains
    "white rice": (130, 2.7, 28.2, 0.3, 0.4, 0.1, 5),
    "brown rice": (123, 2.3, 23, 0.9, 1.8, 0.7, 3),
    "rice": (130, 2.7, 28.2, 0.3, 0.4, 0.1, 5),
    "pasta": (131, 5, 25, 1.1, 1.8, 0.6, 6),
    "whole wheat pasta": (124, 5, 25.1, 1.4, 3.2, 0.8, 3),
    "bread": (265, 9, 49, 3.2, 2.7, 5, 491),
    "whole grain bread": (247, 13.4, 41.3, 4.2, 7, 5.6, 491),
    "quinoa": (120, 4.4, 22, 1.9, 2.8, 0.9, 7),
    "oats": (389, 16.9, 66.3, 6.9, 10.6, 0.99, 2),
    "barley": (123, 2.3, 28.2, 0.4, 3.8, 0.8, 3),

    # Fats and oils
    "olive oil": (884, 0, 0, 100, 0, 0, 2),
    "vegetable oil": (884, 0, 0, 100, 0, 0, 0),
    "coconut oil": (862, 0, 0, 99.1, 0, 0, 0),
    "avocado": (160, 2, 8.5, 14.7, 6.7, 0.7, 7),

    # Fruits
    "apple": (52, 0.3, 13.8, 0.2, 2.4, 10.4, 1),
    "banana": (89, 1.1, 22.8, 0.3, 2.6, 12.2, 1),
    "orange": (47, 0.9, 11.8, 0.1, 2.4, 9.4, 0),
    "lemon": (29, 1.1, 9.3, 0.3, 2.8, 1.5, 2),
    "lime": (30, 0.7, 10.5, 0.2, 2.8, 1.7, 2),
    "berries": (57, 0.7, 14.5, 0.3, 2.4, 10, 1),
    "strawberries": (32, 0.7, 7.7, 0.3, 2, 4.9, 1),
    "blueberries": (57, 0.7, 14.5, 0.3, 2.4, 10, 1),

    # Herbs and spices
    "basil": (22, 3.2, 2.6, 0.6, 1.6, 0.3, 4),
    "oregano": (265, 9, 68.9, 4.3, 42.5, 4.1, 25),
    "thyme": (101, 5.6, 24.5, 1.7, 14, 1.7, 9),
    "parsley": (36, 3, 6.3, 0.8, 3.3, 0.9, 56),
    "cilantro": (23, 2.1, 3.7, 0.5, 2.8, 0.9, 46),
    "ginger": (80, 1.8, 17.8, 0.8, 2, 1.7, 13),
    "turmeric": (354, 7.8, 64.9, 9.9, 21.1, 3.2, 38),
    "cumin": (375, 17.8, 44.2, 22.3, 10.5, 2.3, 168),
    "paprika": (282, 14.1, 53.9, 12.9, 34.9, 10.3, 68),

    # Nuts and seeds
    "almonds": (579, 21.2, 21.6, 49.9, 12.5, 4.4, 1),
    "walnuts": (654, 15.2, 13.7, 65.2, 6.7, 2.6, 2),
    "peanuts": (567, 25.8, 16.1, 49.2, 8.5, 4.7, 18),
    "sunflower seeds": (584, 20.8, 20, 51.5, 8.6, 2.6, 9),
    "chia seeds": (486, 16.5, 42.1, 30.7, 34.4, 0, 16),
})

# Category estimates used when no table row matches.
# Checked in order; the first category whose keywords hit wins.
CATEGORY_ESTIMATES: Tuple[Tuple[str, Tuple[str, ...], Row], ...] = (
    ("vegetable", (
        "vegetable", "veggie", "greens", "leafy", "cabbage", "kale", "celery",
        "radish", "turnip", "beet", "artichoke", "asparagus", "brussels sprouts",
        "eggplant", "squash", "pumpkin", "corn", "peas", "beans",
    ), (25, 2, 5, 0.2, 2, 3, 10)),
    ("fruit", (
        "fruit", "berry", "berries", "grape", "grapes", "peach", "peaches",
        "pear", "pears", "cherry", "cherries", "plum", "plums", "mango",
        "mangoes", "pineapple", "watermelon", "cantaloupe", "honeydew", "kiwi",
    ), (50, 0.5, 12, 0.2, 2, 8, 1)),
    ("protein", (
        "meat", "protein", "turkey", "duck", "lamb", "pork", "salmon", "tuna",
        "cod", "halibut", "shrimp", "crab", "lobster", "scallops", "mussels",
        "tempeh", "seitan",
    ), (200, 20, 0, 10, 0, 0, 70)),
    ("grain", (
        "grain", "wheat", "barley", "oats", "flour", "noodle", "noodles",
        "cereal", "crackers", "couscous", "bulgur", "millet", "amaranth",
    ), (120, 3, 25, 1, 2, 1, 5)),
    ("dairy", (
        "dairy", "cream", "sour cream", "cottage cheese", "mozzarella",
        "parmesan", "swiss", "cheddar", "goat cheese", "feta", "ricotta",
        "mascarpone",
    ), (80, 5, 4, 4, 0, 4, 50)),
    ("nut", (
        "nut", "nuts", "seed", "seeds", "cashew", "cashews", "pecan", "pecans",
        "hazelnut", "hazelnuts", "pistachio", "pistachios", "macadamia",
        "brazil nut", "pine nut", "sesame", "pumpkin seed", "flax",
    ), (550, 18, 15, 45, 8, 3, 5)),
    ("oil", ("oil", "fat", "lard", "shortening", "ghee"), (884, 0, 0, 100, 0, 0, 0)),
)

DEFAULT_ESTIMATE: Row = (50, 2, 8, 1, 1, 2, 20)

# Unit -> grams (volume units assume water density).
GRAMS_PER_UNIT: Mapping[str, float] = MappingProxyType({
    # Weight
    "g": 1, "gram": 1, "grams": 1,
    "kg": 1000, "kilogram": 1000, "kilograms": 1000,
    "lb": 453.592, "pound": 453.592, "pounds": 453.592,
    "oz": 28.3495, "ounce": 28.3495, "ounces": 28.3495,

    # Volume
    "ml": 1, "milliliter": 1, "milliliters": 1,
    "l": 1000, "liter": 1000, "liters": 1000,
    "cup": 240, "cups": 240,
    "tbsp": 15, "tablespoon": 15, "tablespoons": 15, "tbs": 15,
    "tsp": 5, "teaspoon": 5, "teaspoons": 5,
    "fl oz": 30, "fluid ounce": 30, "fluid ounces": 30,
    "pint": 473, "pints": 473,
    "quart": 946, "quarts": 946,
    "gallon": 3785, "gallons": 3785,

    # Count
    "piece": 100, "pieces": 100, "item": 100, "items": 100,
    "small": 80, "medium": 150, "large": 200, "extra large": 250,
    "clove": 3, "cloves": 3,
    "slice": 25, "slices": 25,
    "fillet": 150, "fillets": 150,
    "breast": 200, "breasts": 200,
    "thigh": 120, "thighs": 120,

    # Approximate
    "handful": 50, "pinch": 1, "dash": 2, "sprinkle": 3, "bunch": 100,
    "head": 500, "stalk": 40, "stalks": 40, "sprig": 5, "sprigs": 5,
})

UNKNOWN_UNIT_GRAMS = 100.0
