"""Starter catalog inserted by `python -m app.scripts.seed_recipes`."""

SEED_RECIPES = [
    {
        "title": "Carrot Ginger Soup",
        "description": "A silky smooth soup with fresh carrots, ginger, and a touch of coconut milk.",
        "image": "https://images.example.com/carrot-ginger-soup.jpg",
        "cuisine": "American",
        "ingredients": [
            {"name": "carrot", "quantity": 6, "unit": "pcs"},
            {"name": "ginger", "quantity": 1, "unit": "tbsp"},
            {"name": "onion", "quantity": 1, "unit": "pcs"},
            {"name": "vegetable broth", "quantity": 4, "unit": "cups"},
            {"name": "coconut milk", "quantity": 0.5, "unit": "cup", "substitutes": ["cream"]},
        ],
        "instructions": [
            "Sweat the onion and ginger until soft.",
            "Add carrots and broth; simmer until tender.",
            "Blend with coconut milk until smooth.",
        ],
        "servings": 4,
        "cookTimeMinutes": 30,
        "prepTimeMinutes": 10,
        "difficulty": "easy",
        "dietary": ["vegetarian", "vegan", "gluten-free", "dairy-free", "halal", "kosher"],
        "nutritionPerServing": {"calories": 220, "protein": 3, "fat": 12, "carbs": 26},
        "tags": ["soup", "comfort"],
    },
    {
        "title": "Mediterranean Chickpea Salad",
        "description": "Refreshing salad with chickpeas, cucumber, tomatoes, olives, and a lemon-herb dressing.",
        "image": "https://images.example.com/chickpea-salad.png",
        "cuisine": "Mediterranean",
        "ingredients": [
            {"name": "chickpeas", "quantity": 2, "unit": "cups"},
            {"name": "cucumber", "quantity": 1, "unit": "pcs"},
            {"name": "tomato", "quantity": 2, "unit": "pcs"},
            {"name": "olive", "quantity": 0.25, "unit": "cup", "optional": True},
            {"name": "lemon", "quantity": 1, "unit": "pcs"},
            {"name": "parsley", "quantity": 2, "unit": "tbsp"},
        ],
        "instructions": [
            "Chop the vegetables.",
            "Toss with chickpeas, lemon juice and parsley.",
        ],
        "servings": 2,
        "cookTimeMinutes": 15,
        "difficulty": "easy",
        "dietary": ["vegetarian", "vegan", "gluten-free", "dairy-free", "halal", "kosher", "nut-free"],
        "nutritionPerServing": {"calories": 320, "protein": 12, "fat": 10, "carbs": 44},
        "ratings": {"avg": 4.6, "count": 88},
    },
    {
        "title": "Chicken Tikka Masala",
        "description": "Tender chicken in a creamy spiced tomato sauce, perfect with basmati rice.",
        "image": "https://images.example.com/chicken-tikka-masala.jpg",
        "cuisine": "Indian",
        "ingredients": [
            {"name": "chicken", "quantity": 500, "unit": "g"},
            {"name": "tomato", "quantity": 3, "unit": "pcs"},
            {"name": "yogurt", "quantity": 0.5, "unit": "cup"},
            {"name": "garam masala", "quantity": 2, "unit": "tsp"},
            {"name": "ginger", "quantity": 1, "unit": "tbsp"},
            {"name": "garlic", "quantity": 3, "unit": "cloves"},
        ],
        "instructions": [
            "Marinate chicken in yogurt and spices.",
            "Grill, then simmer in the tomato sauce.",
        ],
        "servings": 4,
        "cookTimeMinutes": 55,
        "prepTimeMinutes": 20,
        "difficulty": "medium",
        "dietary": ["halal", "gluten-free", "nut-free"],
        "nutritionPerServing": {"calories": 540, "protein": 38, "fat": 28, "carbs": 22},
    },
    {
        "title": "Pasta Aglio e Olio",
        "description": "Classic Italian pasta with garlic, olive oil, chili flakes, and parsley.",
        "image": "https://images.example.com/aglio-e-olio.jpg",
        "cuisine": "Italian",
        "ingredients": [
            {"name": "spaghetti", "quantity": 200, "unit": "g"},
            {"name": "garlic", "quantity": 4, "unit": "cloves"},
            {"name": "olive oil", "quantity": 4, "unit": "tbsp"},
            {"name": "chili flakes", "quantity": 1, "unit": "tsp", "optional": True},
            {"name": "parsley", "quantity": 2, "unit": "tbsp"},
        ],
        "instructions": [
            "Cook the spaghetti.",
            "Gently fry garlic and chili in olive oil.",
            "Toss pasta with the oil and parsley.",
        ],
        "servings": 2,
        "cookTimeMinutes": 20,
        "difficulty": "easy",
        "dietary": ["vegetarian", "kosher", "nut-free"],
        "nutritionPerServing": {"calories": 480, "protein": 14, "fat": 20, "carbs": 62},
    },
    {
        "title": "Thai Green Curry",
        "description": "Fragrant coconut curry with vegetables, basil and green curry paste.",
        "image": "https://images.example.com/green-curry.jpg",
        "cuisine": "Thai",
        "ingredients": [
            {"name": "green curry paste", "quantity": 3, "unit": "tbsp"},
            {"name": "coconut milk", "quantity": 400, "unit": "ml"},
            {"name": "eggplant", "quantity": 1, "unit": "pcs"},
            {"name": "thai basil", "quantity": 1, "unit": "handful"},
            {"name": "tofu", "quantity": 200, "unit": "g", "substitutes": ["chicken"]},
        ],
        "instructions": [
            "Fry the curry paste in a little coconut milk.",
            "Add remaining coconut milk, vegetables and tofu; simmer.",
            "Finish with basil.",
        ],
        "servings": 3,
        "cookTimeMinutes": 35,
        "difficulty": "medium",
        "dietary": ["vegan", "vegetarian", "gluten-free", "dairy-free"],
        "nutritionPerServing": {"calories": 410, "protein": 13, "fat": 30, "carbs": 20},
    },
    {
        "title": "Beef Bourguignon",
        "description": "Slow-braised beef in red wine with mushrooms, pearl onions and bacon.",
        "image": "https://images.example.com/beef-bourguignon.jpg",
        "cuisine": "French",
        "ingredients": [
            {"name": "beef chuck", "quantity": 1, "unit": "kg"},
            {"name": "red wine", "quantity": 750, "unit": "ml"},
            {"name": "mushroom", "quantity": 250, "unit": "g"},
            {"name": "pearl onion", "quantity": 12, "unit": "pcs"},
            {"name": "bacon", "quantity": 150, "unit": "g"},
        ],
        "instructions": [
            "Brown the beef and bacon.",
            "Braise in wine for three hours.",
            "Add mushrooms and onions for the last 30 minutes.",
        ],
        "servings": 6,
        "cookTimeMinutes": 180,
        "prepTimeMinutes": 30,
        "difficulty": "hard",
        "dietary": ["dairy-free", "nut-free"],
        "nutritionPerServing": {"calories": 690, "protein": 52, "fat": 38, "carbs": 12},
    },
]
