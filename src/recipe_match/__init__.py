"""
recipe_match

Ingredient-matching engine for the recipe platform:
  - search: rank recipes by how well they cover the user's ingredients
  - nutrition: parse ingredient lines and total their nutrients

Modules are imported directly, e.g.:
    from recipe_match.recommendation.ranker import rank
    from recipe_match.nutrition.aggregator import aggregate
"""
