"""
Recommendation layer (recipe_match)

Ranks a recipe corpus against the ingredients a user has on hand:
  - Layer-0 heuristics only (exact / substring / word-overlap matching)
  - tiered result assembly with rating-based fallback suggestions

Kept decoupled from storage: the ranker receives a corpus snapshot and
never reads or writes the recipe store itself.
"""
