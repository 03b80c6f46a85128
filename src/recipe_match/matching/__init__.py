"""
Ingredient text matching (normalization, tokens, match tiers).
"""
