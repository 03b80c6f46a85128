"""
Nutrition layer: ingredient line parsing, reference table, aggregation.
"""
