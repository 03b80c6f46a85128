"""
Exception classes for the recipe_match engine
"""


class RecipeMatchError(Exception):
    """Base exception for the recipe_match engine"""
    pass


class ValidationError(RecipeMatchError):
    """Raised when caller input has the wrong shape (empty or non-list ingredients)"""
    def __init__(self, message: str, field: str = "ingredients"):
        self.field = field
        super().__init__(message)


class MalformedRecipeData(RecipeMatchError):
    """Raised when a recipe corpus source is not a list of recipe documents"""
    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Malformed recipe data in {source}: {detail}")
