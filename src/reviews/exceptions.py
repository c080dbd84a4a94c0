"""Exceptions personnalisées pour le module reviews."""
from src.reviews.constants import ERROR_REVIEW_NOT_FOUND, ERROR_REVIEW_ALREADY_EXISTS

class ReviewError(Exception):
    """Classe de base pour les exceptions liées aux avis."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class ReviewNotFoundError(ReviewError):
    """Avis inexistant, ou appartenant à un autre utilisateur."""
    def __init__(self, review_id: int):
        self.review_id = review_id
        super().__init__(f"{ERROR_REVIEW_NOT_FOUND} (ID: {review_id}).")

class DuplicateReviewError(ReviewError):
    def __init__(self, user_id: int, product_id: int):
        self.user_id = user_id
        self.product_id = product_id
        super().__init__(f"{ERROR_REVIEW_ALREADY_EXISTS} (produit ID: {product_id}).")
