"""
Exceptions personnalisées pour le module de gestion des utilisateurs.
"""

class UserError(Exception):
    """Classe de base pour les exceptions liées aux utilisateurs."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class UserNotFoundError(UserError):
    """Levée lorsque l'utilisateur n'est pas trouvé."""
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"Utilisateur {user_id} non trouvé")

class UserAlreadyExistsError(UserError):
    """Levée lorsqu'un utilisateur avec cet email existe déjà."""
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Un utilisateur avec l'email {email} existe déjà")

class SelfModificationForbiddenError(UserError):
    """Levée lorsqu'un administrateur tente de changer son propre rôle ou de supprimer son compte."""
    pass

class UserInUseError(UserError):
    """Levée lorsqu'un utilisateur ne peut pas être supprimé car des données y sont liées."""
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"L'utilisateur {user_id} possède des données liées (commandes, boutique...) et ne peut pas être supprimé. Désactivez-le plutôt.")
