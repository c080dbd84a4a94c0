"""
Module définissant les routes API FastAPI pour l'authentification.

Contient les endpoints pour:
- /register : Inscription d'un client ou d'un vendeur
- /token : Connexion et obtention d'un token JWT
- /me : Récupération des informations de l'utilisateur connecté
"""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from src.auth.dependencies import AuthServiceDep, CurrentUserDep
from src.auth.exceptions import InvalidCredentialsException, InactiveUserException
from src.auth.models import Token, RegisterResponse
from src.auth.security import create_access_token
from src.users.dependencies import UserServiceDep
from src.users.exceptions import UserAlreadyExistsError
from src.users.models import UserRead, UserRegister

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED, tags=["Authentication"])
async def register(user_in: UserRegister, user_service: UserServiceDep):
    """
    Inscrit un nouveau client ou vendeur et retourne directement un token.

    Les comptes vendeur sont créés non vérifiés.
    """
    logger.info("[Router] Inscription pour: %s (%s)", user_in.email, user_in.role)
    try:
        user = await user_service.register_user(user_in)
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

    access_token = create_access_token(user_id=user.id, email=user.email, role=user.role)
    return RegisterResponse(user=user, access_token=access_token)

@router.post("/token", response_model=Token, tags=["Authentication"])
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    auth_service: AuthServiceDep,
    user_service: UserServiceDep,
):
    """
    Authentifie l'utilisateur et retourne un token JWT.

    - **username**: Email de l'utilisateur (utilisé comme identifiant)
    - **password**: Mot de passe de l'utilisateur
    """
    logger.info("[Router] Tentative de login pour: %s", form_data.username)

    user = await auth_service.authenticate_user(email=form_data.username.lower(), password=form_data.password)
    if not user:
        logger.warning("[Router] Échec authentification pour: %s", form_data.username)
        raise InvalidCredentialsException()
    if not user.is_active:
        logger.warning("[Router] Connexion refusée, compte inactif: %s", form_data.username)
        raise InactiveUserException()

    await user_service.record_login(user)
    access_token = create_access_token(user_id=user.id, email=user.email, role=user.role)
    logger.info("[Router] Token créé pour user ID: %s", user.id)
    return Token(access_token=access_token, token_type="bearer")

@router.get("/me", response_model=UserRead, tags=["Authentication"])
async def read_users_me(current_user: CurrentUserDep):
    """
    Récupère les informations de l'utilisateur actuellement connecté.

    Nécessite un token JWT valide dans l'en-tête Authorization.
    """
    logger.info("[Router] Récupération infos pour user ID: %s", current_user.id)
    return current_user

# Créer une instance du routeur pour l'export
auth_router = router
