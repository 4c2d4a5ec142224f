import logging

from fastapi import APIRouter, Depends

from api.dependencies import bind_json, get_repository, json_body_doc
from api.responses import STATUS_SERVER_ERROR, STATUS_UNKNOWN_LOGIN, ApiError, envelope
from schemas.basket import Basket
from schemas.envelope import AnswerJSON
from schemas.users import Users
from services.errors import RepositoryError
from services.repository import Repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/basket", tags=["Basket"])


@router.post(
    "",
    response_model=AnswerJSON,
    summary="Add good to basket",
    description="Add one row (user, good, quantity) to the basket",
    openapi_extra=json_body_doc(Basket),
)
def api_basket_add(
    params: Basket = Depends(bind_json(Basket)),
    repo: Repository = Depends(get_repository),
):
    try:
        repo.create_basket_row(params)
    except RepositoryError as exc:
        logger.warning(
            "Cannot add goods %s to basket of user %s: %s", params.good_id, params.user_id, exc
        )
        raise ApiError(STATUS_SERVER_ERROR, "good cant be added to basket") from exc

    return envelope(200, AnswerJSON.ok("good was added to basket"))


@router.get(
    "",
    response_model=list[Basket],
    summary="Show basket of user",
    description="Return basket rows of the user whose login is passed in json body",
    openapi_extra=json_body_doc(Users),
)
def api_basket_list(
    params: Users = Depends(bind_json(Users)),
    repo: Repository = Depends(get_repository),
):
    try:
        user_id = repo.get_id_by_login(params.login)
    except RepositoryError as exc:
        logger.info("Basket requested for unknown login %r: %s", params.login, exc)
        raise ApiError(STATUS_UNKNOWN_LOGIN, "cant find user with this login") from exc

    try:
        return repo.get_basket(user_id)
    except RepositoryError as exc:
        logger.warning("Cannot get basket of user %s: %s", user_id, exc)
        raise ApiError(STATUS_SERVER_ERROR, "cant get rows in basket") from exc
