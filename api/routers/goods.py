import logging

from fastapi import APIRouter, Depends

from api.dependencies import bind_json, get_repository, json_body_doc, parse_int
from api.responses import STATUS_BAD_INPUT, STATUS_SERVER_ERROR, ApiError, envelope
from schemas.envelope import AnswerJSON
from schemas.goods import Goods
from services.errors import RecordNotFound, RepositoryError
from services.repository import Repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/goods", tags=["Goods"])


@router.get(
    "",
    response_model=list[Goods],
    summary="Show all rows in db",
    description="Return all product and info about rows",
)
def api_goods_list(repo: Repository = Depends(get_repository)):
    try:
        return repo.list_goods()
    except RepositoryError as exc:
        logger.warning("Cannot list goods: %s", exc)
        raise ApiError(STATUS_SERVER_ERROR, "cant get all rows") from exc


@router.get(
    "/floor/{floor}",
    response_model=list[Goods],
    summary="Show products on a floor",
    description="Return all products placed on the given floor",
)
def api_goods_by_floor(floor: str, repo: Repository = Depends(get_repository)):
    # Нечисловой этаж отдаётся как 500: так исторически отвечает сервис
    floor_int = parse_int(floor, status_code=STATUS_SERVER_ERROR, description="cant convert id to int")
    try:
        return repo.get_objects_by_floor(floor_int)
    except RepositoryError as exc:
        logger.warning("Cannot list goods on floor %s: %s", floor_int, exc)
        raise ApiError(STATUS_SERVER_ERROR, "cant get all rows") from exc


@router.get(
    "/{product_id}",
    response_model=Goods,
    summary="Show product info by id",
    description="Return all info of one product by id",
)
def api_goods_detail(product_id: str, repo: Repository = Depends(get_repository)):
    product_id_int = parse_int(
        product_id,
        status_code=STATUS_SERVER_ERROR,
        description="cant convert id to int",
        allow_negative=False,
    )
    try:
        return repo.get_product_by_id(product_id_int)
    except RepositoryError as exc:
        logger.warning("Cannot get goods %s: %s", product_id_int, exc)
        raise ApiError(STATUS_SERVER_ERROR, "cant get product by id") from exc


@router.put(
    "/{product_id}",
    response_model=Goods,
    summary="Change price of product by id",
    description="Change price of product by id. Price can't be 0",
    openapi_extra=json_body_doc(Goods),
)
def api_goods_change_price(
    product_id: str,
    params: Goods = Depends(bind_json(Goods)),
    repo: Repository = Depends(get_repository),
):
    product_id_int = parse_int(
        product_id,
        status_code=STATUS_BAD_INPUT,
        description="id must be integer",
        allow_negative=False,
    )
    if params.price == 0:
        raise ApiError(STATUS_BAD_INPUT, "product cant cost 0")

    try:
        repo.change_product(product_id_int, params.price)
    except RepositoryError as exc:
        logger.warning("Cannot change price of goods %s: %s", product_id_int, exc)
        raise ApiError(STATUS_SERVER_ERROR, "cant change price") from exc

    try:
        return repo.get_product_by_id(product_id_int)
    except RepositoryError as exc:
        logger.warning("Cannot reload goods %s: %s", product_id_int, exc)
        raise ApiError(STATUS_SERVER_ERROR, "cant get product by id") from exc


@router.post(
    "",
    response_model=Goods,
    summary="Add new row",
    description="add new row with parameters in json",
    openapi_extra=json_body_doc(Goods),
)
def api_goods_create(
    params: Goods = Depends(bind_json(Goods)),
    repo: Repository = Depends(get_repository),
):
    if params.price <= 0:
        raise ApiError(STATUS_BAD_INPUT, "price cant be <= 0")
    if params.quantity <= 0:
        raise ApiError(STATUS_BAD_INPUT, "quantity cant be <= 0")

    try:
        created = repo.create_product(params)
    except RepositoryError as exc:
        logger.warning("Cannot create goods %r: %s", params.name, exc)
        raise ApiError(STATUS_SERVER_ERROR, "cant create product row") from exc

    logger.info("Goods %s created", created.id)
    return created


@router.delete(
    "/{product_id}",
    response_model=AnswerJSON,
    summary="Delete row by id",
    description="Delete row by id. If there is not this id return error",
)
def api_goods_delete(product_id: str, repo: Repository = Depends(get_repository)):
    product_id_int = parse_int(
        product_id,
        status_code=STATUS_BAD_INPUT,
        description="id must be integer",
        allow_negative=False,
    )
    try:
        repo.delete_product(product_id_int)
    except RecordNotFound as exc:
        raise ApiError(STATUS_BAD_INPUT, "id not found") from exc
    except RepositoryError as exc:
        logger.warning("Cannot delete goods %s: %s", product_id_int, exc)
        raise ApiError(STATUS_SERVER_ERROR, "cant delete row") from exc

    logger.info("Goods %s deleted", product_id_int)
    return envelope(200, AnswerJSON.ok("row was deleted"))
