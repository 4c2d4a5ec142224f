from __future__ import annotations

from decimal import Decimal

import pytest

from conftest import call


def test_list_by_floor_returns_only_matching_goods(app):
    response = call(app, "GET", "/goods/floor/2")

    assert response.status == 200
    payload = response.json()
    assert [item["Name"] for item in payload] == ["Чайник", "Кружка"]
    assert all(item["Floor"] == 2 for item in payload)


@pytest.mark.parametrize("floor", ["0", "7", "-1", "+1"])
def test_list_by_floor_matches_floor_exactly(app, repo, floor):
    response = call(app, "GET", f"/goods/floor/{floor}")

    assert response.status == 200
    expected = [item.id for item in repo.goods.values() if item.floor == int(floor)]
    assert [item["ID"] for item in response.json()] == expected


@pytest.mark.parametrize("floor", ["abc", "1.5", "1e3", " 1", "٣"])
def test_list_by_floor_with_non_integer_floor_is_server_error(app, repo, floor):
    response = call(app, "GET", f"/goods/floor/{floor}")

    assert response.status == 500
    assert response.json() == {"Status": "error", "Description": "cant convert id to int"}
    assert repo.calls == []


def test_list_by_floor_repository_failure(app, repo, monkeypatch):
    from services.errors import RepositoryError

    def _broken(floor):
        raise RepositoryError("connection refused")

    monkeypatch.setattr(repo, "get_objects_by_floor", _broken)

    response = call(app, "GET", "/goods/floor/1")

    assert response.status == 500
    assert response.json() == {"Status": "error", "Description": "cant get all rows"}


def test_list_all_goods(app):
    response = call(app, "GET", "/goods")

    assert response.status == 200
    assert [item["ID"] for item in response.json()] == [1, 2, 3]


def test_get_by_id_returns_goods(app):
    response = call(app, "GET", "/goods/2")

    assert response.status == 200
    assert response.json() == {
        "ID": 2,
        "Name": "Чайник",
        "Description": "1.7 л",
        "Price": 2490.0,
        "Quantity": 4,
        "Floor": 2,
    }


@pytest.mark.parametrize("product_id", ["abc", "-1", "2x"])
def test_get_by_id_with_bad_id_is_server_error(app, repo, product_id):
    response = call(app, "GET", f"/goods/{product_id}")

    assert response.status == 500
    assert response.json() == {"Status": "error", "Description": "cant convert id to int"}
    assert repo.calls == []


def test_get_by_id_missing_goods(app):
    response = call(app, "GET", "/goods/999")

    assert response.status == 500
    assert response.json() == {"Status": "error", "Description": "cant get product by id"}


def test_change_price_updates_and_returns_refreshed_goods(app, repo):
    response = call(app, "PUT", "/goods/3", {"Price": 450})

    assert response.status == 200
    assert response.json()["Price"] == 450
    assert response.json()["Name"] == "Кружка"
    assert repo.goods[3].price == Decimal("450")
    assert repo.calls == ["change_product", "get_product_by_id"]


def test_change_price_to_zero_is_rejected_before_repository(app, repo):
    response = call(app, "PUT", "/goods/7", {"Price": 0})

    assert response.status == 416
    assert response.json() == {"Status": "error", "Description": "product cant cost 0"}
    assert repo.calls == []


def test_change_price_without_price_counts_as_zero(app, repo):
    response = call(app, "PUT", "/goods/1", {"Name": "ignored"})

    assert response.status == 416
    assert response.json()["Description"] == "product cant cost 0"
    assert repo.goods[1].price == Decimal("1290")


def test_change_price_checks_body_before_id(app, repo):
    response = call(app, "PUT", "/goods/abc", raw_body=b"{not json")

    assert response.status == 416
    assert response.json() == {"Status": "error", "Description": "cant parse json"}
    assert repo.calls == []


def test_change_price_checks_id_before_price(app, repo):
    response = call(app, "PUT", "/goods/abc", {"Price": 0})

    assert response.status == 416
    assert response.json() == {"Status": "error", "Description": "id must be integer"}
    assert repo.calls == []


def test_change_price_with_wrong_field_type_is_parse_error(app, repo):
    response = call(app, "PUT", "/goods/1", {"Price": "expensive"})

    assert response.status == 416
    assert response.json()["Description"] == "cant parse json"
    assert repo.calls == []


def test_change_price_of_missing_goods(app):
    response = call(app, "PUT", "/goods/999", {"Price": 10})

    assert response.status == 500
    assert response.json() == {"Status": "error", "Description": "cant change price"}


def test_create_product_returns_stored_goods(app, repo):
    body = {"Name": "Сахар", "Description": "1 кг", "Price": 100, "Quantity": 5, "Floor": 1}

    response = call(app, "POST", "/goods", body)

    assert response.status == 200
    payload = response.json()
    assert payload == {**body, "ID": 4}
    assert repo.goods[4].name == "Сахар"


@pytest.mark.parametrize(
    "body, description",
    [
        ({"Price": 0, "Quantity": 5}, "price cant be <= 0"),
        ({"Price": -3, "Quantity": 5}, "price cant be <= 0"),
        ({"Price": 100, "Quantity": 0}, "quantity cant be <= 0"),
        ({"Price": 100, "Quantity": -1}, "quantity cant be <= 0"),
        ({"Price": 0, "Quantity": 0}, "price cant be <= 0"),
    ],
)
def test_create_product_validation_stops_before_creation(app, repo, body, description):
    response = call(app, "POST", "/goods", body)

    assert response.status == 416
    assert response.json() == {"Status": "error", "Description": description}
    assert repo.calls == []
    assert len(repo.goods) == 3


def test_create_product_with_malformed_json(app, repo):
    response = call(app, "POST", "/goods", raw_body=b"[1, 2")

    assert response.status == 416
    assert response.json() == {"Status": "error", "Description": "cant parse json"}
    assert repo.calls == []


def test_create_product_with_non_object_json(app, repo):
    response = call(app, "POST", "/goods", [1, 2])

    assert response.status == 416
    assert response.json()["Description"] == "cant parse json"


def test_create_product_repository_failure(app):
    response = call(app, "POST", "/goods", {"ID": 1, "Price": 10, "Quantity": 1})

    assert response.status == 500
    assert response.json() == {"Status": "error", "Description": "cant create product row"}


def test_delete_existing_goods(app, repo):
    response = call(app, "DELETE", "/goods/2")

    assert response.status == 200
    assert response.json() == {"Status": "successful", "Description": "row was deleted"}
    assert 2 not in repo.goods


def test_delete_missing_goods(app, repo):
    response = call(app, "DELETE", "/goods/999")

    assert response.status == 416
    assert response.json() == {"Status": "error", "Description": "id not found"}
    assert len(repo.goods) == 3


def test_delete_with_bad_id(app, repo):
    response = call(app, "DELETE", "/goods/abc")

    assert response.status == 416
    assert response.json() == {"Status": "error", "Description": "id must be integer"}
    assert repo.calls == []


def test_delete_repository_failure(app, repo, monkeypatch):
    from services.errors import RepositoryError

    def _broken(product_id):
        raise RepositoryError("record not found")

    monkeypatch.setattr(repo, "delete_product", _broken)

    response = call(app, "DELETE", "/goods/1")

    # Текст ошибки хранилища не влияет на классификацию: важен только тип
    assert response.status == 500
    assert response.json() == {"Status": "error", "Description": "cant delete row"}


@pytest.mark.parametrize(
    "body",
    [
        {"Price": "100", "Quantity": 5},
        {"Price": 100, "Quantity": "5"},
        {"Price": 100, "Quantity": 5.0},
        {"Price": True, "Quantity": 5},
        {"Price": 100, "Quantity": 5, "Floor": True},
        {"Price": 100, "Quantity": 5, "Name": 7},
    ],
)
def test_create_product_with_wrong_field_types_is_parse_error(app, repo, body):
    response = call(app, "POST", "/goods", body)

    assert response.status == 416
    assert response.json() == {"Status": "error", "Description": "cant parse json"}
    assert repo.calls == []
    assert len(repo.goods) == 3


@pytest.mark.parametrize(
    "raw_body",
    [
        b'{"Price": 1E+400, "Quantity": 1}',
        b'{"Price": "1E+400", "Quantity": 1}',
        b'{"Price": 123456789.5, "Quantity": 1}',
        b'{"Price": 0.001, "Quantity": 1}',
    ],
)
def test_create_product_with_price_out_of_column_range(app, repo, raw_body):
    response = call(app, "POST", "/goods", raw_body=raw_body)

    assert response.status == 416
    assert response.json()["Description"] == "cant parse json"
    assert repo.calls == []
    assert sorted(repo.goods) == [1, 2, 3]


def test_create_product_with_largest_price_the_column_holds(app, repo):
    response = call(app, "POST", "/goods", raw_body=b'{"Price": 99999999.99, "Quantity": 1}')

    assert response.status == 200
    assert repo.goods[4].price == Decimal("99999999.99")


@pytest.mark.parametrize("raw_body", [b'{"Price": 1E+400}', b'{"Price": "450"}', b'{"Price": 1234567890}'])
def test_change_price_with_bad_price_leaves_goods_untouched(app, repo, raw_body):
    response = call(app, "PUT", "/goods/3", raw_body=raw_body)

    assert response.status == 416
    assert response.json()["Description"] == "cant parse json"
    assert repo.calls == []
    assert repo.goods[3].price == Decimal("390")
