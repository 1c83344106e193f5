"""HTTP-level tests calling the blueprint handlers with func.HttpRequest objects."""

import json

import azure.functions as func

from conftest import gradient_png, json_request, multipart_request, small_jpeg, stored_files
from routes import auth as auth_routes
from routes import cars as car_routes
from routes import site_content as content_routes
from routes import uploads as upload_routes


def handler(builder):
    return builder.build().get_user_function()


cars = handler(car_routes.cars)
car_item = handler(car_routes.car_item)
car_images = handler(car_routes.car_images)
login = handler(auth_routes.login)
me = handler(auth_routes.me)
home_page_images = handler(content_routes.home_page_images)
uploads = handler(upload_routes.uploads)


def body(resp):
    return json.loads(resp.get_body())


def car_fields(**overrides):
    fields = {
        "make": "BMW", "model_en": "X5", "model_ar": "اكس 5", "name_en": "BMW X5",
        "name_ar": "بي ام دبليو", "year": "2024", "condition": "Brand New",
        "mileage": "0", "stockNumber": "STK-1", "price": "250000",
    }
    fields.update(overrides)
    return list(fields.items())


def test_preflight():
    resp = cars(json_request(method="OPTIONS"))
    assert resp.status_code == 204
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_create_requires_admin(uploads_root):
    resp = cars(multipart_request(car_fields() + [("images", ("a.jpg", small_jpeg(), "image/jpeg"))]))
    assert resp.status_code == 401
    payload = body(resp)
    assert payload["success"] is False
    assert set(payload["message"]) == {"en", "ar"}
    assert stored_files(uploads_root) == set()


def test_create_car_with_images(auth_headers, uploads_root):
    files = [("images", (f"{i}.jpg", small_jpeg(), "image/jpeg")) for i in range(3)]
    resp = cars(multipart_request(car_fields() + files, headers=auth_headers))

    assert resp.status_code == 201
    car = body(resp)["data"]
    assert len(car["images"]) == 3
    assert car["images"][0]["isMain"] is True
    assert sum(img["isMain"] for img in car["images"]) == 1
    assert len(stored_files(uploads_root)) == 3


def test_large_image_is_resized_on_upload(auth_headers, monkeypatch):
    import config
    monkeypatch.setattr(config, "MAX_FILE_SIZE", 2 * 1024 * 1024)
    files = [("images", ("big.png", gradient_png(1500, 1400), "image/png"))]

    resp = cars(multipart_request(car_fields() + files, headers=auth_headers))

    assert resp.status_code == 201
    url = body(resp)["data"]["images"][0]["url"]
    assert url.endswith(".jpg")


def test_text_posing_as_jpeg_is_rejected(auth_headers, uploads_root):
    files = [("images", ("fake.jpg", b"just some text", "image/jpeg"))]
    resp = cars(multipart_request(car_fields() + files, headers=auth_headers))

    assert resp.status_code == 400
    assert stored_files(uploads_root) == set()
    listing = body(cars(json_request(params={})))
    assert listing["total"] == 0


def test_part_over_upload_ceiling_is_rejected(auth_headers, uploads_root, monkeypatch):
    import config
    monkeypatch.setattr(config, "MAX_UPLOAD_SIZE", 1024)
    files = [("images", ("a.jpg", small_jpeg(400, 400) + b"\0" * 2048, "image/jpeg"))]

    resp = cars(multipart_request(car_fields() + files, headers=auth_headers))

    assert resp.status_code == 400
    assert stored_files(uploads_root) == set()


def test_wrong_mime_is_rejected(auth_headers):
    files = [("images", ("a.pdf", b"%PDF-1.4", "application/pdf"))]
    resp = cars(multipart_request(car_fields() + files, headers=auth_headers))
    assert resp.status_code == 400
    assert body(resp)["message"]["en"] == "Only image files are allowed."


def test_list_is_paginated(auth_headers):
    for i in range(3):
        cars(multipart_request(car_fields(stockNumber=f"S-{i}"), headers=auth_headers))

    payload = body(cars(json_request(params={"page": "2", "limit": "2"})))

    assert payload["total"] == 3
    assert payload["count"] == 1
    assert payload["pagination"] == {"currentPage": 2, "totalPages": 2, "pageSize": 2}


def test_non_finite_page_is_a_bad_request():
    resp = cars(json_request(params={"page": "inf"}))
    assert resp.status_code == 400
    assert body(resp)["message"]["en"] == "Field page must be a number."


def test_update_with_json_body_and_delete_image(auth_headers, uploads_root):
    files = [("images", (f"{i}.jpg", small_jpeg(), "image/jpeg")) for i in range(2)]
    car = body(cars(multipart_request(car_fields() + files, headers=auth_headers)))["data"]
    route = {"id": car["id"]}

    resp = car_item(json_request({"mileage": 15}, method="PUT", route_params=route, headers=auth_headers))
    assert resp.status_code == 200
    assert body(resp)["data"]["mileage"] == 15

    main = car["mainImage"]
    resp = car_images(json_request(method="DELETE", route_params=route, params={"url": main}, headers=auth_headers))
    data = body(resp)["data"]
    assert len(data["images"]) == 1
    assert data["images"][0]["isMain"] is True
    assert main not in stored_files(uploads_root)


def test_invalid_and_missing_ids():
    assert car_item(json_request(route_params={"id": "abc"})).status_code == 400
    missing = "00000000-0000-0000-0000-000000000000"
    assert car_item(json_request(route_params={"id": missing})).status_code == 404


def test_login_and_me(admin):
    resp = login(json_request({"email": admin["email"], "password": "secret123"}, method="POST"))
    assert resp.status_code == 200
    token = body(resp)["token"]

    resp = me(json_request(headers={"Authorization": f"Bearer {token}"}))
    assert body(resp)["data"]["email"] == admin["email"]

    assert me(json_request(headers={"Authorization": "Bearer garbage"})).status_code == 401


def test_bad_login_is_401(admin):
    resp = login(json_request({"email": admin["email"], "password": "nope"}, method="POST"))
    assert resp.status_code == 401


def test_home_page_images_slot_update_and_serving(auth_headers, uploads_root):
    req = multipart_request(
        [("showroom", ("s.jpg", small_jpeg(), "image/jpeg"))],
        method="PUT",
        url="/api/home-page-images",
        headers=auth_headers,
    )
    resp = home_page_images(req)
    assert resp.status_code == 200
    url = body(resp)["data"]["showroom"]

    served = uploads(func.HttpRequest(
        method="GET", url=f"/api{url}", body=b"",
        route_params={"path": url[len("/uploads/"):]},
    ))
    assert served.status_code == 200
    assert served.mimetype == "image/jpeg"
    assert served.get_body() == small_jpeg()


def test_uploads_refuses_traversal():
    resp = uploads(func.HttpRequest(
        method="GET", url="/api/uploads/x", body=b"", route_params={"path": "../conftest.py"},
    ))
    assert resp.status_code == 404
