import io

from fakes import PNG_BYTES, png_file

CONTACT = {
    "name": "Sana Mirza",
    "email": "sana@example.com",
    "phone": "9812345678",
    "message": "Can you do a party of eight next Saturday?",
}


def create_category(client, name, image=True):
    data = {"name": name}
    if image:
        data["image"] = png_file()
    return client.post("/dashboard/categories", data=data, content_type="multipart/form-data")


def local_path(url):
    return url[len("http://localhost"):]


def test_home_lists_services(client):
    body = client.get("/").get_json()
    assert body["success"] is True
    assert len(body["data"]["services"]) == 6


def test_dashboard_requires_login(client):
    response = client.get("/dashboard/")
    assert response.status_code == 401
    assert response.get_json()["error"] == "Authentication required"


def test_login_rejects_wrong_password(client):
    response = client.post("/admin/login", json={"email": "admin@mehendi.studio", "password": "nope"})
    assert response.status_code == 401
    assert response.get_json()["error"] == "Invalid email or password"


def test_create_category_serves_its_image(admin_client):
    response = create_category(admin_client, "Bridal")
    assert response.status_code == 201
    category = response.get_json()["data"]
    assert category["name"] == "Bridal"
    assert "/storage/v1/object/public/gallery/mehendi/category/" in category["image"]

    image = admin_client.get(local_path(category["image"]))
    assert image.status_code == 200
    assert image.data == PNG_BYTES

    listed = admin_client.get("/categories").get_json()["data"]
    assert [c["name"] for c in listed] == ["Bridal"]


def test_duplicate_category_is_a_conflict(admin_client):
    create_category(admin_client, "Bridal", image=False)
    response = create_category(admin_client, "Bridal")
    assert response.status_code == 409
    assert response.get_json()["error"] == 'Category "Bridal" already exists'


def test_gif_is_rejected(admin_client):
    response = admin_client.post(
        "/dashboard/categories",
        data={"name": "Festive", "image": (io.BytesIO(b"GIF89a"), "festive.gif", "image/gif")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 400
    assert "File type image/gif not allowed" in response.get_json()["error"]


def test_products_and_gallery(admin_client):
    category = create_category(admin_client, "Arabic", image=False).get_json()["data"]
    response = admin_client.post(
        "/dashboard/products",
        data={"name": "Vines", "category_id": category["id"], "image": png_file("vines.png")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 201
    product = response.get_json()["data"]
    assert product["category_id"] == category["id"]

    gallery = admin_client.get(f"/gallery/{category['id']}").get_json()["data"]
    assert [p["name"] for p in gallery] == ["Vines"]

    detail = admin_client.get(f"/category/{category['id']}").get_json()["data"]
    assert [p["id"] for p in detail["products"]] == [product["id"]]

    edited = admin_client.post(
        f"/dashboard/products/{product['id']}/edit",
        data={"name": "Royal Vines", "category_id": category["id"]},
    ).get_json()["data"]
    assert edited["name"] == "Royal Vines"
    assert edited["image"] == product["image"]


def test_delete_category_reports_cascade(admin_client):
    category = create_category(admin_client, "Bridal").get_json()["data"]
    for name in ("One", "Two", "Three"):
        admin_client.post(
            "/dashboard/products",
            data={"name": name, "category_id": category["id"], "image": png_file(f"{name}.png")},
            content_type="multipart/form-data",
        )

    response = admin_client.post(f"/dashboard/categories/{category['id']}/delete")
    body = response.get_json()["data"]
    assert response.status_code == 200
    assert body["deleted_products"] == 3
    assert body["storage_cleaned"] is True
    assert admin_client.get("/dashboard/products").get_json()["data"] == []
    assert admin_client.get(local_path(category["image"])).status_code == 404


def test_missing_category_is_404(admin_client):
    assert admin_client.get("/category/31").status_code == 404
    assert admin_client.post("/dashboard/categories/31/delete").status_code == 404


def test_contact_form(client, admin_client):
    bad = client.post("/contact", json=dict(CONTACT, phone="12"))
    assert bad.status_code == 400
    assert bad.get_json()["errors"] == {"phone": "Phone number must be at least 10 digits"}

    created = client.post("/contact", data=CONTACT)
    assert created.status_code == 201

    inquiries = admin_client.get("/dashboard/contacts").get_json()["data"]
    assert inquiries[-1]["email"] == "sana@example.com"
    assert len(inquiries) == 4


def test_logout(admin_client):
    assert admin_client.post("/admin/logout").status_code == 200
    assert admin_client.get("/dashboard/").status_code == 401


def test_login_with_non_object_json_is_rejected(client):
    for body in (["admin@mehendi.studio", "henna-secret"], "henna-secret"):
        response = client.post("/admin/login", json=body)
        assert response.status_code == 401
        assert response.get_json()["error"] == "Invalid email or password"
