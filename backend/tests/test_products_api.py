"""
Component tests for the public catalog endpoints
"""
from fastapi.testclient import TestClient

from models.product import Product


class TestListProducts:
    def test_lists_all_active_products(self, test_client: TestClient):
        response = test_client.get("/products")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 5
        assert len(data["data"]) == 5

    def test_newest_first(self, test_client: TestClient, catalog):
        data = test_client.get("/products").json()["data"]

        # Seeded in one batch: ties on created_at fall back to id
        assert data[0]["id"] == catalog["Premium Linen Fabric"]

    def test_filter_by_type(self, test_client: TestClient):
        data = test_client.get("/products?type=fabric").json()

        assert data["count"] == 2
        assert {p["name"] for p in data["data"]} == {"Egyptian Cotton Fabric", "Premium Linen Fabric"}
        assert all(p["stitching_available"] for p in data["data"])

    def test_filter_by_category_and_featured(self, test_client: TestClient):
        accessories = test_client.get("/products?category=accessories").json()
        featured = test_client.get("/products?featured=true").json()

        assert [p["name"] for p in accessories["data"]] == ["Royal Oudh Attar"]
        assert {p["name"] for p in featured["data"]} == {"Classic White Thobe", "Egyptian Cotton Fabric"}

    def test_inactive_products_are_hidden(self, test_client: TestClient, catalog, db_session):
        kurta = db_session.query(Product).filter(Product.id == catalog["Navy Blue Kurta"]).first()
        kurta.active = False
        db_session.commit()

        data = test_client.get("/products").json()

        assert data["count"] == 4

    def test_unknown_type_is_rejected(self, test_client: TestClient):
        response = test_client.get("/products?type=shoes")

        assert response.status_code == 422


class TestProductDetail:
    def test_readymade_detail(self, test_client: TestClient, catalog):
        response = test_client.get(f"/products/{catalog['Classic White Thobe']}")

        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "readymade"
        assert data["price"] == 50
        assert data["size_stock"]["XL"] == 8
        assert data["stock_in_meters"] is None

    def test_fabric_detail(self, test_client: TestClient, catalog):
        data = test_client.get(f"/products/{catalog['Egyptian Cotton Fabric']}").json()

        assert data["type"] == "fabric"
        assert data["price_per_meter"] == 15
        assert data["stitching_price"] == 35
        assert data["stock_in_meters"] == 500
        assert data["size_stock"] is None

    def test_accessory_detail(self, test_client: TestClient, catalog):
        data = test_client.get(f"/products/{catalog['Royal Oudh Attar']}").json()

        assert data["stock"] == 50
        assert data["color"] == "Amber"

    def test_missing_product(self, test_client: TestClient):
        response = test_client.get("/products/999")

        assert response.status_code == 404
