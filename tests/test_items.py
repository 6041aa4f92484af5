import pytest


def test_end_to_end_scenario(client):
	resp = client.post("/auth/signup", json={"username": "ana", "password": "secret1"})
	assert resp.status_code == 201
	token = resp.json()["token"]
	ana_id = resp.json()["user"]["id"]
	headers = {"Authorization": f"Bearer {token}"}

	cat = client.post("/categories", json={"name": "Shirts"}, headers=headers)
	assert cat.status_code == 201
	assert cat.json()["name"] == "Shirts"
	assert cat.json()["ownerId"] == ana_id

	created = client.post("/items", json={"name": "Blue Tee", "category": "Shirts"}, headers=headers)
	assert created.status_code == 201
	item = created.json()

	listed = client.get("/items", headers=headers).json()
	assert len(listed) == 1
	assert listed[0]["id"] == item["id"]

	assert client.delete(f"/items/{item['id']}", headers=headers).status_code == 204
	assert client.get("/items", headers=headers).json() == []


def test_create_item_defaults_status_to_washed(client, auth):
	resp = client.post("/items", json={"name": "Blue Tee", "category": "Shirts"}, headers=auth)
	body = resp.json()
	assert body["status"] == "Washed"
	assert body["imageUrl"] is None
	assert body["imageAssetId"] is None
	assert {"id", "ownerId", "createdAt", "updatedAt"} <= set(body)


def test_create_item_keeps_given_status(client, auth):
	created = client.post(
		"/items", json={"name": "Jeans", "category": "Pants", "status": "Unwashed"}, headers=auth
	).json()
	listed = client.get("/items", headers=auth).json()
	assert created["status"] == listed[0]["status"] == "Unwashed"


@pytest.mark.parametrize(
	"payload",
	[
		{"category": "Shirts"},
		{"name": "Blue Tee"},
		{"name": "  ", "category": "Shirts"},
		{"name": "Blue Tee", "category": ""},
		{"name": "Blue Tee", "category": "Shirts", "status": "Dirty"},
	],
)
def test_create_item_invalid_input(client, auth, payload):
	resp = client.post("/items", json=payload, headers=auth)
	assert resp.status_code == 400
	assert list(resp.json()) == ["error"]


def test_items_listed_in_creation_order(client, auth):
	for name in ("c", "a", "b"):
		client.post("/items", json={"name": name, "category": "Shirts"}, headers=auth)
	assert [i["name"] for i in client.get("/items", headers=auth).json()] == ["c", "a", "b"]


def test_category_label_is_free_form(client, auth):
	resp = client.post("/items", json={"name": "Scarf", "category": "Not A Category"}, headers=auth)
	assert resp.status_code == 201
	assert resp.json()["category"] == "Not A Category"


def test_update_replaces_all_fields(client, auth):
	item = client.post(
		"/items",
		json={
			"name": "Blue Tee",
			"category": "Shirts",
			"status": "Unwashed",
			"imageUrl": "https://cdn.example.test/x.jpg",
			"imageAssetId": "wardrobe/1/x.jpg",
		},
		headers=auth,
	).json()

	resp = client.put(f"/items/{item['id']}", json={"name": "Red Tee", "category": "Shirts"}, headers=auth)
	assert resp.status_code == 200
	body = resp.json()
	assert body["name"] == "Red Tee"
	# Omitted fields are cleared, not merged
	assert body["status"] == "Washed"
	assert body["imageUrl"] is None
	assert body["imageAssetId"] is None


def test_update_missing_item_404(client, auth):
	resp = client.put("/items/9999", json={"name": "x", "category": "y"}, headers=auth)
	assert resp.status_code == 404
	assert resp.json() == {"error": "Not found"}


def test_delete_missing_item_404(client, auth):
	resp = client.delete("/items/9999", headers=auth)
	assert resp.status_code == 404
	assert resp.json() == {"error": "Not found"}


def test_items_are_isolated_between_owners(client, signup):
	ana, _ = signup("ana")
	bob, _ = signup("bob")
	item = client.post("/items", json={"name": "Blue Tee", "category": "Shirts"}, headers=ana).json()

	assert client.get("/items", headers=bob).json() == []

	put = client.put(f"/items/{item['id']}", json={"name": "Stolen", "category": "Shirts"}, headers=bob)
	missing = client.put("/items/9999", json={"name": "Stolen", "category": "Shirts"}, headers=bob)
	assert put.status_code == missing.status_code == 404
	assert put.json() == missing.json()

	delete = client.delete(f"/items/{item['id']}", headers=bob)
	assert delete.status_code == 404

	still = client.get("/items", headers=ana).json()
	assert len(still) == 1
	assert still[0]["name"] == "Blue Tee"


def test_owner_id_in_body_is_ignored(client, signup):
	ana, ana_user = signup("ana")
	bob, bob_user = signup("bob")
	resp = client.post(
		"/items", json={"name": "Blue Tee", "category": "Shirts", "ownerId": bob_user["id"]}, headers=ana
	)
	assert resp.json()["ownerId"] == ana_user["id"]
	assert client.get("/items", headers=bob).json() == []
