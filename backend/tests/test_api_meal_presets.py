def test_create_list_update_delete(client):
    toast = client.post("/api/meal-presets", json={"name": "Toast", "carb_value": 25})
    assert toast.status_code == 201
    oats = client.post(
        "/api/meal-presets",
        json={"name": "Oatmeal", "carb_value": 40, "description": "with milk"},
    )
    assert oats.status_code == 201

    names = [p["name"] for p in client.get("/api/meal-presets").json()]
    assert names == ["Oatmeal", "Toast"]

    preset_id = toast.json()["id"]
    updated = client.put(f"/api/meal-presets/{preset_id}", json={"carb_value": 30})
    assert updated.status_code == 200
    assert updated.json()["carb_value"] == 30
    assert updated.json()["name"] == "Toast"

    assert client.delete(f"/api/meal-presets/{preset_id}").status_code == 204
    assert client.get(f"/api/meal-presets/{preset_id}").status_code == 404


def test_update_can_clear_description(client):
    created = client.post(
        "/api/meal-presets",
        json={"name": "Rice", "carb_value": 45, "description": "1 cup"},
    ).json()

    response = client.put(f"/api/meal-presets/{created['id']}", json={"description": None, "name": None})
    assert response.status_code == 200
    assert response.json()["description"] is None
    assert response.json()["name"] == "Rice"


def test_missing_preset(client):
    assert client.get("/api/meal-presets/42").status_code == 404
    assert client.put("/api/meal-presets/42", json={"name": "x"}).status_code == 404
    assert client.delete("/api/meal-presets/42").status_code == 404


def test_invalid_preset_rejected(client):
    assert client.post("/api/meal-presets", json={"name": "", "carb_value": 10}).status_code == 422
    assert client.post("/api/meal-presets", json={"name": "Cake", "carb_value": 0}).status_code == 422
    assert client.post("/api/meal-presets", json={"name": "Cake", "carb_value": 1000}).status_code == 422
