from uuid import uuid4


class TestDealers:

    def test_create_and_list(self, client, auth_headers, other_auth_headers):
        response = client.post("/dealers", json={"name": "Ravi Jewels", "location": "Mumbai", "email": ""},
                               headers=auth_headers)

        assert response.status_code == 200
        dealer = response.json()["dealer"]
        assert dealer["status"] == "active"
        assert dealer["email"] is None

        assert [d["id"] for d in client.get("/dealers", headers=auth_headers).json()["dealers"]] == [dealer["id"]]
        assert client.get("/dealers", headers=other_auth_headers).json() == {"dealers": []}

    def test_active_lookup_excludes_inactive(self, client, auth_headers):
        active = client.post("/dealers", json={"name": "Active", "location": "Pune"},
                             headers=auth_headers).json()["dealer"]
        client.post("/dealers", json={"name": "Dormant", "status": "inactive"}, headers=auth_headers)

        lookup = client.get("/dealers/active-lookup", headers=auth_headers).json()

        assert lookup == [{"id": active["id"], "name": "Active - Pune"}]

    def test_deactivate_blocks_transfers(self, client, auth_headers):
        dealer = client.post("/dealers", json={"name": "Ravi"}, headers=auth_headers).json()["dealer"]
        item = client.post("/inventory", json={"quantity": 100}, headers=auth_headers).json()["inventory"]

        response = client.put(f"/dealers/{dealer['id']}", json={"status": "inactive"}, headers=auth_headers)
        assert response.json()["dealer"]["status"] == "inactive"

        response = client.post("/inventory/transactions", json={
            "inventory_id": item["id"], "transaction_type": "transfer",
            "quantity": 10, "dealer_id": dealer["id"]}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Dealer is not active"}

    def test_update_unknown_dealer(self, client, auth_headers):
        response = client.put(f"/dealers/{uuid4()}", json={"name": "x"}, headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Dealer not found"}

    def test_blank_name_is_rejected(self, client, auth_headers):
        dealer = client.post("/dealers", json={"name": "Ravi"}, headers=auth_headers).json()["dealer"]

        response = client.put(f"/dealers/{dealer['id']}", json={"name": " "}, headers=auth_headers)

        assert response.status_code == 400


class TestEmployees:

    def test_create_list_and_lookup(self, client, auth_headers):
        response = client.post("/employees", json={
            "name": "Anita", "position": "Manager", "department": "Sales", "hire_date": "2024-03-01"},
            headers=auth_headers)

        assert response.status_code == 200
        employee = response.json()["employee"]
        assert employee["hire_date"] == "2024-03-01"

        client.post("/employees", json={"name": "Former", "status": "inactive"}, headers=auth_headers)

        assert len(client.get("/employees", headers=auth_headers).json()["employees"]) == 2
        assert client.get("/employees/active-lookup", headers=auth_headers).json() == [
            {"id": employee["id"], "name": "Anita - Manager"}]

    def test_update_employee(self, client, auth_headers):
        employee = client.post("/employees", json={"name": "Anita"}, headers=auth_headers).json()["employee"]

        response = client.put(f"/employees/{employee['id']}", json={"department": "Vault"},
                              headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["employee"]["department"] == "Vault"
        assert response.json()["employee"]["name"] == "Anita"
