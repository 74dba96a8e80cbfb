def place_order(client, table=5, quantity=2):
    response = client.post("/api/orders", json={
        "tableNumber": table,
        "assignedWaiter": "waiter",
        "items": [{"menuItemId": "1", "quantity": quantity}],
    })
    assert response.status_code == 201, response.text
    return response.json()


def test_root(client):
    assert client.get("/").status_code == 200


def test_menu_crud(client):
    assert len(client.get("/api/menu").json()) == 8
    created = client.post("/api/menu", json={
        "name": "Hawawshi", "price": 55, "category": "main", "allergens": ["gluten", "gluten"],
    })
    assert created.status_code == 201
    item = created.json()
    assert item["allergens"] == ["gluten"]
    assert item["imageUrl"] == ""

    toggled = client.post(f"/api/menu/{item['id']}/toggle-availability").json()
    assert toggled["available"] is False
    assert client.put(f"/api/menu/{item['id']}", json={"price": 60}).json()["price"] == 60.0
    assert client.delete(f"/api/menu/{item['id']}").status_code == 200
    assert client.get(f"/api/menu/{item['id']}").status_code == 404


def test_table_endpoints(client):
    assert len(client.get("/api/tables").json()) == 10
    created = client.post("/api/tables", json={"tableNumber": 11, "capacity": 4, "location": "patio"})
    assert created.status_code == 201
    assert client.post("/api/tables", json={"tableNumber": 11, "capacity": 4}).status_code == 409

    assigned = client.post("/api/tables/table_3/assign", json={"waiterId": "waiter"}).json()
    assert assigned["status"] == "occupied"
    assert assigned["assignedWaiter"] == "waiter"
    assert client.post("/api/tables/table_3/assist").json()["status"] == "need-assistance"
    assert [t["number"] for t in client.get("/api/tables", params={"status": "need-assistance"}).json()] == [3]

    released = client.post("/api/tables/table_3/release").json()
    assert released["status"] == "available"
    assert released["assignedWaiter"] is None
    assert 3 in [t["number"] for t in client.get("/api/tables/available").json()]

    updated = client.put("/api/tables/table_3/status", json={"status": "reserved"})
    assert updated.json()["status"] == "reserved"
    assert client.post("/api/tables/missing/assist").status_code == 404


def test_reservation_scenario(client):
    body = {
        "customerName": "Omar",
        "customerEmail": "omar@example.com",
        "customerPhone": "0100000000",
        "tableNumber": 2,
        "reservationDate": "2024-12-31",
        "reservationTime": "19:00",
        "endTime": "20:00",
        "numberOfGuests": 2,
    }
    first = client.post("/api/reservations", json=body)
    assert first.status_code == 201, first.text
    assert first.json()["reservationTime"] == "19:00"
    assert first.json()["status"] == "confirmed"

    conflict = client.post("/api/reservations", json={**body, "reservationTime": "19:30", "endTime": "20:30"})
    assert conflict.status_code == 409
    assert "already reserved" in conflict.json()["detail"]

    later = client.post("/api/reservations", json={**body, "reservationTime": "20:00", "endTime": "21:00"})
    assert later.status_code == 201

    conflicts = client.get("/api/reservations/conflicts", params={
        "tableNumber": 2, "date": "2024-12-31", "startTime": "19:45", "endTime": "20:15",
    }).json()
    assert len(conflicts) == 2

    cancelled = client.post(f"/api/reservations/{first.json()['id']}/cancel").json()
    assert cancelled["status"] == "cancelled"
    assert len(client.get("/api/reservations", params={"status": "confirmed"}).json()) == 1


def test_reservation_validation_errors(client):
    assert client.post("/api/reservations", json={"tableNumber": 2}).status_code == 400
    missing_table = client.post("/api/reservations", json={
        "customerName": "Omar", "tableNumber": 99, "reservationDate": "2024-12-31", "reservationTime": "19:00",
    })
    assert missing_table.status_code == 400
    assert missing_table.json()["detail"] == "Table 99 not found"
    assert client.get("/api/reservations/res_404").status_code == 404


def test_order_to_payment_flow(client):
    order = place_order(client)
    assert order["status"] == "pending"
    assert order["items"][0]["name"] == "Fattoush Salad"
    assert order["items"][0]["price"] == 45.0
    assert client.get("/api/tables/table_5").json()["currentOrder"] == order["id"]

    bill = client.post("/api/bills/generate", json={"orderId": order["id"]})
    assert bill.status_code == 201
    bill = bill.json()
    assert (bill["subtotal"], bill["tax"], bill["total"]) == (90.0, 9.0, 99.0)

    receipt = client.get(f"/api/bills/{bill['id']}/receipt")
    assert receipt.status_code == 200
    assert receipt.headers["content-type"] == "application/pdf"
    assert receipt.content.startswith(b"%PDF")

    paid = client.post(f"/api/bills/{bill['id']}/pay", json={"paymentMethod": "card"})
    assert paid.status_code == 200
    assert paid.json() == {
        "success": True,
        "message": "Payment processed successfully",
        "billId": bill["id"],
        "paymentMethod": "card",
    }
    assert client.get(f"/api/orders/{order['id']}").json()["status"] == "paid"
    table = client.get("/api/tables/table_5").json()
    assert table["status"] == "available"
    assert table["currentOrder"] is None

    assert client.post(f"/api/bills/{bill['id']}/pay").status_code == 400


def test_order_errors(client):
    assert client.post("/api/orders", json={"tableNumber": 5, "items": []}).status_code == 400
    unknown_table = client.post("/api/orders", json={"tableNumber": 50, "items": [{"menuItemId": "1", "quantity": 1}]})
    assert unknown_table.status_code == 400
    place_order(client)
    busy = client.post("/api/orders", json={"tableNumber": 5, "items": [{"menuItemId": "1", "quantity": 1}]})
    assert busy.status_code == 400
    assert client.get("/api/orders/order_404").status_code == 404
    assert client.post("/api/bills/generate", json={"orderId": "order_404"}).status_code == 404


def test_kitchen_endpoints(client):
    order = place_order(client)
    assert [o["id"] for o in client.get("/api/kitchen/orders").json()] == [order["id"]]

    rejected = client.post(f"/api/kitchen/orders/{order['id']}/accept",
                           json={"chefId": "chef1", "chefName": "Head Chef", "estimatedPrepTime": 0})
    assert rejected.status_code == 400
    assert client.get(f"/api/orders/{order['id']}").json()["status"] == "pending"

    accepted = client.post(f"/api/kitchen/orders/{order['id']}/accept",
                           json={"chefId": "chef1", "chefName": "Head Chef", "estimatedPrepTime": 20}).json()
    assert accepted["status"] == "preparing"
    assert accepted["startTime"] == "2024-12-01T12:00:00.000Z"
    assert client.post(f"/api/kitchen/orders/{order['id']}/complete").json()["status"] == "ready"
    assert client.post(f"/api/kitchen/orders/{order['id']}/served").json()["status"] == "served"
    assert client.get("/api/kitchen/orders").json() == []


def test_order_status_and_items(client):
    order = place_order(client)
    added = client.post(f"/api/orders/{order['id']}/items", json=[{"menuItemId": "8", "quantity": 2}])
    assert len(added.json()["items"]) == 2
    updated = client.put(f"/api/orders/{order['id']}/status", json={"status": "ready"}).json()
    assert updated["status"] == "ready"
    assert [o["id"] for o in client.get("/api/orders", params={"status": "ready,served"}).json()] == [order["id"]]
    assert client.get("/api/orders", params={"status": "bogus"}).status_code == 400


def test_login(client):
    ok = client.post("/api/auth/login", json={"username": "manager", "password": "manager123", "role": "manager"})
    assert ok.status_code == 200
    assert ok.json()["role"] == "manager"
    assert ok.json()["token"]
    bad = client.post("/api/auth/login", json={"username": "manager", "password": "nope", "role": "manager"})
    assert bad.status_code == 401
    assert client.post("/api/auth/login", json={"username": "manager"}).status_code == 400


def test_waiter_stats_endpoint(client):
    place_order(client, quantity=3)
    stats = client.get("/api/waiters/waiter/stats").json()
    assert stats == {"activeTables": 1, "pendingOrders": 1, "todayRevenue": 135.0, "totalTablesServed": 0}
