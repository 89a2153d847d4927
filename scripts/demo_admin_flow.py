"""Demo: register, log in as the dev admin, manage products and users.

Runs in-process against the in-memory repositories.

Run with:
    APP_ENV=dev python scripts/demo_admin_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from app.main import DEV_ADMIN_EMAIL, DEV_ADMIN_PASSWORD, app


def main() -> None:
    client = TestClient(app)

    # -- Step 1: public product CRUD ------------------------------------
    r = client.post(
        "/api/products",
        json={"name": "Pen", "description": "Blue pen", "price": 1.5, "stock": 100},
    )
    product_id = r.json()["id"]
    print(f"1. POST   /api/products            -> {r.status_code}  id={product_id}")

    r = client.put(f"/api/products/{product_id}", json={"price": -5})
    print(f"2. PUT    /api/products/{product_id} (bad) -> {r.status_code}  {r.json()}")

    r = client.put(f"/api/products/{product_id}", json={"stock": 90})
    print(f"3. PUT    /api/products/{product_id}       -> {r.status_code}  stock={r.json()['stock']}")

    # -- Step 2: register a regular user --------------------------------
    r = client.post(
        "/api/register",
        json={"email": "demo@example.com", "password": "demo-pass", "name": "Demo"},
    )
    user_id = r.json()["user"]["id"]
    print(f"4. POST   /api/register            -> {r.status_code}  id={user_id}")

    # -- Step 3: admin login and user management ------------------------
    r = client.post(
        "/api/login",
        json={"email": DEV_ADMIN_EMAIL, "password": DEV_ADMIN_PASSWORD},
    )
    if r.status_code != 200:
        print(f"5. POST   /api/login (admin)       -> {r.status_code}  (is APP_ENV=dev?)")
        return
    headers = {"Authorization": f"Bearer {r.json()['token']}"}
    print(f"5. POST   /api/login (admin)       -> {r.status_code}")

    r = client.get("/api/users", headers=headers)
    print(f"6. GET    /api/users               -> {r.status_code}  count={len(r.json())}")

    r = client.patch(
        f"/api/users/{user_id}/toggle-status",
        json={"enabled": False},
        headers=headers,
    )
    print(f"7. PATCH  toggle-status            -> {r.status_code}  {r.json()['message']}")

    r = client.post(
        "/api/login",
        json={"email": "demo@example.com", "password": "demo-pass"},
    )
    print(f"8. POST   /api/login (disabled)    -> {r.status_code}")

    r = client.delete(f"/api/products/{product_id}")
    print(f"9. DELETE /api/products/{product_id}       -> {r.status_code}")


if __name__ == "__main__":
    main()
