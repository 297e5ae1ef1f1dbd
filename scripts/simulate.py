"""
Concurrency Simulation Script

Hammers a running server to check the invariants that depend on the
store rather than on request ordering:
    - N parallel registrations for one email: exactly one must succeed
    - register -> login -> add-to-cart flow for a restaurant and a customer

Run from project root: python scripts/simulate.py [--racers 20]
"""

import argparse
import asyncio
import os
import random
import sys
import time
import uuid
from datetime import datetime
from typing import Any

import httpx

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:6001")
TOTAL_RACERS = 20

FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emma", "David", "Lisa", "Chris", "Amy"]
MENU_ITEMS = [
    {"name": "Pizza Margherita", "price": 14.99},
    {"name": "Pepperoni Pizza", "price": 16.99},
    {"name": "Caesar Salad", "price": 8.99},
    {"name": "Garlic Bread", "price": 5.99},
    {"name": "Tiramisu", "price": 7.99},
]


# =============================================================================
# DUPLICATE EMAIL RACE
# =============================================================================

async def send_registration(
    client: httpx.AsyncClient,
    racer_num: int,
    email: str,
) -> dict[str, Any]:
    """Register one racer against the shared email."""
    payload = {
        "username": f"{random.choice(FIRST_NAMES)}{racer_num}",
        "email": email,
        "usertype": "customer",
        "password": "race-password",
    }
    start_time = time.time()

    try:
        response = await client.post(f"{API_BASE_URL}/register", json=payload, timeout=30.0)
        elapsed = round(time.time() - start_time, 3)
        return {
            "racer": racer_num,
            "status": response.status_code,
            "success": response.status_code == 201,
            "message": response.json().get("message"),
            "time": elapsed,
        }
    except Exception as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "racer": racer_num,
            "status": None,
            "success": False,
            "message": str(e)[:100],
            "time": elapsed,
        }


async def run_race(num_racers: int = TOTAL_RACERS) -> bool:
    """Fire parallel registrations for one email and count winners."""
    email = f"race-{uuid.uuid4().hex[:8]}@example.com"

    print("=" * 70)
    print("DUPLICATE EMAIL RACE")
    print("=" * 70)
    print(f"Racers: {num_racers}")
    print(f"Email: {email}")
    print(f"Target: {API_BASE_URL}")
    print(f"Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()
    async with httpx.AsyncClient() as client:
        tasks = [send_registration(client, i + 1, email) for i in range(num_racers)]
        results = await asyncio.gather(*tasks)

        users = (await client.get(f"{API_BASE_URL}/fetch-users")).json()
    total_time = round(time.time() - start_time, 2)

    winners = [r for r in results if r["success"]]
    conflicts = [r for r in results if r["status"] == 400]
    errors = [r for r in results if r["status"] not in (201, 400)]
    stored = [u for u in users if u["email"] == email]

    print(f"\nSucceeded: {len(winners)}/{num_racers}")
    print(f"Refused as duplicate: {len(conflicts)}/{num_racers}")
    print(f"Other failures: {len(errors)}/{num_racers}")
    print(f"Identities stored for email: {len(stored)}")
    print(f"Total Time: {total_time}s")

    for e in errors[:5]:
        print(f"   Racer #{e['racer']}: {e['status']} {e['message']}")

    ok = len(winners) == 1 and len(stored) == 1
    print("\n" + ("PASS" if ok else "FAIL") + ": exactly one identity per email")
    print("=" * 70)
    return ok


# =============================================================================
# HAPPY PATH
# =============================================================================

async def test_single_flows() -> bool:
    """Register an owner and a customer, then fill the customer's cart."""
    suffix = uuid.uuid4().hex[:8]

    print("\n" + "=" * 70)
    print("TESTING INDIVIDUAL FLOWS")
    print("=" * 70)

    async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=30.0) as client:
        print("\n1. Health Check...")
        response = await client.get("/health")
        if response.status_code != 200:
            print(f"   Failed: {response.text}")
            return False
        print(f"   Status: {response.json().get('status')}")

        print("\n2. Register restaurant owner...")
        response = await client.post("/register", json={
            "username": f"Trattoria {suffix}",
            "email": f"owner-{suffix}@example.com",
            "usertype": "restaurant",
            "password": "owner-password",
            "restaurantAddress": "350 Fifth Avenue",
            "restaurantImage": "trattoria.png",
        })
        if response.status_code != 201:
            print(f"   Failed: {response.text}")
            return False
        owner = response.json()["user"]
        print(f"   Owner {owner['id']} approval={owner['approval']}")

        restaurants = (await client.get("/fetch-restaurants")).json()
        restaurant = next(r for r in restaurants if r["owner_id"] == owner["id"])
        print(f"   Restaurant {restaurant['id']} '{restaurant['title']}'")

        print("\n3. Register and log in customer...")
        email = f"customer-{suffix}@example.com"
        await client.post("/register", json={
            "username": f"customer-{suffix}",
            "email": email,
            "usertype": "customer",
            "password": "customer-password",
        })
        response = await client.post("/login", json={"email": email, "password": "customer-password"})
        if response.status_code != 200:
            print(f"   Failed: {response.text}")
            return False
        customer = response.json()["user"]
        print(f"   Customer {customer['id']} approval={customer['approval']}")

        print("\n4. Add items to cart...")
        for item in random.sample(MENU_ITEMS, 2):
            response = await client.post("/add-to-cart", json={
                "userId": customer["id"],
                "foodItemId": uuid.uuid4().hex,
                "foodItemName": item["name"],
                "restaurantId": restaurant["id"],
                "foodItemImg": None,
                "price": item["price"],
                "discount": 0,
                "quantity": random.randint(1, 3),
            })
            print(f"   {item['name']}: {response.status_code} {response.json().get('message')}")

    print("\n" + "=" * 70)
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrency Simulation Script")
    parser.add_argument("--racers", type=int, default=TOTAL_RACERS, help="Parallel registrations")
    parser.add_argument("--skip-tests", action="store_true", help="Skip individual flows")
    args = parser.parse_args()

    if not args.skip_tests:
        if not asyncio.run(test_single_flows()):
            print("\nPre-flight flows failed. Fix issues before running the race.")
            sys.exit(1)

    ok = asyncio.run(run_race(args.racers))
    sys.exit(0 if ok else 1)
