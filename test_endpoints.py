#!/usr/bin/env python3
"""
Smoke test script for the SuperCook API.
Run this against a live server to verify the endpoints respond correctly.
"""
import asyncio
import os
from datetime import datetime

import httpx

# Test configuration
BASE_URL = os.getenv("SUPERCOOK_BASE_URL", "http://127.0.0.1:5000")
# Generation hits the model and inserts into the live store; opt in explicitly
RUN_GENERATION = os.getenv("SMOKE_GENERATE", "0") == "1"


class SuperCookSmokeTester:
    def __init__(self):
        self.client = httpx.AsyncClient(timeout=90.0)
        self.test_results = []
        self.first_recipe_id = None

    async def log_test(self, test_name: str, success: bool, details: str = ""):
        """Log test results."""
        status = "✅ PASS" if success else "❌ FAIL"
        result = f"{status} {test_name}"
        if details:
            result += f" - {details}"
        print(result)
        self.test_results.append({
            "test": test_name,
            "success": success,
            "details": details,
            "timestamp": datetime.now().isoformat()
        })

    async def test_health_endpoints(self):
        print("\n🔍 Testing Health Endpoints...")

        try:
            response = await self.client.get(f"{BASE_URL}/")
            success = response.status_code == 200
            await self.log_test("Root endpoint", success, f"Status: {response.status_code}")
        except Exception as e:
            await self.log_test("Root endpoint", False, str(e))

        try:
            response = await self.client.get(f"{BASE_URL}/health")
            data = response.json()
            success = response.status_code == 200
            await self.log_test("Health endpoint", success,
                                f"DB: {data.get('database', 'unknown')}")
        except Exception as e:
            await self.log_test("Health endpoint", False, str(e))

    async def test_search(self):
        print("\n🔍 Testing Search...")

        try:
            response = await self.client.post(
                f"{BASE_URL}/recipes/search",
                json={"terms": [], "filters": {}, "generateIfEmpty": False},
            )
            recipes = response.json().get("recipes", [])
            success = response.status_code == 200 and isinstance(recipes, list)
            if recipes:
                self.first_recipe_id = recipes[0].get("id")
            await self.log_test("Search (no filters)", success, f"Found {len(recipes)} recipes")
        except Exception as e:
            await self.log_test("Search (no filters)", False, str(e))

        try:
            response = await self.client.post(
                f"{BASE_URL}/api/recipes/search",
                json={
                    "terms": ["garlic"],
                    "filters": {"time": "15-30", "dietary": ["vegetarian"], "caloriesMax": "600"},
                    "generateIfEmpty": False,
                },
            )
            success = response.status_code == 200
            await self.log_test("Search (filtered, /api prefix)", success,
                                f"Found {len(response.json().get('recipes', []))} recipes")
        except Exception as e:
            await self.log_test("Search (filtered, /api prefix)", False, str(e))

    async def test_recipe_detail(self):
        print("\n🔍 Testing Recipe Detail...")

        if not self.first_recipe_id:
            await self.log_test("Recipe detail", False, "No recipe id from search")
            return

        try:
            response = await self.client.get(f"{BASE_URL}/recipes/{self.first_recipe_id}")
            success = response.status_code == 200 and "recipe" in response.json()
            await self.log_test("Recipe detail", success, f"Status: {response.status_code}")
        except Exception as e:
            await self.log_test("Recipe detail", False, str(e))

        try:
            response = await self.client.get(
                f"{BASE_URL}/recipes/{self.first_recipe_id}/scaled",
                params={"servings": 4, "mode": "total"},
            )
            scaled = response.json().get("scaled", {})
            success = response.status_code == 200 and scaled.get("servings") == 4
            await self.log_test("Scaled recipe", success, f"Calories: {scaled.get('calories')}")
        except Exception as e:
            await self.log_test("Scaled recipe", False, str(e))

        try:
            response = await self.client.get(f"{BASE_URL}/recipes/does-not-exist")
            success = response.status_code == 404
            await self.log_test("Recipe not found", success, f"Status: {response.status_code}")
        except Exception as e:
            await self.log_test("Recipe not found", False, str(e))

    async def test_generation(self):
        print("\n🔍 Testing Generation...")

        try:
            response = await self.client.post(f"{BASE_URL}/generate-recipes", json={"n": 1})
            recipes = response.json().get("recipes", [])
            success = response.status_code == 200 and len(recipes) >= 1
            await self.log_test("Generate recipes", success,
                                f"Status: {response.status_code}, got {len(recipes)}")
        except Exception as e:
            await self.log_test("Generate recipes", False, str(e))

    async def run_all_tests(self):
        print("🧪 Starting SuperCook smoke tests...")
        print(f"Testing against: {BASE_URL}")

        await self.test_health_endpoints()
        await self.test_search()
        await self.test_recipe_detail()
        if RUN_GENERATION:
            await self.test_generation()

        print("\n📊 Test Summary:")
        passed = sum(1 for result in self.test_results if result["success"])
        total = len(self.test_results)
        print(f"Passed: {passed}/{total}")

        if passed < total:
            print("\n❌ Failed Tests:")
            for result in self.test_results:
                if not result["success"]:
                    print(f"  - {result['test']}: {result['details']}")

        await self.client.aclose()
        return passed == total


async def main():
    tester = SuperCookSmokeTester()
    success = await tester.run_all_tests()

    if success:
        print("\n🎉 All smoke tests passed!")
    else:
        print("\n⚠️ Some tests failed. Check the details above.")

    return success


if __name__ == "__main__":
    asyncio.run(main())
