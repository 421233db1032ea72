"""Send sample raid reports to the local server.

Usage: uv run python send_report.py [reporter-uuid]
"""

import asyncio
import sys

import httpx

BASE_URL = "http://localhost:8080"

SAMPLE_REPORT = {
    "raidType": "The Canyon Colossus",
    "players": ["Salted", "Aerrihn", "Nepmia", "Kaizuu"],
    "reporterUuid": "",
}


async def main():
    reporter = sys.argv[1] if len(sys.argv) > 1 else ""
    if not reporter:
        print("Usage: uv run python send_report.py <reporter-uuid>")
        print("  (Use the UUID of a member of the configured guild)")
        sys.exit(1)

    report = {**SAMPLE_REPORT, "reporterUuid": reporter}

    async with httpx.AsyncClient() as client:
        print("--- Health Check ---")
        r = await client.get(f"{BASE_URL}/health")
        print(f"  {r.status_code}: {r.json()}\n")

        print("--- Unknown raid (should be 400) ---")
        r = await client.post(f"{BASE_URL}/raid", json={**report, "raidType": "Unknown Raid"})
        print(f"  {r.status_code}: {r.json()}\n")

        print("--- Sending Raid Report ---")
        r = await client.post(f"{BASE_URL}/raid", json=report)
        print(f"  {r.status_code}: {r.json()}\n")

        print("--- Sending Duplicate Report (should be 429) ---")
        r = await client.post(f"{BASE_URL}/raid", json=report)
        print(f"  {r.status_code}: {r.json()}\n")

        print("Done! Check the Discord channel and the server logs.")


if __name__ == "__main__":
    asyncio.run(main())
