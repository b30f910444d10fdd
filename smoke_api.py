#!/usr/bin/env python3
"""
Smoke test script for the WIMS API

Walks every resource through create, read, update and delete against a
running server and a real database, then cleans up after itself.
Run this script with: python3 smoke_api.py [base_url]
"""

import sys
from datetime import date

import requests

# API Base URL
BASE_URL = "http://localhost:8000/api"

# Color codes for terminal output
GREEN = '\033[92m'
RED = '\033[91m'
YELLOW = '\033[93m'
BLUE = '\033[94m'
RESET = '\033[0m'


def print_section(title: str):
    print(f"\n{BLUE}{'='*70}{RESET}")
    print(f"{BLUE}{title:^70}{RESET}")
    print(f"{BLUE}{'='*70}{RESET}\n")


def print_success(message: str):
    print(f"{GREEN}✓ {message}{RESET}")


def print_error(message: str):
    print(f"{RED}✗ {message}{RESET}")


def print_info(message: str):
    print(f"{YELLOW}ℹ {message}{RESET}")


def crud_roundtrip(resource: str, id_field: str, create_data: dict, update_data: dict) -> bool:
    """Create, list, get, replace and delete one row of a resource."""
    print_section(f"{resource.capitalize()} API")
    try:
        print_info(f"Creating {resource}...")
        response = requests.post(f"{BASE_URL}/{resource}", json=create_data)
        response.raise_for_status()
        row_id = response.json()[id_field]
        print_success(f"Created {resource} (ID: {row_id})")

        response = requests.get(f"{BASE_URL}/{resource}")
        response.raise_for_status()
        print_success(f"Listed {len(response.json())} {resource}")

        response = requests.get(f"{BASE_URL}/{resource}/{row_id}")
        response.raise_for_status()
        print_success(f"Retrieved {resource} {row_id}")

        response = requests.put(f"{BASE_URL}/{resource}/{row_id}", json=update_data)
        response.raise_for_status()
        print_success(f"Replaced {resource} {row_id}")

        response = requests.delete(f"{BASE_URL}/{resource}/{row_id}")
        response.raise_for_status()
        print_success(f"Deleted {resource} {row_id}")
        return True

    except Exception as e:
        print_error(f"{resource} check failed: {e}")
        return False


def create(resource: str, id_field: str, data: dict) -> int:
    response = requests.post(f"{BASE_URL}/{resource}", json=data)
    response.raise_for_status()
    return response.json()[id_field]


def delete(resource: str, row_id: int):
    requests.delete(f"{BASE_URL}/{resource}/{row_id}")


def check_health() -> bool:
    print_section("Health Check")
    try:
        response = requests.get(f"{BASE_URL}/health")
        response.raise_for_status()
        response = requests.get(BASE_URL)
        response.raise_for_status()
        print_success(f"API is healthy - Version: {response.json()['version']}")

        response = requests.get(f"{BASE_URL}/db/ping")
        response.raise_for_status()
        print_success(f"Database time: {response.json()['now']}")
        return True
    except Exception as e:
        print_error(f"Health check failed: {e}")
        return False


def check_resources() -> list:
    today = date.today().isoformat()
    triangle = [{"lat": -19.0, "lon": 29.0}, {"lat": -19.0, "lon": 29.1}, {"lat": -19.1, "lon": 29.1}]
    results = []

    species_id = create("species", "w_species_id", {"name": "Smoke Test Kudu", "population": 10})
    reserve_id = create("reserves", "reserve_id", {"name": "Smoke Test Reserve", "points": triangle})
    hunter_id = create("hunters", "hunter_id", {"name": "Smoke Test Hunter"})
    try:
        results.append(("Species", crud_roundtrip(
            "species", "w_species_id",
            {"name": "Smoke Test Eland"}, {"name": "Smoke Test Eland", "population": "3"},
        )))
        results.append(("Reserves", crud_roundtrip(
            "reserves", "reserve_id",
            {"name": "Smoke Test Block", "points": triangle},
            {"name": "Smoke Test Block", "boundary": "((29,-19),(29.2,-19),(29.2,-19.2))"},
        )))
        results.append(("Hunters", crud_roundtrip(
            "hunters", "hunter_id",
            {"name": "Smoke Test Tracker"}, {"name": "Smoke Test Tracker", "address": "Box 1"},
        )))
        results.append(("Sightings", crud_roundtrip(
            "sightings", "sighting_id",
            {"w_species_id": species_id, "sighting_date": today, "lat": -19.05, "lon": 29.05},
            {"w_species_id": species_id, "sighting_date": today, "lat": -19.06, "lon": 29.06, "notes": "moved"},
        )))
        results.append(("Licences", crud_roundtrip(
            "licences", "licence_id",
            {"hunter_id": hunter_id, "issue_date": today, "expiry_date": today},
            {"hunter_id": hunter_id, "issue_date": today, "expiry_date": "2099-12-31"},
        )))
        results.append(("Poaching", crud_roundtrip(
            "poaching", "incident_id",
            {"incident_date": today, "lat": -19.05, "lon": 29.05, "reserve_id": reserve_id},
            {"incident_date": today, "lat": -19.05, "lon": 29.05, "reserve_id": ""},
        )))
        results.append(("Quotas", crud_roundtrip(
            "quotas", "quota_id",
            {"year": 2099, "w_species_id": species_id, "reserve_id": reserve_id, "quota": 2},
            {"year": 2099, "w_species_id": species_id, "reserve_id": reserve_id, "quota": 0},
        )))
    finally:
        delete("species", species_id)
        delete("reserves", reserve_id)
        delete("hunters", hunter_id)
    return results


def main():
    """Run all checks"""
    print(f"\n{BLUE}{'='*70}")
    print(f"{'WIMS API Smoke Test':^70}")
    print(f"{'='*70}{RESET}\n")

    results = [("Health Check", check_health())]

    if results[0][1]:  # Only continue if health check passes
        results.extend(check_resources())
    else:
        print_error("Skipping remaining checks due to failed health check")

    print_section("Summary")
    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = f"{GREEN}PASSED{RESET}" if result else f"{RED}FAILED{RESET}"
        print(f"  {name}: {status}")

    print(f"\n{BLUE}{'─'*70}{RESET}")
    if passed == total:
        print(f"{GREEN}All checks passed! ({passed}/{total}){RESET}")
    else:
        print(f"{YELLOW}Some checks failed ({passed}/{total} passed){RESET}")
    print(f"{BLUE}{'─'*70}{RESET}\n")
    return passed == total


if __name__ == "__main__":
    if len(sys.argv) > 1:
        BASE_URL = sys.argv[1].rstrip("/")
    try:
        ok = main()
    except KeyboardInterrupt:
        print(f"\n\n{YELLOW}Interrupted by user{RESET}\n")
        ok = False
    sys.exit(0 if ok else 1)
