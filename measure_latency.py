#!/usr/bin/env python3
"""
Latency measurement script for the caregiver app's main reads
Measures GET /patients, GET /patients/{id}/assessments, GET /patients/{id}/daily-records
"""
import time
import requests
import statistics
import sys

API_BASE = "http://127.0.0.1:8000/api/v1"
CAREGIVER_ID = "latency-test-caregiver"
NUM_ITERATIONS = 10


def measure_endpoint(name: str, url: str, headers: dict):
    """Measure latency for a single endpoint"""
    times = []
    errors = 0

    print(f"\nMeasuring {name}...")

    for i in range(NUM_ITERATIONS):
        start = time.perf_counter()
        try:
            response = requests.get(url, headers=headers, timeout=5)
            duration = (time.perf_counter() - start) * 1000
            times.append(duration)
            if response.status_code != 200:
                errors += 1
                print(f"  Iteration {i+1}: {response.status_code} - {duration:.2f}ms")
            else:
                print(f"  Iteration {i+1}: {duration:.2f}ms")
        except requests.RequestException as e:
            errors += 1
            duration = (time.perf_counter() - start) * 1000
            print(f"  Iteration {i+1}: ERROR - {e} ({duration:.2f}ms)")

    if not times:
        print(f"  ERROR: All requests failed for {name}")
        return None

    result = {
        'name': name,
        'avg': statistics.mean(times),
        'median': statistics.median(times),
        'min': min(times),
        'max': max(times),
        'p95': statistics.quantiles(times, n=20)[18] if len(times) > 1 else times[0],
        'errors': errors,
    }
    print(f"\n  Results for {name}:")
    print(f"    Average: {result['avg']:.2f}ms")
    print(f"    Median:  {result['median']:.2f}ms")
    print(f"    P95:     {result['p95']:.2f}ms")
    print(f"    Errors:  {errors}/{NUM_ITERATIONS}")
    return result


def setup_patient(headers: dict) -> str:
    """Create a patient with one assessment and one daily record, return its id"""
    response = requests.post(f"{API_BASE}/patients", headers=headers, json={"nome": "Paciente Teste"}, timeout=5)
    response.raise_for_status()
    patient_id = response.json()["id"]

    requests.post(f"{API_BASE}/triage/session", headers=headers, json={"patient_id": patient_id}, timeout=5)
    for index in range(9):
        requests.post(f"{API_BASE}/triage/session/answer", headers=headers, json={"index": index, "value": index % 2}, timeout=5)

    requests.post(
        f"{API_BASE}/patients/{patient_id}/daily-records",
        headers=headers,
        json={"symptoms": ["tosse", "fadiga"], "food_consistency": "pastosa"},
        timeout=5,
    )
    return patient_id


def main():
    """Run latency measurements"""
    headers = {
        'X-Caregiver-ID': CAREGIVER_ID,
        'Content-Type': 'application/json'
    }

    print("Setting up test patient...")
    try:
        patient_id = setup_patient(headers)
    except requests.RequestException as e:
        print(f"Could not set up test patient: {e}")
        sys.exit(1)

    endpoints = [
        ("GET /api/v1/patients", f"{API_BASE}/patients"),
        ("GET /api/v1/patients/{id}/assessments", f"{API_BASE}/patients/{patient_id}/assessments"),
        ("GET /api/v1/patients/{id}/daily-records", f"{API_BASE}/patients/{patient_id}/daily-records"),
    ]
    results = [r for r in (measure_endpoint(name, url, headers) for name, url in endpoints) if r]

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)
    if not results:
        print("No successful measurements")
        sys.exit(1)

    total_avg = sum(r['avg'] for r in results) / len(results)
    print(f"\nAverage latency across all endpoints: {total_avg:.2f}ms")
    for r in results:
        print(f"  {r['name']:42} {r['avg']:7.2f}ms (median: {r['median']:.2f}ms)")


if __name__ == "__main__":
    main()
