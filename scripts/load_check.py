# scripts/load_check.py
"""Fire concurrent /current-time calls at a running server and compare row counts."""
import os
import sys
from concurrent.futures import ThreadPoolExecutor

import requests
from dotenv import load_dotenv

load_dotenv()

BASE_URL = os.getenv("BASE_URL", "http://127.0.0.1:8080")
REQUESTS = int(os.getenv("REQUESTS", "50"))


def count_rows() -> int:
    resp = requests.get(f"{BASE_URL}/logs", timeout=10)
    resp.raise_for_status()
    return len(resp.json())


def record_once(_) -> bool:
    resp = requests.get(f"{BASE_URL}/current-time", timeout=30)
    return resp.status_code == 200


def main():
    before = count_rows()
    with ThreadPoolExecutor(max_workers=REQUESTS) as pool:
        ok = sum(pool.map(record_once, range(REQUESTS)))
    after = count_rows()

    print(f"requests: {REQUESTS}  succeeded: {ok}  rows added: {after - before}")
    if after - before != ok:
        print("❌ row count does not match successful calls")
        return 1
    print("✅ every successful call produced one row")
    return 0


if __name__ == "__main__":
    sys.exit(main())
