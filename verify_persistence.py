import time
import subprocess
import httpx
import sys
import os
import signal

BASE_URL = "http://127.0.0.1:8080"


def start_server():
    return subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "backend.app.main:app", "--host", "127.0.0.1", "--port", "8080"],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env={**os.environ, "DB_ECHO": "False"}
    )


def stop_server(proc):
    proc.send_signal(signal.SIGTERM)
    proc.wait()


def wait_for_server(retries=10, delay=2):
    url = f"{BASE_URL}/health"
    print(f"Waiting for server at {url}...")
    for i in range(retries):
        try:
            resp = httpx.get(url)
            if resp.status_code == 200:
                print("✅ Server is up!")
                return True
        except httpx.ConnectError:
            pass
        time.sleep(delay)
    print("❌ Server failed to start.")
    return False


def run_verification():
    # 1. Start Server (First Run)
    print("\n--- [Step 1] Starting Server (Initial) ---")
    proc = start_server()

    try:
        if not wait_for_server():
            server_logs = proc.communicate(timeout=2)
            print("Server Stdout:", server_logs[0].decode())
            print("Server Stderr:", server_logs[1].decode())
            raise Exception("Server start failed")

        # 2. Record an entry
        print("\n--- [Step 2] Recording Transaction (Persistence Test) ---")
        payload = {
            "nama": "Persistence Check",
            "keperluan": "verify_persistence.py",
            "kategori": "test",
            "amount": 12345,
            "tipe": "pemasukan",
            "tanggal": "2025-07-01"
        }
        resp = httpx.post(f"{BASE_URL}/transactions", json=payload)
        if resp.status_code != 200:
            print(f"❌ Create Failed: {resp.status_code} {resp.text}")
            raise Exception("Create failed")
        transaction_id = resp.json()["id"]
        print(f"✅ Transaction {transaction_id} recorded")

    finally:
        print("\n--- [Step 3] Stopping Server ---")
        stop_server(proc)

    time.sleep(2)  # Wait for port release

    # 3. Restart Server
    print("\n--- [Step 4] Restarting Server (Verification) ---")
    proc2 = start_server()

    try:
        if not wait_for_server():
            raise Exception("Server restart failed")

        print("\n--- [Step 5] Reading Transaction (Post-Restart) ---")
        resp = httpx.get(f"{BASE_URL}/transactions/{transaction_id}")
        if resp.status_code == 200 and resp.json()["nama"] == payload["nama"]:
            print("✅ Transaction Persisted")
            print(resp.json())
        else:
            print(f"❌ Read Failed (Persistence Issue?): {resp.status_code} {resp.text}")
            raise Exception("Transaction missing after restart")

        # 4. Clean up the check entry
        print("\n--- [Step 6] Deleting Check Entry ---")
        resp = httpx.delete(f"{BASE_URL}/transactions/{transaction_id}")
        print(f"{'✅' if resp.status_code == 200 else '❌'} {resp.json()['message']}")

    finally:
        print("\n--- [Step 7] Stopping Server ---")
        stop_server(proc2)


if __name__ == "__main__":
    run_verification()
