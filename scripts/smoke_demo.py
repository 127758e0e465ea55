from __future__ import annotations

import argparse
import json
import time
import urllib.error
import urllib.request


def fetch(url: str, payload: dict | None = None) -> tuple[int, bytes]:
    data = json.dumps(payload).encode("utf-8") if payload is not None else None
    req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"})
    with urllib.request.urlopen(req, timeout=10) as resp:
        return resp.status, resp.read()


def wait_for(url: str, timeout: int) -> bytes:
    deadline = time.time() + timeout
    last_error: Exception | None = None
    while time.time() < deadline:
        try:
            status, body = fetch(url)
            if status == 200:
                return body
        except (urllib.error.URLError, ConnectionError) as exc:
            last_error = exc
        time.sleep(1)
    raise RuntimeError(f"Timed out waiting for {url}: {last_error}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke test for a running layout server.")
    parser.add_argument("--base", default="http://localhost:8080")
    parser.add_argument("--timeout", type=int, default=60)
    args = parser.parse_args()

    base = args.base.rstrip("/")

    grid = json.loads(wait_for(f"{base}/api/grid", args.timeout).decode("utf-8"))
    if len(grid.get("hour_lines", [])) != 23:
        raise RuntimeError("Grid payload missing hour lines")

    status, body = fetch(
        f"{base}/api/layout/day",
        {
            "events": [
                {"id": 1, "title": "a", "start": "2024-03-13T09:00:00", "end": "2024-03-13T10:00:00"},
                {"id": 2, "title": "b", "start": "2024-03-13T09:30:00", "end": "2024-03-13T10:30:00"},
            ]
        },
    )
    if status != 200:
        raise RuntimeError(f"Day layout failed with status {status}")
    widths = [item["width"] for item in json.loads(body.decode("utf-8"))["placements"]]
    if widths != [0.5, 0.5]:
        raise RuntimeError(f"Unexpected widths: {widths}")

    print("Smoke test passed.")


if __name__ == "__main__":
    main()
