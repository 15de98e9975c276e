#!/usr/bin/env python3
"""
blogwords quickstart — check the server, print the top words, then poll.

Run with: python examples/quickstart.py [--watch]

Requires: pip install httpx
Server must be running: blogwords serve (plus blogwords poll)
"""

import sys
import time

import httpx

BASE = "http://localhost:8080/api/v1"


def main():
    client = httpx.Client(base_url=BASE, timeout=10)

    # ── Health check ──────────────────────────────────────────────
    print("Checking server health...")
    try:
        resp = client.get("/health")
    except httpx.ConnectError:
        print(f"Server not reachable at {BASE}")
        print("Start it with:  blogwords serve  (and  blogwords poll  in another shell)")
        sys.exit(1)
    health = resp.json()
    print(f"  Redis:    {'✓' if health['redis'] == 'ok' else '✗'}")

    # ── Top words ─────────────────────────────────────────────────
    last_total = None
    while True:
        resp = client.get("/snapshot", params={"top": 10})
        if resp.status_code == 404:
            print("\nNo snapshot yet — is the poller running?")
        else:
            data = resp.json()
            if data["total_words"] != last_total:
                last_total = data["total_words"]
                print(f"\n{data['total_words']} words, {data['unique_words']} unique:")
                for word, count in data["words"].items():
                    print(f"  {word:<20} {count}")

        if "--watch" not in sys.argv:
            break
        time.sleep(10)


if __name__ == "__main__":
    main()
