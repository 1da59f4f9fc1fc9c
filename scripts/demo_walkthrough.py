"""Walk through admin/moderator/owner flows against a running server.

Start the API first (python -m catalog.main), then:
    python scripts/demo_walkthrough.py [--base http://localhost:8000/api/v1]
"""
import argparse
import sys

import httpx

sys.path.insert(0, ".")
from catalog.kernel.identity.jwt import create_access_token


def headers(principal):
    token, _, _ = create_access_token(principal)
    return {"Authorization": f"Bearer {token}"}


def show(label, r):
    print(f"{label}: {r.status_code} {r.text[:200]}")
    return r


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://localhost:8000/api/v1")
    args = parser.parse_args()
    base = args.base

    admin, mod, owner, stranger = "demo-admin", "demo-mod", "demo-owner", "demo-stranger"
    c = httpx.Client(timeout=30)

    show("set admin", c.put(f"{base}/access/admin", json={"address": admin}, headers=headers(admin)))
    show("add moderator", c.post(f"{base}/access/moderators", json={"address": mod}, headers=headers(admin)))

    r = show("add course", c.post(f"{base}/courses", json={
        "title": "Intro to Rust",
        "creator_name": "Demo Owner",
        "body": "Ownership, borrowing, lifetimes.",
        "attachment_url": "https://example.com/rust.pdf",
        "keyword": "rust",
        "category": "programming",
        "contact": "owner@example.com",
    }, headers=headers(owner)))
    if r.status_code != 201:
        sys.exit(1)
    course_id = r.json()["id"]

    show("moderator update", c.patch(f"{base}/courses/{course_id}", json={"title": "Rust 101"}, headers=headers(mod)))
    show("stranger delete", c.delete(f"{base}/courses/{course_id}", headers=headers(stranger)))
    show("filter and", c.post(f"{base}/courses/filter/and", json={"keyword": "rust", "category": "programming"}))
    show("ban owner", c.post(f"{base}/access/banned", json={"address": owner}, headers=headers(mod)))
    show("banned owner adds", c.post(f"{base}/courses", json={
        "title": "x", "creator_name": "x", "body": "x", "attachment_url": "x",
        "keyword": "x", "category": "x", "contact": "x",
    }, headers=headers(owner)))
    show("unban owner", c.delete(f"{base}/access/banned/{owner}", headers=headers(admin)))
    show("ledger", c.get(f"{base}/access"))


if __name__ == "__main__":
    main()
