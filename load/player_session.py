"""Locust load-test file simulating a captions player session.

Run standalone, e.g.:

    locust -f load/player_session.py --headless -u 50 -r 5 -t 5m \
           --host https://captions.example.com

Each simulated viewer resolves a video, downloads its caption track and now
and then flags a caption and retracts the flag again.  The video under test is
chosen with the ``LOAD_EVENT``, ``LOAD_SLUG`` and ``LOAD_LANG`` environment
variables.
"""

import os
import random

from locust import HttpUser, between, task

EVENT = os.getenv("LOAD_EVENT", "bangkokjs")
SLUG = os.getenv("LOAD_SLUG", "intro")
LANG = os.getenv("LOAD_LANG", "th")


class CaptionsPlayerUser(HttpUser):  # noqa: D401 – Locust user class
    wait_time = between(0.5, 2.0)

    @task(5)
    def watch(self):
        resp = self.client.get(
            f"/videos/{EVENT}/{SLUG}/{LANG}", name="/videos/[event]/[slug]/[lang]"
        )
        if resp.ok:
            self.client.get(resp.json()["vttUrl"], name="/captions/[event]/[slug]/[lang]")

    @task(1)
    def flag_and_retract(self):
        flagging_url = f"/flags/{EVENT}/{SLUG}/{LANG}"
        resp = self.client.post(
            flagging_url,
            json={"timestamp": random.randint(0, 3_600_000), "text": "load test"},
            name="/flags/[event]/[slug]/[lang]",
        )
        if resp.ok:
            self.client.delete(
                f"{flagging_url}/{resp.json()['flagId']}",
                name="/flags/[event]/[slug]/[lang]/[flagId]",
            )
