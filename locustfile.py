import csv
import os
import random

from locust import HttpUser, between, task

# Load wallets from CSV (column: wallet); falls back to a single known wallet
WALLETS_CSV = os.getenv("LOCUST_WALLETS_CSV", "wallets.csv")
TIME_WINDOWS = ["24h", "1w", "1m", "1y"]

wallets = []
if os.path.exists(WALLETS_CSV):
    with open(WALLETS_CSV) as f:
        for row in csv.DictReader(f):
            wallets.append(row["wallet"])
if not wallets:
    wallets = ["AhzZc4d1MrNUbD6N3ZqyD8TviNzY67L8fgE63tRpRKHf"]


class WalletScannerUser(HttpUser):
    wait_time = between(1, 2)

    @task(3)
    def historical_balance(self):
        wallet = random.choice(wallets)
        self.client.get(
            f"/api/helius/historical-balance/{wallet}",
            params={"timeWindow": random.choice(TIME_WINDOWS)},
            name="/api/helius/historical-balance/[wallet]",
        )

    @task(1)
    def balance(self):
        wallet = random.choice(wallets)
        self.client.get(f"/api/helius/balance/{wallet}", name="/api/helius/balance/[wallet]")
