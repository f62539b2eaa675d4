"""
API server package — HTTP/REST interface for the mobile client.

Exposes wallet validation, balances, balance history, transactions and token
holdings. Delegates to the Solana and Helius services for data.
"""
