"""
Feature modules for the Walletlink backend.

- auth: resolves requests to a Supabase session and bearer token
- wallets: Privy users, embedded wallets and wallet actions

Each module keeps its Protocol interfaces, Pydantic models, exceptions and
service implementation side by side; routes depend on the interfaces only.
"""
